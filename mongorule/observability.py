"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire

from mongorule import __version__
from mongorule.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> None:
    """
    Initialize Logfire with MongoDB instrumentation.

    Must be called ONCE at application startup, before the database is
    initialized, so that the pymongo command listener is registered on the
    client.

    This function configures Logfire cloud tracking and instruments:
    - pymongo commands (inserts, finds, index builds, drops)
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing Logfire token
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="mongorule",
            service_version=__version__,
            environment=settings.environment,
        )

        logfire.instrument_pymongo()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
