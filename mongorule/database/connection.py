"""
MongoDB connection and Beanie ODM initialization.

This module provides:
- MongoDB client connection via Motor (async driver)
- Beanie ODM initialization
- Index creation from the models' declared indexes
- Health check utilities
"""

import logging
from typing import List, Optional, Type

from beanie import Document, init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from mongorule.config import Settings, get_settings
from mongorule.database.indexes import ensure_indexes

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: Optional[AsyncIOMotorClient] = None
_settings: Optional[Settings] = None

# Empty until register_models() is called; init_db() then falls back to
# mongorule.models.get_document_models()
_document_models: List[Type[Document]] = []


def register_models(models: List[Type[Document]]) -> None:
    """
    Register document models for Beanie initialization.
    """
    global _document_models
    _document_models = list(models)


def _get_document_models() -> List[Type[Document]]:
    if _document_models:
        return _document_models

    # Imported here to avoid circular imports
    from mongorule.models import get_document_models

    return get_document_models()


async def init_db(
    settings: Optional[Settings] = None,
    client: Optional[AsyncIOMotorClient] = None,
) -> AsyncIOMotorDatabase:
    """
    Initialize MongoDB connection and Beanie ODM.

    Args:
        settings: Settings to use, defaults to get_settings()
        client: Pre-built client (e.g. an in-memory one for tests)

    Returns:
        The initialized database handle
    """
    global _client, _settings

    _settings = settings or get_settings()
    mongo = _settings.mongodb

    _client = client or AsyncIOMotorClient(
        mongo.url,
        serverSelectionTimeoutMS=mongo.server_selection_timeout_ms,
    )
    database = _client[mongo.database]
    models = _get_document_models()

    await init_beanie(database=database, document_models=models)
    await ensure_indexes(database, models)

    logger.info(
        f"Initialized database '{mongo.database}' with "
        f"{len(models)} document model(s)"
    )
    return database


async def close_db() -> None:
    """
    Close MongoDB connection.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("Closed MongoDB connection")


def get_client() -> AsyncIOMotorClient:
    """
    Get the MongoDB client instance.
    """
    if _client is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the MongoDB database instance.
    """
    client = get_client()
    return client[(_settings or get_settings()).mongodb.database]


async def check_db_connection() -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    settings = _settings or get_settings()

    return {
        "status": "connected" if _client is not None else "disconnected",
        "url": sanitize_mongodb_url(settings.mongodb.url),
        "database": settings.mongodb.database,
        "environment": settings.environment,
    }


def sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if "@" not in url or "://" not in url:
        return url

    # Handle mongodb+srv:// or mongodb://
    protocol, rest = url.split("://", 1)
    if "@" not in rest:
        return url

    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url
