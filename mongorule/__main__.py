"""mongorule CLI entry point."""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from mongorule import __version__
from mongorule.config import get_settings
from mongorule.database import (
    check_db_connection,
    close_db,
    get_db_info,
    init_db,
    sanitize_mongodb_url,
)
from mongorule.tickets import DuplicateTicketError, Ticket, TicketRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def _init_logfire() -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from mongorule.observability import initialize_logfire

        initialize_logfire(get_settings())
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== mongorule Configuration ===\n")
        print(f"Environment: {settings.environment}")
        print(f"Log Level: {settings.log_level}")
        print(f"Config File: {settings.config_path}\n")

        print("MongoDB:")
        print(f"  URL: {sanitize_mongodb_url(settings.mongodb.url)}")
        print(f"  Database: {settings.mongodb.database}")
        print(f"  Server Selection Timeout: {settings.mongodb.server_selection_timeout_ms} ms\n")

        print(f"Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return 1


async def _check() -> bool:
    try:
        await init_db()
        return await check_db_connection()
    finally:
        await close_db()


def cmd_check(args: argparse.Namespace) -> int:
    """Connect to MongoDB and ping it."""
    try:
        healthy = asyncio.run(_check())
        info = get_db_info()

        if not healthy:
            print(f"\n❌ MongoDB not reachable at {info['url']}\n")
            return 1

        print(f"\n✓ MongoDB reachable at {info['url']} (database: {info['database']})\n")
        return 0

    except Exception as e:
        logger.error(f"Connection check failed: {e}", exc_info=True)
        print(f"\n❌ Connection check failed: {e}\n")
        return 1


async def _init() -> None:
    try:
        await init_db()
    finally:
        await close_db()


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize Beanie and build all declared indexes."""
    _init_logfire()

    try:
        asyncio.run(_init())
        print("\n✓ Database initialized and indexes created\n")
        return 0

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


async def _save(ticket_id: str, content: str) -> Ticket:
    try:
        await init_db()
        return await TicketRepository().save(Ticket(ticket_id=ticket_id, content=content))
    finally:
        await close_db()


def cmd_save(args: argparse.Namespace) -> int:
    """Store a new ticket."""
    _init_logfire()

    try:
        ticket = asyncio.run(_save(args.ticket_id, args.content))
        print(f"\n✓ Saved ticket {ticket.ticket_id} (id: {ticket.id})\n")
        return 0

    except DuplicateTicketError as e:
        print(f"\n❌ {e}\n")
        return 1
    except Exception as e:
        logger.error(f"Failed to save ticket: {e}", exc_info=True)
        print(f"\n❌ Failed to save ticket: {e}\n")
        return 1


async def _find(ticket_id: str) -> Ticket | None:
    try:
        await init_db()
        return await TicketRepository().find_by_ticket_id(ticket_id)
    finally:
        await close_db()


def cmd_find(args: argparse.Namespace) -> int:
    """Look up a ticket by its ticket_id."""
    try:
        ticket = asyncio.run(_find(args.ticket_id))

        if ticket is None:
            print(f"\n✗ No ticket with ticket_id '{args.ticket_id}'\n")
            return 1

        print(f"\n=== Ticket {ticket.ticket_id} ===\n")
        print(f"ID: {ticket.id}")
        print(f"Content: {ticket.content}\n")
        return 0

    except Exception as e:
        logger.error(f"Failed to find ticket: {e}", exc_info=True)
        print(f"\n❌ Failed to find ticket: {e}\n")
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongorule",
        description="Ticket store on MongoDB",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Show configuration").set_defaults(func=cmd_config)
    subparsers.add_parser("check", help="Check MongoDB connection").set_defaults(func=cmd_check)
    subparsers.add_parser("init", help="Initialize database and indexes").set_defaults(func=cmd_init)

    save_parser = subparsers.add_parser("save", help="Save a new ticket")
    save_parser.add_argument("ticket_id", help="Business identifier of the ticket")
    save_parser.add_argument("content", help="Ticket content")
    save_parser.set_defaults(func=cmd_save)

    find_parser = subparsers.add_parser("find", help="Find a ticket by ticket_id")
    find_parser.add_argument("ticket_id", help="Business identifier of the ticket")
    find_parser.set_defaults(func=cmd_find)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        try:
            logging.getLogger().setLevel(get_settings().log_level.upper())
        except ValidationError:
            # Reported by the command itself when it loads settings
            logger.warning("Invalid configuration, keeping default log level")
        except ValueError as e:
            logger.warning(f"Invalid LOG_LEVEL, keeping default log level: {e}")

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
