"""
Clean-slate MongoDB collections for tests.

MongoCleanup drops a set of collections before and after a test. Beanie builds
the declared indexes when it is initialized, but dropping a collection throws
its indexes away and nothing rebuilds them. So the cleanup recreates them
after the initial drop, from the same declarations the startup path uses
(see mongorule.database.indexes). A unique index therefore keeps rejecting
duplicates in every test, not just the first one.

The database handle is handed in explicitly, usually from a pytest fixture:

    cleanup = mongo_cleanup(Ticket)

    async def test_something(cleanup, database):
        ...

or used directly as an async context manager:

    async with MongoCleanup(database, Ticket):
        ...
"""

import logging
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar

from beanie import Document

from mongorule.database.indexes import create_indexes, get_collection_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CleanupConfigurationError(ValueError):
    """MongoCleanup was set up without a usable database or model list."""

    pass


def _is_database_handle(database: Any) -> bool:
    return hasattr(database, "get_collection") and hasattr(database, "__getitem__")


class MongoCleanup:
    """Drop and re-index collections around a test."""

    def __init__(self, database: Any, *document_models: Type):
        if database is None or not _is_database_handle(database):
            raise CleanupConfigurationError(
                f"{type(self).__name__} expects parameter 'database' to be a "
                f"MongoDB database handle, got {database!r}"
            )
        if any(model is None for model in document_models):
            raise CleanupConfigurationError(
                "document_models must not contain None"
            )
        for model in document_models:
            if not isinstance(model, type) or not issubclass(model, Document):
                raise CleanupConfigurationError(
                    f"document_models must be Beanie Document classes "
                    f"declaring a collection, got {model!r}"
                )

        self.database = database
        self.document_models: Tuple[Type, ...] = document_models

    async def before(self) -> None:
        """Start from empty collections with all declared indexes in place."""
        await self.drop_collections()
        await self.create_indexes()

    async def after(self) -> None:
        """Leave nothing behind for the next test."""
        await self.drop_collections()

    async def drop_collections(self) -> None:
        for model in self.document_models:
            collection_name = get_collection_name(model)
            await self.database[collection_name].drop()
            logger.debug(f"Dropped collection {collection_name}")

    async def create_indexes(self) -> None:
        for model in self.document_models:
            await create_indexes(self.database, model)

    async def run(self, test: Callable[[], Awaitable[T]]) -> T:
        """Await test between the before and after phases."""
        async with self:
            return await test()

    async def __aenter__(self) -> "MongoCleanup":
        await self.before()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.after()


def mongo_cleanup(*document_models: Type):
    """
    Build a pytest fixture wrapping each test in a MongoCleanup.

    The database handle comes from a fixture named ``database``. Async
    fixtures need pytest-asyncio in auto mode.
    """
    import pytest

    @pytest.fixture
    async def _cleanup(database):
        async with MongoCleanup(database, *document_models) as cleanup:
            yield cleanup

    return _cleanup
