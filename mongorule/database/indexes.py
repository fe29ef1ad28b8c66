"""
MongoDB Index Definitions

Index declarations live in each document's ``Settings.indexes`` list. This
module turns those declarations into pymongo ``IndexModel`` objects and builds
them on a given database. The startup path (database/connection.py) and the
test cleanup (mongorule/testing.py) both go through here.

Accepted ``Settings.indexes`` entries:
- "field": ascending single-field index
- [("field", direction), ...]: compound index
- IndexModel: used as is

Fields annotated with beanie ``Indexed(...)`` get the single-field index
init_beanie builds for them, so a reset rebuilds those as well.
"""

import logging
from typing import Iterable, List, Type

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, IndexModel

logger = logging.getLogger(__name__)


def get_collection_name(model: Type) -> str:
    """Collection name declared in Settings, defaulting to the class name."""
    settings = getattr(model, "Settings", None)
    return getattr(settings, "name", None) or model.__name__


def _field_indexes(model: Type) -> List[IndexModel]:
    fields = getattr(model, "model_fields", None) or {}

    index_models = []
    for name, field in fields.items():
        # Indexed(...) marks either the annotation type or an Annotated metadata item
        candidates = [field.annotation, *field.metadata]
        indexed = next(
            (getattr(c, "_indexed") for c in candidates if getattr(c, "_indexed", None)),
            None,
        )
        if indexed is None:
            continue

        index_type, options = indexed
        index_models.append(
            IndexModel([(field.alias or name, index_type)], **options)
        )
    return index_models


def get_index_models(model: Type) -> List[IndexModel]:
    """Declared indexes of a model: Settings.indexes plus Indexed() fields."""
    settings = getattr(model, "Settings", None)
    declared = getattr(settings, "indexes", None) or []

    index_models = []
    for entry in declared:
        if isinstance(entry, IndexModel):
            index_models.append(entry)
        elif isinstance(entry, str):
            index_models.append(IndexModel([(entry, ASCENDING)]))
        elif isinstance(entry, (list, tuple)):
            index_models.append(IndexModel(list(entry)))
        else:
            raise TypeError(
                f"Unsupported index declaration on {model.__name__}: {entry!r}"
            )

    index_models.extend(_field_indexes(model))
    return index_models


async def create_indexes(database: AsyncIOMotorDatabase, model: Type) -> List[str]:
    """Build every declared index of a model on its collection in database."""
    index_models = get_index_models(model)
    collection_name = get_collection_name(model)

    if not index_models:
        logger.debug(f"No indexes declared for {collection_name}")
        return []

    names = await database[collection_name].create_indexes(index_models)
    logger.info(f"Created indexes on {collection_name}: {', '.join(names)}")
    return names


async def ensure_indexes(database: AsyncIOMotorDatabase, models: Iterable[Type]) -> None:
    """Create declared indexes for all models (idempotent)."""
    for model in models:
        await create_indexes(database, model)
