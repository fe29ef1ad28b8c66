"""
Database module initialization.
Exports database components for use throughout the application.
"""

from mongorule.database.connection import (
    init_db,
    close_db,
    get_client,
    get_database,
    check_db_connection,
    get_db_info,
    register_models,
    sanitize_mongodb_url,
)
from mongorule.database.indexes import (
    create_indexes,
    ensure_indexes,
    get_collection_name,
    get_index_models,
)

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    "get_client",
    "get_database",
    "register_models",
    # Indexes
    "create_indexes",
    "ensure_indexes",
    "get_collection_name",
    "get_index_models",
    # Utilities
    "check_db_connection",
    "get_db_info",
    "sanitize_mongodb_url",
]
