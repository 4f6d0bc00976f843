"""Database infrastructure - shared engine and error primitives."""

from infrastructure.database.engines import (
    build_async_url,
    create_primary_engine,
    create_tenant_engine,
)
from infrastructure.database.errors import (
    is_duplicate_database_error,
    is_missing_storage_error,
    is_unique_violation_error,
    sqlstate_of,
)

__all__ = [
    "build_async_url",
    "create_primary_engine",
    "create_tenant_engine",
    "is_duplicate_database_error",
    "is_missing_storage_error",
    "is_unique_violation_error",
    "sqlstate_of",
]
