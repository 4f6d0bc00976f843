"""Classification of PostgreSQL errors raised through SQLAlchemy and asyncpg.

asyncpg exceptions carry a ``sqlstate`` attribute; SQLAlchemy's asyncpg
adapter copies it onto the DBAPI error as ``sqlstate``/``pgcode`` and keeps
the original exception as ``__cause__``. Connection-time failures may arrive
unwrapped, so the whole chain is inspected.
"""

from __future__ import annotations

SQLSTATE_INVALID_CATALOG_NAME = "3D000"
SQLSTATE_UNDEFINED_TABLE = "42P01"
SQLSTATE_DUPLICATE_DATABASE = "42P04"
SQLSTATE_UNIQUE_VIOLATION = "23505"

# Database or entity storage does not exist
MISSING_STORAGE_SQLSTATES = frozenset(
    {SQLSTATE_INVALID_CATALOG_NAME, SQLSTATE_UNDEFINED_TABLE}
)


def sqlstate_of(error: BaseException) -> str | None:
    """Return the first SQLSTATE found on an exception or anything it wraps."""
    seen: set[int] = set()
    pending: list[BaseException | None] = [error]
    while pending:
        current = pending.pop(0)
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))

        for attribute in ("sqlstate", "pgcode"):
            value = getattr(current, attribute, None)
            if isinstance(value, str) and value:
                return value

        pending.append(getattr(current, "orig", None))
        pending.append(current.__cause__)
        pending.append(current.__context__)
    return None


def is_missing_storage_error(error: BaseException) -> bool:
    """Whether the error means the database or table does not exist."""
    return sqlstate_of(error) in MISSING_STORAGE_SQLSTATES


def is_duplicate_database_error(error: BaseException) -> bool:
    """Whether the error means CREATE DATABASE found an existing database."""
    return sqlstate_of(error) == SQLSTATE_DUPLICATE_DATABASE


def is_unique_violation_error(error: BaseException) -> bool:
    """Whether the error is a unique constraint violation."""
    return sqlstate_of(error) == SQLSTATE_UNIQUE_VIOLATION
