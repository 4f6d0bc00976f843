"""SQLAlchemy declarative base and shared model utilities.

This module provides the declarative base class for every entity stored in
a property database, plus the mixins shared by those entities. The same
declarations are copied into each property database's own MetaData when the
model registry binds them, so nothing here is bound to an engine.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    """Generate UTC timestamp for database defaults.

    Uses a named function instead of lambda for SQLAlchemy 2.0 compatibility.
    Ensures proper INSERT-time evaluation.
    """
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models of a property database."""

    type_annotation_map: dict[type, Any] = {
        dict[str, Any]: JSONB,
    }


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamp columns.

    Uses timezone-aware UTC timestamps with Python-side default generation.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        onupdate=_utc_now,  # Evaluated at UPDATE time
        nullable=False,
    )


class PropertyScopedMixin:
    """Mixin for records owned by the property of their database.

    Every business record carries the id of the property it belongs to, so
    queries can be scoped even when a database is shared during migrations.
    """

    property_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)


class DocumentMixin:
    """Mixin holding the free-form part of a record as a JSONB document.

    Line items, rates and template bodies are owned by collaborators outside
    the tenancy core; they live in ``document`` and are not modelled here.
    """

    document: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )
