"""Property entity for the tenancy context.

A property is one hotel customer. Its record lives inside its own isolated
database and is the proof that a database belongs to the property.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from ulid import ULID

from tenancy.domain.value_objects import PropertyCode, PropertyStatus

PREFERRED_DATABASE_KEY = "preferredDatabaseName"
LEGACY_PREFERRED_DATABASE_KEY = "dbName"

DEFAULT_ALLOWED_ROOMS = 15


@dataclass(frozen=True)
class Property:
    """The tenant's own record.

    Business rules:
    - The code is unique, trimmed and upper-cased
    - ``allowed_rooms`` is at least 1
    - ``metadata`` may name a preferred database; that name is a hint used
      by resolution, never a hard requirement
    """

    id: str
    code: str
    name: str
    status: PropertyStatus = PropertyStatus.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)
    allowed_rooms: int = DEFAULT_ALLOWED_ROOMS
    mobile_app_version: str = "1.0.0"
    mobile_app_link: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        code: PropertyCode,
        name: str,
        metadata: dict[str, Any] | None = None,
        allowed_rooms: int = DEFAULT_ALLOWED_ROOMS,
    ) -> Property:
        """Factory method for a brand-new property record.

        Raises:
            ValueError: If the name is blank or allowed_rooms is below 1
        """
        name = name.strip()
        if not name:
            raise ValueError("Property name must not be empty")
        if allowed_rooms < 1:
            raise ValueError(f"allowed_rooms must be at least 1, got {allowed_rooms}")

        now = datetime.now(UTC)
        return cls(
            id=str(ULID()),
            code=code.value,
            name=name,
            metadata=dict(metadata or {}),
            allowed_rooms=allowed_rooms,
            created_at=now,
            updated_at=now,
        )

    @property
    def preferred_database_name(self) -> str | None:
        """Preferred database override, or None when absent or blank."""
        for key in (PREFERRED_DATABASE_KEY, LEGACY_PREFERRED_DATABASE_KEY):
            value = self.metadata.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip().lower()
        return None

    @property
    def is_active(self) -> bool:
        return self.status == PropertyStatus.ACTIVE

    def with_changes(
        self,
        name: str | None = None,
        allowed_rooms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Property:
        """Return a copy with the given fields changed.

        ``metadata`` is merged into the existing metadata rather than
        replacing it.

        Raises:
            ValueError: If the new name is blank or allowed_rooms is below 1
        """
        changes: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Property name must not be empty")
            changes["name"] = name.strip()
        if allowed_rooms is not None:
            if allowed_rooms < 1:
                raise ValueError(
                    f"allowed_rooms must be at least 1, got {allowed_rooms}"
                )
            changes["allowed_rooms"] = allowed_rooms
        if metadata is not None:
            changes["metadata"] = {**self.metadata, **metadata}
        if not changes:
            return self
        return replace(self, updated_at=datetime.now(UTC), **changes)
