"""Property provisioning application service.

Administrative create and update of properties. Runs outside request
traffic (from the ``hotelops-property`` CLI) but shares the tenant
registry, so handles and bindings it produces are the ones resolution uses.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from tenancy.application.observability import (
    DefaultProvisioningProbe,
    ProvisioningProbe,
)
from tenancy.application.registry import TenantRegistry
from tenancy.application.resolver import DEFAULT_RESERVED_DATABASES, TenantResolver
from tenancy.domain.property import (
    DEFAULT_ALLOWED_ROOMS,
    PREFERRED_DATABASE_KEY,
    Property,
)
from tenancy.domain.value_objects import (
    DEFAULT_DATABASE_NAME_MAX_LENGTH,
    PropertyCode,
    sanitize_database_name,
)
from tenancy.ports.exceptions import NothingToUpdateError, PropertyAlreadyExistsError


@dataclass(frozen=True)
class ProvisioningResult:
    """Outcome of provisioning one property."""

    property: Property
    database_name: str
    database_created: bool


@dataclass(frozen=True)
class PropertyUpdateResult:
    """Outcome of updating one property."""

    property: Property
    database_name: str
    changed_fields: tuple[str, ...]


class PropertyProvisioningService:
    """Application service for creating and updating properties."""

    def __init__(
        self,
        registry: TenantRegistry,
        resolver: TenantResolver,
        reserved_databases: Iterable[str] = DEFAULT_RESERVED_DATABASES,
        database_name_max_length: int = DEFAULT_DATABASE_NAME_MAX_LENGTH,
        probe: ProvisioningProbe | None = None,
    ):
        """Initialize PropertyProvisioningService.

        Args:
            registry: Shared tenant registry
            resolver: Resolver used to locate properties for update
            reserved_databases: Names a property database may never take
            database_name_max_length: Limit applied to derived database names
            probe: Optional domain probe for observability
        """
        self._registry = registry
        self._store = registry.store
        self._resolver = resolver
        self._reserved = frozenset(name.lower() for name in reserved_databases)
        self._max_length = database_name_max_length
        self._probe = probe or DefaultProvisioningProbe()

    async def provision(
        self,
        name: str,
        code: str,
        database_name: str | None = None,
        metadata: dict[str, Any] | None = None,
        allowed_rooms: int = DEFAULT_ALLOWED_ROOMS,
    ) -> ProvisioningResult:
        """Create a property database, its storage and its property record.

        Safe to re-run: an existing database and existing tables are
        reused. Only an existing property with the same code stops it.

        Args:
            name: Display name of the property
            code: Property code; normalized before use
            database_name: Explicit database name; defaults to the
                sanitized display name
            metadata: Extra metadata stored on the property
            allowed_rooms: Room allowance, at least 1

        Returns:
            The created property and the database that holds it

        Raises:
            TenantCodeRequiredError: If the code is blank
            ValueError: If the name is blank, allowed_rooms is below 1 or
                the database name is reserved
            PropertyAlreadyExistsError: If the code already exists there
            PrimaryUnavailableError: If the store could not be reached
        """
        property_code = PropertyCode.normalize(code)
        if not name or not name.strip():
            raise ValueError("Property name must not be empty")
        if allowed_rooms < 1:
            raise ValueError(f"allowed_rooms must be at least 1, got {allowed_rooms}")

        target = sanitize_database_name(database_name or name, max_length=self._max_length)
        if target in self._reserved:
            raise ValueError(f"Database name '{target}' is reserved")

        created = await self._store.create_database(target)
        entry = await self._registry.connections.get_or_create(target)
        models = entry.model_set
        await self._store.ensure_storage(models)
        self._probe.database_prepared(database_name=target, created=created)

        existing = await self._store.find_property(models, property_code.value)
        if existing is not None:
            self._probe.duplicate_property(code=property_code.value, database_name=target)
            raise PropertyAlreadyExistsError(property_code.value, target)

        record = Property.create(
            code=property_code,
            name=name,
            metadata={**(metadata or {}), PREFERRED_DATABASE_KEY: target},
            allowed_rooms=allowed_rooms,
        )
        await self._store.insert_property(models, record)

        entry.remember(record)
        self._registry.index.put(record.code, target)
        self._probe.property_provisioned(
            code=record.code, database_name=target, property_id=record.id
        )
        return ProvisioningResult(
            property=record, database_name=target, database_created=created
        )

    async def update(
        self,
        code: str,
        name: str | None = None,
        allowed_rooms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> PropertyUpdateResult:
        """Update an existing property wherever it lives.

        Metadata is merged into the stored metadata.

        Raises:
            NothingToUpdateError: If no field would change
            TenantNotFoundError: If the property cannot be found
            ValueError: If the new values are invalid
        """
        if name is None and allowed_rooms is None and not metadata:
            raise NothingToUpdateError("No fields to update")

        context = await self._resolver.resolve(code)
        current = context.property
        updated = current.with_changes(
            name=name, allowed_rooms=allowed_rooms, metadata=metadata or None
        )
        changed = tuple(
            field_name
            for field_name in ("name", "allowed_rooms", "metadata")
            if getattr(updated, field_name) != getattr(current, field_name)
        )
        if not changed:
            raise NothingToUpdateError(f"Property '{context.code}' already has these values")

        await self._store.update_property(context.models, updated)

        entry = self._registry.connections.peek(context.database_name)
        if entry is not None:
            entry.remember(updated)
        self._probe.property_updated(
            code=context.code,
            database_name=context.database_name,
            fields=list(changed),
        )
        return PropertyUpdateResult(
            property=updated,
            database_name=context.database_name,
            changed_fields=changed,
        )
