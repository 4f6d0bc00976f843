"""Port for the store holding every property database.

The tenancy application layer talks to the underlying store only through
``TenantStore``. The production implementation is
``tenancy.infrastructure.store.PostgresTenantStore``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from tenancy.ports.exceptions import UnknownEntityError

if TYPE_CHECKING:
    from tenancy.domain.property import Property
    from tenancy.domain.value_objects import EntityName


class TenantModel(Protocol):
    """An entity schema bound to one property database's connection handle."""

    @property
    def entity(self) -> EntityName: ...

    @property
    def database_name(self) -> str: ...


class ModelSet(Mapping["EntityName", TenantModel]):
    """Read-only lookup table of the models registered on one handle.

    Lookups are keyed by ``EntityName``. An entity without a registered
    model raises ``UnknownEntityError`` instead of returning None.
    """

    def __init__(self, database_name: str, models: Mapping[EntityName, TenantModel]):
        self._database_name = database_name
        self._models = MappingProxyType(dict(models))

    @property
    def database_name(self) -> str:
        return self._database_name

    def __getitem__(self, entity: EntityName) -> TenantModel:
        try:
            return self._models[entity]
        except KeyError:
            raise UnknownEntityError(str(entity)) from None

    def __iter__(self) -> Iterator[EntityName]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"<ModelSet(database={self._database_name}, models={len(self)})>"


class TenantStore(Protocol):
    """Operations the tenancy core needs from the underlying store.

    Implementations raise ``DatabaseMissingError`` when a database or its
    entity storage does not exist and ``PrimaryUnavailableError`` for every
    other store failure.
    """

    def open_handle(self, database_name: str) -> Any:
        """Create a connection handle for a database without performing I/O."""
        ...

    async def dispose_handle(self, database_name: str, handle: Any) -> None:
        """Release every resource held by a handle."""
        ...

    async def list_database_names(self) -> list[str]:
        """List every database known to the store, in listing order."""
        ...

    def bind_model(self, database_name: str, handle: Any, entity: EntityName, schema: Any) -> TenantModel:
        """Bind an entity schema to a handle, producing its model."""
        ...

    async def find_property(self, models: ModelSet, code: str) -> Property | None:
        """Load the property with the given normalized code, if present."""
        ...

    async def create_database(self, database_name: str) -> bool:
        """Create a database; return False if it already existed."""
        ...

    async def ensure_storage(self, models: ModelSet) -> None:
        """Create the storage of every model, tolerating existing storage."""
        ...

    async def insert_property(self, models: ModelSet, record: Property) -> None:
        """Insert a property record."""
        ...

    async def update_property(self, models: ModelSet, record: Property) -> None:
        """Persist changed fields of an existing property record."""
        ...

    async def close(self) -> None:
        """Release store-wide resources such as the primary connection."""
        ...
