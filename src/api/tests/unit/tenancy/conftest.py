"""Tenancy unit test fixtures.

Provides an in-memory TenantStore so resolver, cache and provisioning
behaviour can be tested without PostgreSQL.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

import pytest

from tenancy.application.catalog import SchemaCatalog
from tenancy.application.observability import (
    ConnectionCacheProbe,
    ModelRegistryProbe,
    ProvisioningProbe,
    TenantResolverProbe,
)
from tenancy.application.registry import TenantRegistry
from tenancy.application.resolver import TenantResolver
from tenancy.application.services import PropertyProvisioningService
from tenancy.domain.property import Property
from tenancy.domain.value_objects import EntityName, PropertyCode
from tenancy.ports.exceptions import DatabaseMissingError, PrimaryUnavailableError
from tenancy.ports.store import ModelSet


@dataclass(eq=False)
class FakeHandle:
    """Stands in for an engine bound to one database."""

    database_name: str
    disposed: bool = False


@dataclass(frozen=True)
class FakeModel:
    entity: EntityName
    database_name: str
    schema: Any
    handle: FakeHandle


@dataclass
class InMemoryTenantStore:
    """TenantStore holding databases as dicts of property code to Property.

    ``databases`` maps a database name to its properties. Databases in
    ``without_storage`` exist but have no tables yet. Databases in
    ``unavailable`` fail every probe with PrimaryUnavailableError.
    """

    databases: dict[str, dict[str, Property]] = field(default_factory=dict)
    without_storage: set[str] = field(default_factory=set)
    unavailable: set[str] = field(default_factory=set)
    listing_unavailable: bool = False
    opened: list[str] = field(default_factory=list)
    disposed: list[str] = field(default_factory=list)
    bind_calls: list[tuple[str, EntityName]] = field(default_factory=list)
    find_calls: list[tuple[str, str]] = field(default_factory=list)
    list_calls: int = 0
    closed: bool = False

    def add_database(self, name: str) -> None:
        self.databases.setdefault(name, {})

    def add_property(
        self,
        database_name: str,
        code: str,
        name: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Property:
        record = Property.create(
            code=PropertyCode.normalize(code),
            name=name or f"Hotel {code}",
            metadata=metadata,
        )
        self.databases.setdefault(database_name, {})[record.code] = record
        return record

    def drop_database(self, name: str) -> None:
        self.databases.pop(name, None)

    def open_handle(self, database_name: str) -> FakeHandle:
        self.opened.append(database_name)
        return FakeHandle(database_name)

    async def dispose_handle(self, database_name: str, handle: FakeHandle) -> None:
        handle.disposed = True
        self.disposed.append(database_name)

    async def list_database_names(self) -> list[str]:
        self.list_calls += 1
        await asyncio.sleep(0)
        if self.listing_unavailable:
            raise PrimaryUnavailableError("listing failed")
        return sorted(self.databases)

    def bind_model(
        self, database_name: str, handle: FakeHandle, entity: EntityName, schema: Any
    ) -> FakeModel:
        self.bind_calls.append((database_name, entity))
        return FakeModel(entity, database_name, schema, handle)

    async def find_property(self, models: ModelSet, code: str) -> Property | None:
        _ = models[EntityName.PROPERTY]
        database_name = models.database_name
        self.find_calls.append((database_name, code))
        await asyncio.sleep(0)
        if database_name in self.unavailable:
            raise PrimaryUnavailableError(f"{database_name} unreachable")
        if database_name not in self.databases or database_name in self.without_storage:
            raise DatabaseMissingError(database_name)
        return self.databases[database_name].get(code)

    async def create_database(self, database_name: str) -> bool:
        if database_name in self.databases:
            return False
        self.databases[database_name] = {}
        self.without_storage.add(database_name)
        return True

    async def ensure_storage(self, models: ModelSet) -> None:
        self.without_storage.discard(models.database_name)

    async def insert_property(self, models: ModelSet, record: Property) -> None:
        self.databases[models.database_name][record.code] = record

    async def update_property(self, models: ModelSet, record: Property) -> None:
        self.databases[models.database_name][record.code] = record

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store() -> InMemoryTenantStore:
    return InMemoryTenantStore()


@pytest.fixture
def catalog() -> SchemaCatalog:
    """Catalog with an opaque schema for every entity."""
    return SchemaCatalog({entity: f"schema:{entity}" for entity in EntityName})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_probe() -> MagicMock:
    return MagicMock(spec=ConnectionCacheProbe)


@pytest.fixture
def model_registry_probe() -> MagicMock:
    return MagicMock(spec=ModelRegistryProbe)


@pytest.fixture
def resolver_probe() -> MagicMock:
    return MagicMock(spec=TenantResolverProbe)


@pytest.fixture
def provisioning_probe() -> MagicMock:
    return MagicMock(spec=ProvisioningProbe)


@pytest.fixture
def registry(
    store: InMemoryTenantStore,
    catalog: SchemaCatalog,
    clock: FakeClock,
    cache_probe: MagicMock,
    model_registry_probe: MagicMock,
) -> TenantRegistry:
    return TenantRegistry(
        store=store,
        catalog=catalog,
        negative_cache_ttl=30.0,
        cache_probe=cache_probe,
        model_registry_probe=model_registry_probe,
        clock=clock,
    )


@pytest.fixture
def resolver(registry: TenantRegistry, resolver_probe: MagicMock) -> TenantResolver:
    return TenantResolver(registry, probe=resolver_probe)


@pytest.fixture
def provisioning_service(
    registry: TenantRegistry,
    resolver: TenantResolver,
    provisioning_probe: MagicMock,
) -> PropertyProvisioningService:
    return PropertyProvisioningService(
        registry=registry, resolver=resolver, probe=provisioning_probe
    )
