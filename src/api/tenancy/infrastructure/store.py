"""PostgreSQL implementation of the tenant store.

One PostgreSQL server holds every property database. The primary engine
(bound to ``DatabaseSettings.database``) lists databases and creates new
ones; each property database gets its own engine, opened through
``open_handle`` and cached by the connection cache.

Errors are classified by SQLSTATE: a missing database (3D000) or missing
table (42P01) becomes ``DatabaseMissingError``, everything else that goes
wrong talking to the server becomes ``PrimaryUnavailableError``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import asyncpg
from sqlalchemy import MetaData, Table, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from infrastructure.database.engines import create_primary_engine, create_tenant_engine
from infrastructure.database.errors import (
    is_duplicate_database_error,
    is_missing_storage_error,
    is_unique_violation_error,
)
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings
from tenancy.domain.property import Property
from tenancy.domain.value_objects import EntityName, PropertyStatus
from tenancy.infrastructure.tenant_model import BoundTableModel
from tenancy.ports.exceptions import (
    DatabaseMissingError,
    PrimaryUnavailableError,
    PropertyAlreadyExistsError,
)
from tenancy.ports.store import ModelSet

STORE_ERRORS: tuple[type[BaseException], ...] = (
    SQLAlchemyError,
    asyncpg.PostgresError,
    OSError,
)

_LIST_DATABASES = text(
    "SELECT datname FROM pg_database "
    "WHERE datallowconn AND NOT datistemplate "
    "ORDER BY datname"
)


class PostgresTenantStore:
    """Tenant store backed by one PostgreSQL database per property."""

    def __init__(
        self,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
        engine_factory: Callable[[DatabaseSettings, str], AsyncEngine] = create_tenant_engine,
        primary_engine: AsyncEngine | None = None,
    ):
        """Initialize PostgresTenantStore.

        Args:
            settings: Connection settings for the shared server
            probe: Optional domain probe for observability
            engine_factory: Builds the engine of one property database
            primary_engine: Pre-built primary engine; created lazily if None
        """
        self._settings = settings
        self._probe = probe or DefaultConnectionProbe()
        self._engine_factory = engine_factory
        self._primary_engine = primary_engine
        self._metadata: dict[str, MetaData] = {}

    def _require_configured(self, database_name: str) -> None:
        if not self._settings.is_configured:
            error = PrimaryUnavailableError("Primary database endpoint is not configured")
            self._probe.store_unavailable(
                database=database_name, operation="configure", error=error
            )
            raise error

    def _primary(self) -> AsyncEngine:
        if self._primary_engine is None:
            self._require_configured(self._settings.database)
            self._primary_engine = create_primary_engine(self._settings)
            self._probe.engine_created(
                host=self._settings.host, database=self._settings.database
            )
        return self._primary_engine

    def _store_error(
        self,
        error: BaseException,
        database_name: str,
        operation: str,
        missing_is_miss: bool = True,
    ) -> Exception:
        """Translate a driver error into the tenancy error to raise."""
        if missing_is_miss and is_missing_storage_error(error):
            return DatabaseMissingError(database_name)
        self._probe.store_unavailable(database=database_name, operation=operation, error=error)
        return PrimaryUnavailableError(
            f"Store unavailable during {operation} on '{database_name}': {error}"
        )

    def open_handle(self, database_name: str) -> AsyncEngine:
        self._require_configured(database_name)
        engine = self._engine_factory(self._settings, database_name)
        self._probe.engine_created(host=self._settings.host, database=database_name)
        return engine

    async def dispose_handle(self, database_name: str, handle: AsyncEngine) -> None:
        self._metadata.pop(database_name, None)
        await handle.dispose()
        self._probe.engine_disposed(database=database_name)

    async def list_database_names(self) -> list[str]:
        """List connectable, non-template databases alphabetically."""
        primary = self._primary()
        try:
            async with primary.connect() as connection:
                result = await connection.execute(_LIST_DATABASES)
                names = [str(name) for name in result.scalars()]
        except STORE_ERRORS as exc:
            # A missing primary database is an outage, not a miss
            raise self._store_error(
                exc, self._settings.database, "list_databases", missing_is_miss=False
            ) from exc
        self._probe.databases_listed(count=len(names))
        return names

    def bind_model(
        self,
        database_name: str,
        handle: AsyncEngine,
        entity: EntityName,
        schema: Table,
    ) -> BoundTableModel:
        """Copy ``schema`` into the database's own MetaData and bind it."""
        metadata = self._metadata.setdefault(database_name, MetaData())
        table = metadata.tables.get(schema.key)
        if table is None:
            table = schema.to_metadata(metadata)
        return BoundTableModel(entity, database_name, table, handle)

    async def find_property(self, models: ModelSet, code: str) -> Property | None:
        model = _bound(models, EntityName.PROPERTY)
        try:
            row = await model.fetch_one(model.table.c.code == code)
        except STORE_ERRORS as exc:
            raise self._store_error(exc, models.database_name, "find_property") from exc
        return _property_from_row(row) if row is not None else None

    async def create_database(self, database_name: str) -> bool:
        primary = self._primary()
        statement = text(
            f"CREATE DATABASE {primary.dialect.identifier_preparer.quote(database_name)}"
        )
        try:
            async with primary.connect() as connection:
                connection = await connection.execution_options(isolation_level="AUTOCOMMIT")
                await connection.execute(statement)
        except STORE_ERRORS as exc:
            if is_duplicate_database_error(exc):
                self._probe.database_already_exists(database=database_name)
                return False
            raise self._store_error(
                exc, database_name, "create_database", missing_is_miss=False
            ) from exc
        self._probe.database_created(database=database_name)
        return True

    async def ensure_storage(self, models: ModelSet) -> None:
        """Create every model's table that does not exist yet."""
        bound = [_bound(models, entity) for entity in models]
        if not bound:
            return
        metadata = self._metadata.setdefault(models.database_name, MetaData())
        tables = [model.table for model in bound]
        engine = bound[0].engine
        try:
            async with engine.begin() as connection:
                await connection.run_sync(
                    lambda sync_connection: metadata.create_all(
                        sync_connection, tables=tables, checkfirst=True
                    )
                )
        except STORE_ERRORS as exc:
            raise self._store_error(exc, models.database_name, "ensure_storage") from exc

    async def insert_property(self, models: ModelSet, record: Property) -> None:
        model = _bound(models, EntityName.PROPERTY)
        try:
            await model.insert(_row_from_property(record))
        except STORE_ERRORS as exc:
            if is_unique_violation_error(exc):
                raise PropertyAlreadyExistsError(record.code, models.database_name) from exc
            raise self._store_error(exc, models.database_name, "insert_property") from exc

    async def update_property(self, models: ModelSet, record: Property) -> None:
        model = _bound(models, EntityName.PROPERTY)
        values = _row_from_property(record)
        values.pop("id")
        values.pop("created_at", None)
        try:
            await model.update(model.table.c.id == record.id, values)
        except STORE_ERRORS as exc:
            raise self._store_error(exc, models.database_name, "update_property") from exc

    async def close(self) -> None:
        if self._primary_engine is not None:
            await self._primary_engine.dispose()
            self._probe.engine_disposed(database=self._settings.database)
            self._primary_engine = None


def _bound(models: ModelSet, entity: EntityName) -> BoundTableModel:
    model = models[entity]
    if not isinstance(model, BoundTableModel):
        raise TypeError(f"{entity} is not bound to a PostgreSQL table: {model!r}")
    return model


def _row_from_property(record: Property) -> dict[str, Any]:
    row = {
        "id": record.id,
        "code": record.code,
        "name": record.name,
        "status": str(record.status),
        "metadata": dict(record.metadata),
        "allowed_rooms": record.allowed_rooms,
        "mobile_app_version": record.mobile_app_version,
        "mobile_app_link": record.mobile_app_link,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }
    # Unset timestamps fall back to the column defaults
    return {key: value for key, value in row.items() if value is not None}


def _property_from_row(row: dict[str, Any]) -> Property:
    return Property(
        id=row["id"],
        code=row["code"],
        name=row["name"],
        status=PropertyStatus(row["status"]),
        metadata=dict(row.get("metadata") or {}),
        allowed_rooms=row["allowed_rooms"],
        mobile_app_version=row["mobile_app_version"],
        mobile_app_link=row["mobile_app_link"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )
