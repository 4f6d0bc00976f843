"""Tenant resolution: property code to a ready-to-use tenant context.

Resolution order for a normalized code:

1. the code index (no I/O when the cached entry already holds the record)
2. the default database derived from the code
3. every other database the store lists, in listing order, skipping
   reserved names and the default already tried

Once a database is found, from the index or by discovery, a
preferred-database override carried by the property record is honoured
for one hop. A database or table that does not exist is an ordinary miss;
every other store failure surfaces as ``PrimaryUnavailableError`` and
never as ``TenantNotFoundError``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tenancy.application.cache import CacheEntry
from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.application.registry import TenantRegistry
from tenancy.application.value_objects import ResolutionSource, TenantContext
from tenancy.domain.property import Property
from tenancy.domain.value_objects import (
    DEFAULT_DATABASE_NAME_MAX_LENGTH,
    PropertyCode,
    database_name_from_code,
)
from tenancy.ports.exceptions import (
    DatabaseMissingError,
    PrimaryUnavailableError,
    TenantNotFoundError,
)

DEFAULT_RESERVED_DATABASES = ("postgres", "template0", "template1")

_Found = tuple[CacheEntry, Property]


class TenantResolver:
    """Resolves property codes against the shared tenant registry."""

    def __init__(
        self,
        registry: TenantRegistry,
        reserved_databases: Iterable[str] = DEFAULT_RESERVED_DATABASES,
        database_name_max_length: int = DEFAULT_DATABASE_NAME_MAX_LENGTH,
        probe: TenantResolverProbe | None = None,
    ):
        """Initialize TenantResolver.

        Args:
            registry: Owner of the connection cache and code index
            reserved_databases: Database names never probed for properties
            database_name_max_length: Limit applied when deriving the
                default database name from a code
            probe: Optional domain probe for observability
        """
        self._registry = registry
        self._store = registry.store
        self._reserved = frozenset(name.lower() for name in reserved_databases)
        self._max_length = database_name_max_length
        self._probe = probe or DefaultTenantResolverProbe()

    @property
    def registry(self) -> TenantRegistry:
        return self._registry

    def default_database_name(self, code: PropertyCode) -> str:
        return database_name_from_code(code, max_length=self._max_length)

    async def resolve(self, raw_code: str | None) -> TenantContext:
        """Resolve a raw property code to its tenant context.

        Args:
            raw_code: Code as supplied by the caller; trimmed and upper-cased

        Returns:
            Context bound to the database holding the property

        Raises:
            TenantCodeRequiredError: If the code is None, empty or blank
            TenantNotFoundError: If no candidate database holds the property
            PrimaryUnavailableError: If the store could not be reached
            UnknownEntityError: If the schema catalog is incomplete
        """
        code = PropertyCode.normalize(raw_code).value
        try:
            return await self._resolve(code)
        except PrimaryUnavailableError as exc:
            self._probe.primary_unavailable(code=code, error=exc)
            raise

    async def _resolve(self, code: str) -> TenantContext:
        index = self._registry.index
        if index.is_known_missing(code):
            self._probe.tenant_known_missing(code=code)
            raise TenantNotFoundError(code)

        context = await self._from_index(code)
        if context is not None:
            return context

        async with self._registry.code_lock(code):
            # Another caller may have finished discovery while we waited
            context = await self._from_index(code)
            if context is not None:
                return context
            if index.is_known_missing(code):
                self._probe.tenant_known_missing(code=code)
                raise TenantNotFoundError(code)

            entry, record, source = await self._discover(code)
            entry, record, source = await self._apply_override(code, entry, record, source)
            index.put(code, entry.database_name)
            return self._build_context(code, entry, record, source)

    async def _from_index(self, code: str) -> TenantContext | None:
        database_name = self._registry.index.get(code)
        if database_name is None:
            return None

        entry = await self._registry.connections.get_or_create(database_name)
        record = entry.cached_property_for(code)
        if record is None:
            found = await self._probe_database(code, database_name)
            if found is None:
                self._probe.stale_binding_detected(code=code, database_name=database_name)
                self._registry.index.invalidate(code)
                return None
            entry, record = found
        source = ResolutionSource.INDEX
        entry, record, source = await self._apply_override(code, entry, record, source)
        if source == ResolutionSource.OVERRIDE:
            self._registry.index.put(code, entry.database_name)
        return self._build_context(code, entry, record, source)

    async def _discover(self, code: str) -> tuple[CacheEntry, Property, ResolutionSource]:
        default_name = self.default_database_name(PropertyCode(code))
        checked = 0
        if default_name not in self._reserved:
            checked += 1
            found = await self._probe_database(code, default_name)
            if found is not None:
                return (*found, ResolutionSource.DEFAULT)

        names = await self._store.list_database_names()
        candidates = [
            name
            for name in names
            if name.lower() not in self._reserved and name != default_name
        ]
        self._probe.discovery_started(code=code, candidate_count=len(candidates))

        for name in candidates:
            checked += 1
            found = await self._probe_database(code, name)
            if found is not None:
                self._probe.tenant_discovered(
                    code=code, database_name=name, candidates_checked=checked
                )
                return (*found, ResolutionSource.DISCOVERY)

        self._registry.index.mark_missing(code)
        self._probe.tenant_not_found(code=code, candidates_checked=checked)
        raise TenantNotFoundError(code, candidates_checked=checked)

    async def _probe_database(self, code: str, database_name: str) -> _Found | None:
        """Look for the property in one database.

        Returns None when the database, its storage or the record is
        missing. A database proven not to exist is evicted from the cache
        unless the entry still serves another property.
        """
        connections = self._registry.connections
        entry = await connections.get_or_create(database_name)
        record = entry.cached_property_for(code)
        if record is not None:
            return entry, record

        try:
            record = await self._store.find_property(entry.model_set, code)
        except DatabaseMissingError:
            self._probe.candidate_missing(code=code, database_name=database_name)
            if entry.property is None:
                await connections.evict(database_name)
            return None

        if record is None:
            return None
        entry.remember(record)
        return entry, record

    async def _apply_override(
        self,
        code: str,
        entry: CacheEntry,
        record: Property,
        source: ResolutionSource,
    ) -> tuple[CacheEntry, Property, ResolutionSource]:
        preferred = record.preferred_database_name
        if (
            preferred is None
            or preferred == entry.database_name
            or preferred == entry.rejected_override
        ):
            return entry, record, source

        if preferred in self._reserved:
            entry.rejected_override = preferred
            self._probe.preferred_database_unavailable(
                code=code,
                found_in=entry.database_name,
                preferred=preferred,
                reason="reserved_database",
            )
            return entry, record, source

        try:
            found = await self._probe_database(code, preferred)
        except PrimaryUnavailableError as exc:
            self._probe.preferred_database_unavailable(
                code=code,
                found_in=entry.database_name,
                preferred=preferred,
                reason=f"store_unavailable: {exc}",
            )
            return entry, record, source

        if found is None:
            entry.rejected_override = preferred
            self._probe.preferred_database_unavailable(
                code=code,
                found_in=entry.database_name,
                preferred=preferred,
                reason="property_not_found",
            )
            return entry, record, source

        self._probe.preferred_database_applied(
            code=code, found_in=entry.database_name, preferred=preferred
        )
        override_entry, override_record = found
        return override_entry, override_record, ResolutionSource.OVERRIDE

    def _build_context(
        self,
        code: str,
        entry: CacheEntry,
        record: Property,
        source: ResolutionSource,
    ) -> TenantContext:
        models = self._registry.model_registry.ensure_registered(
            entry, self._registry.catalog
        )
        self._probe.tenant_resolved(
            code=code, database_name=entry.database_name, source=str(source)
        )
        return TenantContext(
            code=code,
            database_name=entry.database_name,
            handle=entry.handle,
            models=models,
            property=record,
            source=source,
        )

    async def revalidate(self, context: TenantContext) -> Property | None:
        """Re-read the property through an already resolved context.

        The caller keeps its context either way. When the record is gone
        the index binding is dropped so the next resolution rediscovers.

        Raises:
            PrimaryUnavailableError: If the store could not be reached
        """
        entry = self._registry.connections.peek(context.database_name)
        try:
            record = await self._store.find_property(context.models, context.code)
        except DatabaseMissingError:
            record = None

        if record is None:
            self._probe.stale_binding_detected(
                code=context.code, database_name=context.database_name
            )
            if self._registry.index.get(context.code) == context.database_name:
                self._registry.index.invalidate(context.code)
            if entry is not None and entry.cached_property_for(context.code) is not None:
                entry.remember(None)
            return None

        if entry is not None:
            entry.remember(record)
        return record

    def invalidate(self, raw_code: str) -> None:
        """Drop the binding and cached record for a code."""
        code = PropertyCode.normalize(raw_code).value
        database_name = self._registry.index.get(code)
        self._registry.index.invalidate(code)
        if database_name is None:
            return
        entry = self._registry.connections.peek(database_name)
        if entry is not None and entry.cached_property_for(code) is not None:
            entry.remember(None)

    def warm(self, bindings: Mapping[str, str]) -> None:
        """Pre-populate the code index from code to database name pairs."""
        self._registry.index.warm(
            {
                PropertyCode.normalize(code).value: database_name.strip().lower()
                for code, database_name in bindings.items()
            }
        )
