"""Process-wide caches for tenant resolution.

``ConnectionCache`` keeps one handle per logical database name together
with the models registered on it. ``TenantCodeIndex`` remembers which
database last held each property code so repeat lookups skip discovery.
Both live for the lifetime of the process and are owned by
``TenantRegistry``.
"""

from __future__ import annotations

import asyncio
import builtins
import time
from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from tenancy.application.catalog import SchemaCatalog
from tenancy.application.model_registry import ModelRegistry
from tenancy.application.observability import (
    ConnectionCacheProbe,
    DefaultConnectionCacheProbe,
)
from tenancy.domain.property import Property
from tenancy.domain.value_objects import EntityName
from tenancy.ports.store import ModelSet, TenantModel, TenantStore


class KeyedLocks:
    """Lazily created ``asyncio.Lock`` per key."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks.setdefault(key, asyncio.Lock())
        return lock

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` and drop it once nobody holds or awaits it."""
        lock = self.lock_for(key)
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._holders[key] - 1
            if remaining:
                self._holders[key] = remaining
            else:
                del self._holders[key]
                if self._locks.get(key) is lock:
                    del self._locks[key]

    def discard(self, key: str) -> None:
        lock = self._locks.get(key)
        if lock is not None and not lock.locked() and key not in self._holders:
            del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


@dataclass(eq=False)
class CacheEntry:
    """One logical database: its handle and the models bound to it.

    ``models`` only ever grows. ``property`` is the last property record
    read through this entry and ``rejected_override`` a preferred database
    already proven unusable for it.
    """

    database_name: str
    handle: Any
    models: dict[EntityName, TenantModel] = field(default_factory=dict)
    property: Property | None = None
    rejected_override: str | None = None

    @builtins.property
    def model_set(self) -> ModelSet:
        return ModelSet(self.database_name, self.models)

    def cached_property_for(self, code: str) -> Property | None:
        """The cached property record if it belongs to ``code``."""
        if self.property is not None and self.property.code == code:
            return self.property
        return None

    def remember(self, record: Property | None) -> None:
        previous = self.property
        if (
            record is None
            or previous is None
            or previous.code != record.code
            or previous.preferred_database_name != record.preferred_database_name
        ):
            self.rejected_override = None
        self.property = record


class ConnectionCache:
    """Cache of database name to ``CacheEntry``.

    The same name always yields the same entry and handle until the entry
    is evicted. Handles are never closed implicitly; only ``evict`` and
    ``dispose_all`` release them. The resolver evicts a name once a lookup
    proves its database does not exist, even if a concurrent lookup still
    holds the entry; that holder only sees the same miss, and a later
    ``get_or_create`` for the name starts a fresh entry.

    Population is guarded by a per-name lock with a lock-free lookup first,
    and models are registered before the entry is published.
    """

    def __init__(
        self,
        store: TenantStore,
        model_registry: ModelRegistry,
        catalog: SchemaCatalog,
        probe: ConnectionCacheProbe | None = None,
    ):
        self._store = store
        self._model_registry = model_registry
        self._catalog = catalog
        self._probe = probe or DefaultConnectionCacheProbe()
        self._entries: dict[str, CacheEntry] = {}
        self._locks = KeyedLocks()

    async def get_or_create(self, database_name: str) -> CacheEntry:
        """Return the entry for a database, creating and registering it once.

        Raises:
            UnknownEntityError: If the catalog lacks a required entity
        """
        entry = self._entries.get(database_name)
        if entry is not None:
            return entry

        async with self._locks.lock_for(database_name):
            # Double-check after acquiring lock
            entry = self._entries.get(database_name)
            if entry is not None:
                return entry

            handle = self._store.open_handle(database_name)
            entry = CacheEntry(database_name=database_name, handle=handle)
            try:
                self._model_registry.ensure_registered(entry, self._catalog)
            except Exception:
                await self._store.dispose_handle(database_name, handle)
                raise
            self._entries[database_name] = entry
            self._probe.entry_created(database_name=database_name)
            return entry

    def peek(self, database_name: str) -> CacheEntry | None:
        return self._entries.get(database_name)

    async def evict(self, database_name: str) -> bool:
        """Remove an entry and dispose its handle.

        Returns:
            True if an entry was removed
        """
        entry = self._entries.pop(database_name, None)
        if entry is None:
            return False
        await self._store.dispose_handle(database_name, entry.handle)
        self._locks.discard(database_name)
        self._probe.entry_evicted(database_name=database_name)
        return True

    async def dispose_all(self) -> int:
        """Dispose every cached handle and empty the cache."""
        entries = list(self._entries.values())
        self._entries.clear()
        for entry in entries:
            await self._store.dispose_handle(entry.database_name, entry.handle)
        self._probe.entries_disposed(count=len(entries))
        return len(entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, database_name: object) -> bool:
        return database_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class TenantCodeIndex:
    """Normalized property code to the database last proven to hold it.

    Also records negative results: a code that exhaustive discovery could
    not find is remembered as missing for ``negative_ttl`` seconds. A TTL
    of zero disables negative entries. Expired negative entries are pruned
    whenever a new one is recorded, and at most ``max_missing`` are kept,
    oldest dropped first. Pure in-memory state, no I/O.
    """

    def __init__(
        self,
        negative_ttl: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        max_missing: int = 10_000,
    ):
        if negative_ttl < 0:
            raise ValueError("negative_ttl must be >= 0")
        if max_missing < 1:
            raise ValueError("max_missing must be >= 1")
        self._negative_ttl = negative_ttl
        self._clock = clock
        self._max_missing = max_missing
        self._bindings: dict[str, str] = {}
        self._missing_until: dict[str, float] = {}

    def get(self, code: str) -> str | None:
        return self._bindings.get(code)

    def put(self, code: str, database_name: str) -> None:
        self._bindings[code] = database_name
        self._missing_until.pop(code, None)

    def invalidate(self, code: str) -> None:
        self._bindings.pop(code, None)
        self._missing_until.pop(code, None)

    def mark_missing(self, code: str) -> None:
        """Remember that discovery found no database holding ``code``."""
        self._bindings.pop(code, None)
        self._missing_until.pop(code, None)
        if self._negative_ttl <= 0:
            return
        now = self._clock()
        # Insertion order is expiry order because the TTL is fixed
        self._prune_missing(now)
        while len(self._missing_until) >= self._max_missing:
            del self._missing_until[next(iter(self._missing_until))]
        self._missing_until[code] = now + self._negative_ttl

    def _prune_missing(self, now: float) -> None:
        expired = []
        for code, until in self._missing_until.items():
            if now < until:
                break
            expired.append(code)
        for code in expired:
            del self._missing_until[code]

    def missing_count(self) -> int:
        return len(self._missing_until)

    def is_known_missing(self, code: str) -> bool:
        expires_at = self._missing_until.get(code)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            del self._missing_until[code]
            return False
        return True

    def warm(self, bindings: Mapping[str, str]) -> None:
        for code, database_name in bindings.items():
            self.put(code, database_name)

    def clear(self) -> None:
        self._bindings.clear()
        self._missing_until.clear()

    def snapshot(self) -> dict[str, str]:
        return dict(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
