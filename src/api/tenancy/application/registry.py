"""Owner of the process-wide tenancy caches."""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from tenancy.application.cache import ConnectionCache, KeyedLocks, TenantCodeIndex
from tenancy.application.catalog import SchemaCatalog
from tenancy.application.model_registry import ModelRegistry
from tenancy.application.observability import (
    ConnectionCacheProbe,
    ModelRegistryProbe,
)
from tenancy.ports.store import TenantStore


class TenantRegistry:
    """Holds the connection cache, the code index and per-code locks.

    Constructed once per process and injected into the resolver and the
    provisioning service so both share the same handles and bindings.
    """

    def __init__(
        self,
        store: TenantStore,
        catalog: SchemaCatalog,
        negative_cache_ttl: float = 30.0,
        cache_probe: ConnectionCacheProbe | None = None,
        model_registry_probe: ModelRegistryProbe | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._catalog = catalog
        self._model_registry = ModelRegistry(store, probe=model_registry_probe)
        self._connections = ConnectionCache(
            store, self._model_registry, catalog, probe=cache_probe
        )
        self._index = TenantCodeIndex(negative_ttl=negative_cache_ttl, clock=clock)
        self._code_locks = KeyedLocks()

    @property
    def store(self) -> TenantStore:
        return self._store

    @property
    def catalog(self) -> SchemaCatalog:
        return self._catalog

    @property
    def model_registry(self) -> ModelRegistry:
        return self._model_registry

    @property
    def connections(self) -> ConnectionCache:
        return self._connections

    @property
    def index(self) -> TenantCodeIndex:
        return self._index

    def code_lock(self, code: str) -> AbstractAsyncContextManager[None]:
        """Single-flight lock serializing discovery of one property code.

        The lock is forgotten once nobody holds or awaits it.
        """
        return self._code_locks.hold(code)

    def reset(self) -> None:
        """Forget every code binding; cached handles stay open."""
        self._index.clear()

    async def close(self) -> None:
        """Dispose every cached handle and release store-wide resources."""
        await self._connections.dispose_all()
        self._index.clear()
        await self._store.close()
