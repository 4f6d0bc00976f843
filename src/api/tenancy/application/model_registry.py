"""Per-handle registration of entity models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tenancy.application.catalog import REQUIRED_ENTITIES, SchemaCatalog
from tenancy.application.observability import (
    DefaultModelRegistryProbe,
    ModelRegistryProbe,
)
from tenancy.domain.value_objects import EntityName
from tenancy.ports.exceptions import UnknownEntityError
from tenancy.ports.store import ModelSet, TenantStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tenancy.application.cache import CacheEntry


class ModelRegistry:
    """Ensures every required entity has exactly one model on a cache entry.

    Registration does no I/O and is idempotent: entities already present on
    the entry are left untouched, so repeated calls for the same entry are a
    cheap no-op.
    """

    def __init__(
        self,
        store: TenantStore,
        required: Iterable[EntityName] = REQUIRED_ENTITIES,
        probe: ModelRegistryProbe | None = None,
    ):
        self._store = store
        self._required = tuple(required)
        self._probe = probe or DefaultModelRegistryProbe()

    @property
    def required(self) -> tuple[EntityName, ...]:
        return self._required

    def ensure_registered(self, entry: CacheEntry, catalog: SchemaCatalog) -> ModelSet:
        """Bind every missing entity schema to the entry's handle.

        Args:
            entry: Cache entry whose handle receives the models
            catalog: Source of entity schemas

        Returns:
            Read-only view of every model registered on the entry

        Raises:
            UnknownEntityError: If a required entity has no schema
        """
        added: list[str] = []
        for entity in self._required:
            if entity in entry.models:
                continue
            try:
                schema = catalog.schema_for(entity)
            except UnknownEntityError:
                self._probe.registration_failed(
                    database_name=entry.database_name, entity=str(entity)
                )
                raise
            entry.models[entity] = self._store.bind_model(
                entry.database_name, entry.handle, entity, schema
            )
            added.append(str(entity))

        if added:
            self._probe.models_registered(database_name=entry.database_name, entities=added)
        return entry.model_set
