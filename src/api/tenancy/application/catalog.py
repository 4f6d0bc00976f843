"""Schema catalog: the closed table of entity name to schema definition."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from tenancy.domain.value_objects import EntityName
from tenancy.ports.exceptions import UnknownEntityError

REQUIRED_ENTITIES: tuple[EntityName, ...] = tuple(EntityName)


class SchemaCatalog:
    """Static mapping of ``EntityName`` to the schema each database receives.

    Pure data; the only behavior is lookup-or-fail. The schema objects are
    opaque here and are interpreted by the store when a model is bound.
    """

    def __init__(self, schemas: Mapping[EntityName, Any]):
        self._schemas = MappingProxyType(dict(schemas))

    def schema_for(self, entity: EntityName) -> Any:
        """Return the schema of an entity.

        Raises:
            UnknownEntityError: If the catalog has no schema for the entity
        """
        try:
            return self._schemas[entity]
        except KeyError:
            raise UnknownEntityError(str(entity)) from None

    def missing(self, required: Iterable[EntityName] = REQUIRED_ENTITIES) -> list[EntityName]:
        """Entities from ``required`` that have no schema."""
        return [entity for entity in required if entity not in self._schemas]

    @property
    def entities(self) -> tuple[EntityName, ...]:
        return tuple(self._schemas)

    def __contains__(self, entity: object) -> bool:
        return entity in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
