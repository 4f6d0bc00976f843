"""Application-layer value objects for the tenancy bounded context.

These represent the outcome of tenant resolution as handed to every other
part of the system, not business entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from tenancy.domain.property import Property
from tenancy.ports.store import ModelSet


class ResolutionSource(StrEnum):
    """How a tenant context's database was chosen."""

    INDEX = "index"
    DEFAULT = "default"
    DISCOVERY = "discovery"
    OVERRIDE = "override"


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant: the normalized code and the database that holds it.

    Immutable once built. ``models`` is read-only; collaborators look up
    entities through it but cannot register new ones.
    """

    code: str
    database_name: str
    handle: Any
    models: ModelSet
    property: Property
    source: ResolutionSource

    @property
    def property_id(self) -> str:
        return self.property.id
