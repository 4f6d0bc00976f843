"""Application layer for the tenancy bounded context."""

from tenancy.application.cache import CacheEntry, ConnectionCache, TenantCodeIndex
from tenancy.application.catalog import REQUIRED_ENTITIES, SchemaCatalog
from tenancy.application.model_registry import ModelRegistry
from tenancy.application.registry import TenantRegistry
from tenancy.application.resolver import TenantResolver
from tenancy.application.value_objects import ResolutionSource, TenantContext

__all__ = [
    "REQUIRED_ENTITIES",
    "CacheEntry",
    "ConnectionCache",
    "ModelRegistry",
    "ResolutionSource",
    "SchemaCatalog",
    "TenantCodeIndex",
    "TenantContext",
    "TenantRegistry",
    "TenantResolver",
]
