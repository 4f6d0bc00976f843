"""Infrastructure layer for the tenancy bounded context."""

from tenancy.infrastructure.catalog import build_default_catalog
from tenancy.infrastructure.store import PostgresTenantStore
from tenancy.infrastructure.tenant_model import BoundTableModel

__all__ = [
    "BoundTableModel",
    "PostgresTenantStore",
    "build_default_catalog",
]
