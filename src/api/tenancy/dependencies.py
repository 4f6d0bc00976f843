"""FastAPI dependency injection for the tenancy bounded context.

The tenant registry and resolver are process-wide singletons. Request
handlers receive a resolved ``TenantContext`` through
``get_tenant_context``, which reads the ``X-Property-Code`` header.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        reservations = tenant.models[EntityName.RESERVATION]
        ...
"""

from __future__ import annotations

import threading
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings, get_tenancy_settings
from tenancy.application.registry import TenantRegistry
from tenancy.application.resolver import TenantResolver
from tenancy.application.services import PropertyProvisioningService
from tenancy.application.value_objects import TenantContext
from tenancy.infrastructure import PostgresTenantStore, build_default_catalog
from tenancy.ports.exceptions import (
    PrimaryUnavailableError,
    TenantCodeRequiredError,
    TenantNotFoundError,
)

PROPERTY_CODE_HEADER = "X-Property-Code"
RETRY_AFTER_SECONDS = 5

# Module-level singletons (created on first use)
_registry: TenantRegistry | None = None
_resolver: TenantResolver | None = None

# Thread lock for safe singleton initialization
_registry_lock = threading.Lock()


def build_tenant_registry() -> TenantRegistry:
    """Build a registry over PostgreSQL from the current settings."""
    store = PostgresTenantStore(get_database_settings(), probe=DefaultConnectionProbe())
    return TenantRegistry(
        store=store,
        catalog=build_default_catalog(),
        negative_cache_ttl=get_tenancy_settings().negative_cache_ttl_seconds,
    )


def build_tenant_resolver(registry: TenantRegistry) -> TenantResolver:
    tenancy = get_tenancy_settings()
    return TenantResolver(
        registry,
        reserved_databases=tenancy.reserved_databases,
        database_name_max_length=tenancy.database_name_max_length,
    )


def get_tenant_registry() -> TenantRegistry:
    """Get the tenant registry (singleton).

    Uses double-check locking for thread-safe initialization.
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            # Double-check after acquiring lock
            if _registry is None:
                _registry = build_tenant_registry()
    return _registry


def get_tenant_resolver() -> TenantResolver:
    """Get the tenant resolver (singleton) bound to the shared registry."""
    global _resolver
    if _resolver is None:
        registry = get_tenant_registry()
        with _registry_lock:
            if _resolver is None:
                _resolver = build_tenant_resolver(registry)
    return _resolver


def build_provisioning_service(resolver: TenantResolver) -> PropertyProvisioningService:
    tenancy = get_tenancy_settings()
    return PropertyProvisioningService(
        registry=resolver.registry,
        resolver=resolver,
        reserved_databases=tenancy.reserved_databases,
        database_name_max_length=tenancy.database_name_max_length,
    )


async def get_tenant_context(
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    x_property_code: Annotated[str | None, Header(alias=PROPERTY_CODE_HEADER)] = None,
) -> TenantContext:
    """Resolve the tenant context of a request (FastAPI dependency).

    Raises:
        HTTPException 400: If the header is missing or blank
        HTTPException 401: If no property with the code exists
        HTTPException 503: If the store could not be reached
    """
    try:
        return await resolver.resolve(x_property_code)
    except TenantCodeRequiredError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{PROPERTY_CODE_HEADER} header is required",
        )
    except TenantNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown property code",
        )
    except PrimaryUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Property store is temporarily unavailable",
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )


async def close_tenant_registry() -> None:
    """Dispose every cached handle and reset the singletons.

    Should be called on application shutdown.
    """
    global _registry, _resolver
    registry = _registry
    _registry = None
    _resolver = None
    if registry is not None:
        await registry.close()
