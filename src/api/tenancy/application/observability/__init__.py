"""Domain probes for the tenancy application layer."""

from tenancy.application.observability.connection_cache_probe import (
    ConnectionCacheProbe,
    DefaultConnectionCacheProbe,
)
from tenancy.application.observability.model_registry_probe import (
    DefaultModelRegistryProbe,
    ModelRegistryProbe,
)
from tenancy.application.observability.provisioning_probe import (
    DefaultProvisioningProbe,
    ProvisioningProbe,
)
from tenancy.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "ConnectionCacheProbe",
    "DefaultConnectionCacheProbe",
    "DefaultModelRegistryProbe",
    "DefaultProvisioningProbe",
    "DefaultTenantResolverProbe",
    "ModelRegistryProbe",
    "ProvisioningProbe",
    "TenantResolverProbe",
]
