"""Application services for the tenancy bounded context."""

from tenancy.application.services.provisioning_service import (
    PropertyProvisioningService,
    PropertyUpdateResult,
    ProvisioningResult,
)

__all__ = [
    "PropertyProvisioningService",
    "PropertyUpdateResult",
    "ProvisioningResult",
]
