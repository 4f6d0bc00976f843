"""Ports (exceptions and store protocol) for the tenancy bounded context."""

from tenancy.ports.exceptions import (
    DatabaseMissingError,
    NothingToUpdateError,
    PrimaryUnavailableError,
    PropertyAlreadyExistsError,
    TenancyError,
    TenantCodeRequiredError,
    TenantNotFoundError,
    UnknownEntityError,
)
from tenancy.ports.store import ModelSet, TenantModel, TenantStore

__all__ = [
    "DatabaseMissingError",
    "ModelSet",
    "NothingToUpdateError",
    "PrimaryUnavailableError",
    "PropertyAlreadyExistsError",
    "TenancyError",
    "TenantCodeRequiredError",
    "TenantModel",
    "TenantNotFoundError",
    "TenantStore",
    "UnknownEntityError",
]
