"""Domain layer for the tenancy bounded context."""

from tenancy.domain.property import Property
from tenancy.domain.value_objects import (
    EntityName,
    PropertyCode,
    PropertyStatus,
    database_name_from_code,
    sanitize_database_name,
)

__all__ = [
    "EntityName",
    "Property",
    "PropertyCode",
    "PropertyStatus",
    "database_name_from_code",
    "sanitize_database_name",
]
