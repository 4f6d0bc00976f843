"""Pydantic models for property API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tenancy.application.value_objects import TenantContext


class CurrentPropertyResponse(BaseModel):
    """Response model for the property resolved from the request."""

    id: str = Field(..., description="Property ID (ULID format)")
    code: str = Field(..., description="Normalized property code")
    name: str = Field(..., description="Property display name")
    status: str = Field(..., description="Active or Inactive")
    allowed_rooms: int = Field(..., description="Number of rooms the property may manage")
    mobile_app_version: str = Field(..., description="Minimum mobile app version")
    mobile_app_link: str = Field(..., description="Mobile app download link")
    database_name: str = Field(..., description="Database holding the property")
    resolved_via: str = Field(..., description="index, default, discovery or override")

    @classmethod
    def from_context(cls, context: TenantContext) -> CurrentPropertyResponse:
        """Convert a resolved tenant context to API response."""
        record = context.property
        return cls(
            id=record.id,
            code=record.code,
            name=record.name,
            status=str(record.status),
            allowed_rooms=record.allowed_rooms,
            mobile_app_version=record.mobile_app_version,
            mobile_app_link=record.mobile_app_link,
            database_name=context.database_name,
            resolved_via=str(context.source),
        )
