"""HTTP routes for the property of the current request."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from tenancy.application.value_objects import TenantContext
from tenancy.dependencies import get_tenant_context
from tenancy.presentation.models import CurrentPropertyResponse

router = APIRouter(
    prefix="/properties",
    tags=["properties"],
)


@router.get("/current")
async def get_current_property(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> CurrentPropertyResponse:
    """Return the property named by the X-Property-Code header.

    Raises:
        HTTPException: 400 if the header is missing
        HTTPException: 401 if the property code is unknown
        HTTPException: 503 if the property store is unavailable
    """
    return CurrentPropertyResponse.from_context(tenant)
