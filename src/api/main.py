"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tenancy.dependencies import close_tenant_registry
from tenancy.presentation import routes as tenancy_routes


@asynccontextmanager
async def hotelops_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Tenant registry lifecycle (created lazily, every handle disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    yield

    await close_tenant_registry()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant hotel back-office API",
    version=__version__,
    lifespan=hotelops_lifespan,
)

# Include Tenancy bounded context routes
app.include_router(tenancy_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
