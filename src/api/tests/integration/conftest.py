"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL server whose user may create
and drop databases. Use docker-compose for testing.
"""

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from ulid import ULID

from infrastructure.database.engines import create_primary_engine
from infrastructure.settings import DatabaseSettings
from tenancy.application.registry import TenantRegistry
from tenancy.infrastructure import PostgresTenantStore, build_default_catalog
from tenancy.ports.exceptions import PrimaryUnavailableError


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        HOTELOPS_DB_HOST, HOTELOPS_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("HOTELOPS_DB_HOST", "localhost"),
        port=int(os.getenv("HOTELOPS_DB_PORT", "5432")),
        database=os.getenv("HOTELOPS_DB_DATABASE", "postgres"),
        username=os.getenv("HOTELOPS_DB_USERNAME", "hotelops"),
        password=SecretStr(os.getenv("HOTELOPS_DB_PASSWORD", "hotelops_dev_password")),
    )


@pytest.fixture
def unique_suffix() -> str:
    """Short random suffix keeping test databases and codes apart."""
    return str(ULID()).lower()[-10:]


@pytest.fixture
def created_databases() -> list[str]:
    """Databases a test created; dropped after the test."""
    return []


async def drop_databases(settings: DatabaseSettings, names: list[str]) -> None:
    engine = create_primary_engine(settings)
    try:
        async with engine.connect() as connection:
            connection = await connection.execution_options(isolation_level="AUTOCOMMIT")
            for name in names:
                quoted = engine.dialect.identifier_preparer.quote(name)
                await connection.execute(text(f"DROP DATABASE IF EXISTS {quoted} WITH (FORCE)"))
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def tenant_registry(
    integration_db_settings: DatabaseSettings,
    created_databases: list[str],
) -> AsyncGenerator[TenantRegistry, None]:
    """Registry over the integration server.

    Skips when the server is unreachable. Negative caching is disabled so
    each resolution hits the server.
    """
    registry = TenantRegistry(
        store=PostgresTenantStore(integration_db_settings),
        catalog=build_default_catalog(),
        negative_cache_ttl=0,
    )
    try:
        await registry.store.list_database_names()
    except PrimaryUnavailableError as e:
        await registry.close()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield registry

    await registry.close()
    if created_databases:
        await drop_databases(integration_db_settings, created_databases)
