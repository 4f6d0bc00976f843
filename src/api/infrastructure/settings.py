"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Settings for the shared PostgreSQL server holding every property database.

    The ``database`` field names the primary (maintenance) database. It is
    used to enumerate property databases and to run CREATE DATABASE during
    provisioning; property databases themselves are selected by name at
    resolution time.

    Environment variables:
        HOTELOPS_DB_HOST: Database host (default: localhost)
        HOTELOPS_DB_PORT: Database port (default: 5432)
        HOTELOPS_DB_DATABASE: Primary database name (default: postgres)
        HOTELOPS_DB_USERNAME: Database user (default: hotelops)
        HOTELOPS_DB_PASSWORD: Database password (required in production)
        HOTELOPS_DB_POOL_MAX_CONNECTIONS: Pool size of the primary engine (default: 5)
        HOTELOPS_DB_TENANT_POOL_SIZE: Pool size of each property engine (default: 5)
        HOTELOPS_DB_TENANT_MAX_OVERFLOW: Overflow of each property engine (default: 5)
        HOTELOPS_DB_POOL_PRE_PING: Verify pooled connections before use (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOTELOPS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="postgres", description="Primary database name")
    username: str = Field(default="hotelops", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=5,
        description="Pool size of the primary engine",
        ge=1,
        le=100,
    )
    tenant_pool_size: int = Field(
        default=5,
        description="Pool size of each property database engine",
        ge=1,
        le=100,
    )
    tenant_max_overflow: int = Field(
        default=5,
        description="Overflow connections allowed per property database engine",
        ge=0,
        le=100,
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Verify pooled connections before use",
    )

    @property
    def is_configured(self) -> bool:
        """Whether a primary endpoint has been provided."""
        return bool(self.host.strip()) and bool(self.database.strip())

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        HOTELOPS_TENANCY_RESERVED_DATABASES: JSON list of database names never
            probed during discovery (default: ["postgres", "template0", "template1"])
        HOTELOPS_TENANCY_DATABASE_NAME_MAX_LENGTH: Truncation limit for derived
            database names (default: 63)
        HOTELOPS_TENANCY_NEGATIVE_CACHE_TTL_SECONDS: How long an exhaustive
            "not found" result is remembered (default: 30, 0 disables)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOTELOPS_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    reserved_databases: list[str] = Field(
        default_factory=lambda: ["postgres", "template0", "template1"],
        description="Databases excluded from discovery",
    )
    database_name_max_length: int = Field(
        default=63,
        description="Maximum length of a derived database name",
        ge=1,
        le=63,
    )
    negative_cache_ttl_seconds: float = Field(
        default=30.0,
        description="Seconds a definitive not-found result is cached",
        ge=0,
    )

    @model_validator(mode="after")
    def normalize_reserved_databases(self) -> "TenancySettings":
        """Compare reserved names case-insensitively."""
        self.reserved_databases = sorted(
            {name.strip().lower() for name in self.reserved_databases if name.strip()}
        )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="HOTELOPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="HotelOps API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto",
        description="Log rendering: console, json, or auto (console on a TTY)",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
