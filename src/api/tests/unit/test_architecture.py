"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Tenancy bounded context.
"""

from pytest_archon import archrule


class TestTenancyDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        The domain layer contains pure business logic and should not
        know about database engines, SQL, or other infrastructure concerns.
        """
        (
            archrule("domain_no_infrastructure")
            .match("tenancy.domain*")
            .should_not_import("tenancy.infrastructure*", "infrastructure*")
            .check("tenancy")
        )

    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("domain_no_application")
            .match("tenancy.domain*")
            .should_not_import("tenancy.application*")
            .check("tenancy")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("domain_no_frameworks")
            .match("tenancy.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "asyncpg*")
            .check("tenancy")
        )


class TestTenancyPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces; they should not know about PostgresTenantStore."""
        (
            archrule("ports_no_infrastructure")
            .match("tenancy.ports*")
            .should_not_import("tenancy.infrastructure*", "sqlalchemy*", "asyncpg*")
            .check("tenancy")
        )

    def test_ports_does_not_import_application(self):
        """Ports are interfaces for the application layer, not the other way around."""
        (
            archrule("ports_no_application")
            .match("tenancy.ports*")
            .should_not_import("tenancy.application*")
            .check("tenancy")
        )


class TestTenancyApplicationLayerBoundaries:
    """Tests that the application layer only talks to the store through ports."""

    def test_application_does_not_import_infrastructure(self):
        """Resolution and provisioning must not depend on the PostgreSQL store."""
        (
            archrule("application_no_infrastructure")
            .match("tenancy.application*")
            .should_not_import("tenancy.infrastructure*", "sqlalchemy*", "asyncpg*")
            .check("tenancy")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("application_no_presentation")
            .match("tenancy.application*")
            .should_not_import("tenancy.presentation*", "fastapi*", "starlette*")
            .check("tenancy")
        )
