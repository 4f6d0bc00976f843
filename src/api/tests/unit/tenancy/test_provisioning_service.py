"""Unit tests for PropertyProvisioningService."""

from __future__ import annotations

import pytest

from tenancy.application.value_objects import ResolutionSource
from tenancy.domain.property import PREFERRED_DATABASE_KEY
from tenancy.ports.exceptions import (
    NothingToUpdateError,
    PropertyAlreadyExistsError,
    TenantCodeRequiredError,
    TenantNotFoundError,
)


class TestProvision:
    """Tests for creating properties."""

    @pytest.mark.asyncio
    async def test_creates_database_storage_and_record(
        self, provisioning_service, store, provisioning_probe
    ):
        result = await provisioning_service.provision(name="Hotel Sunrise", code=" hsun ")

        assert result.database_name == "hotel_sunrise"
        assert result.database_created is True
        assert result.property.code == "HSUN"
        assert result.property.name == "Hotel Sunrise"
        assert result.property.allowed_rooms == 15
        assert store.databases["hotel_sunrise"]["HSUN"] is result.property
        assert "hotel_sunrise" not in store.without_storage
        provisioning_probe.database_prepared.assert_called_once_with(
            database_name="hotel_sunrise", created=True
        )
        provisioning_probe.property_provisioned.assert_called_once_with(
            code="HSUN", database_name="hotel_sunrise", property_id=result.property.id
        )

    @pytest.mark.asyncio
    async def test_explicit_database_name_is_sanitized(self, provisioning_service):
        result = await provisioning_service.provision(
            name="Hotel Sunrise", code="HSUN", database_name="Sunrise-Hotel"
        )

        assert result.database_name == "sunrise_hotel"

    @pytest.mark.asyncio
    async def test_records_preferred_database(self, provisioning_service):
        result = await provisioning_service.provision(
            name="Hotel Sunrise",
            code="HSUN",
            database_name="sunrise_hotel",
            metadata={"city": "Lisbon"},
        )

        assert result.property.metadata == {
            "city": "Lisbon",
            PREFERRED_DATABASE_KEY: "sunrise_hotel",
        }
        assert result.property.preferred_database_name == "sunrise_hotel"

    @pytest.mark.asyncio
    async def test_resolution_after_provisioning_uses_index(
        self, provisioning_service, resolver, store
    ):
        result = await provisioning_service.provision(name="Hotel Sunrise", code="HSUN")
        store.list_calls = 0

        context = await resolver.resolve("hsun")

        assert context.database_name == result.database_name
        assert context.source == ResolutionSource.INDEX
        assert store.list_calls == 0

    @pytest.mark.asyncio
    async def test_provisioning_clears_negative_cache(self, provisioning_service, resolver):
        with pytest.raises(TenantNotFoundError):
            await resolver.resolve("HSUN")

        await provisioning_service.provision(name="Hotel Sunrise", code="HSUN")

        context = await resolver.resolve("HSUN")
        assert context.database_name == "hotel_sunrise"

    @pytest.mark.asyncio
    async def test_duplicate_code_raises(self, provisioning_service, provisioning_probe):
        await provisioning_service.provision(name="Hotel Sunrise", code="HSUN")

        with pytest.raises(PropertyAlreadyExistsError) as exc_info:
            await provisioning_service.provision(name="Hotel Sunrise", code="hsun")

        assert exc_info.value.code == "HSUN"
        assert exc_info.value.database_name == "hotel_sunrise"
        provisioning_probe.duplicate_property.assert_called_once_with(
            code="HSUN", database_name="hotel_sunrise"
        )

    @pytest.mark.asyncio
    async def test_existing_database_is_reused(self, provisioning_service, store):
        """Re-running against a prepared database adds the record only."""
        store.add_database("hotel_sunrise")

        result = await provisioning_service.provision(name="Hotel Sunrise", code="HSUN")

        assert result.database_created is False
        assert "HSUN" in store.databases["hotel_sunrise"]

    @pytest.mark.asyncio
    async def test_storage_is_completed_for_half_provisioned_database(
        self, provisioning_service, store
    ):
        store.add_database("hotel_sunrise")
        store.without_storage.add("hotel_sunrise")

        await provisioning_service.provision(name="Hotel Sunrise", code="HSUN")

        assert "hotel_sunrise" not in store.without_storage

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["", "   ", None])
    async def test_blank_code_rejected(self, provisioning_service, store, code):
        with pytest.raises(TenantCodeRequiredError):
            await provisioning_service.provision(name="Hotel", code=code)

        assert store.databases == {}

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, provisioning_service, store):
        with pytest.raises(ValueError, match="name"):
            await provisioning_service.provision(name="  ", code="HSUN")

        assert store.databases == {}

    @pytest.mark.asyncio
    async def test_invalid_rooms_rejected(self, provisioning_service, store):
        with pytest.raises(ValueError, match="allowed_rooms"):
            await provisioning_service.provision(name="Hotel", code="HSUN", allowed_rooms=0)

        assert store.databases == {}

    @pytest.mark.asyncio
    async def test_reserved_database_rejected(self, provisioning_service, store):
        with pytest.raises(ValueError, match="reserved"):
            await provisioning_service.provision(
                name="Hotel", code="HSUN", database_name="Postgres"
            )

        assert store.databases == {}


class TestUpdate:
    """Tests for updating properties."""

    @pytest.mark.asyncio
    async def test_updates_fields_and_reports_changes(
        self, provisioning_service, store, provisioning_probe
    ):
        store.add_property("hsun", "HSUN", name="Sunrise", metadata={"city": "Lisbon"})

        result = await provisioning_service.update(
            code="hsun", allowed_rooms=30, metadata={"stars": 4}
        )

        assert result.changed_fields == ("allowed_rooms", "metadata")
        assert result.database_name == "hsun"
        assert result.property.allowed_rooms == 30
        assert result.property.metadata == {"city": "Lisbon", "stars": 4}
        assert store.databases["hsun"]["HSUN"] is result.property
        provisioning_probe.property_updated.assert_called_once_with(
            code="HSUN", database_name="hsun", fields=["allowed_rooms", "metadata"]
        )

    @pytest.mark.asyncio
    async def test_update_refreshes_cached_record(self, provisioning_service, resolver, store):
        store.add_property("hsun", "HSUN", name="Sunrise")
        await resolver.resolve("HSUN")

        await provisioning_service.update(code="HSUN", name="Sunset")

        context = await resolver.resolve("HSUN")
        assert context.property.name == "Sunset"

    @pytest.mark.asyncio
    async def test_update_finds_renamed_database(self, provisioning_service, store):
        store.add_property("grand_palace", "HSUN")

        result = await provisioning_service.update(code="HSUN", name="Grand Palace")

        assert result.database_name == "grand_palace"

    @pytest.mark.asyncio
    async def test_nothing_to_update(self, provisioning_service, store):
        store.add_property("hsun", "HSUN")

        with pytest.raises(NothingToUpdateError):
            await provisioning_service.update(code="HSUN")

        assert store.find_calls == []

    @pytest.mark.asyncio
    async def test_same_values_are_not_a_change(self, provisioning_service, store):
        store.add_property("hsun", "HSUN", name="Sunrise")

        with pytest.raises(NothingToUpdateError):
            await provisioning_service.update(code="HSUN", name="Sunrise", allowed_rooms=15)

    @pytest.mark.asyncio
    async def test_unknown_code(self, provisioning_service):
        with pytest.raises(TenantNotFoundError):
            await provisioning_service.update(code="NOPE", name="x")

    @pytest.mark.asyncio
    async def test_invalid_rooms(self, provisioning_service, store):
        record = store.add_property("hsun", "HSUN")

        with pytest.raises(ValueError):
            await provisioning_service.update(code="HSUN", allowed_rooms=0)

        assert store.databases["hsun"]["HSUN"] is record
