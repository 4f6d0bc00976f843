"""Unit tests for tenancy domain value objects and the Property entity."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from tenancy.domain.property import (
    DEFAULT_ALLOWED_ROOMS,
    PREFERRED_DATABASE_KEY,
    Property,
)
from tenancy.domain.value_objects import (
    EntityName,
    PropertyCode,
    PropertyStatus,
    database_name_from_code,
    sanitize_database_name,
)
from tenancy.ports.exceptions import TenancyError, TenantCodeRequiredError


class TestPropertyCode:
    """Tests for PropertyCode normalization."""

    def test_normalize_trims_and_uppercases(self):
        assert PropertyCode.normalize("  hsun\t").value == "HSUN"

    def test_normalized_codes_compare_equal(self):
        assert PropertyCode.normalize("hsun") == PropertyCode.normalize(" HSUN ")

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n"])
    def test_blank_code_rejected(self, raw):
        with pytest.raises(TenantCodeRequiredError):
            PropertyCode.normalize(raw)

    def test_code_required_is_a_tenancy_error(self):
        """Callers can catch every tenancy failure by the base class."""
        with pytest.raises(TenancyError):
            PropertyCode.normalize("")

    def test_str_returns_value(self):
        assert str(PropertyCode.normalize("abc")) == "ABC"


class TestSanitizeDatabaseName:
    """Tests for database name derivation."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Hotel Sunrise", "hotel_sunrise"),
            ("  Grand -- Palace!! ", "grand_palace"),
            ("sunrise_hotel", "sunrise_hotel"),
            ("Casa.Azul/2024", "casa_azul_2024"),
            ("__edge__", "edge"),
        ],
    )
    def test_collapses_non_alphanumerics(self, raw, expected):
        assert sanitize_database_name(raw) == expected

    def test_truncates_to_max_length(self):
        assert sanitize_database_name("a" * 100) == "a" * 63
        assert sanitize_database_name("abcdef", max_length=3) == "abc"

    @pytest.mark.parametrize("raw", [None, "", "!!!", "   "])
    def test_falls_back_to_timestamp_name(self, raw):
        """Input with no usable characters still yields a valid name."""
        name = sanitize_database_name(raw)

        assert name.startswith("property_")
        assert name.removeprefix("property_").isdigit()

    def test_database_name_from_code_is_deterministic(self):
        code = PropertyCode.normalize("Hotel Sun-Rise")

        assert database_name_from_code(code) == "hotel_sun_rise"
        assert database_name_from_code(code) == database_name_from_code(code)


class TestEntityName:
    """The entity set is closed and stable."""

    def test_contains_property_entity(self):
        assert EntityName("Property") is EntityName.PROPERTY

    def test_entity_names_are_unique(self):
        values = [entity.value for entity in EntityName]
        assert len(values) == len(set(values)) == 25


class TestProperty:
    """Tests for the Property entity."""

    def test_create_sets_defaults(self):
        record = Property.create(code=PropertyCode.normalize("hsun"), name=" Sunrise ")

        assert record.code == "HSUN"
        assert record.name == "Sunrise"
        assert record.status == PropertyStatus.ACTIVE
        assert record.is_active
        assert record.allowed_rooms == DEFAULT_ALLOWED_ROOMS
        assert record.mobile_app_version == "1.0.0"
        assert record.mobile_app_link == ""
        assert record.metadata == {}
        assert len(record.id) == 26
        assert record.created_at == record.updated_at
        assert record.created_at.tzinfo is UTC

    def test_create_generates_distinct_ids(self):
        code = PropertyCode.normalize("hsun")
        assert Property.create(code=code, name="a").id != Property.create(code=code, name="a").id

    def test_create_copies_metadata(self):
        metadata = {"city": "Lisbon"}
        record = Property.create(code=PropertyCode.normalize("x"), name="X", metadata=metadata)

        metadata["city"] = "Porto"

        assert record.metadata == {"city": "Lisbon"}

    def test_create_rejects_blank_name(self):
        with pytest.raises(ValueError, match="name"):
            Property.create(code=PropertyCode.normalize("x"), name="  ")

    def test_create_rejects_zero_rooms(self):
        with pytest.raises(ValueError, match="allowed_rooms"):
            Property.create(code=PropertyCode.normalize("x"), name="X", allowed_rooms=0)

    @pytest.mark.parametrize(
        "metadata,expected",
        [
            ({}, None),
            ({PREFERRED_DATABASE_KEY: "Sunrise_Hotel "}, "sunrise_hotel"),
            ({"dbName": "legacy_db"}, "legacy_db"),
            ({PREFERRED_DATABASE_KEY: "new_db", "dbName": "old_db"}, "new_db"),
            ({PREFERRED_DATABASE_KEY: "  ", "dbName": "old_db"}, "old_db"),
            ({PREFERRED_DATABASE_KEY: 42}, None),
        ],
    )
    def test_preferred_database_name(self, metadata, expected):
        record = Property(id="01", code="HSUN", name="Sunrise", metadata=metadata)

        assert record.preferred_database_name == expected

    def test_inactive_property(self):
        record = Property(id="01", code="X", name="X", status=PropertyStatus.INACTIVE)
        assert not record.is_active


class TestPropertyWithChanges:
    """Tests for Property.with_changes."""

    @pytest.fixture
    def record(self) -> Property:
        return Property(
            id="01",
            code="HSUN",
            name="Sunrise",
            metadata={"city": "Lisbon"},
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
            updated_at=datetime(2024, 1, 1, tzinfo=UTC),
        )

    def test_no_changes_returns_same_instance(self, record):
        assert record.with_changes() is record

    def test_changes_name_and_rooms(self, record):
        updated = record.with_changes(name=" Sunset ", allowed_rooms=40)

        assert updated.name == "Sunset"
        assert updated.allowed_rooms == 40
        assert updated.id == record.id
        assert updated.created_at == record.created_at
        assert updated.updated_at > record.updated_at

    def test_metadata_is_merged(self, record):
        updated = record.with_changes(metadata={"stars": 4})

        assert updated.metadata == {"city": "Lisbon", "stars": 4}
        assert record.metadata == {"city": "Lisbon"}

    def test_rejects_blank_name(self, record):
        with pytest.raises(ValueError):
            record.with_changes(name="")

    def test_rejects_invalid_rooms(self, record):
        with pytest.raises(ValueError):
            record.with_changes(allowed_rooms=-1)
