"""Unit tests for the hotelops-property CLI."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from tenancy.presentation.cli import (
    build_parser,
    parse_allowed_rooms,
    parse_metadata,
    run_command,
)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def out(output) -> Console:
    return Console(file=output, width=120, color_system=None)


class TestParsers:
    """Tests for argument parsing helpers."""

    def test_parse_metadata_object(self):
        assert parse_metadata('{"city": "Lisbon"}') == {"city": "Lisbon"}

    def test_parse_metadata_none(self):
        assert parse_metadata(None) is None

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"text"'])
    def test_parse_metadata_rejects_non_objects(self, raw):
        with pytest.raises(ValueError):
            parse_metadata(raw)

    def test_parse_allowed_rooms(self):
        assert parse_allowed_rooms("30") == 30
        assert parse_allowed_rooms(None) is None

    @pytest.mark.parametrize("raw", ["0", "-3", "ten", "1.5"])
    def test_parse_allowed_rooms_rejects_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_allowed_rooms(raw)

    def test_subcommand_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_create_requires_name_and_code(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["create", "--code", "HSUN"])

    def test_create_arguments(self):
        args = build_parser().parse_args(
            ["create", "--name", "Hotel Sunrise", "--code", "HSUN", "--db-name", "sunrise"]
        )

        assert args.command == "create"
        assert args.db_name == "sunrise"
        assert args.allowed_rooms is None


class TestRunCommand:
    """Tests for executing CLI commands against the in-memory store."""

    @pytest.mark.asyncio
    async def test_create(self, resolver, provisioning_service, store, out, output):
        args = build_parser().parse_args(
            [
                "create",
                "--name",
                "Hotel Sunrise",
                "--code",
                "hsun",
                "--metadata",
                '{"city": "Lisbon"}',
                "--allowed-rooms",
                "25",
            ]
        )

        exit_code = await run_command(args, resolver, provisioning_service, out=out)

        assert exit_code == 0
        record = store.databases["hotel_sunrise"]["HSUN"]
        assert record.allowed_rooms == 25
        assert record.metadata["city"] == "Lisbon"
        assert "Property provisioned successfully" in output.getvalue()
        assert "hotel_sunrise" in output.getvalue()

    @pytest.mark.asyncio
    async def test_create_uses_default_rooms(self, resolver, provisioning_service, store, out):
        args = build_parser().parse_args(["create", "--name", "Sunrise", "--code", "HSUN"])

        assert await run_command(args, resolver, provisioning_service, out=out) == 0
        assert store.databases["sunrise"]["HSUN"].allowed_rooms == 15

    @pytest.mark.asyncio
    async def test_create_duplicate_fails(self, resolver, provisioning_service, out, output):
        args = build_parser().parse_args(["create", "--name", "Sunrise", "--code", "HSUN"])
        await run_command(args, resolver, provisioning_service, out=out)

        exit_code = await run_command(args, resolver, provisioning_service, out=out)

        assert exit_code == 1
        assert "already exists" in output.getvalue()

    @pytest.mark.asyncio
    async def test_create_with_invalid_rooms(
        self, resolver, provisioning_service, store, out, output
    ):
        args = build_parser().parse_args(
            ["create", "--name", "Sunrise", "--code", "HSUN", "--allowed-rooms", "0"]
        )

        assert await run_command(args, resolver, provisioning_service, out=out) == 1
        assert store.databases == {}
        assert "Error:" in output.getvalue()

    @pytest.mark.asyncio
    async def test_update(self, resolver, provisioning_service, store, out, output):
        store.add_property("hsun", "HSUN")
        args = build_parser().parse_args(["update", "--code", "HSUN", "--allowed-rooms", "30"])

        assert await run_command(args, resolver, provisioning_service, out=out) == 0
        assert store.databases["hsun"]["HSUN"].allowed_rooms == 30
        assert "Property updated: allowed_rooms" in output.getvalue()

    @pytest.mark.asyncio
    async def test_update_without_fields(self, resolver, provisioning_service, store, out):
        store.add_property("hsun", "HSUN")
        args = build_parser().parse_args(["update", "--code", "HSUN"])

        assert await run_command(args, resolver, provisioning_service, out=out) == 1

    @pytest.mark.asyncio
    async def test_resolve(self, resolver, provisioning_service, store, out, output):
        store.add_property("grand_palace", "HSUN", name="Grand Palace")
        args = build_parser().parse_args(["resolve", "--code", "hsun"])

        assert await run_command(args, resolver, provisioning_service, out=out) == 0
        text = output.getvalue()
        assert "grand_palace" in text
        assert "Resolved via discovery" in text

    @pytest.mark.asyncio
    async def test_resolve_unknown(self, resolver, provisioning_service, out, output):
        args = build_parser().parse_args(["resolve", "--code", "NOPE"])

        assert await run_command(args, resolver, provisioning_service, out=out) == 1
        assert "NOPE" in output.getvalue()
