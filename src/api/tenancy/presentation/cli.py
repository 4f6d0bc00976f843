"""Administrative CLI for provisioning and inspecting properties.

Usage:
    hotelops-property create --name "Hotel Sunrise" --code HSUN --db-name sunrise_hotel
    hotelops-property update --code HSUN --allowed-rooms 30
    hotelops-property resolve --code HSUN

Connection settings come from the usual HOTELOPS_DB_* environment
variables (or .env).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from tenancy.application.resolver import TenantResolver
from tenancy.application.services import PropertyProvisioningService
from tenancy.dependencies import (
    build_provisioning_service,
    build_tenant_registry,
    build_tenant_resolver,
)
from tenancy.domain.property import DEFAULT_ALLOWED_ROOMS, Property
from tenancy.ports.exceptions import TenancyError

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hotelops-property",
        description="Provision, update and resolve HotelOps properties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s create --name "Hotel Sunrise" --code HSUN
  %(prog)s create --name "Hotel Sunrise" --code HSUN --db-name sunrise_hotel
  %(prog)s update --code HSUN --allowed-rooms 30
  %(prog)s update --code HSUN --metadata '{"city": "Lisbon"}'
  %(prog)s resolve --code HSUN
        """,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Provision a new property")
    create.add_argument("--name", required=True, help="Display name of the property")
    create.add_argument("--code", required=True, help="Unique property code (uppercased)")
    create.add_argument(
        "--db-name",
        default=None,
        help="Database name (default: sanitized property name)",
    )
    create.add_argument("--metadata", default=None, help="JSON object merged into metadata")
    create.add_argument("--allowed-rooms", default=None, help="Allowed rooms (default: 15)")

    update = commands.add_parser("update", help="Update an existing property")
    update.add_argument("--code", required=True, help="Property code")
    update.add_argument("--name", default=None, help="New display name")
    update.add_argument("--metadata", default=None, help="JSON object merged into metadata")
    update.add_argument("--allowed-rooms", default=None, help="New allowed rooms")

    resolve = commands.add_parser("resolve", help="Show which database holds a property")
    resolve.add_argument("--code", required=True, help="Property code")

    return parser


def parse_metadata(raw: str | None) -> dict[str, Any] | None:
    """Parse ``--metadata``; it must be a JSON object.

    Raises:
        ValueError: If the value is not valid JSON or not an object
    """
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid metadata JSON: {e.msg}") from e
    if not isinstance(value, dict):
        raise ValueError("Metadata must be a JSON object")
    return value


def parse_allowed_rooms(raw: str | None) -> int | None:
    """Parse ``--allowed-rooms``; it must be a positive integer.

    Raises:
        ValueError: If the value is not a positive integer
    """
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid allowed rooms value: {raw!r}") from None
    if value < 1:
        raise ValueError(f"Allowed rooms must be a positive integer, got {value}")
    return value


def _property_table(title: str, record: Property, database_name: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Property ID", record.id)
    table.add_row("Property Code", record.code)
    table.add_row("Name", record.name)
    table.add_row("Database", database_name)
    table.add_row("Allowed Rooms", str(record.allowed_rooms))
    table.add_row("Status", str(record.status))
    return table


async def run_command(
    args: argparse.Namespace,
    resolver: TenantResolver,
    service: PropertyProvisioningService,
    out: Console = console,
) -> int:
    """Execute a parsed command; return the process exit code."""
    try:
        if args.command == "create":
            result = await service.provision(
                name=args.name,
                code=args.code,
                database_name=args.db_name,
                metadata=parse_metadata(args.metadata),
                allowed_rooms=parse_allowed_rooms(args.allowed_rooms) or DEFAULT_ALLOWED_ROOMS,
            )
            out.print("[green]✓[/green] Property provisioned successfully")
            out.print(_property_table("Property", result.property, result.database_name))
        elif args.command == "update":
            result = await service.update(
                code=args.code,
                name=args.name,
                allowed_rooms=parse_allowed_rooms(args.allowed_rooms),
                metadata=parse_metadata(args.metadata),
            )
            out.print(
                f"[green]✓[/green] Property updated: {', '.join(result.changed_fields)}"
            )
            out.print(_property_table("Property", result.property, result.database_name))
        else:
            context = await resolver.resolve(args.code)
            out.print(_property_table("Property", context.property, context.database_name))
            out.print(f"Resolved via [bold]{context.source}[/bold]")
    except (TenancyError, ValueError) as e:
        out.print(f"[bold red]Error:[/] {e}")
        return 1
    return 0


async def _run(args: argparse.Namespace) -> int:
    registry = build_tenant_registry()
    resolver = build_tenant_resolver(registry)
    service = build_provisioning_service(resolver)
    try:
        return await run_command(args, resolver, service)
    finally:
        await registry.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
