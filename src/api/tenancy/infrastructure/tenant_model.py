"""Entity tables bound to one property database."""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, Select, Table, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from tenancy.domain.value_objects import EntityName


class BoundTableModel:
    """A copy of an entity table attached to a property database's engine.

    Each property database owns its own copy of the table, held in that
    database's MetaData, so models registered on one handle never leak to
    another.
    """

    def __init__(
        self,
        entity: EntityName,
        database_name: str,
        table: Table,
        engine: AsyncEngine,
    ):
        self._entity = entity
        self._database_name = database_name
        self._table = table
        self._engine = engine

    @property
    def entity(self) -> EntityName:
        return self._entity

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def table(self) -> Table:
        return self._table

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def select(self, *criteria: ColumnElement[bool]) -> Select[Any]:
        return select(self._table).where(*criteria)

    async def fetch_one(self, *criteria: ColumnElement[bool]) -> dict[str, Any] | None:
        """Return the first row matching ``criteria`` as a dict, if any."""
        async with self._engine.connect() as connection:
            result = await connection.execute(self.select(*criteria).limit(1))
            row = result.mappings().first()
        return dict(row) if row is not None else None

    async def insert(self, values: dict[str, Any]) -> None:
        async with self._engine.begin() as connection:
            await connection.execute(insert(self._table).values(**values))

    async def update(self, criteria: ColumnElement[bool], values: dict[str, Any]) -> int:
        """Update matching rows; return the number of rows changed."""
        async with self._engine.begin() as connection:
            result = await connection.execute(
                update(self._table).where(criteria).values(**values)
            )
        return result.rowcount

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<BoundTableModel(entity={self._entity}, "
            f"database={self._database_name}, table={self._table.name})>"
        )
