"""A compiled table schema bound to CRUD operations.

``Table`` owns the column list; it compiles definition statements for
whichever dialect a ``Database`` speaks and builds parameterized
statements for each operation.

Usage::

    users = Table("user", [
        Column("id", "int", length=11, unsigned=True, primary_key=True, autoincrement=True),
        Column("name", "varchar", length=32, required=True),
    ])

    await users.define(db)
    user_id = await users.create(db, {"name": "Ada"})
    row = await users.read(db, user_id)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from tern.data.dialects import Dialect
from tern.data.schema import Column, TableDefinition, compile_table, validate_columns
from tern.data.statements import (
    build_delete,
    build_flush,
    build_insert,
    build_read,
    build_update,
)

if TYPE_CHECKING:
    from tern.data.database import Database


class Table:
    """Column specification for one table plus the statements derived from it.

    The column list is validated on construction, so a bad schema fails
    at import time rather than on the first request.
    """

    __slots__ = ("columns", "id_column", "name", "read_only")

    def __init__(self, name: str, columns: Sequence[Column]) -> None:
        self.name = name
        self.columns: tuple[Column, ...] = validate_columns(name, columns)
        self.id_column: str = next((c.name for c in self.columns if c.primary_key), "id")
        self.read_only: frozenset[str] = frozenset(c.name for c in self.columns if c.read_only)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, {len(self.columns)} columns)"

    def definition(self, dialect: str | Dialect = "mysql") -> TableDefinition:
        """Compile the table definition for *dialect*."""
        return compile_table(self.name, self.columns, dialect)

    def writable(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Drop fields the store assigns itself."""
        return {key: value for key, value in data.items() if key not in self.read_only}

    async def define(self, db: Database) -> None:
        """Create the table (and its indexes) if it does not exist."""
        for sql in self.definition(db.dialect).statements:
            await db.execute(sql)

    async def create(self, db: Database, data: Mapping[str, Any]) -> Any:
        """Insert one row and return its generated identifier."""
        stmt = build_insert(self.name, data, db.dialect, id_column=self.id_column)
        return await db.insert(stmt.sql, *stmt.params)

    async def read(self, db: Database, identifier: Any) -> dict[str, Any] | None:
        """Fetch one row by identifier, or ``None``."""
        stmt = build_read(self.name, identifier, db.dialect, id_column=self.id_column)
        return await db.fetch_one(stmt.sql, *stmt.params)

    async def update(self, db: Database, identifier: Any, data: Mapping[str, Any]) -> int:
        """Set the given fields on one row. Returns rows changed."""
        stmt = build_update(self.name, identifier, data, db.dialect, id_column=self.id_column)
        return await db.execute(stmt.sql, *stmt.params)

    async def delete(self, db: Database, identifier: Any) -> int:
        """Delete one row. Returns rows affected."""
        stmt = build_delete(self.name, identifier, db.dialect, id_column=self.id_column)
        return await db.execute(stmt.sql, *stmt.params)

    async def flush(self, db: Database) -> int:
        """Delete every row. Returns rows affected."""
        stmt = build_flush(self.name)
        return await db.execute(stmt.sql, *stmt.params)
