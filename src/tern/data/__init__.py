"""Async database access and schema compilation for tern.

Column specifications in, definition and CRUD statements out. Not an ORM.

Basic usage::

    from tern.data import Column, Database, Table

    db = Database("sqlite:///app.db")
    users = Table("user", [
        Column("id", "int", length=11, unsigned=True, primary_key=True, autoincrement=True),
        Column("name", "varchar", length=32, required=True),
    ])

    await users.define(db)
    user_id = await users.create(db, {"name": "Ada"})

SQLite works out of the box. Other stores need their driver::

    pip install tern[data-pg]     # PostgreSQL (asyncpg)
    pip install tern[data-mysql]  # MySQL (aiomysql)
"""

from tern.data.database import Database
from tern.data.dialects import DIALECTS, Dialect, get_dialect
from tern.data.errors import (
    DataError,
    DriverNotInstalledError,
    MalformedDataError,
    MissingFieldError,
    QueryError,
    SchemaError,
    UnknownFieldError,
)
from tern.data.schema import Column, ForeignKey, TableDefinition, compile_table
from tern.data.statements import Statement
from tern.data.table import Table

__all__ = [
    "DIALECTS",
    "Column",
    "DataError",
    "Database",
    "Dialect",
    "DriverNotInstalledError",
    "ForeignKey",
    "MalformedDataError",
    "MissingFieldError",
    "QueryError",
    "SchemaError",
    "Statement",
    "Table",
    "TableDefinition",
    "UnknownFieldError",
    "compile_table",
    "get_dialect",
]
