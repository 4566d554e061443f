"""Schema-to-statement compiler: column specifications to table definitions.

Each column compiles to one definition fragment, in a fixed order:

1. name and type
2. length, or enumerated options (length wins when both are given)
3. ``unsigned``
4. one default/nullability clause, first applicable of:
   ``optional`` (default null) > explicit ``default`` > ``required``
   (not null) > ``timestamp`` (default current_timestamp)
5. ``unique``
6. ``primary key``
7. autoincrement marker

Foreign-key fragments follow all column fragments, then one full-text
fragment over the searchable columns and one index fragment over the
indexed columns. Dialects that can't declare indexes inline get separate
``create index`` statements instead.

Usage::

    columns = [
        Column("id", "int", length=11, unsigned=True, primary_key=True, autoincrement=True),
        Column("name", "varchar", length=32, required=True),
        Column("created_at", "timestamp", timestamp=True),
    ]
    definition = compile_table("user", columns, "mysql")
    definition.create
    # create table if not exists user (
    #   id int(11) unsigned primary key auto_increment,
    #   name varchar(32) not null,
    #   created_at timestamp default current_timestamp
    # )
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from tern.data.dialects import Dialect, get_dialect
from tern.data.errors import SchemaError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TYPE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_ ]*$")


@dataclass(frozen=True, slots=True)
class ForeignKey:
    """Reference from a column to ``table(column)``."""

    table: str
    column: str = "id"
    cascade_delete: bool = False


@dataclass(frozen=True, slots=True)
class Column:
    """Declarative description of one table column. Never mutated."""

    name: str
    type: str
    length: int | tuple[int, ...] | None = None
    options: tuple[str, ...] | None = None
    unsigned: bool = False
    required: bool = False
    optional: bool = False
    default: Any = None
    timestamp: bool = False
    unique: bool = False
    primary_key: bool = False
    autoincrement: bool = False
    searchable: bool = False
    indexed: bool = False
    foreign_key: ForeignKey | None = None

    @property
    def read_only(self) -> bool:
        """Values the store assigns itself: identifiers and creation timestamps."""
        return self.primary_key or self.autoincrement or self.timestamp


@dataclass(frozen=True, slots=True)
class TableDefinition:
    """Compiled definition text for one table."""

    table: str
    create: str
    indexes: tuple[str, ...] = ()

    @property
    def statements(self) -> tuple[str, ...]:
        """Statements to run, in order."""
        return (self.create, *self.indexes)


def check_identifier(name: str, what: str) -> str:
    """Return *name* if it is a plain SQL identifier, else raise ``SchemaError``."""
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        msg = f"Invalid {what} name {name!r}: use letters, digits and underscores."
        raise SchemaError(msg)
    return name


def validate_columns(table: str, columns: Sequence[Column]) -> tuple[Column, ...]:
    """Check a column list as a whole. Raises ``SchemaError`` on the first problem."""
    check_identifier(table, "table")
    if not columns:
        msg = f"Table {table!r} has no columns."
        raise SchemaError(msg)
    seen: set[str] = set()
    primary: list[str] = []
    for column in columns:
        check_identifier(column.name, "column")
        if column.name in seen:
            msg = f"Duplicate column {column.name!r} in table {table!r}."
            raise SchemaError(msg)
        seen.add(column.name)
        if not _TYPE_NAME.match(column.type):
            msg = f"Invalid type {column.type!r} for column {table}.{column.name}."
            raise SchemaError(msg)
        if column.primary_key:
            primary.append(column.name)
        if column.foreign_key is not None:
            check_identifier(column.foreign_key.table, "table")
            check_identifier(column.foreign_key.column, "column")
        if column.length is not None:
            sizes = column.length if isinstance(column.length, tuple) else (column.length,)
            if not sizes or any(not isinstance(n, int) or n <= 0 for n in sizes):
                msg = f"Invalid length {column.length!r} for column {table}.{column.name}."
                raise SchemaError(msg)
        elif column.options is not None and not column.options:
            msg = f"Column {table}.{column.name} declares an empty option list."
            raise SchemaError(msg)
    if len(primary) > 1:
        msg = f"Table {table!r} declares more than one primary key: {', '.join(primary)}."
        raise SchemaError(msg)
    return tuple(columns)


def _type_clause(column: Column, dialect: Dialect) -> tuple[str, bool]:
    """Render type plus size/options. Returns (text, size_replaced_by_type)."""
    if column.autoincrement and dialect.autoincrement is None:
        return dialect.serial_types.get(column.type.lower(), "serial"), True
    if column.autoincrement and column.primary_key and dialect.integer_primary_key:
        return "integer", True
    if column.length is not None:
        if not dialect.takes_length(column.type):
            return column.type, False
        sizes = column.length if isinstance(column.length, tuple) else (column.length,)
        return f"{column.type}({', '.join(str(n) for n in sizes)})", False
    if column.options:
        options = ", ".join(dialect.literal(option) for option in column.options)
        if dialect.enum_types:
            return f"{column.type}({options})", False
        return f"text check ({column.name} in ({options}))", False
    return column.type, False


def _default_clause(column: Column, dialect: Dialect) -> str | None:
    if column.optional:
        return "default null"
    if column.default is not None:
        return f"default {dialect.literal(column.default)}"
    if column.required:
        return "not null"
    if column.timestamp:
        return "default current_timestamp"
    return None


def column_fragment(column: Column, dialect: str | Dialect = "mysql") -> str:
    """Compile one column to its definition fragment."""
    dialect = get_dialect(dialect)
    type_text, typed_by_store = _type_clause(column, dialect)
    parts = [f"{column.name} {type_text}"]
    if column.unsigned and dialect.unsigned and not typed_by_store:
        parts.append("unsigned")
    default = _default_clause(column, dialect)
    if default is not None:
        parts.append(default)
    if column.unique:
        parts.append("unique")
    if column.primary_key:
        parts.append("primary key")
    if column.autoincrement and dialect.autoincrement is not None:
        parts.append(dialect.autoincrement)
    return " ".join(parts)


def foreign_key_fragment(column: Column) -> str:
    """``foreign key (col) references table(col)`` with optional cascade."""
    fk = column.foreign_key
    assert fk is not None
    fragment = f"foreign key ({column.name}) references {fk.table}({fk.column})"
    if fk.cascade_delete:
        fragment += " on delete cascade"
    return fragment


def compile_table(
    table: str,
    columns: Sequence[Column],
    dialect: str | Dialect = "mysql",
) -> TableDefinition:
    """Compile a column list into a ``create table if not exists`` statement.

    Raises ``SchemaError`` before producing any text if the list is invalid.
    """
    dialect = get_dialect(dialect)
    columns = validate_columns(table, columns)

    fragments: list[str] = []
    trailing: list[str] = []
    for column in columns:
        fragments.append(column_fragment(column, dialect))
        if column.foreign_key is not None:
            target = fragments if dialect.inline_foreign_keys else trailing
            target.append(foreign_key_fragment(column))
    fragments.extend(trailing)

    searchable = [c.name for c in columns if c.searchable]
    indexed = [c.name for c in columns if c.indexed]
    indexes: list[str] = []
    if dialect.inline_indexes:
        if searchable:
            fragments.append(f"fulltext ({', '.join(searchable)})")
        if indexed:
            fragments.append(f"index ({', '.join(indexed)})")
    else:
        if searchable:
            indexes.append(
                f"create index if not exists {table}_search_idx on {table} ({', '.join(searchable)})"
            )
        if indexed:
            indexes.append(
                f"create index if not exists {table}_idx on {table} ({', '.join(indexed)})"
            )

    body = ",\n  ".join(fragments)
    create = f"create table if not exists {table} (\n  {body}\n)"
    return TableDefinition(table=table, create=create, indexes=tuple(indexes))
