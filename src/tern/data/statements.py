"""Parameterized CRUD statement builders.

Values are always bound positionally, never interpolated. Field lists
for insert and update come from the data's own keys in iteration order;
field names are quoted by the dialect since they come from callers.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from tern.data.dialects import Dialect, get_dialect
from tern.data.errors import MalformedDataError

_SCALARS = (str, int, float, bool, bytes, Decimal, date, datetime, time)


@dataclass(frozen=True, slots=True)
class Statement:
    """SQL text plus its positional parameters."""

    sql: str
    params: tuple[Any, ...] = ()


def _fields(data: Any) -> list[tuple[str, Any]]:
    """Validate insert/update data and return its items in order."""
    if not isinstance(data, Mapping):
        msg = f"Expected an object of fields, got {type(data).__name__}"
        raise MalformedDataError(msg)
    items: list[tuple[str, Any]] = []
    for key, value in data.items():
        if not isinstance(key, str) or not key:
            msg = f"Invalid field name {key!r}"
            raise MalformedDataError(msg)
        if value is not None and not isinstance(value, _SCALARS):
            msg = f"Unsupported value for field {key!r}: {type(value).__name__}"
            raise MalformedDataError(msg)
        items.append((key, value))
    return items


def build_insert(
    table: str,
    data: Mapping[str, Any],
    dialect: str | Dialect = "mysql",
    *,
    id_column: str = "id",
) -> Statement:
    """``insert into table (a, b) values (?, ?)``.

    Empty data inserts a row of defaults. Dialects with ``returning``
    append ``returning <id_column>`` so the generated identifier comes back.
    """
    dialect = get_dialect(dialect)
    items = _fields(data)
    if items:
        names = ", ".join(dialect.quote(key) for key, _ in items)
        marks = ", ".join(dialect.placeholder(i) for i in range(1, len(items) + 1))
        sql = f"insert into {table} ({names}) values ({marks})"
    else:
        sql = f"insert into {table} {dialect.default_row}"
    if dialect.returning:
        sql += f" returning {id_column}"
    return Statement(sql, tuple(value for _, value in items))


def build_read(
    table: str,
    identifier: Any,
    dialect: str | Dialect = "mysql",
    *,
    id_column: str = "id",
) -> Statement:
    """``select * from table where id = ?``."""
    dialect = get_dialect(dialect)
    return Statement(
        f"select * from {table} where {id_column} = {dialect.placeholder(1)}",
        (identifier,),
    )


def build_update(
    table: str,
    identifier: Any,
    data: Mapping[str, Any],
    dialect: str | Dialect = "mysql",
    *,
    id_column: str = "id",
) -> Statement:
    """``update table set a = ?, b = ? where id = ?``.

    Dialects with ``distinct_from`` also require one assigned value to
    differ, so the affected-row count is the number of rows changed.
    Raises ``MalformedDataError`` when there is nothing to set.
    """
    dialect = get_dialect(dialect)
    items = _fields(data)
    if not items:
        msg = "No fields to update"
        raise MalformedDataError(msg)
    assignments = ", ".join(
        f"{dialect.quote(key)} = {dialect.placeholder(i)}" for i, (key, _) in enumerate(items, 1)
    )
    values = tuple(value for _, value in items)
    where = f"{id_column} = {dialect.placeholder(len(items) + 1)}"
    params: tuple[Any, ...] = (*values, identifier)
    if dialect.distinct_from:
        if dialect.param_style == "numeric":
            marks = [dialect.placeholder(i) for i in range(1, len(items) + 1)]
        else:
            marks = [dialect.placeholder(0)] * len(items)
            params += values
        changed = " or ".join(
            f"{dialect.quote(key)} {dialect.distinct_from} {mark}"
            for (key, _), mark in zip(items, marks, strict=True)
        )
        where += f" and ({changed})"
    return Statement(f"update {table} set {assignments} where {where}", params)


def build_delete(
    table: str,
    identifier: Any,
    dialect: str | Dialect = "mysql",
    *,
    id_column: str = "id",
) -> Statement:
    """``delete from table where id = ?``."""
    dialect = get_dialect(dialect)
    return Statement(
        f"delete from {table} where {id_column} = {dialect.placeholder(1)}",
        (identifier,),
    )


def build_flush(table: str) -> Statement:
    """``delete from table``: removes every row."""
    return Statement(f"delete from {table}")
