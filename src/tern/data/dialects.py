"""SQL dialects for the statement compiler.

``mysql`` renders column definitions exactly in the canonical form
(inline ``fulltext``/``index`` fragments, ``unsigned``, ``auto_increment``).
``sqlite`` and ``postgresql`` rewrite what their grammar can't express
inline:

- ``unsigned`` is dropped.
- Enumerated options become ``text check (name in (...))``.
- Search and secondary indexes become separate ``create index`` statements.
- Updates only touch rows whose values differ, so row counts mean
  "changed" as they do on MySQL.
- sqlite: an autoincrement primary key is typed ``integer``
  (``autoincrement`` is only legal there).
- postgresql: autoincrement columns take a ``serial`` type; inserts use
  ``returning`` to report the generated identifier; lengths are only
  kept for types that accept one.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from tern.data.errors import DataError


@dataclass(frozen=True, slots=True)
class Dialect:
    """Per-store spelling rules. Instances are module-level constants."""

    name: str
    param_style: str  # "qmark" (?), "format" (%s), or "numeric" ($1)
    identifier_quote: str
    autoincrement: str | None
    inline_indexes: bool
    unsigned: bool
    enum_types: bool
    # Foreign keys directly after their column rather than after all columns
    inline_foreign_keys: bool = False
    integer_primary_key: bool = False
    returning: bool = False
    default_row: str = "() values ()"
    sized_types: frozenset[str] | None = None  # None: any type takes a length
    serial_types: dict[str, str] = field(default_factory=dict)
    # Null-safe inequality used to count only rows an update changes; None
    # where the driver already reports changed rather than matched rows
    distinct_from: str | None = None

    def placeholder(self, position: int) -> str:
        """Parameter marker for the 1-based *position*."""
        if self.param_style == "numeric":
            return f"${position}"
        if self.param_style == "format":
            return "%s"
        return "?"

    def quote(self, name: str) -> str:
        """Quote an identifier, doubling any embedded quote character."""
        q = self.identifier_quote
        quoted = f"{q}{name.replace(q, q + q)}{q}"
        if self.param_style == "format":
            # format-style drivers run the SQL through %-interpolation
            quoted = quoted.replace("%", "%%")
        return quoted

    def literal(self, value: Any) -> str:
        """Render a default value or option as SQL literal text."""
        if isinstance(value, bool):
            if self.name == "postgresql":
                return "true" if value else "false"
            return "1" if value else "0"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (date, datetime, time)):
            value = value.isoformat()
        text = str(value).replace("'", "''")
        return f"'{text}'"

    def takes_length(self, type_name: str) -> bool:
        return self.sized_types is None or type_name.lower() in self.sized_types


MYSQL = Dialect(
    name="mysql",
    param_style="format",
    identifier_quote="`",
    autoincrement="auto_increment",
    inline_indexes=True,
    inline_foreign_keys=True,
    unsigned=True,
    enum_types=True,
)

SQLITE = Dialect(
    name="sqlite",
    param_style="qmark",
    identifier_quote='"',
    autoincrement="autoincrement",
    inline_indexes=False,
    unsigned=False,
    enum_types=False,
    integer_primary_key=True,
    default_row="default values",
    distinct_from="is not",
)

POSTGRESQL = Dialect(
    name="postgresql",
    param_style="numeric",
    identifier_quote='"',
    autoincrement=None,
    inline_indexes=False,
    unsigned=False,
    enum_types=False,
    returning=True,
    default_row="default values",
    distinct_from="is distinct from",
    sized_types=frozenset(
        {"varchar", "char", "character", "character varying", "bit", "varbit", "numeric", "decimal"}
    ),
    serial_types={"smallint": "smallserial", "bigint": "bigserial"},
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (MYSQL, SQLITE, POSTGRESQL)}


def get_dialect(name: str | Dialect) -> Dialect:
    """Look up a dialect by name (instances pass through)."""
    if isinstance(name, Dialect):
        return name
    try:
        return DIALECTS[name]
    except KeyError:
        msg = f"Unknown SQL dialect {name!r}. Supported: {', '.join(sorted(DIALECTS))}"
        raise DataError(msg) from None
