"""Immutable query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str | list[str]]):
    """Parsed query string.

    A key that appears once maps to its string value; a repeated key maps
    to the list of its values in order of appearance. ``get_list`` always
    returns a list.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        data: dict[str, str | list[str]] = {}
        for key, value in parse_qsl(query_string.decode("latin-1"), keep_blank_values=True):
            existing = data.get(key)
            if existing is None:
                data[key] = value
            elif isinstance(existing, list):
                existing.append(value)
            else:
                data[key] = [existing, value]
        self._data = data

    def __getitem__(self, key: str) -> str | list[str]:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self._data!r})"

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (empty list if missing)."""
        value = self._data.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]
