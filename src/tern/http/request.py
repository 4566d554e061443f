"""Per-request input façade.

Frozen metadata plus the already-buffered, already-parsed body. Computed
properties that aren't needed by every stage (cookies) are memoised in a
private per-request cache on first access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tern._internal.asgi import Scope
from tern.http.cookies import parse_cookies
from tern.http.headers import Headers
from tern.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request as seen by stages.

    ``body`` is the parsed body: a dict for URL-encoded or JSON-object
    bodies (``{}`` when empty). ``path_params`` holds placeholder values
    from the matched route template.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    body: dict[str, Any] | list[Any]
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: memoised computed properties
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def cookies(self) -> dict[str, str]:
        """Cookies from the ``Cookie`` header. Parsed once, on first access."""
        if "cookies" not in self._cache:
            self._cache["cookies"] = parse_cookies("; ".join(self.headers.get_list("cookie")))
        return self._cache["cookies"]

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as received."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        *,
        body: dict[str, Any] | list[Any] | None = None,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and a parsed body."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            path_params=path_params or {},
            body=body if body is not None else {},
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
