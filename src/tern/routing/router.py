"""Route pattern compiler and per-method registry.

Templates are compiled into explicit segment tuples (literal or
placeholder) rather than regexes. Each HTTP method owns an ordered
sequence of entries; dispatch scans it and the first entry that accepts
the path wins, so more specific routes must be registered first.
"""

import re
from collections.abc import Sequence
from urllib.parse import unquote

from tern._internal.types import Stage
from tern.errors import ConfigurationError, NotFound
from tern.routing.route import PathSegment, RouteEntry, RouteMatch

_PARAM_NAME = re.compile(r"^\w+$")


def split_path(path: str) -> list[str]:
    """Split a literal request path into segments.

    One trailing slash is optional and ignored; ``"/"`` and ``""`` have
    zero segments. Inner empty segments (``/a//b``) are kept so they can
    never satisfy a placeholder.
    """
    trimmed = path[1:] if path.startswith("/") else path
    if trimmed.endswith("/"):
        trimmed = trimmed[:-1]
    if not trimmed:
        return []
    return trimmed.split("/")


def parse_path(template: str) -> tuple[PathSegment, ...]:
    """Compile a route template into segments.

    Examples::

        "/user"     -> (PathSegment("user"),)
        "/user/:id" -> (PathSegment("user"), PathSegment("id", is_param=True))
        "/"         -> ()

    Raises ``ConfigurationError`` for placeholders without a valid name or
    for a placeholder name used twice in one template.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(template):
        if not part.startswith(":"):
            segments.append(PathSegment(part))
            continue
        name = part[1:]
        if not _PARAM_NAME.match(name):
            msg = f"Invalid placeholder {part!r} in route {template!r}: use ':name' with word characters."
            raise ConfigurationError(msg)
        if name in seen:
            msg = f"Placeholder ':{name}' appears twice in route {template!r}."
            raise ConfigurationError(msg)
        seen.add(name)
        segments.append(PathSegment(name, is_param=True))
    return tuple(segments)


def compile_route(method: str, template: str, stages: Sequence[Stage]) -> RouteEntry:
    """Build an immutable ``RouteEntry`` from a template and its stages."""
    if not stages:
        msg = f"Route {method} {template!r} has no stages."
        raise ConfigurationError(msg)
    segments = parse_path(template)
    return RouteEntry(
        method=method.upper(),
        path=template,
        segments=segments,
        param_names=tuple(s.value for s in segments if s.is_param),
        stages=tuple(stages),
    )


class Router:
    """Per-method ordered route tables.

    Usage::

        router = Router()
        router.add(compile_route("GET", "/user/:id", [show_user]))
        router.compile()
        match = router.match("GET", "/user/42")
    """

    __slots__ = ("_compiled", "_pending", "_tables")

    def __init__(self) -> None:
        self._pending: dict[str, list[RouteEntry]] = {}
        self._tables: dict[str, tuple[RouteEntry, ...]] = {}
        self._compiled = False

    def add(self, entry: RouteEntry) -> None:
        """Append a route to its method's table. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._pending.setdefault(entry.method, []).append(entry)

    def compile(self) -> None:
        """Freeze the tables. No more routes can be added."""
        self._tables = {method: tuple(entries) for method, entries in self._pending.items()}
        self._pending = {}
        self._compiled = True

    @property
    def routes(self) -> list[RouteEntry]:
        """All registered entries, grouped by method in registration order."""
        source = self._tables if self._compiled else self._pending
        return [entry for entries in source.values() for entry in entries]

    def match(self, method: str, path: str, *, encoded: bool = False) -> RouteMatch:
        """Return the first entry for *method* that accepts *path*.

        With ``encoded=True`` *path* is the raw request target: it is split
        first and each segment percent-decoded afterwards, so an escaped
        ``%2F`` stays inside its segment.

        Raises ``NotFound`` if none does (including unknown methods).
        """
        parts = split_path(path)
        if encoded:
            parts = [unquote(part) for part in parts]
        for entry in self._tables.get(method.upper(), ()):
            params = entry.match(parts)
            if params is not None:
                return RouteMatch(entry=entry, path_params=params)
        raise NotFound(f"No route matches {method} {path!r}")
