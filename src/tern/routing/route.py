"""PathSegment, RouteEntry and RouteMatch frozen dataclasses."""

from collections.abc import Sequence
from dataclasses import dataclass

from tern._internal.types import Stage


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A compiled segment of a route template.

    Literal:     ``/users``  (is_param=False, value="users")
    Placeholder: ``/:id``    (is_param=True, value="id")
    """

    value: str
    is_param: bool = False

    def accepts(self, part: str) -> bool:
        """Whether a single literal path segment matches this template segment."""
        if self.is_param:
            return part != ""
        return part == self.value


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A compiled route. Created once at registration, never mutated.

    ``param_names`` lists the placeholder names in template order; values
    are bound positionally by segment index.
    """

    method: str
    path: str
    segments: tuple[PathSegment, ...]
    param_names: tuple[str, ...]
    stages: tuple[Stage, ...]

    def match(self, parts: Sequence[str]) -> dict[str, str] | None:
        """Match split path parts; return bound parameters or ``None``.

        A segment-count mismatch is simply no match.
        """
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts, strict=True):
            if not segment.accepts(part):
                return None
            if segment.is_param:
                params[segment.value] = part
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    entry: RouteEntry
    path_params: dict[str, str]
