"""Routing: compiled per-method route tables with first-match dispatch.

Routes are registered during setup and frozen into immutable tuples
before the app serves its first request.
"""

from tern.routing.route import PathSegment, RouteEntry, RouteMatch
from tern.routing.router import Router, compile_route, parse_path, split_path

__all__ = [
    "PathSegment",
    "RouteEntry",
    "RouteMatch",
    "Router",
    "compile_route",
    "parse_path",
    "split_path",
]
