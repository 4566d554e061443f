"""Shared type aliases used across tern modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Continuation handed to each stage. Async stages await it; a sync stage
# calls it and the rest of the chain runs once the stage returns
Next: TypeAlias = Callable[[], Awaitable[None]]

# Handler stage: stage(request, response, next), sync or async
Stage: TypeAlias = Callable[..., Any]

# Template renderer: renderer(path, data) -> markup
Renderer: TypeAlias = Callable[[str, dict[str, Any]], str]
