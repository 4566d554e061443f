"""Invoke helper: call sync or async callables uniformly.

Stages, hooks, and renderers can be ``def`` or ``async def``. Any code
that calls a user-provided callable goes through ``invoke`` so the
sync/async check lives in exactly one place.

Usage::

    from tern._internal.invoke import invoke

    await invoke(stage, request, response, next)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
