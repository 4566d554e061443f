"""Task chain executor.

Runs a route's stages strictly in registration order. Each stage gets
``(request, response, next)``; calling ``next()`` advances to the rest of
the chain. Async stages await it. A sync stage just calls it, and the
executor runs the rest once the stage returns. A stage ends the chain by
writing a response instead of calling ``next()``.

There is no chain-level error channel: a stage that fails is expected to
write its own error response. Exceptions that escape anyway are handled
by the dispatcher.
"""

from collections.abc import Awaitable, Callable, Generator, Sequence
from typing import Any

from tern._internal.invoke import invoke
from tern._internal.types import Stage
from tern.http.request import Request
from tern.http.response import Response


class Advance:
    """What ``next()`` returns: the rest of the chain, run at most once.

    Awaiting it runs the remainder immediately. If nobody awaits it, the
    executor runs it after the calling stage returns.
    """

    __slots__ = ("_rest", "_started")

    def __init__(self, rest: Callable[[], Awaitable[None]]) -> None:
        self._rest = rest
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def run(self) -> None:
        if self._started:
            return
        self._started = True
        await self._rest()

    def __await__(self) -> Generator[Any, None, None]:
        return self.run().__await__()


async def run_chain(stages: Sequence[Stage], request: Request, response: Response) -> None:
    """Invoke *stages* in order until one doesn't advance or a response is written.

    Calling ``next()`` after the response was written, or past the last
    stage, does nothing. Repeated calls within one stage return the same
    ``Advance``, so the rest of the chain never runs twice.
    """

    async def run_from(index: int) -> None:
        if response.sent or index >= len(stages):
            return
        advance: Advance | None = None

        def next_() -> Advance:
            nonlocal advance
            if advance is None:
                advance = Advance(lambda: run_from(index + 1))
            return advance

        await invoke(stages[index], request, response, next_)
        if advance is not None and not advance.started:
            await advance.run()

    await run_from(0)
