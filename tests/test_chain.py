"""Tests for tern.server.chain: ordered stages with a response-aware exit."""

from tern.http.request import Request
from tern.http.response import Response
from tern.server.chain import run_chain


class _Sink:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)


def _request() -> Request:
    return Request.from_asgi({"type": "http", "method": "GET", "path": "/"})


class TestRunChain:
    async def test_stages_run_in_order(self) -> None:
        calls: list[str] = []

        async def first(req, res, next):
            calls.append("first")
            await next()

        def second(req, res, next):
            calls.append("second")
            return next()

        async def third(req, res, next):
            calls.append("third")
            await res.send(200, "done")

        response = Response(_Sink())
        await run_chain((first, second, third), _request(), response)
        assert calls == ["first", "second", "third"]
        assert response.sent

    async def test_stage_that_does_not_advance_stops_chain(self) -> None:
        calls: list[str] = []

        async def gate(req, res, next):
            calls.append("gate")
            await res.send(403, "no")

        async def never(req, res, next):
            calls.append("never")

        await run_chain((gate, never), _request(), Response(_Sink()))
        assert calls == ["gate"]

    async def test_next_after_response_is_noop(self) -> None:
        calls: list[str] = []

        async def respond_then_next(req, res, next):
            await res.send(200, "early")
            await next()

        async def later(req, res, next):
            calls.append("later")

        sink = _Sink()
        await run_chain((respond_then_next, later), _request(), Response(sink))
        assert calls == []
        assert [m["type"] for m in sink.messages] == ["http.response.start", "http.response.body"]

    async def test_next_past_last_stage_is_noop(self) -> None:
        async def only(req, res, next):
            await next()
            await next()

        response = Response(_Sink())
        await run_chain((only,), _request(), response)
        assert not response.sent

    async def test_code_after_next_runs_when_rest_finishes(self) -> None:
        events: list[str] = []

        async def outer(req, res, next):
            events.append("before")
            await next()
            events.append("after")

        async def inner(req, res, next):
            events.append("inner")
            await res.send(200)

        await run_chain((outer, inner), _request(), Response(_Sink()))
        assert events == ["before", "inner", "after"]

    async def test_context_flows_between_stages(self) -> None:
        async def load(req, res, next):
            res.context["user"] = "ada"
            await next()

        async def show(req, res, next):
            await res.send(200, res.context["user"])

        sink = _Sink()
        await run_chain((load, show), _request(), Response(sink))
        assert sink.messages[1]["body"] == b"ada"

    async def test_sync_stage_advances_without_awaiting(self) -> None:
        def first(req, res, next):
            res.context["seen"] = "first"
            next()

        async def second(req, res, next):
            await res.send(200, res.context["seen"] + ",second")

        sink = _Sink()
        response = Response(sink)
        await run_chain((first, second), _request(), response)
        assert sink.messages[0]["status"] == 200
        assert sink.messages[1]["body"] == b"first,second"

    async def test_rest_of_chain_runs_once(self) -> None:
        calls: list[str] = []

        async def twice(req, res, next):
            await next()
            await next()

        def counted(req, res, next):
            calls.append("counted")

        await run_chain((twice, counted), _request(), Response(_Sink()))
        assert calls == ["counted"]
