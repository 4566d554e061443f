"""Tests for tern.testing: the in-process client."""

from tern.app import App
from tern.config import AppConfig
from tern.testing import ClientResponse, TestClient


class TestClientResponse:
    def test_headers(self) -> None:
        response = ClientResponse(
            status=200,
            headers=(("content-type", "application/json"), ("set-cookie", "a=1"), ("set-cookie", "b=2")),
            body=b'{"ok": true}',
        )
        assert response.content_type == "application/json"
        assert response.header("Set-Cookie") == "a=1"
        assert response.header_list("set-cookie") == ["a=1", "b=2"]
        assert response.header("x-missing") is None
        assert response.json() == {"ok": True}
        assert response.text == '{"ok": true}'


class TestTestClient:
    async def test_methods_and_query(self) -> None:
        app = App(AppConfig(static_dir=None))

        async def echo(request, response, next):
            await response.send(200, {"method": request.method, "q": dict(request.query)})

        for method in ("GET", "POST", "PUT", "PATCH", "DELETE"):
            app.route(method, "/echo", echo)

        async with TestClient(app) as client:
            results = [
                await client.get("/echo?a=1"),
                await client.post("/echo"),
                await client.put("/echo", json={"x": 1}),
                await client.patch("/echo"),
                await client.delete("/echo"),
            ]
        assert [r.json()["method"] for r in results] == ["GET", "POST", "PUT", "PATCH", "DELETE"]
        assert results[0].json()["q"] == {"a": "1"}

    async def test_hooks_mirrored(self) -> None:
        app = App()
        events: list[str] = []
        app.on_startup(lambda: events.append("up"))
        app.on_shutdown(lambda: events.append("down"))
        async with TestClient(app):
            assert events == ["up"]
        assert events == ["up", "down"]
