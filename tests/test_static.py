"""Tests for the static-file fallback and content-type mapping."""

import pytest

from tern.http.files import content_type_for, looks_like_directory
from tern.server.static import send_not_found, serve_static


class _Sink:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)


class TestContentTypes:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("index.html", "text/html"),
            ("index.htm", "text/html"),
            ("app.js", "text/javascript"),
            ("site.css", "text/css"),
            ("favicon.ico", "image/x-icon"),
            ("logo.png", "image/png"),
            ("anim.gif", "image/gif"),
            ("photo.jpeg", "image/jpeg"),
            ("photo.JPG", "image/jpeg"),
            ("notes.txt", "text/plain"),
            ("data.bin", "text/plain"),
            ("README", "text/plain"),
        ],
    )
    def test_mapping(self, name: str, expected: str) -> None:
        assert content_type_for(name) == expected

    def test_directory_paths(self) -> None:
        assert looks_like_directory("/docs/")
        assert not looks_like_directory("/docs/index.html")


class TestServeStatic:
    async def test_serves_file(self, tmp_path) -> None:
        (tmp_path / "hello.txt").write_bytes(b"hi")
        sink = _Sink()
        assert await serve_static("/hello.txt", sink, tmp_path)
        start = sink.messages[0]
        assert start["status"] == 200
        assert (b"content-type", b"text/plain") in start["headers"]
        assert (b"content-length", b"2") in start["headers"]
        assert b"".join(m.get("body", b"") for m in sink.messages[1:]) == b"hi"
        assert sink.messages[-1]["more_body"] is False

    async def test_nested_file(self, tmp_path) -> None:
        (tmp_path / "css").mkdir()
        (tmp_path / "css" / "site.css").write_text("p{}")
        sink = _Sink()
        assert await serve_static("/css/site.css", sink, tmp_path)

    async def test_large_file_is_chunked(self, tmp_path) -> None:
        (tmp_path / "big.png").write_bytes(b"x" * (64 * 1024 + 10))
        sink = _Sink()
        assert await serve_static("/big.png", sink, tmp_path)
        chunks = [m["body"] for m in sink.messages[1:] if m["body"]]
        assert [len(c) for c in chunks] == [64 * 1024, 10]

    async def test_directory_looking_path_not_probed(self, tmp_path) -> None:
        (tmp_path / "docs").mkdir()
        sink = _Sink()
        assert not await serve_static("/docs/", sink, tmp_path)
        assert sink.messages == []

    async def test_directory_is_not_served(self, tmp_path) -> None:
        (tmp_path / "docs").mkdir()
        assert not await serve_static("/docs", _Sink(), tmp_path)

    async def test_missing(self, tmp_path) -> None:
        assert not await serve_static("/nope.css", _Sink(), tmp_path)

    async def test_traversal(self, tmp_path) -> None:
        root = tmp_path / "public"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("x")
        assert not await serve_static("/../secret.txt", _Sink(), root)

    async def test_overlong_name(self, tmp_path) -> None:
        assert not await serve_static("/" + "a" * 300, _Sink(), tmp_path)

    async def test_nul_byte(self, tmp_path) -> None:
        assert not await serve_static("/a\x00b", _Sink(), tmp_path)

    async def test_disabled(self, tmp_path) -> None:
        (tmp_path / "a.txt").write_text("a")
        assert not await serve_static("/a.txt", _Sink(), None)

    async def test_not_found_response(self) -> None:
        sink = _Sink()
        await send_not_found(sink)
        assert sink.messages[0]["status"] == 404
        assert sink.messages[1]["body"] == b"Not found"
