"""Tests for the request façade: body parsing, cookies, query, headers."""

import pytest

from tern.errors import MalformedBody, PayloadTooLarge
from tern.http.body import parse_body, parse_urlencoded, read_body
from tern.http.cookies import SetCookie, parse_cookies
from tern.http.headers import Headers
from tern.http.query import QueryParams
from tern.http.request import Request


def _receive(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict:
        return messages.pop(0)

    return receive


class TestReadBody:
    async def test_concatenates_chunks(self) -> None:
        assert await read_body(_receive(b"na", b"me=", b"ada")) == b"name=ada"

    async def test_empty(self) -> None:
        assert await read_body(_receive(b"")) == b""

    async def test_limit(self) -> None:
        with pytest.raises(PayloadTooLarge) as exc_info:
            await read_body(_receive(b"12345", b"6789"), limit=8)
        assert exc_info.value.status == 413

    async def test_stops_on_disconnect(self) -> None:
        async def receive() -> dict:
            return {"type": "http.disconnect"}

        assert await read_body(receive) == b""


class TestParseBody:
    def test_empty_is_empty_dict(self) -> None:
        assert parse_body(b"") == {}
        assert parse_body(b"   \n") == {}

    def test_json_object(self) -> None:
        assert parse_body(b'{"name":"John Doe","dob":"1990-05-25"}') == {
            "name": "John Doe",
            "dob": "1990-05-25",
        }

    def test_json_after_leading_whitespace(self) -> None:
        assert parse_body(b'  \n {"a": 1}') == {"a": 1}

    def test_broken_json_is_malformed(self) -> None:
        with pytest.raises(MalformedBody) as exc_info:
            parse_body(b'{"name": ')
        assert exc_info.value.status == 400
        assert exc_info.value.detail == "Corrupt body"

    def test_urlencoded(self) -> None:
        assert parse_body(b"name=Ada+Lovelace&city=London%20UK") == {
            "name": "Ada Lovelace",
            "city": "London UK",
        }

    def test_non_brace_text_is_urlencoded(self) -> None:
        assert parse_body(b"[1, 2]") == {"[1, 2]": ""}


class TestParseUrlencoded:
    def test_splits_on_first_equals(self) -> None:
        assert parse_urlencoded("expr=a=b") == {"expr": "a=b"}

    def test_keys_trimmed(self) -> None:
        assert parse_urlencoded(" name =x") == {"name": "x"}

    def test_pair_without_value(self) -> None:
        assert parse_urlencoded("flag&x=1") == {"flag": "", "x": "1"}

    def test_empty_pairs_skipped(self) -> None:
        assert parse_urlencoded("a=1&&b=2&") == {"a": "1", "b": "2"}


class TestCookies:
    def test_parse(self) -> None:
        assert parse_cookies("session=abc; theme=dark") == {"session": "abc", "theme": "dark"}

    def test_value_may_contain_equals(self) -> None:
        assert parse_cookies("token=a=b=c") == {"token": "a=b=c"}

    def test_percent_decoded(self) -> None:
        assert parse_cookies("name=Ada%20L") == {"name": "Ada L"}

    def test_entry_without_equals(self) -> None:
        assert parse_cookies("lonely; a=1") == {"lonely": "", "a": "1"}

    def test_empty_header(self) -> None:
        assert parse_cookies("") == {}

    def test_set_cookie_header_value(self) -> None:
        value = SetCookie("sid", "xyz", max_age=60, secure=True).to_header_value()
        assert value == "sid=xyz; Max-Age=60; Path=/; Secure; HttpOnly; SameSite=lax"


class TestQueryParams:
    def test_single_value_is_string(self) -> None:
        q = QueryParams(b"page=2&sort=name")
        assert q["page"] == "2"
        assert dict(q) == {"page": "2", "sort": "name"}

    def test_repeated_key_is_list(self) -> None:
        q = QueryParams(b"tag=a&tag=b&x=1")
        assert q["tag"] == ["a", "b"]
        assert q.get_list("tag") == ["a", "b"]
        assert q.get_list("x") == ["1"]
        assert q.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"empty=")["empty"] == ""


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = Headers([(b"Content-Type", b"application/json")])
        assert h["content-type"] == "application/json"
        assert "CONTENT-TYPE" in h

    def test_get_list(self) -> None:
        h = Headers([(b"cookie", b"a=1"), (b"cookie", b"b=2")])
        assert h["cookie"] == "a=1"
        assert h.get_list("Cookie") == ["a=1", "b=2"]


class TestRequest:
    def _scope(self, **overrides) -> dict:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/user/5",
            "query_string": b"verbose=1",
            "headers": [(b"cookie", b"sid=abc"), (b"cookie", b"theme=dark")],
            "client": ("10.0.0.1", 5000),
        }
        scope.update(overrides)
        return scope

    def test_from_asgi(self) -> None:
        request = Request.from_asgi(
            self._scope(), body={"a": "1"}, path_params={"id": "5"}
        )
        assert request.method == "GET"
        assert request.path_params == {"id": "5"}
        assert request.body == {"a": "1"}
        assert request.query["verbose"] == "1"
        assert request.client == ("10.0.0.1", 5000)
        assert request.url == "/user/5?verbose=1"

    def test_defaults(self) -> None:
        request = Request.from_asgi({"type": "http", "method": "GET", "path": "/"})
        assert request.body == {}
        assert request.path_params == {}
        assert request.cookies == {}
        assert request.url == "/"

    def test_cookies_merge_header_lines(self) -> None:
        request = Request.from_asgi(self._scope())
        assert request.cookies == {"sid": "abc", "theme": "dark"}

    def test_cookies_parsed_once(self) -> None:
        request = Request.from_asgi(self._scope())
        assert request.cookies is request.cookies

    def test_content_type(self) -> None:
        request = Request.from_asgi(self._scope(headers=[(b"content-type", b"text/plain")]))
        assert request.content_type == "text/plain"
