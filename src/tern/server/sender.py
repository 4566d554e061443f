"""ASGI response sending: turns a status, headers and body into ASGI messages.

Handles both single-body responses and chunked file streams.
"""

from collections.abc import AsyncIterator, Iterable

from tern._internal.asgi import Send


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(
    content_type: str,
    headers: Iterable[tuple[str, str]],
) -> list[tuple[bytes, bytes]]:
    raw: list[tuple[bytes, bytes]] = [(b"content-type", content_type.encode("latin-1"))]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers
    )
    return raw


async def send_body(
    send: Send,
    status: int,
    content_type: str,
    headers: Iterable[tuple[str, str]],
    body: bytes,
) -> None:
    """Send a complete response in one start + one body message."""
    if not _body_allowed(status):
        body = b""
    raw_headers = _raw_headers(content_type, headers)
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    await send({"type": "http.response.start", "status": status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})


async def send_stream(
    send: Send,
    status: int,
    content_type: str,
    headers: Iterable[tuple[str, str]],
    chunks: AsyncIterator[bytes],
    *,
    length: int | None = None,
) -> None:
    """Send headers immediately, then each chunk with ``more_body=True``.

    Closes with an empty body message. With *length* the response carries
    a Content-Length; without it the server falls back to chunked encoding.
    """
    raw_headers = _raw_headers(content_type, headers)
    if length is not None:
        raw_headers.append((b"content-length", str(length).encode("latin-1")))
    await send({"type": "http.response.start", "status": status, "headers": raw_headers})
    async for chunk in chunks:
        if chunk:
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
    await send({"type": "http.response.body", "body": b"", "more_body": False})
