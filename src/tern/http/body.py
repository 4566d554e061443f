"""Request body buffering and parsing.

The whole body is accumulated before parsing; there is no streaming
parse. A body whose first non-whitespace byte is ``{`` is JSON,
anything else is treated as URL-encoded pairs.
"""

import json
from typing import Any
from urllib.parse import unquote_plus

from tern._internal.asgi import Receive
from tern.errors import MalformedBody, PayloadTooLarge


async def read_body(receive: Receive, *, limit: int | None = None) -> bytes:
    """Drain ``http.request`` messages from *receive* into one bytes object.

    Raises ``PayloadTooLarge`` as soon as the running total passes *limit*.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if limit is not None and size > limit:
                raise PayloadTooLarge(limit)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def parse_body(raw: bytes) -> dict[str, Any] | list[Any]:
    """Parse a buffered body.

    Empty bodies parse to ``{}``. Raises ``MalformedBody`` when the body
    looks like JSON but doesn't decode.
    """
    text = raw.decode("utf-8", errors="replace")
    stripped = text.lstrip()
    if not stripped:
        return {}
    if stripped[0] == "{":
        try:
            return json.loads(stripped)
        except ValueError as exc:
            raise MalformedBody() from exc
    return parse_urlencoded(text)


def parse_urlencoded(text: str) -> dict[str, str]:
    """Parse ``a=1&b=two+words`` pairs.

    Each pair is split on the first ``=``; keys are trimmed, values are
    percent-decoded with ``+`` as space. A pair without ``=`` maps to ``""``.
    """
    result: dict[str, str] = {}
    for pair in text.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        result[key.strip()] = unquote_plus(value)
    return result
