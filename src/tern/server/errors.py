"""Error handling for the dispatch pipeline.

Maps HTTPError exceptions and unexpected failures raised out of a stage
chain to plain-text responses. Nothing is written if the chain already
responded; the failure is only logged.
"""

import logging

from tern._internal.asgi import Send
from tern.errors import HTTPError
from tern.server.sender import send_body

logger = logging.getLogger("tern.server")


async def handle_http_error(exc: HTTPError, method: str, path: str, send: Send, *, sent: bool) -> None:
    """Write the status and detail carried by *exc*."""
    logger.debug("%d %s %s: %s", exc.status, method, path, exc.detail)
    if sent:
        return
    body = (exc.detail or f"Error {exc.status}").encode("utf-8")
    await send_body(send, exc.status, "text/plain", exc.headers, body)


async def handle_internal_error(method: str, path: str, send: Send, *, sent: bool) -> None:
    """Log the active exception and answer 500."""
    logger.exception("500 %s %s", method, path)
    if sent:
        return
    await send_body(send, 500, "text/plain", (), b"Internal Server Error")


async def handle_no_response(method: str, path: str, send: Send) -> None:
    """A chain ran to completion without any stage writing a response."""
    logger.warning("%s %s: stage chain finished without a response", method, path)
    await send_body(send, 500, "text/plain", (), b"No response")
