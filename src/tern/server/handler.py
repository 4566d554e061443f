"""ASGI handler: the dispatcher.

The only component that touches raw ASGI scope and receive directly.
Per request::

    RouteLookup ─┬─ matched ─> BodyBuffering -> StageExecution -> Responded
                 └─ missed ──> StaticFileProbe ─┬─ found ──> Streaming -> Responded
                                                └─ absent ─> Responded (404)

Every path ends in exactly one response write.
"""

import logging

from tern._internal.asgi import Receive, Scope, Send
from tern._internal.types import Renderer
from tern.config import AppConfig
from tern.errors import HTTPError, NotFound
from tern.http.body import parse_body, read_body
from tern.http.request import Request
from tern.http.response import Response
from tern.routing.router import Router
from tern.server.chain import run_chain
from tern.server.errors import handle_http_error, handle_internal_error, handle_no_response
from tern.server.static import send_not_found, serve_static

logger = logging.getLogger("tern.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
    renderer: Renderer | None = None,
) -> None:
    """Process a single HTTP request through lookup, stages, or the static fallback."""
    if scope["type"] != "http":
        return

    method: str = scope["method"]
    path: str = scope["path"]
    raw_path: bytes | None = scope.get("raw_path")

    try:
        if raw_path:
            match = router.match(method, raw_path.decode("latin-1"), encoded=True)
        else:
            match = router.match(method, path)
    except NotFound:
        logger.debug("no route for %s %s, probing static files", method, path)
        if not await serve_static(path, send, config.static_dir):
            await send_not_found(send)
        return

    response = Response(
        send,
        static_dir=config.static_dir,
        template_dir=config.template_dir,
        renderer=renderer,
    )

    try:
        raw = await read_body(receive, limit=config.max_content_length)
        request = Request.from_asgi(
            scope,
            body=parse_body(raw),
            path_params=match.path_params,
        )
        await run_chain(match.entry.stages, request, response)
    except HTTPError as exc:
        await handle_http_error(exc, method, path, send, sent=response.sent)
        return
    except Exception:
        await handle_internal_error(method, path, send, sent=response.sent)
        return

    if not response.sent:
        await handle_no_response(method, path, send)
