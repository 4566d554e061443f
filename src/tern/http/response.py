"""Per-request output façade.

Wraps the ASGI ``send`` callable. Status, headers, cookies and the render
context accumulate freely; then exactly one terminal write (``send``,
``send_file``, ``redirect`` or ``render``) emits the response.

Usage contract: a second terminal write is a caller error and is not
guarded against here. The stage chain stops advancing once ``sent`` is
true, which is the only enforcement there is.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tern._internal.asgi import Send
from tern._internal.invoke import invoke
from tern._internal.types import Renderer
from tern.errors import ConfigurationError, NotFound
from tern.http.cookies import SetCookie
from tern.http.files import content_type_for, iter_file, resolve_file
from tern.server.sender import send_body, send_stream

TEXT = "text/plain"
JSON = "application/json"
HTML = "text/html"


class Response:
    """Mutable response builder bound to one ASGI exchange.

    ``context`` is the render context: stages may add to it and a later
    ``render()`` call without explicit data uses it.
    """

    __slots__ = (
        "_renderer",
        "_send",
        "_sent",
        "_static_dir",
        "_template_dir",
        "context",
        "cookies",
        "headers",
        "status",
    )

    def __init__(
        self,
        send: Send,
        *,
        static_dir: str | Path | None = None,
        template_dir: str | Path = "templates",
        renderer: Renderer | None = None,
    ) -> None:
        self._send = send
        self._sent = False
        self._static_dir = static_dir
        self._template_dir = template_dir
        self._renderer = renderer
        self.status = 200
        self.headers: list[tuple[str, str]] = []
        self.cookies: list[SetCookie] = []
        self.context: dict[str, Any] = {}

    @property
    def sent(self) -> bool:
        """True once a terminal write has started."""
        return self._sent

    # -- Accumulators --

    def set_header(self, name: str, value: str) -> None:
        """Add a response header (repeatable)."""
        self.headers.append((name, value))

    def set_cookie(
        self,
        name: str,
        value: str,
        *,
        max_age: int | None = None,
        path: str = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = True,
        samesite: str = "lax",
    ) -> None:
        """Attach a Set-Cookie directive to the response."""
        self.cookies.append(
            SetCookie(
                name=name,
                value=value,
                max_age=max_age,
                path=path,
                domain=domain,
                secure=secure,
                httponly=httponly,
                samesite=samesite,
            )
        )

    # -- Terminal writes --

    async def send(self, code: int, data: Any = None) -> None:
        """Write a complete response.

        ``None`` sends an empty text body; ``str``/``int``/``float``/``bool``
        are sent as text; ``bytes`` verbatim; anything else as JSON.
        """
        self.status = code
        if data is None:
            await self._write(b"", TEXT)
        elif isinstance(data, bool):
            await self._write(b"true" if data else b"false", TEXT)
        elif isinstance(data, (str, int, float)):
            await self._write(str(data).encode("utf-8"), TEXT)
        elif isinstance(data, (bytes, bytearray)):
            await self._write(bytes(data), TEXT)
        else:
            await self._write(json.dumps(data, default=str).encode("utf-8"), JSON)

    async def send_file(self, file: str) -> None:
        """Stream *file* from the static root with an inferred content type.

        Raises ``NotFound`` (before anything is written) if the file is
        missing, is not a regular file, or resolves outside the root.
        """
        if self._static_dir is None:
            raise NotFound(f"No static directory configured for {file!r}")
        path = await resolve_file(self._static_dir, file)
        if path is None:
            raise NotFound(f"No such file {file!r}")
        self.status = 200
        stat = await path.stat()
        self._sent = True
        await send_stream(
            self._send,
            self.status,
            content_type_for(path.name),
            self._all_headers(),
            iter_file(path),
            length=stat.st_size,
        )

    async def redirect(self, url: str) -> None:
        """302 to *url* with an empty body."""
        self.status = 302
        self.set_header("Location", url)
        await self._write(b"", TEXT)

    async def render(self, file: str, data: dict[str, Any] | None = None) -> None:
        """Render a template through the configured renderer and send it as HTML.

        Raises ``ConfigurationError`` immediately when no renderer is set.
        """
        if self._renderer is None:
            msg = "Missing template renderer: pass renderer= to App()."
            raise ConfigurationError(msg)
        path = str(Path(self._template_dir) / file)
        markup = await invoke(self._renderer, path, self.context if data is None else data)
        self.status = 200
        await self._write(markup.encode("utf-8"), HTML)

    # -- Internal --

    def _all_headers(self) -> list[tuple[str, str]]:
        return [
            *self.headers,
            *(("Set-Cookie", cookie.to_header_value()) for cookie in self.cookies),
        ]

    async def _write(self, body: bytes, content_type: str) -> None:
        self._sent = True
        await send_body(self._send, self.status, content_type, self._all_headers(), body)
