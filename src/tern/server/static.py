"""Static-file fallback for requests no route accepted.

Only non-directory-looking paths are probed. Files are resolved under the
configured static root (symlinks resolved, traversal rejected) and
streamed with a content type inferred from the extension.
"""

import logging
from pathlib import Path

from tern._internal.asgi import Send
from tern.http.files import content_type_for, iter_file, looks_like_directory, resolve_file
from tern.server.sender import send_body, send_stream

logger = logging.getLogger("tern.server")


async def serve_static(path: str, send: Send, static_dir: str | Path | None) -> bool:
    """Stream the file for *path* if one exists. Returns False when nothing was sent."""
    if static_dir is None or looks_like_directory(path):
        return False
    file = await resolve_file(static_dir, path)
    if file is None:
        return False
    stat = await file.stat()
    logger.debug("static %s -> %s", path, file)
    await send_stream(
        send,
        200,
        content_type_for(file.name),
        (),
        iter_file(file),
        length=stat.st_size,
    )
    return True


async def send_not_found(send: Send) -> None:
    """The plain-text 404 every unresolved request ends with."""
    await send_body(send, 404, "text/plain", (), b"Not found")
