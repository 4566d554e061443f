"""Static file resolution, content-type mapping, and async streaming.

The content-type table is deliberately small and fixed: anything not
listed is served as plain text.
"""

from collections.abc import AsyncIterator
from pathlib import Path, PurePosixPath

import anyio

CHUNK_SIZE = 64 * 1024

CONTENT_TYPES: dict[str, str] = {
    "html": "text/html",
    "htm": "text/html",
    "js": "text/javascript",
    "css": "text/css",
    "ico": "image/x-icon",
    "png": "image/png",
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "txt": "text/plain",
}

DEFAULT_CONTENT_TYPE = "text/plain"


def content_type_for(path: str | Path) -> str:
    """Infer a content type from the file extension."""
    suffix = PurePosixPath(str(path)).suffix.lstrip(".").lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


def looks_like_directory(path: str) -> bool:
    """True if the request path ends with a separator."""
    return path.endswith(("/", "\\"))


async def resolve_file(root: str | Path, relative: str) -> anyio.Path | None:
    """Resolve *relative* under *root*; return it only if it is a regular file.

    Resolves symlinks and rejects anything that lands outside *root*.
    Names the filesystem refuses (overlong segments, NUL bytes) resolve
    to nothing.
    """
    try:
        base = await anyio.Path(root).resolve()
        candidate = await (base / relative.lstrip("/\\")).resolve()
        if not candidate.is_relative_to(base):
            return None
        if not await candidate.is_file():
            return None
    except (OSError, ValueError):
        return None
    return candidate


async def iter_file(path: anyio.Path, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the file's bytes in chunks without blocking the event loop."""
    async with await anyio.open_file(path, "rb") as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            yield chunk
