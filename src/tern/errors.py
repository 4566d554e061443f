"""Tern exception hierarchy.

Shared across Router, App, handler, and the data layer so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when the app is misconfigured.

    Fatal: surfaced immediately (at registration time, or at the call site
    that needs the missing piece), never deferred or retried.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(TernError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher or by stages. The ASGI handler catches these
    and writes a plain-text response with the status and detail, unless a
    response was already written.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched and no static file could be served."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status=404, detail=detail)


class MalformedBody(HTTPError):  # noqa: N818
    """400: a structured (JSON) request body could not be parsed.

    Distinct from a body that parses but is semantically invalid; that case
    is reported by the data layer.
    """

    def __init__(self, detail: str = "Corrupt body") -> None:
        super().__init__(status=400, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
