"""Request/response façade over a raw ASGI exchange."""

from tern.http.request import Request
from tern.http.response import Response

__all__ = ["Request", "Response"]
