"""Tern: a minimal ASGI runtime with a schema-driven data layer.

Routes map to ordered task chains of ``(request, response, next)``
stages. Unmatched paths fall back to static files. Tables declared as
column specifications compile to definition and CRUD statements.

Basic usage::

    from tern import App

    app = App()

    @app.get("/user/:id")
    async def show(request, response, next):
        await response.send(200, {"id": request.path_params["id"]})

    app.run()

Resource routes over a table (``pip install tern[data-mysql]`` for MySQL)::

    from tern.data import Column, Database, Table
    from tern.resource import register_resource

    db = Database("sqlite:///app.db")
    register_resource(app, db, users, "/user")
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MalformedBody",
    "Next",
    "NotFound",
    "PayloadTooLarge",
    "Request",
    "Response",
    "Stage",
    "TernError",
    "register_resource",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tern.app import App

        return App

    if name == "AppConfig":
        from tern.config import AppConfig

        return AppConfig

    if name == "Request":
        from tern.http.request import Request

        return Request

    if name == "Response":
        from tern.http.response import Response

        return Response

    if name in ("Next", "Stage"):
        from tern._internal import types as _types

        return getattr(_types, name)

    if name == "register_resource":
        from tern.resource import register_resource

        return register_resource

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MalformedBody",
        "NotFound",
        "PayloadTooLarge",
        "TernError",
    ):
        from tern import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
