"""CRUD routes over a ``Table``.

``register_resource`` wires four routes onto an app::

    POST   /path       -> 201 with the generated identifier
    GET    /path/:id   -> 200 with the row
    PUT    /path/:id   -> 200 when a row was updated
    DELETE /path/:id   -> 200 when a row was deleted

An absent identifier answers ``EMPTY_STATUS`` (204) instead of an
error. Client-input problems classified by the data layer answer
``CLIENT_ERROR_STATUS`` (400) with a short description; any other store
failure is a 500 carrying the store's message.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from tern.data.errors import (
    MalformedDataError,
    MissingFieldError,
    QueryError,
    UnknownFieldError,
)
from tern.http.request import Request
from tern.http.response import Response

if TYPE_CHECKING:
    from tern.app import App
    from tern.data.database import Database
    from tern.data.table import Table

logger = logging.getLogger("tern.server")

CREATED_STATUS = 201
EMPTY_STATUS = 204
CLIENT_ERROR_STATUS = 400
SERVER_ERROR_STATUS = 500

# Most specific first: all three are QueryError subclasses
_CLIENT_ERRORS: tuple[tuple[type[QueryError], str], ...] = (
    (MissingFieldError, "Missing required field"),
    (UnknownFieldError, "Unexpected field"),
    (MalformedDataError, "Corrupt body"),
)


async def send_query_error(response: Response, exc: QueryError) -> None:
    """Answer a failed statement: 400 for client input, 500 otherwise."""
    for error_type, description in _CLIENT_ERRORS:
        if isinstance(exc, error_type):
            await response.send(CLIENT_ERROR_STATUS, description)
            return
    logger.error("store error: %s", exc)
    await response.send(SERVER_ERROR_STATUS, str(exc))


def _identifier(request: Request) -> int | str:
    value = request.path_params["id"]
    return int(value) if value.isdigit() else value


def _guarded(
    stage: Callable[[Request, Response], Awaitable[None]],
) -> Callable[[Request, Response, Any], Awaitable[None]]:
    """Wrap a terminal stage so store errors become responses."""

    async def wrapper(request: Request, response: Response, next: Any) -> None:  # noqa: A002
        try:
            await stage(request, response)
        except QueryError as exc:
            await send_query_error(response, exc)

    wrapper.__name__ = stage.__name__
    wrapper.__qualname__ = stage.__qualname__
    return wrapper


def register_resource(app: App, db: Database, table: Table, path: str) -> None:
    """Register create/read/update/delete routes for *table* under *path*.

    The table is also registered on the app so its definition runs at
    startup.
    """
    base = path.rstrip("/")
    item = f"{base}/:id"

    async def create(request: Request, response: Response) -> None:
        identifier = await table.create(db, request.body)
        await response.send(CREATED_STATUS, identifier)

    async def read(request: Request, response: Response) -> None:
        row = await table.read(db, _identifier(request))
        if row is None:
            await response.send(EMPTY_STATUS)
            return
        await response.send(200, row)

    async def update(request: Request, response: Response) -> None:
        body = request.body
        if not isinstance(body, dict):
            raise MalformedDataError("Expected an object of fields")
        changed = await table.update(db, _identifier(request), table.writable(body))
        await response.send(200 if changed else EMPTY_STATUS)

    async def delete(request: Request, response: Response) -> None:
        affected = await table.delete(db, _identifier(request))
        await response.send(200 if affected else EMPTY_STATUS)

    app.table(table, db=db)
    app.post(base or "/", _guarded(create))
    app.get(item, _guarded(read))
    app.put(item, _guarded(update))
    app.delete(item, _guarded(delete))
