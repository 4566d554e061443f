"""Tern application class.

Mutable during setup (route registration, tables, hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tern._internal.asgi import Receive, Scope, Send
from tern._internal.invoke import invoke
from tern._internal.types import Renderer, Stage
from tern.config import AppConfig
from tern.errors import ConfigurationError
from tern.routing.router import Router, compile_route
from tern.server.handler import handle_request

if TYPE_CHECKING:
    from tern.data.database import Database
    from tern.data.table import Table


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    method: str
    path: str
    stages: tuple[Stage, ...]


@dataclass(slots=True)
class _PendingTable:
    """A table whose definition runs at startup."""

    table: Table
    db: Database | None


class App:
    """The tern application.

    Mutable during setup (route registration, tables, hooks).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Thread safety:
        The setup phase is single-threaded (registration at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the route tables, even when several ASGI
        workers call ``__call__()`` concurrently on first request. Once
        frozen, the tables are read-only and need no synchronization.
    """

    __slots__ = (
        "_db",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_renderer",
        # Compiled state (populated by _freeze)
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_tables",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        db: Database | str | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._tables: list[_PendingTable] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._renderer: Renderer | None = renderer

        # Database: accepts a Database instance or connection URL string.
        # When set, the lifespan connects it and defines registered tables.
        if isinstance(db, str):
            from tern.data.database import Database as _Database

            self._db: Database | None = _Database(db)
        else:
            self._db = db

        # Compiled state: set during _freeze()
        self._router: Router | None = None

    # -- Route registration --

    def route(self, method: str, path: str, *stages: Stage) -> Any:
        """Register a task chain for *method* and *path*.

        Stages run in the order given. With no stages, returns a decorator
        that registers the decorated function as the only stage::

            app.route("GET", "/user/:id", authenticate, show_user)

            @app.route("GET", "/health")
            async def health(request, response, next):
                await response.send(200, "ok")

        Routes are matched in registration order per method, so register
        more specific templates first. Malformed templates raise
        ``ConfigurationError`` here, not at first request.
        """
        self._check_not_frozen()
        if stages:
            self._add_route(method, path, stages)
            return None

        def decorator(func: Stage) -> Stage:
            self._add_route(method, path, (func,))
            return func

        return decorator

    def get(self, path: str, *stages: Stage) -> Any:
        """Register a GET route. See ``route``."""
        return self.route("GET", path, *stages)

    def post(self, path: str, *stages: Stage) -> Any:
        """Register a POST route. See ``route``."""
        return self.route("POST", path, *stages)

    def put(self, path: str, *stages: Stage) -> Any:
        """Register a PUT route. See ``route``."""
        return self.route("PUT", path, *stages)

    def patch(self, path: str, *stages: Stage) -> Any:
        """Register a PATCH route. See ``route``."""
        return self.route("PATCH", path, *stages)

    def delete(self, path: str, *stages: Stage) -> Any:
        """Register a DELETE route. See ``route``."""
        return self.route("DELETE", path, *stages)

    def _add_route(self, method: str, path: str, stages: tuple[Stage, ...]) -> None:
        self._check_not_frozen()
        # Compile now so template errors surface at registration time
        compile_route(method, path, stages)
        self._pending_routes.append(_PendingRoute(method.upper(), path, stages))

    # -- Data --

    @property
    def db(self) -> Database:
        """The database instance, if configured.

        Raises ``RuntimeError`` if no database was configured on this app.
        """
        if self._db is None:
            msg = (
                "No database configured. Pass db= to App() or use "
                "Database directly: from tern.data import Database"
            )
            raise RuntimeError(msg)
        return self._db

    def table(self, table: Table, *, db: Database | None = None) -> Table:
        """Define *table* at startup, on *db* or the app's own database."""
        self._check_not_frozen()
        self._tables.append(_PendingTable(table, db))
        return table

    async def define_tables(self) -> None:
        """Connect the database and run every registered table definition."""
        if self._db is not None:
            await self._db.connect()
        for pending in self._tables:
            db = pending.db or self._db
            if db is None:
                msg = f"Table {pending.table.name!r} has no database to be defined on."
                raise ConfigurationError(msg)
            await pending.table.define(db)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook.

        Hooks run in registration order during ASGI lifespan startup,
        after the database connected and tables were defined.
        Supports both sync and async callables::

            @app.on_startup
            async def setup():
                await warm_cache()
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook.

        Hooks run in registration order during ASGI lifespan shutdown,
        before the database disconnects.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        """Connect, define tables, then run startup hooks."""
        await self.define_tables()
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks, then disconnect."""
        for hook in self._shutdown_hooks:
            await invoke(hook)
        if self._db is not None:
            await self._db.disconnect()

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server.

        Compiles the app (freezing routes) and serves it with pounce,
        over TLS when ``ssl_certfile`` and ``ssl_keyfile`` are configured.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()

        from tern.server.serve import run_server

        run_server(
            self,
            self.config,
            host=host or self.config.host,
            port=port or self.config.port,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the dispatcher.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            config=self.config,
            renderer=self._renderer,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before first HTTP request), then
        runs startup/shutdown and signals completion back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            router.add(compile_route(pending.method, pending.path, pending.stages))
        router.compile()
        self._router = router
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, tables, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
