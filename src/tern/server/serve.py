"""Serving via pounce.

Starts a pounce ASGI server with the live tern App object. One event
loop per worker; debug mode runs a single worker with reload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tern.config import AppConfig


def run_server(app: object, config: AppConfig, *, host: str, port: int) -> None:
    """Start pounce with *app*.

    Pounce's ``run()`` takes an import string, but tern has a live ``App``
    object, so ``pounce.Server`` is used directly with the ASGI callable.
    TLS is enabled when both ``ssl_certfile`` and ``ssl_keyfile`` are set.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        from tern.errors import ConfigurationError

        msg = "Serving requires 'pounce'. Install it with: pip install tern[server]"
        raise ConfigurationError(msg) from None

    server_config = ServerConfig(
        host=host,
        port=port,
        workers=1 if config.debug else config.workers,
        reload=config.debug,
        log_level=config.log_level,
        ssl_certfile=config.ssl_certfile if config.tls else None,
        ssl_keyfile=config.ssl_keyfile if config.tls else None,
    )
    Server(server_config, app).run()
