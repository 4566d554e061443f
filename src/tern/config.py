"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. Loading it from files or the environment is the
job of whatever bootstraps the process.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, static_dir="public")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Static files: unmatched paths are probed under this root.
    # None disables the probe (every miss is a 404).
    static_dir: str | Path | None = "static"

    # Templates: render() resolves file names under this root
    template_dir: str | Path = "templates"

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # TLS (optional): both must be set to serve HTTPS
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def tls(self) -> bool:
        """True when both certificate and key files are configured."""
        return bool(self.ssl_certfile and self.ssl_keyfile)
