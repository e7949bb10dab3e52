"""Production server.

Starts a pounce ASGI server with the live certgate App object. pounce owns
the listening sockets, the worker processes, and graceful shutdown: on
SIGINT/SIGTERM it stops accepting connections, lets in-flight requests
drain, then runs the app's lifespan shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from certgate.errors import ConfigurationError

if TYPE_CHECKING:
    from certgate.app import App


def run_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 5000,
    *,
    workers: int = 1,
    log_level: str = "info",
    log_format: str = "text",
    request_timeout: float = 30.0,
) -> None:
    """Run the gateway under pounce until it is stopped.

    Args:
        app: certgate App instance (an ASGI callable).
        host: Bind address (default: all interfaces).
        port: Bind port (default: 5000).
        workers: Worker count (0 = auto-detect from CPU count).
        log_level: pounce log level (debug, info, warning, error).
        log_format: pounce log format ("text" or "json").
        request_timeout: Per-request timeout enforced by pounce (seconds).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires the pounce ASGI server. "
            "Install it with: pip install certgate[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        lifecycle_logging=True,
        log_format=log_format,
        log_level=log_level,
        request_timeout=request_timeout,
    )
    server = Server(config, app)
    server.run()
