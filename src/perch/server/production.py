"""Server runner — starts pounce with the live perch app object."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.app import StaticServer


def run_production_server(
    app: StaticServer,
    host: str = "0.0.0.0",
    port: int = 8080,
    *,
    log_level: str = "info",
) -> None:
    """Run a perch app under a single-worker pounce server.

    Pounce's ``run()`` takes an import string, but perch has a live
    ``StaticServer`` object, so ``pounce.Server`` is used directly with
    the ASGI callable.  Requests are handled concurrently on the event
    loop; no application-level connection limit is applied.

    Args:
        app: ASGI callable (perch StaticServer instance).
        host: Bind address (default: 0.0.0.0 for all interfaces).
        port: Bind port (default: 8080).
        log_level: Log level (debug, info, warning, error).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        log_level=log_level,
        # The root path is answered by perch's own health check
        health_check_path=None,
    )
    server = Server(config, app)
    server.run()
