"""Perch — a static file server with URL rewrites and a health check.

Serves a public folder over HTTP. When a path is not found, exact-match
rewrite rules get a chance to substitute another file, and a request for
``/`` becomes a health check answered with 204.

Basic usage::

    from perch import ServerConfig, StaticServer

    app = StaticServer(ServerConfig(
        public_folder="./dist",
        rewrite_rules=("/app:/app", "/legacy.js:/bundle.js"),
    ))
    app.run()

Or from the shell::

    perch --publicFolder ./dist --rewriteRule /app:/app --port 8080
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Failed",
    "FileServer",
    "PerchError",
    "Request",
    "Response",
    "Served",
    "ServerConfig",
    "StaticServer",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "StaticServer":
        from perch.app import StaticServer

        return StaticServer

    if name == "ServerConfig":
        from perch.config import ServerConfig

        return ServerConfig

    if name in ("FileServer", "Served", "Failed"):
        from perch import files as _files

        return getattr(_files, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in ("PerchError", "ConfigurationError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
