"""The perch application: a rewrite-aware static file server.

All startup state (rewrite table, file engine) is built once in
``__init__`` from a ``ServerConfig`` and passed explicitly to the
request handler.  Nothing is mutated after construction.
"""

from perch._internal.asgi import Receive, Scope, Send
from perch.config import ServerConfig
from perch.files import FileServer
from perch.rewrite import RewriteTable, build_rewrite_table, describe_rules
from perch.server.handler import handle_request


class StaticServer:
    """ASGI application serving ``config.public_folder``.

    Raises ``ConfigurationError`` on construction if a rewrite rule is
    malformed, so a bad command line never reaches the listener.

    Usage::

        app = StaticServer(ServerConfig(rewrite_rules=("/app:/app",)))
        app.run()
    """

    __slots__ = ("_files", "_rewrites", "config")

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self._rewrites: RewriteTable = build_rewrite_table(self.config.rewrite_rules)
        self._files = FileServer(
            self.config.public_folder,
            index=self.config.index_file,
            cache_control=self.config.cache_control,
        )

    @property
    def rewrites(self) -> RewriteTable:
        return self._rewrites

    @property
    def files(self) -> FileServer:
        return self._files

    def startup_message(self) -> str:
        """One line naming the folder, bind address, and rewrite rules."""
        return (
            f'I\'ll serve "{self.config.public_folder}" on '
            f'"{self.config.host}:{self.config.port}" {describe_rules(self._rewrites)}'
        )

    def run(self) -> None:
        """Print the startup message and serve until interrupted.

        The startup line goes to stdout whatever the log level.
        """
        from perch.server.production import run_production_server

        print(self.startup_message(), flush=True)
        run_production_server(
            self,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            files=self._files,
            rewrites=self._rewrites,
            index_file=self.config.index_file,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup and shutdown; there is nothing to set up."""
        while True:
            message = await receive()
            msg_type = message["type"]
            if msg_type == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
