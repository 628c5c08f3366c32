"""Server configuration.

ServerConfig is a frozen dataclass built once from command-line flags and
passed explicitly to the server.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(
            rewrite_rules=("/app:/index.html",),
            public_folder="./dist",
            port=3000,
        )
    """

    # Rewrites: raw "from:to" entries, parsed by perch.rewrite
    rewrite_rules: tuple[str, ...] = ()

    # Files
    public_folder: str | Path = "./public"
    index_file: str = "index.html"
    cache_control: str = "public, max-age=3600"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
