"""Perch CLI — serve a folder with rewrite rules and a health check.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse

from perch.config import ServerConfig

_LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a static file server with rewrite rules and a health check.",
    )
    parser.add_argument(
        "--rewriteRule",
        dest="rewrite_rules",
        action="append",
        default=[],
        metavar="FROM:TO",
        help="Rewrite rule, applied when FROM is not found (repeatable)",
    )
    parser.add_argument(
        "--publicFolder",
        dest="public_folder",
        default="./public",
        help="The public folder to serve",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="The port on which the server will be running",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind host address")
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="info",
        help="Log level",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Translate parsed flags into an immutable ServerConfig."""
    return ServerConfig(
        rewrite_rules=tuple(args.rewrite_rules),
        public_folder=args.public_folder,
        port=args.port,
        host=args.host,
        log_level=args.log_level,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    from perch.cli._run import run_server

    run_server(config)
