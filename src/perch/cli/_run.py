"""Build the app from a ServerConfig, wire up logging, and start serving."""

import logging
import sys

from perch.app import StaticServer
from perch.config import ServerConfig
from perch.errors import ConfigurationError


class _MaxLevelFilter(logging.Filter):
    def __init__(self, below: int) -> None:
        super().__init__()
        self._below = below

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._below


def configure_logging(level: str) -> None:
    """Send perch's log lines to stdout, errors to stderr, as bare messages.

    Idempotent: handlers installed by a previous call are replaced.
    """
    root = logging.getLogger("perch")
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter("%(message)s")

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(formatter)
    stdout.addFilter(_MaxLevelFilter(logging.ERROR))

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setFormatter(formatter)
    stderr.setLevel(logging.ERROR)

    root.addHandler(stdout)
    root.addHandler(stderr)


def run_server(config: ServerConfig) -> None:
    """Start perch for *config*; exit 1 if the configuration is invalid."""
    try:
        app = StaticServer(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(config.log_level)
    app.run()
