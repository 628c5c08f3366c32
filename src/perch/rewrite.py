"""Rewrite table — exact-match path substitutions applied on 404.

Built once at startup from the raw ``--rewriteRule`` values and never
mutated afterwards.  Lookup is by the request target exactly as it was
sent; no normalization is applied to either side.
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import TypeAlias

from perch.errors import ConfigurationError

RewriteTable: TypeAlias = Mapping[str, str]

_DELIMITER = ":"


def normalize_rules(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Coerce a flag value into a tuple of rule strings.

    ``None`` becomes an empty tuple and a bare string a one-element tuple.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(raw)


def parse_rule(rule: str) -> tuple[str, str]:
    """Split a ``from:to`` entry on its first colon.

    Raises:
        ConfigurationError: If the delimiter is missing or either side
            is empty.
    """
    source, sep, destination = rule.partition(_DELIMITER)
    if not sep:
        msg = f"Invalid rewrite rule {rule!r}: expected '<from>:<to>'."
        raise ConfigurationError(msg)
    if not source or not destination:
        msg = f"Invalid rewrite rule {rule!r}: both '<from>' and '<to>' are required."
        raise ConfigurationError(msg)
    return source, destination


def build_rewrite_table(raw: str | Iterable[str] | None) -> RewriteTable:
    """Build the read-only lookup from request target to destination.

    A later rule with the same source replaces an earlier one.
    """
    rules: dict[str, str] = {}
    for rule in normalize_rules(raw):
        source, destination = parse_rule(rule)
        rules[source] = destination
    return MappingProxyType(rules)


def add_index_file(path: str, index: str = "index.html") -> str:
    """Treat an extension-less destination as a directory.

    ``/docs`` → ``/docs/index.html``; ``/app.js`` is returned unchanged.
    """
    if PurePosixPath(path).suffix:
        return path
    return path.rstrip("/") + "/" + index


def describe_rules(table: RewriteTable) -> str:
    """Human-readable tail of the startup message."""
    if not table:
        return "with no rewrite rules."
    return f"using rewrite rules: {json.dumps(dict(table), separators=(',', ':'))}."
