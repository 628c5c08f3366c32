"""Perch exception hierarchy.

HTTP-level outcomes are values (see ``perch.files``), not exceptions.
Only startup problems are raised.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when server configuration is invalid.

    Typically raised while building the rewrite table at startup.
    """
