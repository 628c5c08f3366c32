"""Immutable HTTP request.

Frozen metadata with async, cached body access.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from perch._internal.asgi import Receive, Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the URL-decoded path the file engine resolves against
    the public folder.  ``url`` is the request target as it arrived on
    the wire and is what rewrite rules match against.
    """

    method: str
    path: str
    raw_path: bytes
    query_string: bytes

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the buffered body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Request target: raw path plus query string, undecoded."""
        target = self.raw_path.decode("latin-1") if self.raw_path else self.path
        if self.query_string:
            return f"{target}?{self.query_string.decode('latin-1')}"
        return target

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string", b""),
            _receive=receive,
        )
