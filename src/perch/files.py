"""File-serving engine.

Maps a request path onto a directory and returns an explicit result:
``Served`` with a complete response, or ``Failed`` with the HTTP status
(and any headers) the caller should surface.  The engine never raises
for HTTP-level outcomes; recovery decisions belong to the dispatcher.
"""

import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from perch.http.request import Request
from perch.http.response import Response

_SERVABLE_METHODS = ("GET", "HEAD")


@dataclass(frozen=True, slots=True)
class Served:
    """The engine produced a response (file contents or a redirect)."""

    response: Response


@dataclass(frozen=True, slots=True)
class Failed:
    """The engine could not serve the request."""

    status: int
    headers: tuple[tuple[str, str], ...] = ()
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


ServeResult: TypeAlias = Served | Failed


class FileServer:
    """Serves files from a single root directory.

    Security: resolves symlinks and verifies the final path is within
    the root directory to prevent path traversal.

    Usage::

        files = FileServer("./public")
        match files.serve(request):
            case Served(response):
                ...
            case Failed(status, headers):
                ...
    """

    __slots__ = ("_cache_control", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    def serve(self, request: Request) -> ServeResult:
        """Serve the file at ``request.path``, resolving directory indexes."""
        if request.method not in _SERVABLE_METHODS:
            return Failed(405, (("Allow", ", ".join(_SERVABLE_METHODS)),), "Method Not Allowed")

        path = request.path
        try:
            file_path = self._resolve(path)
            if file_path is None:
                return Failed(403, detail="Forbidden")

            # Directory: redirect to the trailing-slash URL, or serve its index
            if file_path.is_dir():
                index_path = file_path / self._index
                if not index_path.is_file():
                    return Failed(404, detail="Not Found")
                if not path.endswith("/"):
                    return Served(Response(body="", status=301).with_header("Location", path + "/"))
                file_path = index_path

            if not file_path.is_file():
                return Failed(404, detail="Not Found")
        except OSError:
            # Name too long, unreadable parent directory and the like
            return Failed(404, detail="Not Found")

        return self._read(file_path, head=request.method == "HEAD")

    def serve_file(
        self,
        path: str,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
        *,
        request: Request | None = None,
    ) -> ServeResult:
        """Serve *path* (relative to the root) directly with *status*.

        No directory index resolution or redirects; a directory or a
        missing file is a 404.
        """
        try:
            file_path = self._resolve(path)
            if file_path is None:
                return Failed(403, detail="Forbidden")
            if not file_path.is_file():
                return Failed(404, detail="Not Found")
        except OSError:
            return Failed(404, detail="Not Found")
        head = request is not None and request.method == "HEAD"
        return self._read(file_path, status=status, headers=headers, head=head)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, path: str) -> Path | None:
        """Map a URL path into the root, or ``None`` if it escapes it.

        Raises ``OSError`` for paths the filesystem rejects outright.
        """
        relative = path.lstrip("/")
        if "\x00" in relative:
            return None
        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return None
        return file_path

    def _read(
        self,
        file_path: Path,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
        head: bool = False,
    ) -> ServeResult:
        """Read a file and build a response."""
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        try:
            body = file_path.read_bytes()
        except OSError as exc:
            return Failed(500, detail=f"{type(exc).__name__}: {exc.strerror or exc}")

        response = (
            Response(body=b"" if head else body, content_type=content_type, status=status)
            .with_header("Content-Length", str(len(body)))
            .with_header("Cache-Control", self._cache_control)
        )
        if headers:
            response = response.with_headers(headers)
        return Served(response)
