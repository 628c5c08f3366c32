"""ASGI handler — per-request dispatch with rewrite and health-check fallback.

The only component that touches raw ASGI directly. Builds a Request,
asks the file engine to serve it, and decides what to send when the
engine fails:

- 404 on a path with a rewrite rule → serve the rewrite destination
- 404 on ``/`` → health check, 204 No Content
- anything else → relay the engine's status and headers, empty body

Exactly one response is sent per request.
"""

import functools
import logging

import anyio.to_thread

from perch._internal.asgi import Receive, Scope, Send
from perch.files import Failed, FileServer, Served
from perch.http.request import Request
from perch.http.response import Response
from perch.rewrite import RewriteTable, add_index_file
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")

HEALTH_CHECK_PATH = "/"


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    files: FileServer,
    rewrites: RewriteTable,
    index_file: str = "index.html",
) -> None:
    """Process a single HTTP request through the serve/fallback pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        # Requests are buffered in full before serving
        await request.body()
        response = await dispatch(request, files=files, rewrites=rewrites, index_file=index_file)
    except Exception:
        logger.exception('[!] Can\'t serve "%s", unexpected error.', request.url)
        response = Response(body="", status=500, content_type=None)

    await send_response(response, send)


async def dispatch(
    request: Request,
    *,
    files: FileServer,
    rewrites: RewriteTable,
    index_file: str = "index.html",
) -> Response:
    """Decide the single response for *request*.

    Reads the file engine and the rewrite table, never sends.  File
    lookups run in a worker thread so a slow disk only suspends this
    request.
    """
    url = request.url

    match await anyio.to_thread.run_sync(files.serve, request):
        case Served(response):
            logger.info('[_] Serve "%s".', url)
            return response
        case Failed(status=404) if url in rewrites:
            destination = add_index_file(rewrites[url], index_file)
            logger.info('[>] Serve "%s" instead of "%s".', destination, url)
            serve_rewrite = functools.partial(files.serve_file, destination, 200, {}, request=request)
            match await anyio.to_thread.run_sync(serve_rewrite):
                case Served(response):
                    return response
                case Failed() as failure:
                    return _relay(failure, destination)
        case Failed(status=404) if url == HEALTH_CHECK_PATH:
            logger.info("[>] Health check request.")
            return Response(body="", status=204, content_type=None)
        case Failed() as failure:
            return _relay(failure, url)


def _relay(failure: Failed, url: str) -> Response:
    """Pass an engine failure through to the client verbatim, without a body."""
    logger.error('[!] Can\'t serve "%s", error: %r', url, failure)
    return Response(body="", status=failure.status, content_type=None, headers=failure.headers)
