"""ASGI response sending — translates a perch Response into ASGI messages."""

from perch._internal.asgi import Send
from perch.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a perch Response into ASGI send() calls.

    An explicit ``Content-Length`` header on the response wins over the
    body length, so HEAD responses can advertise the size of the body
    they omit.
    """
    raw_headers: list[tuple[bytes, bytes]] = []
    if response.content_type is not None:
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))

    content_length: bytes | None = None
    for name, value in response.headers:
        name_b = name.lower().encode("latin-1")
        if name_b == b"content-length":
            content_length = value.encode("latin-1")
            continue
        raw_headers.append((name_b, value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    if not _body_allowed(response.status):
        content_length = b"0"
    elif content_length is None:
        content_length = str(len(body)).encode("latin-1")
    raw_headers.append((b"content-length", content_length))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
