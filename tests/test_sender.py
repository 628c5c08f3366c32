"""Tests for perch.server.sender response emission rules."""

from perch.http.response import Response
from perch.server.sender import send_response


async def _capture(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponseNoBodyStatuses:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        # Even if a body is accidentally attached, 204 must go out empty.
        messages = await _capture(Response("unexpected-body").with_status(204))

        assert messages[0]["type"] == "http.response.start"
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b""

    async def test_304_drops_body(self) -> None:
        messages = await _capture(Response("unexpected-body").with_status(304))

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self) -> None:
        messages = await _capture(Response("ok"))

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert messages[1]["body"] == b"ok"


class TestSendResponseHeaders:
    async def test_explicit_content_length_wins(self) -> None:
        response = Response(b"", content_type="text/css").with_header("Content-Length", "20")
        messages = await _capture(response)

        raw = messages[0]["headers"]
        assert [v for k, v in raw if k == b"content-length"] == [b"20"]
        assert messages[1]["body"] == b""

    async def test_no_content_type_when_none(self) -> None:
        messages = await _capture(Response("", status=404, content_type=None))

        names = [k for k, _ in messages[0]["headers"]]
        assert b"content-type" not in names

    async def test_header_names_lowercased(self) -> None:
        messages = await _capture(Response("").with_header("Allow", "GET, HEAD"))

        assert (b"allow", b"GET, HEAD") in messages[0]["headers"]

    async def test_exactly_one_start_message(self) -> None:
        messages = await _capture(Response("ok"))

        starts = [m for m in messages if m["type"] == "http.response.start"]
        assert len(starts) == 1
