"""Tests for the async Oxylabs client.

WHY: The client is the only code that talks to the network. It must
send exactly the request Oxylabs expects and turn every failure mode
into the right error type, because the HTTP and CLI layers dispatch on
those types.

HOW: httpx.MockTransport stands in for the network. Each test drives
the async client with asyncio.run() and inspects the recorded request
or the raised error.

RULES:
- No real network access
- One request per fetch(); failures are never retried
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging

import httpx
import pytest

from transcript_fetcher.api.client import OxylabsClient
from transcript_fetcher.api.models import FetchRequest, TranscriptOrigin
from transcript_fetcher.errors import NetworkError, UnexpectedShapeError, UpstreamHttpError

API_URL = "https://realtime.oxylabs.io/v1/queries"


def _fetch(credentials, transport, request=None, **kwargs):
    request = request or FetchRequest(video_id="dQw4w9WgXcQ")

    async def _run():
        async with OxylabsClient(credentials, transport=transport, **kwargs) as client:
            return await client.fetch(request)

    return asyncio.run(_run())


class TestRequest:
    """The outgoing request matches the Realtime API contract."""

    def test_posts_payload(self, credentials, make_transport):
        transport = make_transport(json_body={"results": []})
        request = FetchRequest(
            video_id="dQw4w9WgXcQ",
            language_code="es",
            origin=TranscriptOrigin.AUTO_GENERATED,
        )
        _fetch(credentials, transport, request)

        assert len(transport.requests) == 1
        sent = transport.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == API_URL
        assert json.loads(sent.content) == {
            "source": "youtube_transcript",
            "query": "dQw4w9WgXcQ",
            "context": [
                {"key": "language_code", "value": "es"},
                {"key": "transcript_origin", "value": "auto_generated"},
            ],
        }

    def test_basic_auth_and_content_type(self, credentials, make_transport):
        transport = make_transport(json_body={})
        _fetch(credentials, transport)

        sent = transport.requests[0]
        expected = base64.b64encode(b"user:secret").decode()
        assert sent.headers["Authorization"] == "Basic {}".format(expected)
        assert sent.headers["Content-Type"] == "application/json"

    def test_custom_api_url(self, credentials, make_transport):
        transport = make_transport(json_body={})
        _fetch(credentials, transport, api_url="https://example.test/v1/queries")
        assert str(transport.requests[0].url) == "https://example.test/v1/queries"

    def test_returns_parsed_body(self, credentials, make_transport, shape_one_payload):
        transport = make_transport(json_body=shape_one_payload)
        assert _fetch(credentials, transport) == shape_one_payload


class TestErrors:
    def test_non_success_status(self, credentials, make_transport):
        transport = make_transport(status_code=401, json_body={"message": "Unauthorized"})
        with pytest.raises(UpstreamHttpError) as excinfo:
            _fetch(credentials, transport)
        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Unauthorized"
        assert str(excinfo.value) == "API Error: 401 - Unauthorized"

    def test_status_without_message_uses_reason_phrase(self, credentials, make_transport):
        transport = make_transport(status_code=404, content=b"")
        with pytest.raises(UpstreamHttpError) as excinfo:
            _fetch(credentials, transport)
        assert excinfo.value.message == "Not Found"

    def test_single_attempt_on_failure(self, credentials, make_transport):
        transport = make_transport(status_code=500, json_body={"message": "boom"})
        with pytest.raises(UpstreamHttpError):
            _fetch(credentials, transport)
        assert len(transport.requests) == 1

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            httpx.RemoteProtocolError("reset"),
        ],
    )
    def test_no_response_is_network_error(self, credentials, make_transport, exc):
        transport = make_transport(raises=exc)
        with pytest.raises(NetworkError, match="Network Error"):
            _fetch(credentials, transport)

    def test_other_errors_propagate(self, credentials, make_transport):
        transport = make_transport(raises=RuntimeError("unexpected"))
        with pytest.raises(RuntimeError, match="unexpected"):
            _fetch(credentials, transport)

    def test_non_json_body(self, credentials, make_transport):
        transport = make_transport(status_code=200, content=b"<html>oops</html>")
        with pytest.raises(UnexpectedShapeError):
            _fetch(credentials, transport)

    def test_requires_context_manager(self, credentials):
        client = OxylabsClient(credentials)
        with pytest.raises(RuntimeError, match="async context manager"):
            asyncio.run(client.fetch(FetchRequest(video_id="dQw4w9WgXcQ")))


class TestDebugLogging:
    def test_raw_body_logged_when_debug(self, credentials, make_transport, caplog):
        transport = make_transport(json_body={"results": [], "marker": "xyz"})
        with caplog.at_level(logging.INFO, logger="transcript_fetcher.api.client"):
            _fetch(credentials, transport, debug=True)
        assert "xyz" in caplog.text

    def test_raw_body_not_logged_by_default(self, credentials, make_transport, caplog):
        transport = make_transport(json_body={"results": [], "marker": "xyz"})
        with caplog.at_level(logging.INFO, logger="transcript_fetcher.api.client"):
            _fetch(credentials, transport, debug=False)
        assert "xyz" not in caplog.text


class TestCredentials:
    def test_password_hidden_from_repr(self, credentials):
        assert "secret" not in repr(credentials)
