"""Tests for the TranscriptService pipeline.

WHY: The service glues extraction, fetching, and normalization together.
These tests check the glue: the right ID reaches the API, the rendered
text comes back in the documented format, and errors pass through
untranslated.

HOW: A TranscriptService over httpx.MockTransport, driven with
asyncio.run().
"""

from __future__ import annotations

import asyncio
import json

import pytest

from transcript_fetcher.api.models import TranscriptOrigin
from transcript_fetcher.errors import (
    InvalidIdentifierError,
    NoTranscriptDataError,
    UpstreamHttpError,
)


class TestGetTranscriptText:
    def test_renders_lines(self, make_service, make_transport, shape_one_payload):
        service = make_service(make_transport(json_body=shape_one_payload))
        text = asyncio.run(service.get_transcript_text("dQw4w9WgXcQ"))
        assert text == (
            "[0s] We're no strangers to love\n"
            "[4s] You know the rules and so do I\n"
            "[8s] A full commitment's what I'm thinking of"
        )

    def test_url_input_sends_extracted_id(self, make_service, make_transport, shape_one_payload):
        transport = make_transport(json_body=shape_one_payload)
        service = make_service(transport)
        asyncio.run(service.get_transcript_text("https://youtu.be/dQw4w9WgXcQ"))
        assert json.loads(transport.requests[0].content)["query"] == "dQw4w9WgXcQ"

    def test_defaults_are_english_uploader_provided(
        self, make_service, make_transport, shape_one_payload
    ):
        transport = make_transport(json_body=shape_one_payload)
        asyncio.run(make_service(transport).get_transcript_text("dQw4w9WgXcQ"))
        context = json.loads(transport.requests[0].content)["context"]
        assert context == [
            {"key": "language_code", "value": "en"},
            {"key": "transcript_origin", "value": "uploader_provided"},
        ]


class TestGetTranscript:
    def test_result_carries_query(self, make_service, make_transport, shape_renderer_payload):
        service = make_service(make_transport(json_body=shape_renderer_payload))
        result = asyncio.run(
            service.get_transcript("dQw4w9WgXcQ", "de", "auto_generated")
        )
        assert result.video_id == "dQw4w9WgXcQ"
        assert result.language == "de"
        assert result.origin is TranscriptOrigin.AUTO_GENERATED
        assert result.document.strategy == "renderer"
        assert result.text == "[1s] Hello\n[4s] world"

    def test_fetch_raw_returns_body(self, make_service, make_transport, shape_one_payload):
        service = make_service(make_transport(json_body=shape_one_payload))
        assert asyncio.run(service.fetch_raw("dQw4w9WgXcQ")) == shape_one_payload


class TestErrorPropagation:
    """Errors pass through the service unchanged."""

    def test_invalid_input_makes_no_request(self, make_service, make_transport):
        transport = make_transport(json_body={})
        with pytest.raises(InvalidIdentifierError):
            asyncio.run(make_service(transport).get_transcript_text("not a video"))
        assert transport.requests == []

    def test_upstream_error(self, make_service, make_transport):
        service = make_service(make_transport(status_code=403, json_body={"message": "Forbidden"}))
        with pytest.raises(UpstreamHttpError) as excinfo:
            asyncio.run(service.get_transcript_text("dQw4w9WgXcQ"))
        assert excinfo.value.status_code == 403

    def test_no_transcript_data(self, make_service, make_transport):
        body = {"results": [{"content": {"title": "no captions here"}}]}
        service = make_service(make_transport(json_body=body))
        with pytest.raises(NoTranscriptDataError):
            asyncio.run(service.get_transcript_text("dQw4w9WgXcQ"))
