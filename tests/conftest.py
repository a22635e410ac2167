"""Shared test fixtures for the transcript_fetcher test suite.

WHY: The normalizer, client, service, HTTP, and CLI tests all need the
same upstream payloads in each of the response shapes Oxylabs has been
seen to return, plus a way to answer HTTP calls without a network.

HOW: Payload builders are plain functions, exposed to tests through the
payloads fixture and wrapped in the shape fixtures. make_transport() returns an
httpx.MockTransport that records every request it receives and replies
with a fixed status and JSON body, or raises a given exception.

RULES:
- No test touches the real Oxylabs API
- Payloads mirror real response shapes, trimmed to a few segments
- The recorded request list lets tests assert on auth and payload
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import httpx
import pytest

from transcript_fetcher.config import Credentials
from transcript_fetcher.service import TranscriptService


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def direct_payload(items: List[Dict[str, Any]], key: str = "transcript") -> Dict[str, Any]:
    """results[0].content.<key> = items."""
    return {"results": [{"content": {key: items}, "status_code": 200}], "job": {"status": "done"}}


def renderer_item(start_ms: Any, *texts: str) -> Dict[str, Any]:
    """One index-keyed transcriptSegmentRenderer record."""
    return {
        "transcriptSegmentRenderer": {
            "startMs": start_ms,
            "endMs": "0",
            "snippet": {"runs": [{"text": text} for text in texts]},
        }
    }


def renderer_payload(*items: Dict[str, Any]) -> Dict[str, Any]:
    content = {str(index): item for index, item in enumerate(items)}
    return {"results": [{"content": content, "status_code": 200}]}


SHAPE_ONE_ITEMS = [
    {"start": 0, "text": "We're no strangers to love"},
    {"start": 4, "text": "You know the rules and so do I"},
    {"start": 8, "text": "A full commitment's what I'm thinking of"},
]


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="user", password="secret")


@pytest.fixture
def shape_one_payload() -> Dict[str, Any]:
    return direct_payload([dict(item) for item in SHAPE_ONE_ITEMS])


@pytest.fixture
def shape_renderer_payload() -> Dict[str, Any]:
    return renderer_payload(
        renderer_item("1500", "Hel", "lo"),
        renderer_item("4200", "  world  "),
    )


# ---------------------------------------------------------------------------
# HTTP mocking
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        raises: Optional[Exception] = None,
        content: Optional[bytes] = None,
    ) -> None:
        self.requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if raises is not None:
                raise raises
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body)

        super().__init__(handler)


@pytest.fixture
def make_transport():
    """Factory fixture: make_transport(status_code=200, json_body=..., raises=...)."""
    return RecordingTransport


@pytest.fixture
def make_service(credentials):
    """Factory fixture building a TranscriptService over a mock transport."""

    def _make(transport: httpx.AsyncBaseTransport) -> TranscriptService:
        return TranscriptService(credentials, transport=transport, debug=False)

    return _make


@pytest.fixture
def payloads():
    """Payload builders: payloads.direct(items, key), payloads.renderer_item(...), payloads.renderer(...)."""
    return SimpleNamespace(
        direct=direct_payload,
        renderer_item=renderer_item,
        renderer=renderer_payload,
        shape_one_items=[dict(item) for item in SHAPE_ONE_ITEMS],
    )
