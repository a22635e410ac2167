"""Oxylabs request types for the youtube_transcript source.

WHY: The Realtime API takes a small JSON body with the video ID and a
"context" list of key/value parameters. Typed request objects keep the
parameter names in one place and make invalid origins impossible.

HOW: TranscriptOrigin enumerates the two transcript origins the source
supports. FetchRequest is a frozen per-call value that renders itself
into the request payload.

RULES:
- origin values match the API exactly: uploader_provided, auto_generated
- context entries are always language_code then transcript_origin
- A FetchRequest is built per call and never reused
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from transcript_fetcher.config import OXYLABS_SOURCE


class TranscriptOrigin(str, Enum):
    """Which transcript track to request."""

    UPLOADER_PROVIDED = "uploader_provided"
    AUTO_GENERATED = "auto_generated"


@dataclass(frozen=True)
class FetchRequest:
    """One transcript query against the Oxylabs Realtime API."""

    video_id: str
    language_code: str = "en"
    origin: TranscriptOrigin = TranscriptOrigin.UPLOADER_PROVIDED

    def to_payload(self) -> dict:
        """Build the JSON request body."""
        return {
            "source": OXYLABS_SOURCE,
            "query": self.video_id,
            "context": [
                {"key": "language_code", "value": self.language_code},
                {"key": "transcript_origin", "value": TranscriptOrigin(self.origin).value},
            ],
        }
