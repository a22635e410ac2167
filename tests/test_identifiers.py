"""Unit tests for video identifier extraction.

WHY: Every entry point funnels user input through extract_video_id().
A regex that is too loose sends garbage upstream; one that is too strict
rejects links people actually paste.

HOW: Bare IDs, each supported URL form (with and without scheme/www),
URLs with extra query parameters, and inputs that must be rejected.

RULES:
- Bare 11-character IDs are returned unchanged
- Pattern order is watch, short link, embed, direct play
"""

import pytest

from transcript_fetcher.core.identifiers import extract_video_id, is_video_id
from transcript_fetcher.errors import InvalidIdentifierError, TranscriptFetcherError


class TestBareIds:
    """Input that is already an ID passes through untouched."""

    @pytest.mark.parametrize(
        "video_id",
        ["dQw4w9WgXcQ", "J1jm4MoZw5Y", "___________", "-----------", "abcDEF12_-9"],
    )
    def test_returns_id_unchanged(self, video_id):
        assert extract_video_id(video_id) == video_id

    def test_surrounding_whitespace_is_ignored(self):
        assert extract_video_id("  dQw4w9WgXcQ\n") == "dQw4w9WgXcQ"

    def test_is_video_id(self):
        assert is_video_id("dQw4w9WgXcQ")
        assert not is_video_id("short")
        assert not is_video_id("dQw4w9WgXcQX")
        assert not is_video_id("dQw4w9WgXc!")


class TestUrlForms:
    """Each supported URL shape yields the embedded ID."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "http://youtube.com/watch?v=dQw4w9WgXcQ",
            "youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
            "https://youtu.be/dQw4w9WgXcQ",
            "youtu.be/dQw4w9WgXcQ?si=abc",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ?version=3",
        ],
    )
    def test_extracts_id(self, url):
        assert extract_video_id(url) == "dQw4w9WgXcQ"


class TestRejection:
    """Unparsable input raises InvalidIdentifierError."""

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "short",
            "not a url at all",
            "https://vimeo.com/123456789",
            "https://www.youtube.com/watch?v=tooShort",
            "https://www.youtube.com/channel/UC1234567890",
        ],
    )
    def test_raises(self, value):
        with pytest.raises(InvalidIdentifierError):
            extract_video_id(value)

    def test_error_is_part_of_taxonomy(self):
        with pytest.raises(TranscriptFetcherError, match="Invalid YouTube URL or video ID"):
            extract_video_id("nope")
