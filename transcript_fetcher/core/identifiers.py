"""Video identifier extraction from free-form user input.

WHY: Users paste whatever they have: a bare video ID, a watch-page URL,
a youtu.be short link, an embed URL. The upstream API only accepts the
bare 11-character ID, so every entry point normalizes input here first.

HOW: A bare ID is returned unchanged. Otherwise a fixed, ordered list
of URL patterns is tried and the first capture wins.

RULES:
- A video ID is exactly 11 chars of [A-Za-z0-9_-]
- Pattern order: watch query, short link, embed, direct play
- Scheme and "www." are optional in every URL pattern
- Surrounding whitespace is ignored
- Raises InvalidIdentifierError when nothing matches
"""

from __future__ import annotations

import re

from transcript_fetcher.errors import InvalidIdentifierError

VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtu\.be/([A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/v/([A-Za-z0-9_-]{11})"),
)


def is_video_id(value: str) -> bool:
    """Return True if value is already a bare 11-character video ID."""
    return bool(VIDEO_ID_RE.match(value))


def extract_video_id(value: str) -> str:
    """Extract the 11-character video ID from an ID or a video URL.

    Args:
        value: A bare video ID or one of the supported URL forms.

    Returns:
        The video ID.

    Raises:
        InvalidIdentifierError: If no supported form matches.
    """
    candidate = value.strip()
    if is_video_id(candidate):
        return candidate

    for pattern in _URL_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1)

    raise InvalidIdentifierError("Invalid YouTube URL or video ID: {!r}".format(value))
