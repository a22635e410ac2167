"""Summary statistics over a rendered transcript.

WHY: The HTTP response reports segment, word, and character counts plus
the approximate duration so clients can sanity-check a transcript
without parsing it.

HOW: Works on the rendered text (the same string the client receives),
so the numbers always agree with what was sent.

RULES:
- segments: number of non-blank lines
- words: whitespace-separated tokens, timestamps included
- characters: length of the rendered string
- duration: the seconds value in the last line's "[Ns]" prefix, else 0
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_OFFSET_RE = re.compile(r"^\[(\d+)s\]")


@dataclass(frozen=True)
class TranscriptStats:
    segments: int
    words: int
    characters: int
    duration: int


def compute_stats(transcript: str) -> TranscriptStats:
    lines = [line for line in transcript.split("\n") if line.strip()]
    duration = 0
    if lines:
        match = _LEADING_OFFSET_RE.match(lines[-1])
        if match:
            duration = int(match.group(1))
    return TranscriptStats(
        segments=len(lines),
        words=len(transcript.split()),
        characters=len(transcript),
        duration=duration,
    )
