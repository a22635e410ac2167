"""Intermediate representation for normalized transcripts.

WHY: The upstream API returns transcripts in several shapes. Everything
downstream of the normalizer (rendering, stats, file export, the HTTP
response) should see one well-typed form regardless of which shape the
response had.

HOW: Two frozen dataclasses:
  TranscriptSegment: one timed line of text
  TranscriptDocument: the ordered segments plus the strategy that
                      produced them

RULES:
- offset_seconds is a non-negative int, or OFFSET_UNKNOWN ("?") when the
  fallback strategy found an item without a usable start time
- text is always non-empty and trimmed
- Segment order is appearance order in the source response
- Rendered form is one "[{offset}s] {text}" line per segment, joined by
  a single newline with no trailing newline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

OFFSET_UNKNOWN = "?"
"""Placeholder offset for fallback items with no start/time field."""

Offset = Union[int, str]


@dataclass(frozen=True)
class TranscriptSegment:
    """A single transcript line with its start offset in whole seconds."""

    offset_seconds: Offset
    text: str

    def render(self) -> str:
        return "[{}s] {}".format(self.offset_seconds, self.text)


@dataclass(frozen=True)
class TranscriptDocument:
    """An ordered, normalized transcript.

    RULES:
    - segments is a tuple so documents can be shared without copying
    - strategy names the normalizer strategy that found the segments
      ("content.transcript", "renderer", "search", ...), for logging
    """

    segments: tuple[TranscriptSegment, ...] = field(default_factory=tuple)
    strategy: str = ""

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def render(self) -> str:
        """Render as newline-joined "[{offset}s] {text}" lines."""
        return "\n".join(segment.render() for segment in self.segments)
