"""Schema-tolerant normalization of Oxylabs transcript responses.

WHY: The youtube_transcript source has returned transcripts in at least
four shapes across releases: a ready-made list under content.transcript,
the same under content.transcripts, a list directly on the result, and
an index-keyed object of YouTube transcriptSegmentRenderer records.
Coupling to any single shape breaks the moment the upstream changes.

HOW: normalize() runs a fixed cascade of strategies and returns the
first one that yields at least one segment:
  1. Direct arrays, in order: results[0].content.transcript,
     results[0].content.transcripts, results[0].transcript
  2. Renderer records: values of results[0].content (a mapping) that
     carry transcriptSegmentRenderer {startMs, snippet.runs[].text}
  3. Search: the first list anywhere under content whose key contains
     "transcript" (case-insensitive), mapped with lenient field lookup
If none of them finds anything, NoTranscriptDataError is raised.

RULES:
- Strategy order and the exact key names are a compatibility contract;
  downstream consumers depend on which shape wins when several exist
- Segments with empty or whitespace-only text are dropped everywhere
- Renderer offsets are floor(startMs / 1000), never negative
- Direct-array offsets are floored numbers, 0 when absent
- Search offsets come from the first of "start" and "time" that parses;
  when neither does the offset is OFFSET_UNKNOWN ("?")
- List-valued content skips the renderer strategy but is still searched
- A missing or empty "results" list is an UnexpectedShapeError, not a
  NoTranscriptDataError
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional

from transcript_fetcher.core.ir import (
    OFFSET_UNKNOWN,
    Offset,
    TranscriptDocument,
    TranscriptSegment,
)
from transcript_fetcher.core.tree import (
    find_sequence,
    from_json,
    ordered_items,
    to_json,
)
from transcript_fetcher.errors import NoTranscriptDataError, UnexpectedShapeError

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# (strategy name, path from results[0]) tried in this exact order
_DIRECT_ARRAY_PATHS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("content.transcript", ("content", "transcript")),
    ("content.transcripts", ("content", "transcripts")),
    ("transcript", ("transcript",)),
)


# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _parse_int_prefix(value: Any) -> Optional[int]:
    """Parse a leading integer the way JavaScript's parseInt does."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return None


def _parse_seconds(value: Any) -> Optional[int]:
    """Floor a numeric or numeric-string value to non-negative whole seconds."""
    if isinstance(value, bool) or value is None:
        return None
    number: Optional[float] = None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if match:
            number = float(match.group(1))
    if number is None or not math.isfinite(number):
        return None
    return max(0, math.floor(number))


def _clean_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def _first_present(item: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None and value != "":
            return value
    return None


def _get_path(data: Any, path: Iterable[str]) -> Any:
    for key in path:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


# ---------------------------------------------------------------------------
# Item mappers
# ---------------------------------------------------------------------------


def _direct_segment(item: Any) -> Optional[TranscriptSegment]:
    """Map an already-shaped {start, text} item."""
    if not isinstance(item, Mapping):
        return None
    text = _clean_text(item.get("text"))
    if not text:
        return None
    offset = _parse_seconds(item.get("start"))
    return TranscriptSegment(offset_seconds=offset if offset is not None else 0, text=text)


def _renderer_segment(item: Any) -> Optional[TranscriptSegment]:
    """Map a {transcriptSegmentRenderer: {startMs, snippet: {runs}}} record."""
    if not isinstance(item, Mapping):
        return None
    renderer = item.get("transcriptSegmentRenderer")
    if not isinstance(renderer, Mapping):
        return None

    start_ms = _parse_int_prefix(renderer.get("startMs")) or 0
    offset = max(0, start_ms // 1000)

    snippet = renderer.get("snippet")
    runs = snippet.get("runs") if isinstance(snippet, Mapping) else None
    parts = []
    if isinstance(runs, list):
        for run in runs:
            if isinstance(run, Mapping) and isinstance(run.get("text"), str):
                parts.append(run["text"])
    text = "".join(parts).strip()
    if not text:
        return None
    return TranscriptSegment(offset_seconds=offset, text=text)


def _search_segment(item: Any) -> Optional[TranscriptSegment]:
    """Map an item of unknown shape with lenient field lookup."""
    if not isinstance(item, Mapping):
        return None
    text = _clean_text(_first_present(item, ("text", "content")))
    if not text:
        return None
    offset: Offset = OFFSET_UNKNOWN
    for key in ("start", "time"):
        seconds = _parse_seconds(item.get(key))
        if seconds is not None:
            offset = seconds
            break
    return TranscriptSegment(offset_seconds=offset, text=text)


def _collect(
    items: Iterable[Any],
    mapper: Callable[[Any], Optional[TranscriptSegment]],
) -> tuple[TranscriptSegment, ...]:
    segments = []
    for item in items:
        segment = mapper(item)
        if segment is not None:
            segments.append(segment)
    return tuple(segments)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def _direct_arrays(result: Mapping[str, Any]) -> Optional[TranscriptDocument]:
    for name, path in _DIRECT_ARRAY_PATHS:
        candidate = _get_path(result, path)
        if not isinstance(candidate, list) or not candidate:
            continue
        segments = _collect(candidate, _direct_segment)
        if segments:
            return TranscriptDocument(segments=segments, strategy=name)
    return None


def _renderer_records(content: Mapping[str, Any]) -> Optional[TranscriptDocument]:
    segments = _collect((value for _, value in ordered_items(content)), _renderer_segment)
    if segments:
        return TranscriptDocument(segments=segments, strategy="renderer")
    return None


def _search(content: Any) -> Optional[TranscriptDocument]:
    found = find_sequence(from_json(content), lambda key: "transcript" in key.lower())
    if found is None:
        return None
    segments = _collect((to_json(node) for node in found.items), _search_segment)
    if segments:
        return TranscriptDocument(segments=segments, strategy="search")
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def first_result(raw: Any) -> Mapping[str, Any]:
    """Return results[0] from a raw response, or raise UnexpectedShapeError."""
    results = raw.get("results") if isinstance(raw, Mapping) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], Mapping):
        status = raw.get("status", "unknown") if isinstance(raw, Mapping) else "unknown"
        raise UnexpectedShapeError(
            "No results found for the video. Status: {}".format(status)
        )
    return results[0]


def normalize(raw: Any) -> TranscriptDocument:
    """Locate and flatten transcript segments in a raw API response.

    Args:
        raw: Parsed JSON body returned by the Oxylabs API.

    Returns:
        A TranscriptDocument with at least one segment.

    Raises:
        UnexpectedShapeError: No results, or a result whose content is
            missing or scalar and that carries no transcript list.
        NoTranscriptDataError: Content was present but no strategy
            located any segments.
    """
    result = first_result(raw)

    document = _direct_arrays(result)
    if document is not None:
        logger.debug("Normalized %d segments via %s", len(document), document.strategy)
        return document

    content = result.get("content")
    if not isinstance(content, (Mapping, list)):
        raise UnexpectedShapeError(
            "Unexpected response structure. Result keys: {}".format(
                json.dumps([str(key) for key in result.keys()])
            )
        )

    if isinstance(content, Mapping):
        document = _renderer_records(content) or _search(content)
        available_keys = [key for key, _ in ordered_items(content)]
    else:
        document = _search(content)
        available_keys = [str(index) for index in range(len(content))]
    if document is not None:
        logger.debug("Normalized %d segments via %s", len(document), document.strategy)
        return document

    raise NoTranscriptDataError(available_keys)
