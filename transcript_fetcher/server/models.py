"""Pydantic request/response models for the HTTP API.

WHY: The endpoints need typed schemas for request validation, response
serialization, and the OpenAPI docs. Browser clients already speak the
camelCase field names (videoId, hasCredentials), so the wire format
keeps them while the Python side uses snake_case.

HOW: Each model declares snake_case fields with camelCase aliases.
populate_by_name lets server code construct models with either form;
FastAPI serializes responses by alias.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- videoId is optional in the request model so a missing ID can be
  reported as 400 "Video ID is required" instead of a schema error
- origin defaults to auto_generated on the HTTP surface
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from transcript_fetcher.api.models import TranscriptOrigin


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TranscriptRequest(BaseModel):
    """Body of POST /transcript."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: Optional[str] = Field(
        default=None,
        alias="videoId",
        description="11-character video ID (URLs are not accepted here).",
    )
    language: str = Field(
        default="en",
        description="Transcript language code (e.g. 'en', 'es', 'en-US').",
    )
    origin: TranscriptOrigin = Field(
        default=TranscriptOrigin.AUTO_GENERATED,
        description="Transcript origin: 'uploader_provided' or 'auto_generated'.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TranscriptStatsModel(BaseModel):
    """Summary numbers for a returned transcript."""

    segments: int = Field(description="Number of non-blank transcript lines.")
    words: int = Field(description="Whitespace-separated token count.")
    characters: int = Field(description="Length of the transcript string.")
    duration: int = Field(description="Start offset of the last segment, in seconds.")


class TranscriptResponse(BaseModel):
    """Successful POST /transcript response."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "videoId": "dQw4w9WgXcQ",
                    "language": "en",
                    "origin": "auto_generated",
                    "transcript": "[0s] We're no strangers to love\n[4s] You know the rules",
                    "stats": {"segments": 2, "words": 11, "characters": 55, "duration": 4},
                    "timestamp": "2026-01-01T12:00:00.000Z",
                }
            ]
        },
    )

    success: bool = Field(default=True, description="Always true on success.")
    video_id: str = Field(alias="videoId", description="The video ID that was fetched.")
    language: str = Field(description="Language code used for the query.")
    origin: str = Field(description="Transcript origin used for the query.")
    transcript: str = Field(description="Newline-joined '[{seconds}s] {text}' lines.")
    stats: TranscriptStatsModel = Field(description="Summary statistics.")
    timestamp: str = Field(description="Response time, ISO 8601 UTC.")


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    has_credentials: bool = Field(
        alias="hasCredentials",
        description="Whether Oxylabs credentials are configured.",
    )
    timestamp: str = Field(description="Response time, ISO 8601 UTC.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - error is always a human-readable message
    - videoId and timestamp are present on transcript failures
    """

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(description="Human-readable error description.")
    video_id: Optional[str] = Field(
        default=None,
        alias="videoId",
        description="The requested video ID, when one was given.",
    )
    method: Optional[str] = Field(
        default=None,
        description="The rejected HTTP method (405 responses only).",
    )
    timestamp: Optional[str] = Field(default=None, description="Response time, ISO 8601 UTC.")


class DebugResponse(BaseModel):
    """Request diagnostics returned by GET /debug."""

    method: str = Field(description="HTTP method of the request.")
    url: str = Field(description="Full request URL.")
    headers: Dict[str, str] = Field(description="Request headers, secrets redacted.")
    query: Dict[str, str] = Field(description="Query string parameters.")
    environment: Dict[str, bool] = Field(description="Which credential variables are set.")
    timestamp: str = Field(description="Response time, ISO 8601 UTC.")
