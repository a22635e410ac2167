"""Error taxonomy shared by every layer of the fetcher.

WHY: The HTTP and CLI boundaries translate failures into status codes
and user hints exactly once. They need a small, closed set of typed
errors to dispatch on instead of parsing free-form messages.

HOW: One base class, TranscriptFetcherError, with a subclass per failure
kind. Lower layers raise these and never translate them; the service
lets them propagate unchanged.

RULES:
- InvalidIdentifierError: input is not a video ID or a known URL shape
- UpstreamHttpError: the remote API answered with a non-2xx status
- NetworkError: no response was received (timeout, DNS, reset)
- NoTranscriptDataError: response parsed, but no segments were found
- UnexpectedShapeError: response lacks the expected top-level results
- ConfigurationError: credentials are missing (also a ValueError)
- Message prefixes ("API Error: ", "Network Error: ") are kept stable
  because users grep logs for them
"""

from __future__ import annotations

import json


class TranscriptFetcherError(Exception):
    """Base class for all request-level failures."""


class InvalidIdentifierError(TranscriptFetcherError, ValueError):
    """Raised when input cannot be parsed into an 11-character video ID."""


class UpstreamHttpError(TranscriptFetcherError):
    """Raised when the Oxylabs API returns a non-success status.

    RULES:
    - Always carries status_code and message
    - message is the API's "message" field or the HTTP reason phrase
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error: {status_code} - {message}")


class NetworkError(TranscriptFetcherError):
    """Raised when the request was sent but no response came back."""

    def __init__(self, message: str = "Network Error: No response received from the API") -> None:
        super().__init__(message)


class NoTranscriptDataError(TranscriptFetcherError):
    """Raised when no normalization strategy located any segments.

    WHY: Users usually fix this by switching language or transcript
    origin. Listing the keys that were present helps them tell an empty
    transcript apart from a new response shape.

    RULES:
    - available_keys holds at most the first 10 keys seen
    - The key list is diagnostic text, not a parseable contract
    """

    def __init__(self, available_keys: list[str] | None = None) -> None:
        self.available_keys = list(available_keys or [])[:10]
        super().__init__(
            "No transcript data found in content. "
            f"Available keys: {json.dumps(self.available_keys)}"
        )


class UnexpectedShapeError(TranscriptFetcherError):
    """Raised when the response is missing the expected results structure."""


class ConfigurationError(ValueError):
    """Raised when required configuration (credentials) is missing."""
