"""Oxylabs API client package: async HTTP interface to the Realtime API.

WHY: The fetcher needs exactly one upstream call per transcript: an
authenticated POST to the Oxylabs Realtime endpoint. This package keeps
that call and its request types in one place.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. OxylabsClient sends
the request; FetchRequest and TranscriptOrigin in models.py describe it.

RULES:
- All HTTP calls go through OxylabsClient (no direct httpx usage elsewhere)
- Authentication is basic auth from the Credentials object
- No retries; the caller decides what to do with a failure
"""

from transcript_fetcher.api.client import OxylabsClient
from transcript_fetcher.api.models import FetchRequest, TranscriptOrigin

__all__ = ["FetchRequest", "OxylabsClient", "TranscriptOrigin"]
