"""Transcript service: extract, fetch, normalize, render.

WHY: The HTTP endpoint and the CLI both need the same pipeline: turn
user input into a video ID, query Oxylabs, normalize whatever shape
comes back, and render the transcript as timestamped lines. The service
owns that pipeline so the entry points stay thin.

HOW: TranscriptService is constructed with an explicit Credentials
object (no environment lookups at call time). Each call opens an
OxylabsClient, sends one FetchRequest, and passes the raw body to the
normalizer.

RULES:
- One network call per get_transcript() / fetch_raw() call
- Errors from any stage propagate unchanged; entry points translate them
- Language defaults to "en", origin to uploader_provided
- The service holds no per-request state and is safe to share
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from transcript_fetcher.api.client import OxylabsClient
from transcript_fetcher.api.models import FetchRequest, TranscriptOrigin
from transcript_fetcher.config import DEFAULT_LANGUAGE, Credentials
from transcript_fetcher.core.identifiers import extract_video_id
from transcript_fetcher.core.ir import TranscriptDocument
from transcript_fetcher.core.normalizer import normalize

logger = logging.getLogger(__name__)

OriginLike = Union[TranscriptOrigin, str]


@dataclass(frozen=True)
class TranscriptResult:
    """A normalized transcript together with the query that produced it."""

    video_id: str
    language: str
    origin: TranscriptOrigin
    document: TranscriptDocument

    @property
    def text(self) -> str:
        return self.document.render()


class TranscriptService:
    """Orchestrates identifier extraction, fetching, and normalization.

    RULES:
    - credentials are required and never re-read from the environment
    - api_url / timeout / debug default to config values via OxylabsClient
    - transport is passed through to httpx (tests use MockTransport)
    """

    def __init__(
        self,
        credentials: Credentials,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.credentials = credentials
        self._api_url = api_url
        self._timeout = timeout
        self._debug = debug
        self._transport = transport

    def _client(self) -> OxylabsClient:
        return OxylabsClient(
            self.credentials,
            api_url=self._api_url,
            timeout=self._timeout,
            debug=self._debug,
            transport=self._transport,
        )

    def build_request(
        self,
        value: str,
        language: str = DEFAULT_LANGUAGE,
        origin: OriginLike = TranscriptOrigin.UPLOADER_PROVIDED,
    ) -> FetchRequest:
        """Extract the video ID and build the upstream query."""
        return FetchRequest(
            video_id=extract_video_id(value),
            language_code=language or DEFAULT_LANGUAGE,
            origin=TranscriptOrigin(origin),
        )

    async def fetch_raw(
        self,
        value: str,
        language: str = DEFAULT_LANGUAGE,
        origin: OriginLike = TranscriptOrigin.UPLOADER_PROVIDED,
    ) -> Any:
        """Return the unnormalized API response for a video."""
        request = self.build_request(value, language, origin)
        async with self._client() as client:
            return await client.fetch(request)

    async def get_transcript(
        self,
        value: str,
        language: str = DEFAULT_LANGUAGE,
        origin: OriginLike = TranscriptOrigin.UPLOADER_PROVIDED,
    ) -> TranscriptResult:
        """Fetch and normalize the transcript for a video ID or URL.

        Args:
            value: Video ID or any supported video URL.
            language: Language code, e.g. "en", "es", "en-US".
            origin: uploader_provided or auto_generated.

        Returns:
            TranscriptResult with the extracted ID and normalized document.
        """
        request = self.build_request(value, language, origin)
        async with self._client() as client:
            raw = await client.fetch(request)

        document = normalize(raw)
        logger.info(
            "Normalized %d segments for %s via %s",
            len(document),
            request.video_id,
            document.strategy,
        )
        return TranscriptResult(
            video_id=request.video_id,
            language=request.language_code,
            origin=request.origin,
            document=document,
        )

    async def get_transcript_text(
        self,
        value: str,
        language: str = DEFAULT_LANGUAGE,
        origin: OriginLike = TranscriptOrigin.UPLOADER_PROVIDED,
    ) -> str:
        """Fetch a transcript and render it as "[{offset}s] {text}" lines."""
        result = await self.get_transcript(value, language, origin)
        return result.text
