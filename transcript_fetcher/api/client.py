"""Async HTTP client for the Oxylabs Realtime API (youtube_transcript source).

WHY: Fetching a transcript is one authenticated POST to the Oxylabs
Realtime endpoint. This module hides the HTTP details (auth, headers,
timeout, error wrapping) so the service, CLI, and tests deal only with
FetchRequest in and parsed JSON out.

HOW: Uses httpx.AsyncClient. OxylabsClient is an async context manager:
enter it to open an authenticated connection pool, exit to close it.
fetch() sends a single request and translates transport failures into
the shared error taxonomy.

RULES:
- Always use the async context manager (async with OxylabsClient(...) as client:)
- Basic auth with the configured Credentials; Content-Type is JSON
- Default timeout is 30 seconds; there are no retries
- Non-2xx → UpstreamHttpError(status, message)
- No response (timeout, DNS, connection reset) → NetworkError
- Non-JSON body → UnexpectedShapeError
- Anything else propagates unchanged
- With debug=True the raw body is logged (diagnostic only)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from transcript_fetcher.api.models import FetchRequest
from transcript_fetcher.config import (
    DEBUG,
    OXYLABS_API_URL,
    REQUEST_TIMEOUT_S,
    Credentials,
)
from transcript_fetcher.errors import NetworkError, UnexpectedShapeError, UpstreamHttpError

logger = logging.getLogger(__name__)

# Failures where the request went out (or tried to) but no response came back
_NO_RESPONSE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.ProtocolError,
    httpx.ProxyError,
)


class OxylabsClient:
    """Async client for a single Oxylabs Realtime query.

    RULES:
    - Use as: async with OxylabsClient(credentials) as client: ...
    - api_url defaults to OXYLABS_API_URL from config
    - timeout defaults to REQUEST_TIMEOUT_S (30s)
    - transport is for tests (httpx.MockTransport); None uses the network
    """

    def __init__(
        self,
        credentials: Credentials,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._api_url = api_url or OXYLABS_API_URL
        self._timeout = timeout if timeout is not None else REQUEST_TIMEOUT_S
        self._debug = DEBUG if debug is None else debug
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> OxylabsClient:
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(self._credentials.username, self._credentials.password),
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "OxylabsClient must be used as an async context manager: "
                "async with OxylabsClient(credentials) as client: ..."
            )
        return self._client

    async def fetch(self, request: FetchRequest) -> Any:
        """Send one transcript query and return the parsed JSON body.

        Args:
            request: The video ID, language, and origin to query.

        Returns:
            The response body as parsed JSON (no schema guaranteed).

        Raises:
            UpstreamHttpError: The API answered with a non-2xx status.
            NetworkError: No response was received.
            UnexpectedShapeError: The body was not valid JSON.
        """
        client = self._ensure_client()
        logger.info(
            "Fetching transcript for video ID: %s (language: %s, origin: %s)",
            request.video_id,
            request.language_code,
            request.origin.value,
        )

        try:
            resp = await client.post(self._api_url, json=request.to_payload())
        except _NO_RESPONSE_ERRORS as exc:
            logger.warning("No response from %s: %s", self._api_url, exc)
            raise NetworkError() from exc

        if not resp.is_success:
            raise UpstreamHttpError(resp.status_code, _error_message(resp))

        try:
            data = resp.json()
        except ValueError as exc:
            raise UnexpectedShapeError(
                "API returned a non-JSON body (status {})".format(resp.status_code)
            ) from exc

        if self._debug:
            logger.info("API Response: %s", json.dumps(data, indent=2))

        return data


def _error_message(resp: httpx.Response) -> str:
    """Pick the most useful message from an error response.

    RULES:
    - Prefer the JSON body's "message" field
    - Fall back to the HTTP reason phrase, then the raw text
    """
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase or resp.text or "Unknown error"
