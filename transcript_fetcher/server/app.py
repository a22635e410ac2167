"""FastAPI application exposing transcript fetching over HTTP.

WHY: Browser front-ends and automation tools (curl, n8n) need a tiny
JSON API in front of the transcript service: a health probe, one
endpoint that returns a normalized transcript with summary stats, and
a diagnostics endpoint for deployment debugging.

HOW: A single FastAPI app with CORS enabled for every origin. Routes are
registered both at the root (/health, /transcript, /debug) and under
/api for front-ends that expect that prefix. Credentials are loaded once
and injected through dependencies, so tests override them without
touching the environment. Service errors are mapped to status codes in
exactly one place, _map_error().

RULES:
- Every error body is {"error": ...}; transcript failures add videoId
  and timestamp
- Missing credentials → 500 before videoId checks or any network call;
  a body that fails schema validation is rejected with 400 first
- videoId must be a bare 11-character ID; URLs are rejected with 400
- Any OPTIONS request returns 200 with an empty body and CORS headers,
  whatever headers a preflight asks for
- Unknown paths → 404 "Endpoint not found"; wrong method → 405
- Unexpected exceptions are logged with traceback and returned as 500
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Annotated, Optional, Tuple

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from transcript_fetcher import __version__
from transcript_fetcher.config import (
    API_HOST,
    API_PORT,
    CREDENTIALS_HELP,
    Credentials,
    credential_flags,
    load_credentials,
)
from transcript_fetcher.core.identifiers import is_video_id
from transcript_fetcher.core.stats import compute_stats
from transcript_fetcher.errors import (
    ConfigurationError,
    InvalidIdentifierError,
    NetworkError,
    NoTranscriptDataError,
    UnexpectedShapeError,
    UpstreamHttpError,
)
from transcript_fetcher.server.models import (
    DebugResponse,
    ErrorResponse,
    HealthResponse,
    TranscriptRequest,
    TranscriptResponse,
    TranscriptStatsModel,
)
from transcript_fetcher.service import TranscriptService

logger = logging.getLogger(__name__)

_CORS_METHODS = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]
_CORS_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
]
_REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie"})
_OPTIONS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ",".join(_CORS_METHODS),
    "Access-Control-Allow-Headers": ", ".join(_CORS_HEADERS),
}

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Transcript Fetcher API",
    description=(
        "Fetch video transcripts through the Oxylabs Realtime API and return "
        "them as normalized, timestamped text with summary statistics."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=_CORS_METHODS,
    allow_headers=_CORS_HEADERS,
)


# Registered after CORSMiddleware, so it runs first and preflights never
# reach CORSMiddleware's header checks.
@app.middleware("http")
async def _short_circuit_options(request: Request, call_next):
    """Answer every OPTIONS request with an empty 200 and CORS headers."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=_OPTIONS_HEADERS)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_credentials() -> Optional[Credentials]:
    """Load Oxylabs credentials once per process."""
    return load_credentials()


def get_service(
    credentials: Annotated[Optional[Credentials], Depends(get_credentials)],
) -> Optional[TranscriptService]:
    """Build the transcript service, or None when unconfigured."""
    if credentials is None:
        return None
    return TranscriptService(credentials)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error(
    status_code: int,
    message: str,
    video_id: Optional[str] = None,
    method: Optional[str] = None,
    with_timestamp: bool = False,
) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        video_id=video_id,
        method=method,
        timestamp=_timestamp() if with_timestamp else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _map_error(exc: Exception) -> Tuple[int, str]:
    """Translate a service error into an HTTP status and user message.

    RULES:
    - Upstream 401 → 401 with a credentials hint
    - Upstream 404 → 404; other upstream statuses → 500 with the message
    - NetworkError → 503; NoTranscriptDataError → 404
    - InvalidIdentifierError → 400
    - UnexpectedShapeError / ConfigurationError → 500 with the message
    - Anything else → 500 "Internal server error"
    """
    if isinstance(exc, InvalidIdentifierError):
        return 400, str(exc)
    if isinstance(exc, UpstreamHttpError):
        if exc.status_code == 401:
            return 401, "Invalid Oxylabs credentials. Please check your username and password."
        if exc.status_code == 404:
            return 404, "Video not found or transcript not available."
        return 500, str(exc)
    if isinstance(exc, NetworkError):
        return 503, "Network error. Please try again later."
    if isinstance(exc, NoTranscriptDataError):
        return 404, (
            "No transcript available for this video. "
            "Try different language or transcript type."
        )
    if isinstance(exc, (UnexpectedShapeError, ConfigurationError)):
        return 500, str(exc)
    return 500, "Internal server error"


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "Endpoint not found")
    if exc.status_code == 405:
        return _error(405, "Method not allowed", method=request.method)
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append("{}: {}".format(location, err.get("msg")) if location else err.get("msg"))
    message = "Invalid request body"
    if problems:
        message = "{}: {}".format(message, "; ".join(str(p) for p in problems))
    return _error(400, message)


# ---------------------------------------------------------------------------
# Endpoints: Transcript
# ---------------------------------------------------------------------------


@app.post(
    "/transcript",
    response_model=TranscriptResponse,
    tags=["transcript"],
    summary="Fetch a transcript",
    description=(
        "Fetch the transcript for an 11-character video ID. Returns the "
        "transcript as newline-joined '[{seconds}s] {text}' lines plus "
        "segment, word, character, and duration statistics."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid video ID"},
        401: {"model": ErrorResponse, "description": "Upstream rejected the credentials"},
        404: {"model": ErrorResponse, "description": "Video or transcript not found"},
        500: {"model": ErrorResponse, "description": "Not configured or internal error"},
        503: {"model": ErrorResponse, "description": "Upstream unreachable"},
    },
)
@app.post("/api/transcript", response_model=TranscriptResponse, include_in_schema=False)
async def fetch_transcript(
    body: TranscriptRequest,
    service: Annotated[Optional[TranscriptService], Depends(get_service)],
):
    if service is None:
        logger.error("Transcript requested but Oxylabs credentials are not configured")
        return _error(500, CREDENTIALS_HELP)

    video_id = (body.video_id or "").strip()
    if not video_id:
        return _error(400, "Video ID is required")
    if not is_video_id(video_id):
        return _error(400, "Invalid video ID format. Must be 11 characters.")

    logger.info(
        "Fetching transcript for video: %s, language: %s, origin: %s",
        video_id,
        body.language,
        body.origin.value,
    )

    try:
        result = await service.get_transcript(video_id, body.language, body.origin)
    except Exception as exc:
        status_code, message = _map_error(exc)
        if status_code == 500 and message == "Internal server error":
            logger.exception("Transcript fetch failed for %s", video_id)
        else:
            logger.error("Transcript fetch error for %s: %s", video_id, exc)
        return _error(status_code, message, video_id=video_id, with_timestamp=True)

    transcript = result.text
    stats = compute_stats(transcript)
    return TranscriptResponse(
        success=True,
        video_id=result.video_id,
        language=result.language,
        origin=result.origin.value,
        transcript=transcript,
        stats=TranscriptStatsModel(
            segments=stats.segments,
            words=stats.words,
            characters=stats.characters,
            duration=stats.duration,
        ),
        timestamp=_timestamp(),
    )


# ---------------------------------------------------------------------------
# Endpoints: Health & diagnostics
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check that also reports whether credentials are configured.",
)
@app.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check(
    credentials: Annotated[Optional[Credentials], Depends(get_credentials)],
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        has_credentials=credentials is not None,
        timestamp=_timestamp(),
    )


@app.get(
    "/debug",
    response_model=DebugResponse,
    tags=["health"],
    summary="Request diagnostics",
    description=(
        "Echo the request method, URL, headers, and query, plus which "
        "credential variables are set. Secret headers are redacted."
    ),
)
@app.get("/api/debug", response_model=DebugResponse, include_in_schema=False)
async def debug_info(request: Request) -> DebugResponse:
    headers = {
        key: ("[redacted]" if key.lower() in _REDACTED_HEADERS else value)
        for key, value in request.headers.items()
    }
    return DebugResponse(
        method=request.method,
        url=str(request.url),
        headers=headers,
        query=dict(request.query_params),
        environment=credential_flags(),
        timestamp=_timestamp(),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_api() -> None:
    """Entry point for the transcript-fetcher-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if get_credentials() is None:
        logger.warning("Oxylabs credentials not found; set OXYLABS_USERNAME and OXYLABS_PASSWORD")
    else:
        logger.info("Oxylabs credentials loaded")
    uvicorn.run(app, host=API_HOST, port=API_PORT)
