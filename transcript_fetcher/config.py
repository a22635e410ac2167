"""Configuration constants, credentials, and .env loading.

WHY: The Oxylabs credentials, endpoint URL, timeout, and server settings
are the only knobs this package has. Keeping them in one module makes
them easy to find and override, and keeps secrets out of source code.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level with environment overrides. Credentials are read once
into an immutable Credentials object that callers pass explicitly into
the service, so the core never looks up global state.

RULES:
- OXYLABS_USERNAME and OXYLABS_PASSWORD are both required for fetching
- load_credentials() returns None when either value is missing or blank
- require_credentials() raises ConfigurationError instead
- Credentials are never mutated after loading
- The password never appears in repr() output or logs
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from transcript_fetcher.errors import ConfigurationError

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Upstream API defaults
# ---------------------------------------------------------------------------

OXYLABS_API_URL = os.getenv("OXYLABS_API_URL", "https://realtime.oxylabs.io/v1/queries")
OXYLABS_SOURCE = "youtube_transcript"
REQUEST_TIMEOUT_S = float(os.getenv("REQUEST_TIMEOUT_S", "30"))

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")

DEBUG = os.getenv("DEBUG", "").strip().lower() not in ("", "0", "false", "no")
"""Log raw upstream response bodies. Diagnostic only."""

# ---------------------------------------------------------------------------
# HTTP server defaults
# ---------------------------------------------------------------------------

API_HOST = os.getenv("HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "3000"))

CREDENTIALS_HELP = (
    "Oxylabs credentials not configured. Please set OXYLABS_USERNAME and "
    "OXYLABS_PASSWORD environment variables."
)


@dataclass(frozen=True)
class Credentials:
    """Basic-auth credential pair for the Oxylabs Realtime API."""

    username: str
    password: str = field(repr=False)


def load_credentials() -> Credentials | None:
    """Read the Oxylabs credential pair from the environment.

    RULES:
    - Values are stripped of surrounding whitespace
    - Returns None if either value is missing or empty
    """
    username = os.getenv("OXYLABS_USERNAME", "").strip()
    password = os.getenv("OXYLABS_PASSWORD", "").strip()
    if not username or not password:
        return None
    return Credentials(username=username, password=password)


def require_credentials() -> Credentials:
    """Like load_credentials(), but raise ConfigurationError when missing."""
    credentials = load_credentials()
    if credentials is None:
        raise ConfigurationError(CREDENTIALS_HELP)
    return credentials


def credential_flags() -> dict[str, bool]:
    """Report which credential variables are present, without their values."""
    return {
        "hasOxylabsUsername": bool(os.getenv("OXYLABS_USERNAME", "").strip()),
        "hasOxylabsPassword": bool(os.getenv("OXYLABS_PASSWORD", "").strip()),
    }
