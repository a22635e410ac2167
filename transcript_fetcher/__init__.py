"""Transcript Fetcher: normalized video transcripts via the Oxylabs API.

WHY: The Oxylabs youtube_transcript source returns transcript data in
several inconsistent shapes. Consumers (a browser front-end, scripts,
people at a terminal) just want ordered "[{seconds}s] {text}" lines.

HOW: Three layers: fetch (async API client), normalize (core strategy
cascade into a typed IR), and serve (FastAPI endpoints and an
interactive CLI). The core is pure and independently testable.

RULES:
- One upstream call per transcript request, no retries, no caching
- The normalizer's strategy order is a compatibility contract
- Credentials are loaded once and passed explicitly, never mutated
"""

__version__ = "0.1.0"
