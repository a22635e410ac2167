"""Package entry point for ``python -m transcript_fetcher``.

WHY: Users run the fetcher as ``python -m transcript_fetcher`` for the
interactive CLI, or ``python -m transcript_fetcher --serve`` to start
the HTTP API.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().

RULES:
- ``--serve`` starts the HTTP API (host/port from HOST/PORT env vars)
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from transcript_fetcher.server.app import run_api
        run_api()
    else:
        from transcript_fetcher.cli import main
        main()
