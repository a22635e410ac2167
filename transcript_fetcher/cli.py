"""Interactive command-line interface for the transcript fetcher.

WHY: The quickest way to grab a transcript is from a terminal: paste a
link, pick a language and transcript type, read the result, optionally
save it. The CLI wires user input to the TranscriptService and turns
service errors into actionable hints.

HOW: argparse accepts optional values for everything the session would
otherwise ask for; anything not given on the command line is prompted
for with input(), one question at a time. The async service call runs
via asyncio.run(). Status and hints go to stderr, the transcript itself
to stdout, so output can be piped.

RULES:
- Credentials are checked before any prompt; missing → exit 1
- Empty video input ends the session without error
- Language defaults to "en"; origin menu 1 = uploader_provided (default),
  2 = auto_generated
- Saved files are named transcript_{id}_{language}.txt, UTF-8, one
  "[{seconds}s] {text}" line per segment
- Errors print "Error: ..." plus kind-specific hints and exit 1
- Ctrl-C or end of input prints "Goodbye!" and exits 0
- Python 3.9 compatible (no match/case, no X | Y unions)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcript_fetcher.api.models import TranscriptOrigin
from transcript_fetcher.config import DEFAULT_LANGUAGE, load_credentials
from transcript_fetcher.errors import (
    InvalidIdentifierError,
    NoTranscriptDataError,
    TranscriptFetcherError,
    UnexpectedShapeError,
    UpstreamHttpError,
)
from transcript_fetcher.service import TranscriptService

logger = logging.getLogger(__name__)

_ORIGIN_CHOICES = {
    "1": TranscriptOrigin.UPLOADER_PROVIDED,
    "2": TranscriptOrigin.AUTO_GENERATED,
}


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _ask(question: str, default: str = "") -> str:
    """Prompt once and return the stripped answer, or default if blank."""
    answer = input(question).strip()
    return answer or default


def _prompt_origin() -> TranscriptOrigin:
    _status("\nTranscript origin options:")
    _status("1. uploader_provided (default)")
    _status("2. auto_generated")
    choice = _ask("Choose transcript origin (1 or 2, default: 1): ", "1")
    return _ORIGIN_CHOICES.get(choice, TranscriptOrigin.UPLOADER_PROVIDED)


def transcript_filename(video_id: str, language: str) -> str:
    return "transcript_{}_{}.txt".format(video_id, language)


def save_transcript(text: str, video_id: str, language: str, output_dir: Path) -> Path:
    """Write a rendered transcript to output_dir and return the path.

    RULES:
    - File name is transcript_{video_id}_{language}.txt
    - Existing files are overwritten
    - Written as UTF-8, exactly the rendered text
    """
    path = Path(output_dir) / transcript_filename(video_id, language)
    path.write_text(text, encoding="utf-8")
    return path


def _print_hints(exc: Exception, video_input: str) -> None:
    """Explain the likely cause of a failure and what to try next."""
    if isinstance(exc, UpstreamHttpError) and exc.status_code == 401:
        _status("\nThis might be due to invalid credentials. "
                "Please check your Oxylabs username and password.")
    elif isinstance(exc, InvalidIdentifierError):
        _status("\nPlease provide a valid YouTube URL or video ID.")
    elif isinstance(exc, NoTranscriptDataError):
        _status("\nPossible solutions:")
        _status("  - Try switching to the \"auto_generated\" transcript origin")
        _status("  - Try a different language code (e.g. \"en-US\" instead of \"en\")")
        _status("  - The video might not have transcripts available")
        _status("  - Check if the video ID is correct: {}".format(video_input))
    elif isinstance(exc, UnexpectedShapeError) and "No results found" in str(exc):
        _status("\nThe API returned no results. This could mean:")
        _status("  - The video doesn't exist or is private")
        _status("  - No transcripts are available for this video")
        _status("  - Try a different video to test your credentials")


def _wants_save(save_flag: Optional[bool]) -> bool:
    if save_flag is not None:
        return save_flag
    answer = _ask("\nSave transcript to file? (y/n): ").lower()
    return answer in ("y", "yes")


def run_session(args: argparse.Namespace, service: TranscriptService) -> int:
    """Run one prompt → fetch → print → save session.

    Returns:
        Process exit code (0 on success or empty input, 1 on error).
    """
    video_input = (args.video or "").strip() or _ask("Enter YouTube video URL or ID: ")
    if not video_input:
        _status("No video URL/ID provided")
        return 0

    language = args.language or _ask(
        "Enter language code (default: {}): ".format(DEFAULT_LANGUAGE), DEFAULT_LANGUAGE
    )
    origin = TranscriptOrigin(args.origin) if args.origin else _prompt_origin()

    try:
        if args.raw:
            _status("\nFetching raw API response...\n")
            raw = asyncio.run(service.fetch_raw(video_input, language, origin))
            print(json.dumps(raw, indent=2, ensure_ascii=False))
            return 0

        _status("\nFetching transcript...\n")
        result = asyncio.run(service.get_transcript(video_input, language, origin))
    except TranscriptFetcherError as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        _print_hints(exc, video_input)
        return 1
    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=True)
        print("Error: {}".format(exc), file=sys.stderr)
        return 1

    _status("Transcript fetched successfully! ({} segments)\n".format(len(result.document)))
    _status("TRANSCRIPT:")
    _status("===========\n")
    print(result.text, flush=True)

    if _wants_save(args.save):
        output_dir = Path(args.output_dir) if args.output_dir else Path.cwd()
        try:
            path = save_transcript(result.text, result.video_id, result.language, output_dir)
        except OSError as exc:
            print("Error: could not save transcript: {}".format(exc), file=sys.stderr)
            return 1
        _status("Transcript saved to {}".format(path))

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional video is optional; prompted for when absent
    - --language and --origin skip their prompts when given
    - --save/--no-save skip the save prompt
    """
    parser = argparse.ArgumentParser(
        prog="transcript_fetcher",
        description="Fetch a video transcript through the Oxylabs API and print "
                    "it as timestamped lines. Missing options are prompted for.",
    )

    parser.add_argument(
        "video",
        nargs="?",
        default=None,
        help="Video URL or 11-character video ID.",
    )

    parser.add_argument(
        "--language",
        default=None,
        help="Transcript language code (default when prompted: {}).".format(DEFAULT_LANGUAGE),
    )

    parser.add_argument(
        "--origin",
        choices=[origin.value for origin in TranscriptOrigin],
        default=None,
        help="Transcript origin. Prompted for when omitted.",
    )

    parser.add_argument(
        "--save",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Save the transcript to transcript_{id}_{language}.txt "
             "(default: ask).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the saved transcript (default: current directory).",
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the raw API response as JSON instead of the transcript.",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log request details and the raw API response to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    _status("YouTube Transcript Fetcher")
    _status("==========================\n")

    credentials = load_credentials()
    if credentials is None:
        print("Error: Oxylabs credentials not found!", file=sys.stderr)
        _status("Please create a .env file with your Oxylabs credentials:")
        _status("OXYLABS_USERNAME=your_username")
        _status("OXYLABS_PASSWORD=your_password")
        sys.exit(1)

    service = TranscriptService(credentials, debug=True if args.debug else None)

    try:
        code = run_session(args, service)
    except (KeyboardInterrupt, EOFError):
        _status("\n\nGoodbye!")
        code = 0

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
