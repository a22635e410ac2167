"""Core identifier extraction, normalization, and intermediate representation.

WHY: The core package holds the only real logic in the fetcher: turning
free-form input into a video ID, and turning an upstream response of
unknown shape into an ordered list of timed segments. Both are pure
functions with no I/O, so they are tested without any network.

HOW: identifiers.py parses input, tree.py provides the tagged JSON tree
used by the last-resort search, normalizer.py runs the strategy cascade,
ir.py defines the segment/document types, stats.py summarizes output.

RULES:
- No HTTP, no environment access, no printing in this package
- IR dataclasses are the contract between normalizer and callers
"""
