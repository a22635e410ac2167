"""Unit tests for transcript summary statistics."""

from transcript_fetcher.core.stats import TranscriptStats, compute_stats


class TestComputeStats:
    def test_basic_counts(self):
        text = "[0s] hello world\n[5s] again"
        assert compute_stats(text) == TranscriptStats(
            segments=2,
            words=5,
            characters=len(text),
            duration=5,
        )

    def test_blank_lines_not_counted_as_segments(self):
        assert compute_stats("[0s] a\n\n   \n[3s] b").segments == 2

    def test_duration_from_last_line_only(self):
        assert compute_stats("[90s] late\n[2s] early").duration == 2

    def test_placeholder_offset_gives_zero_duration(self):
        assert compute_stats("[4s] a\n[?s] b").duration == 0

    def test_empty_transcript(self):
        assert compute_stats("") == TranscriptStats(segments=0, words=0, characters=0, duration=0)
