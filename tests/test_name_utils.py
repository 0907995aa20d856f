"""Tests for name_utils module."""

from datetime import datetime

from name_utils import (
    name_to_slug, find_name_by_slug, format_activity, truncate_notes,
    parse_timestamp, format_timestamp, detect_install_platform,
)
from scoring import LeaderboardEntry


class TestNameToSlug:
    """Test slug generation."""

    def test_basic(self):
        assert name_to_slug("Alice") == "alice"
        assert name_to_slug("Mary Jane") == "mary-jane"

    def test_punctuation_runs_collapse(self):
        assert name_to_slug("O'Brien -- Jr.") == "o-brien-jr"

    def test_no_leading_or_trailing_hyphen(self):
        assert name_to_slug("  (Tater) ") == "tater"

    def test_stable(self):
        assert name_to_slug("Hot Sauce!") == name_to_slug("Hot Sauce!")


class TestFindNameBySlug:
    """Test slug resolution against the leaderboard."""

    LEADERBOARD = [LeaderboardEntry("Mary Jane", 40), LeaderboardEntry("O'Brien", 20)]

    def test_round_trip(self):
        for entry in self.LEADERBOARD:
            assert find_name_by_slug(name_to_slug(entry.name), self.LEADERBOARD) == entry.name

    def test_returns_stored_name(self):
        assert find_name_by_slug("o-brien", self.LEADERBOARD) == "O'Brien"

    def test_unknown_slug(self):
        assert find_name_by_slug("nobody", self.LEADERBOARD) is None

    def test_empty_leaderboard(self):
        assert find_name_by_slug("alice", []) is None

    def test_colliding_slugs_first_wins(self):
        leaderboard = [LeaderboardEntry("Bob Smith", 30), LeaderboardEntry("bob-smith", 10)]
        assert find_name_by_slug("bob-smith", leaderboard) == "Bob Smith"


class TestFormatActivity:
    """Test activity display formatting."""

    def test_title_case(self):
        assert format_activity("POLAR PLUNGE") == "Polar Plunge"

    def test_short_words_and_hashtags_lowercase(self):
        assert format_activity("RUN A 5K #IRONCLAD") == "Run a 5k #ironclad"


class TestTruncateNotes:

    def test_short_notes_unchanged(self):
        assert truncate_notes("short") == "short"

    def test_long_notes_truncated(self):
        assert truncate_notes("x" * 100) == "x" * 80 + "..."
        assert truncate_notes("abcdef", max_length=3) == "abc..."


class TestTimestamps:
    """Test sheet timestamp parsing and display."""

    def test_google_forms_format(self):
        assert parse_timestamp("1/15/2026 14:23:05") == datetime(2026, 1, 15, 14, 23, 5)

    def test_iso_format_naive(self):
        assert parse_timestamp("2026-01-15T14:23:05") == datetime(2026, 1, 15, 14, 23, 5)

    def test_iso_offset_converted_to_display_zone(self):
        # America/Chicago is UTC-6 in January
        assert parse_timestamp("2026-01-15T14:23:05Z") == datetime(2026, 1, 15, 8, 23, 5)
        assert parse_timestamp("2026-01-15T10:00:00-06:00") == datetime(2026, 1, 15, 10, 0, 0)
        assert parse_timestamp("2026-07-15T12:00:00+00:00") == datetime(2026, 7, 15, 7, 0, 0)

    def test_format_offset_timestamp_in_display_zone(self):
        assert format_timestamp("2026-01-15T20:23:00Z") == "Jan 15, 2:23 PM"

    def test_unparsable(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None

    def test_format(self):
        assert format_timestamp("1/15/2026 14:23:05") == "Jan 15, 2:23 PM"
        assert format_timestamp("1/5/2026 0:07:00") == "Jan 5, 12:07 AM"

    def test_format_unparsable_passthrough(self):
        assert format_timestamp("sometime") == "sometime"


class TestInstallPlatform:

    def test_platforms(self):
        assert detect_install_platform("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)") == "ios"
        assert detect_install_platform("Mozilla/5.0 (Linux; Android 14; Pixel 8)") == "android"
        assert detect_install_platform("Mozilla/5.0 (Windows NT 10.0; Win64; x64)") == "desktop"
        assert detect_install_platform(None) == "desktop"
