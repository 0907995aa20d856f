"""
Tests for per-request standings and the standings script.
"""

import pytest
from unittest.mock import patch, AsyncMock

from sheets_client import SheetSnapshot, SheetsError
from scoring import LeaderboardEntry
from standings import build_standings, find_profile, load_standings
from scripts import show_standings

SNAPSHOT = SheetSnapshot(
    submissions=[
        ["Timestamp", "Name", "Challenge", "Notes"],
        ["1/10/2026 08:00:00", "Alice", "Pushups", ""],
        ["1/11/2026 08:00:00", "Bob", "Pushups", ""],
        ["1/12/2026 08:00:00", "Alice", "Burpees", ""],
    ],
    challenges=[
        ["Section", "Activity", "Points"],
        ["Standard", "Pushups", "20"],
        ["Standard", "Burpees", "5"],
    ],
    mileage=[
        ["Timestamp", "Name", "Date", "Activity", "Miles", "Notes"],
        ["t", "Bob", "1/9/2026", "Walk", "60", ""],
        ["t", "Bob", "1/10/2026", "Ruck", "45", ""],
    ],
)


class TestBuildStandings:
    """Test building standings from a snapshot."""

    def test_leaderboards(self):
        standings = build_standings(SNAPSHOT)
        assert standings.leaderboard == [LeaderboardEntry("Bob", 30), LeaderboardEntry("Alice", 25)]
        assert standings.mileage_leaderboard[0].total_miles == 105.0
        assert len(standings.submissions) == 3
        assert len(standings.challenges) == 2

    def test_empty_snapshot(self):
        standings = build_standings(SheetSnapshot(submissions=[], challenges=[], mileage=[]))
        assert standings.leaderboard == []
        assert standings.mileage_leaderboard == []

    def test_find_profile(self):
        standings = build_standings(SNAPSHOT)
        profile = find_profile(standings, "alice")
        assert (profile.name, profile.points, profile.rank) == ("Alice", 25, 2)
        assert find_profile(standings, "bob").mileage_progress.completed is True

    def test_find_profile_unknown_slug(self):
        assert find_profile(build_standings(SNAPSHOT), "nobody") is None

    @pytest.mark.asyncio
    async def test_load_propagates_fetch_failure(self):
        with patch("standings.fetch_snapshot", new_callable=AsyncMock) as mock:
            mock.side_effect = SheetsError("HTTP error: down")
            with pytest.raises(SheetsError):
                await load_standings()


class TestShowStandingsScript:
    """Test the command line standings printer."""

    @pytest.mark.asyncio
    async def test_prints_leaderboard(self):
        with patch("standings.fetch_snapshot", new_callable=AsyncMock) as mock:
            mock.return_value = SNAPSHOT
            output = await show_standings.main([])
        lines = output.splitlines()
        assert "Bob" in lines[0] and "30 pts" in lines[0]
        assert "Alice" in lines[1]
        assert "GWOT miles:" in output

    @pytest.mark.asyncio
    async def test_prints_profile(self):
        with patch("standings.fetch_snapshot", new_callable=AsyncMock) as mock:
            mock.return_value = SNAPSHOT
            output = await show_standings.main(["--profile", "alice"])
        assert output.startswith("Alice: 25 pts, rank 2 of 2")
        assert "Burpees" in output

    def test_unknown_profile(self):
        standings = build_standings(SNAPSHOT)
        assert show_standings.format_profile(standings, "nobody") == "No participant matches 'nobody'"
