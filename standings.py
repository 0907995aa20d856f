"""
One request's worth of records and leaderboards.

Everything is rebuilt from a fresh sheet snapshot; nothing here is shared
between requests.
"""

from dataclasses import dataclass
from typing import List, Optional

from profiles import ProfileView, resolve_profile
from records import (
    ChallengePoints, MileageEntry, Submission,
    map_challenges, map_mileage_entries, map_submissions,
)
from scoring import (
    LeaderboardEntry, MileageLeaderboardEntry,
    build_leaderboard, build_mileage_leaderboard,
)
from sheets_client import SheetSnapshot, fetch_snapshot


@dataclass(frozen=True)
class Standings:
    """All records and aggregates for one request."""
    submissions: List[Submission]
    challenges: List[ChallengePoints]
    mileage_entries: List[MileageEntry]
    leaderboard: List[LeaderboardEntry]
    mileage_leaderboard: List[MileageLeaderboardEntry]


def build_standings(snapshot: SheetSnapshot) -> Standings:
    """Map raw sheet rows to records and compute both leaderboards."""
    submissions = map_submissions(snapshot.submissions)
    challenges = map_challenges(snapshot.challenges)
    mileage_entries = map_mileage_entries(snapshot.mileage)
    mileage_leaderboard = build_mileage_leaderboard(mileage_entries)
    leaderboard = build_leaderboard(submissions, challenges, mileage_leaderboard)
    return Standings(
        submissions=submissions,
        challenges=challenges,
        mileage_entries=mileage_entries,
        leaderboard=leaderboard,
        mileage_leaderboard=mileage_leaderboard,
    )


def find_profile(standings: Standings, slug: str) -> Optional[ProfileView]:
    """Profile for the participant whose slug matches, or None."""
    return resolve_profile(
        slug,
        standings.leaderboard,
        standings.submissions,
        standings.challenges,
        standings.mileage_leaderboard,
    )


async def load_standings() -> Standings:
    """
    Fetch every sheet and compute the leaderboards.

    Raises:
        SheetsError: If any sheet cannot be fetched
    """
    return build_standings(await fetch_snapshot())
