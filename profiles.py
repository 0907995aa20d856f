"""
Per-participant profile views.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from name_utils import find_name_by_slug, parse_timestamp
from records import ChallengePoints, MileageEntry, Submission
from scoring import (
    LeaderboardEntry,
    MileageLeaderboardEntry,
    build_leaderboard,
    build_mileage_leaderboard,
    build_points_map,
    get_next_level,
    get_podium_level,
    has_completed_mileage,
)


@dataclass(frozen=True)
class SubmissionWithPoints:
    """A submission annotated with the points it earned."""
    challenge: str
    points: int
    timestamp: str
    notes: str
    row_index: int


@dataclass(frozen=True)
class MileageProgress:
    """GWOT progress snapshot for one participant."""
    total_miles: float = 0.0
    walk_miles: float = 0.0
    ruck_miles: float = 0.0
    run_miles: float = 0.0
    completed: bool = False


@dataclass(frozen=True)
class ProfileView:
    """Everything the profile page shows for one participant."""
    name: str
    points: int
    rank: int
    total_participants: int
    submissions: List[SubmissionWithPoints] = field(default_factory=list)
    mileage_progress: MileageProgress = field(default_factory=MileageProgress)
    podium_level: Optional[str] = None
    next_level: Optional[dict] = None


def sort_by_recent(submissions: Sequence[SubmissionWithPoints]) -> List[SubmissionWithPoints]:
    """Newest first; rows with unparsable timestamps go last in sheet order."""
    parsed = [(parse_timestamp(s.timestamp), s) for s in submissions]
    dated = [(dt, s) for dt, s in parsed if dt is not None]
    undated = [s for dt, s in parsed if dt is None]
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [s for _, s in dated] + undated


def get_mileage_progress(
    name: str, mileage_leaderboard: Sequence[MileageLeaderboardEntry]
) -> MileageProgress:
    for entry in mileage_leaderboard:
        if entry.name == name:
            return MileageProgress(
                total_miles=entry.total_miles,
                walk_miles=entry.walk_miles,
                ruck_miles=entry.ruck_miles,
                run_miles=entry.run_miles,
                completed=has_completed_mileage(entry.total_miles),
            )
    return MileageProgress()


def build_profile_for_name(
    name: str,
    leaderboard: Sequence[LeaderboardEntry],
    submissions: Sequence[Submission],
    challenges: Sequence[ChallengePoints],
    mileage_leaderboard: Sequence[MileageLeaderboardEntry] = (),
) -> Optional[ProfileView]:
    """
    Build the profile for a participant already on the leaderboard.

    Rank is the 1-based position in the sorted leaderboard, so participants
    tied on points still get consecutive ranks.

    Returns:
        ProfileView, or None if the name is not on the leaderboard
    """
    position = next((i for i, e in enumerate(leaderboard) if e.name == name), None)
    if position is None:
        return None
    entry = leaderboard[position]

    points_map = build_points_map(challenges)
    history = [
        SubmissionWithPoints(
            challenge=s.challenge,
            points=points_map.get(s.challenge, 0),
            timestamp=s.timestamp,
            notes=s.notes,
            row_index=s.row_index,
        )
        for s in submissions
        if s.name == name
    ]

    return ProfileView(
        name=entry.name,
        points=entry.points,
        rank=position + 1,
        total_participants=len(leaderboard),
        submissions=sort_by_recent(history),
        mileage_progress=get_mileage_progress(name, mileage_leaderboard),
        podium_level=get_podium_level(entry.points),
        next_level=get_next_level(entry.points),
    )


def resolve_profile(
    slug: str,
    leaderboard: Sequence[LeaderboardEntry],
    submissions: Sequence[Submission],
    challenges: Sequence[ChallengePoints],
    mileage_leaderboard: Sequence[MileageLeaderboardEntry] = (),
) -> Optional[ProfileView]:
    """Resolve a profile slug against computed leaderboards, or None."""
    name = find_name_by_slug(slug, leaderboard)
    if name is None:
        return None
    return build_profile_for_name(name, leaderboard, submissions, challenges, mileage_leaderboard)


def build_profile(
    slug: str,
    submissions: Sequence[Submission],
    challenges: Sequence[ChallengePoints],
    mileage_entries: Sequence[MileageEntry] = (),
) -> Optional[ProfileView]:
    """
    Resolve a profile slug and build its view from fresh records.

    Returns:
        ProfileView, or None if no participant's slug matches
    """
    mileage_leaderboard = build_mileage_leaderboard(mileage_entries)
    leaderboard = build_leaderboard(submissions, challenges, mileage_leaderboard)
    return resolve_profile(slug, leaderboard, submissions, challenges, mileage_leaderboard)
