"""
Scoring engine for the Iron Clad leaderboard.

Handles:
- Point lookup from the challenge table
- Point totals per participant
- GWOT mileage totals and the completion bonus
- Podium tiers
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from config import config
from records import ChallengePoints, MileageEntry, Submission

MILEAGE_CATEGORIES = ("walk", "ruck", "run")


@dataclass(frozen=True)
class LeaderboardEntry:
    """A participant's point total."""
    name: str
    points: int


@dataclass(frozen=True)
class MileageLeaderboardEntry:
    """A participant's GWOT distance, total and by category."""
    name: str
    total_miles: float
    walk_miles: float
    ruck_miles: float
    run_miles: float


def build_points_map(challenges: Sequence[ChallengePoints]) -> Mapping[str, int]:
    """
    Build the activity -> points lookup.

    Rows are applied in sheet order, so a duplicated activity takes the value
    of its last row.
    """
    points_map: Dict[str, int] = {}
    for challenge in challenges:
        points_map[challenge.activity] = challenge.points
    return MappingProxyType(points_map)


def has_completed_mileage(total_miles: float) -> bool:
    """Check whether a distance total reaches the GWOT goal."""
    return total_miles >= config.MILEAGE_GOAL


def build_leaderboard(
    submissions: Sequence[Submission],
    challenges: Sequence[ChallengePoints],
    mileage_leaderboard: Optional[Sequence[MileageLeaderboardEntry]] = None,
) -> List[LeaderboardEntry]:
    """
    Total points per participant, highest first.

    Every participant with at least one submission is listed, even at zero
    points. Participants who reach the mileage goal get a flat bonus and are
    listed even without submissions. Ties keep the order in which participants
    first appear.

    Args:
        submissions: Submission records
        challenges: Challenge table used for point values
        mileage_leaderboard: Optional mileage totals for the completion bonus

    Returns:
        Leaderboard entries sorted by points, descending
    """
    points_map = build_points_map(challenges)

    totals: Dict[str, int] = {}
    for sub in submissions:
        totals[sub.name] = totals.get(sub.name, 0) + points_map.get(sub.challenge, 0)

    for entry in mileage_leaderboard or []:
        if has_completed_mileage(entry.total_miles):
            totals[entry.name] = totals.get(entry.name, 0) + config.MILEAGE_BONUS_POINTS

    leaderboard = [LeaderboardEntry(name=name, points=points) for name, points in totals.items()]
    leaderboard.sort(key=lambda e: e.points, reverse=True)
    return leaderboard


def build_mileage_leaderboard(entries: Sequence[MileageEntry]) -> List[MileageLeaderboardEntry]:
    """
    Total GWOT distance per participant, highest first.

    Activities are bucketed case-insensitively into walk, ruck and run.
    Anything else counts toward no category, so the total is always the sum
    of the three.
    """
    buckets: Dict[str, Dict[str, float]] = {}
    for entry in entries:
        category = entry.activity.strip().lower()
        per_name = buckets.setdefault(entry.name, {c: 0.0 for c in MILEAGE_CATEGORIES})
        if category in per_name:
            per_name[category] += entry.miles

    leaderboard = []
    for name, miles in buckets.items():
        total = miles["walk"] + miles["ruck"] + miles["run"]
        if total <= 0:
            continue
        leaderboard.append(MileageLeaderboardEntry(
            name=name,
            total_miles=total,
            walk_miles=miles["walk"],
            ruck_miles=miles["ruck"],
            run_miles=miles["run"],
        ))
    leaderboard.sort(key=lambda e: e.total_miles, reverse=True)
    return leaderboard


def get_podium_level(points: int) -> Optional[str]:
    """Return the highest podium tier reached, or None."""
    level = None
    for tier in config.PODIUM_LEVELS:
        if points >= tier["points"]:
            level = tier["name"]
    return level


def get_next_level(points: int) -> Optional[dict]:
    """
    Describe progress toward the next podium tier.

    Returns:
        Dict with name, target, remaining and percent, or None once the top
        tier is reached
    """
    for tier in config.PODIUM_LEVELS:
        if points < tier["points"]:
            target = tier["points"]
            return {
                "name": tier["name"],
                "target": target,
                "remaining": target - points,
                "percent": min(100.0, max(0.0, points / target * 100)) if target else 100.0,
            }
    return None
