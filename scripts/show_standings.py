#!/usr/bin/env python3
"""
Print the current standings straight from the live sheets.

Useful for checking the sheets without starting the web server.

Usage:
    python -m scripts.show_standings
    python -m scripts.show_standings --profile alice-smith
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from standings import Standings, find_profile, load_standings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def format_leaderboard(standings: Standings) -> str:
    lines = [f"{i:>3}. {entry.name:<30} {entry.points:>5} pts"
             for i, entry in enumerate(standings.leaderboard, start=1)]
    if standings.mileage_leaderboard:
        lines.append("")
        lines.append("GWOT miles:")
        lines.extend(f"{i:>3}. {entry.name:<30} {entry.total_miles:>7.1f} mi"
                     for i, entry in enumerate(standings.mileage_leaderboard, start=1))
    return "\n".join(lines)


def format_profile(standings: Standings, slug: str) -> str:
    profile = find_profile(standings, slug)
    if profile is None:
        return f"No participant matches '{slug}'"

    lines = [
        f"{profile.name}: {profile.points} pts, rank {profile.rank} of {profile.total_participants}",
        f"GWOT: {profile.mileage_progress.total_miles:.1f} mi"
        f"{' (completed)' if profile.mileage_progress.completed else ''}",
    ]
    lines.extend(f"  {s.timestamp:<22} {s.challenge:<30} +{s.points}" for s in profile.submissions)
    return "\n".join(lines)


async def main(argv=None):
    """Print the leaderboard, or one profile with --profile SLUG."""
    argv = sys.argv[1:] if argv is None else argv
    standings = await load_standings()
    logger.info(f"Loaded {len(standings.submissions)} submissions, "
                f"{len(standings.challenges)} challenges, {len(standings.mileage_entries)} mileage entries")

    if len(argv) > 1 and argv[0] == "--profile":
        output = format_profile(standings, argv[1])
    else:
        output = format_leaderboard(standings)
    print(output)
    return output


if __name__ == "__main__":
    asyncio.run(main())
