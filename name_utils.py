"""
Participant name and display helpers.

Names are matched exactly everywhere except in profile URLs, which use a slug.
"""

import re
from datetime import datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from config import config
from scoring import LeaderboardEntry

_NON_ALNUM = re.compile(r'[^a-z0-9]+')

# Google Forms writes "M/D/YYYY H:MM:SS"; hand-entered rows vary
TIMESTAMP_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


def name_to_slug(name: str) -> str:
    """Convert a display name to its URL slug ('Dr. Who?' -> 'dr-who')."""
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def find_name_by_slug(slug: str, leaderboard: Sequence[LeaderboardEntry]) -> Optional[str]:
    """Return the stored name of the first leaderboard entry whose slug matches."""
    for entry in leaderboard:
        if name_to_slug(entry.name) == slug:
            return entry.name
    return None


def format_activity(activity: str) -> str:
    """
    Title-case an activity name for display.

    Hashtags and words of two letters or fewer stay lowercase.
    """
    words = []
    for word in activity.lower().split(" "):
        if word.startswith("#") or len(word) <= 2:
            words.append(word)
        else:
            words.append(word[0].upper() + word[1:])
    return " ".join(words)


def truncate_notes(notes: str, max_length: int = 80) -> str:
    if len(notes) <= max_length:
        return notes
    return notes[:max_length] + "..."


def parse_timestamp(timestamp: str) -> Optional[datetime]:
    """Parse a sheet timestamp, or return None if no known format fits."""
    if not timestamp:
        return None
    value = timestamp.strip()
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Sheet timestamps are naive local times, so offsets are converted into
    # the display zone before dropping tzinfo
    if dt.tzinfo:
        dt = dt.astimezone(ZoneInfo(config.DISPLAY_TIMEZONE)).replace(tzinfo=None)
    return dt


def format_timestamp(timestamp: str) -> str:
    """Format a sheet timestamp like 'Jan 15, 2:23 PM'."""
    dt = parse_timestamp(timestamp)
    if dt is None:
        return timestamp
    hour = dt.hour % 12 or 12
    return f"{dt.strftime('%b')} {dt.day}, {hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def detect_install_platform(user_agent: Optional[str]) -> str:
    """Pick install instructions for a browser: 'ios', 'android' or 'desktop'."""
    ua = (user_agent or "").lower()
    if "iphone" in ua or "ipad" in ua or "ipod" in ua:
        return "ios"
    if "android" in ua:
        return "android"
    return "desktop"
