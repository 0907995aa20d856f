"""
Centralized configuration for the Iron Clad leaderboard.

All configurable values are loaded from environment variables with sensible defaults.
"""

import os


def _env_bool(name: str, default: str) -> bool:
    """Read a boolean flag from the environment."""
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    # Site text
    SITE_NAME: str = os.getenv("SITE_NAME", "F3 Iron Clad Challenge")
    SITE_TAGLINE: str = os.getenv(
        "SITE_TAGLINE", "Track your F3 challenge submissions and see the leaderboard"
    )

    # Google Sheet holding all source tabs
    SHEET_ID: str = os.getenv("SHEET_ID", "1M3u3t2TzVcJptUyfipu3IR8SExpFqIzHEeEQRoX7_-E")
    SUBMISSIONS_GID: str = os.getenv("SUBMISSIONS_GID", "319550974")
    CHALLENGES_GID: str = os.getenv("CHALLENGES_GID", "1131610114")
    # Empty disables the mileage sheet entirely
    MILEAGE_GID: str = os.getenv("MILEAGE_GID", "")

    # External Google Forms (the only write path)
    SUBMIT_FORM_URL: str = os.getenv(
        "SUBMIT_FORM_URL",
        "https://docs.google.com/forms/d/e/1FAIpQLScponPxBc3lZmg1sw-xtqTHHaEbio4w3jE_FtgzliIcyq1QDw/viewform?embedded=true",
    )
    MILEAGE_FORM_URL: str = os.getenv("MILEAGE_FORM_URL", "")

    # Fetching
    SHEET_CACHE_SECONDS: int = int(os.getenv("SHEET_CACHE_SECONDS", "60"))
    FETCH_TIMEOUT_SECONDS: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

    # Zone that ISO timestamps with an offset are converted to for display
    DISPLAY_TIMEZONE: str = os.getenv("DISPLAY_TIMEZONE", "America/Chicago")

    # Pages re-render from fresh data on this interval
    REFRESH_SECONDS: int = int(os.getenv("REFRESH_SECONDS", "60"))

    # GWOT distance challenge
    MILEAGE_GOAL: float = float(os.getenv("MILEAGE_GOAL", "100"))
    MILEAGE_BONUS_POINTS: int = int(os.getenv("MILEAGE_BONUS_POINTS", "10"))

    # Podium tiers, lowest first
    PODIUM_LEVELS: list = [
        {"name": "Bronze", "points": int(os.getenv("PODIUM_BRONZE", "50"))},
        {"name": "Silver", "points": int(os.getenv("PODIUM_SILVER", "75"))},
        {"name": "Gold", "points": int(os.getenv("PODIUM_GOLD", "100"))},
    ]

    # Send every visitor straight to the spreadsheet
    REDIRECT_ALL_TO_SHEET: bool = _env_bool("REDIRECT_ALL_TO_SHEET", "false")

    # Rate limiting for the JSON API
    RATE_LIMIT_API: str = os.getenv("RATE_LIMIT_API", "60/minute")

    # Testing mode
    TESTING: bool = bool(os.getenv("TESTING", ""))


# Global config instance
config = Config()
