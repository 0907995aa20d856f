"""
Google Sheets CSV export client.

Fetches the published tabs of the challenge spreadsheet and splits them into
rows of cells. The export format is simple enough that no CSV dialect handling
is attempted (see parse_csv).
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import httpx

from config import config

logger = logging.getLogger(__name__)

SHEETS_BASE_URL = "https://docs.google.com/spreadsheets/d"
USER_AGENT = "IronCladLeaderboard/1.0"

# url -> (fetched_at, text)
_cache: Dict[str, Tuple[float, str]] = {}


class SheetsError(Exception):
    """Exception for spreadsheet export fetch errors."""
    pass


@dataclass(frozen=True)
class SheetSnapshot:
    """Raw rows of every source tab, fetched for a single request."""
    submissions: List[List[str]]
    challenges: List[List[str]]
    mileage: List[List[str]]


def csv_export_url(gid: str) -> str:
    """Build the CSV export URL for one tab of the configured sheet."""
    return f"{SHEETS_BASE_URL}/{config.SHEET_ID}/export?format=csv&gid={gid}"


def sheet_edit_url() -> str:
    """Shareable link to the spreadsheet itself."""
    return f"{SHEETS_BASE_URL}/{config.SHEET_ID}/edit?usp=sharing"


def sheet_row_url(row_index: int) -> str:
    """Link to a single row of the submissions tab."""
    gid = config.SUBMISSIONS_GID
    return (
        f"{SHEETS_BASE_URL}/{config.SHEET_ID}/edit?gid={gid}"
        f"#gid={gid}&range={row_index}:{row_index}"
    )


def parse_csv(text: str) -> List[List[str]]:
    """
    Split exported sheet text into rows of trimmed cells.

    Quoted fields are not supported: a comma inside a cell splits it in two.
    The source sheets never quote, so this is left as-is.

    Args:
        text: Raw CSV text

    Returns:
        List of rows, each a list of cell strings
    """
    text = text.strip()
    if not text:
        return []
    return [
        [cell.strip() for cell in line.split(",")]
        for line in text.split("\n")
    ]


def clear_cache() -> None:
    """Drop all cached sheet text."""
    _cache.clear()


def _cached_text(url: str) -> Optional[str]:
    if config.SHEET_CACHE_SECONDS <= 0:
        return None
    hit = _cache.get(url)
    if hit is None:
        return None
    fetched_at, text = hit
    if time.monotonic() - fetched_at > config.SHEET_CACHE_SECONDS:
        return None
    return text


async def fetch_csv(url: str, client: Optional[httpx.AsyncClient] = None) -> List[List[str]]:
    """
    Fetch a CSV export and parse it into rows.

    Args:
        url: CSV export URL
        client: Optional shared client; a temporary one is used otherwise

    Returns:
        Parsed rows (header included)

    Raises:
        SheetsError: On network failure or a non-success HTTP status
    """
    text = _cached_text(url)
    if text is not None:
        logger.debug(f"Sheet cache hit: {url}")
        return parse_csv(text)

    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await fetch_csv(url, own_client)

    try:
        response = await client.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=config.FETCH_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Sheet fetch failed for {url}: {e}")
        raise SheetsError(f"HTTP error: {e}")

    text = response.text
    if config.SHEET_CACHE_SECONDS > 0:
        _cache[url] = (time.monotonic(), text)
    logger.debug(f"Fetched sheet {url} ({len(text)} bytes)")
    return parse_csv(text)


async def fetch_snapshot() -> SheetSnapshot:
    """
    Fetch all source tabs concurrently.

    The mileage tab is skipped when MILEAGE_GID is not configured.

    Raises:
        SheetsError: If any tab fails to load
    """
    async with httpx.AsyncClient() as client:
        fetches = [
            fetch_csv(csv_export_url(config.SUBMISSIONS_GID), client),
            fetch_csv(csv_export_url(config.CHALLENGES_GID), client),
        ]
        if config.MILEAGE_GID:
            fetches.append(fetch_csv(csv_export_url(config.MILEAGE_GID), client))
        results = await asyncio.gather(*fetches)

    mileage = results[2] if len(results) > 2 else []
    return SheetSnapshot(submissions=results[0], challenges=results[1], mileage=mileage)
