"""
Typed records mapped from raw sheet rows.

Every sheet has one header row, skipped by position. Columns are read by
position only; header names are never checked. Malformed numbers fall back to
zero because the sheets are edited by hand.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence

logger = logging.getLogger(__name__)

HEADER_ROWS = 1

# ASCII digits only; other scripts' digits are not numbers here
_LEADING_INT = re.compile(r'^[+-]?[0-9]+')
_LEADING_FLOAT = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?')


@dataclass(frozen=True)
class Submission:
    """One challenge completion from the submissions form."""
    name: str
    challenge: str
    timestamp: str
    notes: str
    row_index: int  # 1-based sheet row, header included


@dataclass(frozen=True)
class ChallengePoints:
    """A scoring table row."""
    section: str  # 'Standard' or 'Special'
    activity: str
    points: int


@dataclass(frozen=True)
class MileageEntry:
    """One logged distance for the GWOT challenge."""
    name: str
    date: str
    activity: str  # Walk, Ruck or Run, case as entered
    miles: float
    notes: str


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def parse_int(value: str) -> int:
    """Parse a leading integer ('20 pts' -> 20). Anything unparsable is 0."""
    match = _LEADING_INT.match(value.strip()) if value else None
    return int(match.group(0)) if match else 0


def parse_float(value: str) -> float:
    """Parse a leading decimal number ('3.5 mi' -> 3.5). Anything unparsable is 0.0."""
    match = _LEADING_FLOAT.match(value.strip()) if value else None
    return float(match.group(0)) if match else 0.0


def map_submissions(rows: List[List[str]]) -> List[Submission]:
    """
    Map submission form rows to Submission records.

    Columns: timestamp, name, challenge, notes. Rows without a name are dropped,
    but row_index still reflects the row's position in the sheet.
    """
    submissions = []
    for index, row in enumerate(rows[HEADER_ROWS:]):
        name = _cell(row, 1)
        if not name:
            continue
        submissions.append(Submission(
            name=name,
            challenge=_cell(row, 2),
            timestamp=_cell(row, 0),
            notes=_cell(row, 3),
            row_index=index + HEADER_ROWS + 1,
        ))
    dropped = len(rows[HEADER_ROWS:]) - len(submissions)
    if dropped:
        logger.debug(f"Dropped {dropped} submission rows without a name")
    return submissions


def map_challenges(rows: List[List[str]]) -> List[ChallengePoints]:
    """Map scoring table rows (section, activity, points) to ChallengePoints."""
    return [
        ChallengePoints(
            section=_cell(row, 0),
            activity=_cell(row, 1),
            points=max(0, parse_int(_cell(row, 2))),
        )
        for row in rows[HEADER_ROWS:]
    ]


def map_mileage_entries(rows: List[List[str]]) -> List[MileageEntry]:
    """
    Map mileage log rows to MileageEntry records.

    Columns: timestamp (ignored), name, date, activity, miles, notes.
    Rows without a name or with a non-positive distance are dropped.
    """
    entries = []
    for row in rows[HEADER_ROWS:]:
        name = _cell(row, 1)
        miles = parse_float(_cell(row, 4))
        if not name or miles <= 0:
            continue
        entries.append(MileageEntry(
            name=name,
            date=_cell(row, 2),
            activity=_cell(row, 3),
            miles=miles,
            notes=_cell(row, 5),
        ))
    dropped = len(rows[HEADER_ROWS:]) - len(entries)
    if dropped:
        logger.debug(f"Dropped {dropped} mileage rows without a name or distance")
    return entries
