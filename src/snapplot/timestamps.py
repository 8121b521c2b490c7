"""Snapshot filename timestamp parsing.

Snapshot files carry their capture time as the last dot-separated segment
of the filename, e.g. ``state.json.1704067200``. Only the calendar date is
kept; charts are bucketed and labeled per day.
"""

import re
from datetime import datetime, timezone
from typing import Optional

DEFAULT_DATE_FORMAT = "%d.%m.%Y"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def timestamp_from_filename(filename: str) -> Optional[int]:
    """Return the Unix timestamp embedded in a snapshot filename.

    Args:
        filename: Bare filename (no directory part)

    Returns:
        Seconds since the epoch, or None if the last segment is not an integer
    """
    segment = filename.split(".")[-1]
    # int() alone would also accept "4_2" and surrounding whitespace
    if not _INTEGER_RE.fullmatch(segment):
        return None
    return int(segment)


def date_from_filename(filename: str) -> Optional[datetime]:
    """Return the UTC calendar date (midnight) a snapshot was taken on."""
    ts = timestamp_from_filename(filename)
    if ts is None:
        return None

    try:
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None

    return datetime(dt.year, dt.month, dt.day)


def format_date(dt: datetime, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a snapshot date as an axis label."""
    return dt.strftime(fmt)
