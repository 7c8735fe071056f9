"""
Date bucketing for the commit activity calendar.

Converts commit timestamps to local calendar dates and counts commits per
date inside a trailing, week-aligned window.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from src.commit_source import CommitRecord

logger = logging.getLogger(__name__)

# datetime.weekday() numbering
MONDAY = 0
SUNDAY = 6

DEFAULT_WEEKS = 52


@dataclass(frozen=True)
class CalendarWindow:
    """Trailing date range covered by the calendar."""

    today: date
    window_start: date
    weeks: int = DEFAULT_WEEKS
    first_weekday: int = SUNDAY

    def contains(self, day: date) -> bool:
        return self.window_start <= day <= self.today


def build_window(
    today: date, weeks: int = DEFAULT_WEEKS, first_weekday: int = SUNDAY
) -> CalendarWindow:
    """
    Build the calendar window ending today.

    The start is `weeks` weeks before today, moved back to the closest
    earlier (or same) day that falls on first_weekday.

    Args:
        today: Last day of the window
        weeks: Lookback in weeks
        first_weekday: Weekday the grid starts on (Monday=0 .. Sunday=6)

    Returns:
        CalendarWindow
    """
    start = today - timedelta(days=weeks * 7)
    offset = (start.weekday() - first_weekday) % 7
    return CalendarWindow(
        today=today,
        window_start=start - timedelta(days=offset),
        weeks=weeks,
        first_weekday=first_weekday,
    )


def to_local_date(timestamp: int, tz: tzinfo) -> date | None:
    """Calendar date of a Unix timestamp in tz, or None if it is out of range."""
    try:
        return datetime.fromtimestamp(timestamp, tz).date()
    except (OverflowError, OSError, ValueError):
        return None


def bucketize(
    commits: Iterable[CommitRecord], window: CalendarWindow, tz: tzinfo
) -> dict[date, int]:
    """
    Count commits per local calendar date.

    Every commit is scanned; there is no cap. Commits outside the window are
    dropped and commits with unrepresentable timestamps are skipped.

    Args:
        commits: Commit records in any order
        window: Date range to keep
        tz: Timezone used to turn instants into dates

    Returns:
        Mapping of date -> commit count (only non-zero dates are present)
    """
    buckets: dict[date, int] = {}
    skipped = 0

    for commit in commits:
        day = to_local_date(commit.timestamp, tz)
        if day is None:
            skipped += 1
            logger.debug("Skipping commit %s with bad timestamp %r", commit.id, commit.timestamp)
            continue
        if window.contains(day):
            buckets[day] = buckets.get(day, 0) + 1

    if skipped:
        logger.info("Skipped %d commits with unusable timestamps", skipped)

    return buckets
