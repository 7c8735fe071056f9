"""
Aggregate statistics over the calendar window.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ActivitySummary:
    """Totals for the calendar window."""

    total_commits: int
    active_days: int

    def line(self) -> str:
        return (
            f"{self.total_commits} commits in the last year "
            f"across {self.active_days} days"
        )


def summarize(buckets: dict[date, int]) -> ActivitySummary:
    """
    Summarize per-date commit counts.

    Args:
        buckets: Mapping of date -> commit count from bucketize()

    Returns:
        ActivitySummary with the total commit count and the number of days
        with at least one commit
    """
    return ActivitySummary(
        total_commits=sum(buckets.values()),
        active_days=sum(1 for count in buckets.values() if count > 0),
    )
