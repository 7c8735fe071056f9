"""
Intensity levels for heatmap coloring.
"""

from datetime import date

MAX_LEVEL = 4


def max_count(buckets: dict[date, int]) -> int:
    """Busiest day's commit count, never less than 1."""
    return max(max(buckets.values(), default=0), 1)


def classify(count: int, max_count: int) -> int:
    """
    Calculate intensity level for a day relative to the busiest day.

    Args:
        count: Number of commits for the day
        max_count: Commits on the busiest day of the window (floored at 1)

    Returns:
        Level from 0-4:
            0: No commits
            1-4: ceil(count / max_count * 4), so the busiest day is always 4
    """
    if count <= 0:
        return 0

    max_count = max(max_count, 1)
    # Integer ceiling of count * 4 / max_count
    level = -(-count * MAX_LEVEL // max_count)
    return min(max(level, 1), MAX_LEVEL)
