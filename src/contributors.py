"""
Contributor ranking by commit count.
"""

from collections import Counter
from itertools import islice
from typing import Iterable

from src.commit_source import CommitRecord

DEFAULT_SCAN_LIMIT = 1000


def rank_contributors(
    commits: Iterable[CommitRecord], limit: int = DEFAULT_SCAN_LIMIT
) -> list[tuple[str, int]]:
    """
    Rank authors by number of commits.

    Only the first `limit` commits are scanned to keep large histories fast.
    The calendar does not share this cap.

    Args:
        commits: Commit records, normally newest first
        limit: Maximum number of commits to scan

    Returns:
        List of (author, count), most commits first, ties by name
    """
    counts = Counter(commit.author for commit in islice(commits, limit))
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
