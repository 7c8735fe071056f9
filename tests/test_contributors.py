"""
Tests for contributor ranking.
"""

from src.commit_source import CommitRecord
from src.contributors import rank_contributors


def commits_by(*authors):
    return [CommitRecord(author=a, timestamp=1769428800 - i, id=str(i)) for i, a in enumerate(authors)]


class TestRankContributors:
    """Tests for the rank_contributors function."""

    def test_empty_history(self):
        assert rank_contributors([]) == []

    def test_most_commits_first(self):
        ranking = rank_contributors(commits_by("bob", "alice", "alice", "carol", "alice", "bob"))

        assert ranking == [("alice", 3), ("bob", 2), ("carol", 1)]

    def test_ties_sorted_by_name(self):
        ranking = rank_contributors(commits_by("zoe", "adam"))

        assert ranking == [("adam", 1), ("zoe", 1)]

    def test_scan_limit(self):
        """Only the first `limit` commits are counted."""
        history = commits_by(*(["alice"] * 3 + ["bob"] * 5))

        assert rank_contributors(history, limit=3) == [("alice", 3)]

    def test_default_limit_is_1000(self):
        history = (CommitRecord(author="alice", timestamp=0, id=str(i)) for i in range(1500))

        assert rank_contributors(history) == [("alice", 1000)]
