"""
Commit sources backed by a local git repository.

Uses GitPython to discover the repository and walk the history reachable
from HEAD. Every traversal is a fresh, lazy iterator of CommitRecord.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)


class CommitSourceError(Exception):
    """Raised when a commit source cannot be opened."""

    pass


@dataclass(frozen=True)
class CommitRecord:
    """One commit as seen by the activity engine."""

    author: str
    timestamp: int  # Unix seconds (commit time)
    id: str


class GitCommitSource:
    """Commit history of a local git repository."""

    def __init__(self, path: str | Path = "."):
        """
        Open the repository containing path.

        Args:
            path: Any path inside the work tree; parent directories are searched
                the same way `git` does.

        Raises:
            CommitSourceError: If no repository is found at or above path
        """
        try:
            self.repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise CommitSourceError(f"could not find repository from '{path}'") from e

    @property
    def workdir(self) -> Path:
        """Work tree root (the git dir's parent for bare repositories)."""
        if self.repo.working_tree_dir:
            return Path(self.repo.working_tree_dir)
        return Path(self.repo.git_dir).parent

    @property
    def name(self) -> str:
        return self.workdir.name or "unknown"

    def branch(self) -> str:
        """Short name of the checked-out branch, 'detached', or 'unknown'."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return "detached"
        except (ValueError, OSError, GitCommandError) as e:
            logger.warning("Could not read HEAD: %s", e)
            return "unknown"

    def count(self) -> int:
        """Number of commits reachable from HEAD (0 for an empty repository)."""
        if not self.repo.head.is_valid():
            return 0
        try:
            return int(self.repo.git.rev_list("--count", "HEAD"))
        except (GitCommandError, ValueError) as e:
            logger.warning("Could not count commits: %s", e)
            return 0

    def commits(self, sort_by_time: bool = False) -> Iterator[CommitRecord]:
        """
        Walk the history reachable from HEAD.

        Traversal problems end the walk early instead of raising, so callers
        see an empty or partial history.

        Args:
            sort_by_time: Ask git for commit-date order (newest first)

        Yields:
            CommitRecord for each commit
        """
        if not self.repo.head.is_valid():
            logger.info("Repository at %s has no commits yet", self.workdir)
            return

        try:
            for commit in self.repo.iter_commits("HEAD", date_order=sort_by_time):
                yield CommitRecord(
                    author=commit.author.name or "Unknown",
                    timestamp=commit.committed_date,
                    id=commit.hexsha,
                )
        except (GitCommandError, ValueError) as e:
            logger.warning("History traversal stopped early: %s", e)
