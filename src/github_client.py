"""
GitHub API client for fetching repository commit history.
"""

import logging
from datetime import datetime
from typing import Iterator

import requests

from src.commit_source import CommitRecord

logger = logging.getLogger(__name__)


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubClient:
    """Client for interacting with the GitHub API."""

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str | None = None):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token. Public repositories can be
                read without one, at a much lower rate limit.
        """
        self.token = token
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, url: str, params: dict | None = None) -> requests.Response:
        response = self.session.get(url, params=params)

        if response.status_code == 401:
            raise GitHubClientError(
                "Authentication failed. Check your GITHUB_TOKEN is valid."
            )
        elif response.status_code == 404:
            raise GitHubClientError(f"Not found on GitHub: {url}")
        elif response.status_code == 403:
            # Check for rate limiting
            remaining = response.headers.get("X-RateLimit-Remaining", "unknown")
            raise GitHubClientError(
                f"API rate limit exceeded or access forbidden. "
                f"Remaining requests: {remaining}"
            )
        elif response.status_code == 409:
            # Empty repository; callers treat this as "no history"
            return response
        elif not response.ok:
            raise GitHubClientError(
                f"GitHub API error: {response.status_code} - {response.text}"
            )

        return response

    def get_repo(self, full_name: str) -> dict:
        """
        Fetch repository metadata.

        Args:
            full_name: Repository in "owner/name" form

        Returns:
            Repository dictionary from the GitHub API

        Raises:
            GitHubClientError: If the API request fails
        """
        return self._get(f"{self.BASE_URL}/repos/{full_name}").json()

    def list_commits(
        self, full_name: str, since: datetime | None = None, per_page: int = 100
    ) -> Iterator[dict]:
        """
        Iterate over commits on the default branch, newest first.

        Follows the Link header until every page has been read.

        Args:
            full_name: Repository in "owner/name" form
            since: Only return commits after this instant
            per_page: Page size (max 100)

        Yields:
            Commit dictionaries from the GitHub API

        Raises:
            GitHubClientError: If the API request fails
        """
        url = f"{self.BASE_URL}/repos/{full_name}/commits"
        params = {"per_page": min(per_page, 100)}
        if since is not None:
            params["since"] = since.isoformat()

        while url:
            response = self._get(url, params=params)
            if response.status_code == 409:
                return
            yield from response.json()

            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None


def _commit_timestamp(item: dict) -> int | None:
    """Committer date of an API commit as Unix seconds, or None if unusable."""
    commit = item.get("commit") or {}
    raw = (commit.get("committer") or {}).get("date") or (
        commit.get("author") or {}
    ).get("date")
    if not raw:
        return None
    try:
        return int(datetime.fromisoformat(raw.replace("Z", "+00:00")).timestamp())
    except (ValueError, OverflowError):
        return None


class GitHubCommitSource:
    """Commit history of a repository hosted on GitHub."""

    def __init__(self, full_name: str, client: GitHubClient):
        self.full_name = full_name
        self.client = client
        self._repo: dict | None = None

    @property
    def name(self) -> str:
        return self.full_name.rsplit("/", 1)[-1]

    def branch(self) -> str:
        if self._repo is None:
            self._repo = self.client.get_repo(self.full_name)
        return self._repo.get("default_branch") or "unknown"

    def commits(self, since: datetime | None = None) -> Iterator[CommitRecord]:
        """
        Walk the default branch history, newest first.

        Args:
            since: Only fetch commits after this instant

        Yields:
            CommitRecord for each commit with a usable date
        """
        for item in self.client.list_commits(self.full_name, since=since):
            timestamp = _commit_timestamp(item)
            if timestamp is None:
                logger.debug("Skipping commit %s without a usable date", item.get("sha"))
                continue

            author = ((item.get("commit") or {}).get("author") or {}).get("name")
            yield CommitRecord(
                author=author or "Unknown",
                timestamp=timestamp,
                id=item.get("sha", ""),
            )
