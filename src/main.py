"""
repo-pulse: a one-screen summary of a repository's activity.

Entry point for the application.
"""

import argparse
import logging
import sys
from datetime import datetime, time

from rich.text import Text

from src import config
from src.calendar_builder import activity_calendar
from src.cli import RepoInfo, display_calendar, display_repo_info, make_console
from src.code_stats import detect_languages, repo_size
from src.commit_source import CommitSourceError, GitCommitSource
from src.contributors import rank_contributors
from src.date_bucketizer import build_window
from src.github_client import GitHubClient, GitHubClientError, GitHubCommitSource

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="repo-pulse",
        description="Show repository stats and a commit calendar for the last year.",
    )
    p.add_argument("path", nargs="?", default=".", help="Path inside a git repository (default: current directory).")
    p.add_argument("--github", metavar="OWNER/NAME", default="", help="Read history from a GitHub repository instead of a local one.")
    p.add_argument("--timezone", default="", help="IANA timezone for calendar days (default: CALENDAR_TIMEZONE or the host zone).")
    p.add_argument("--week-start", choices=sorted(config.WEEK_STARTS), default="", help="First weekday of each calendar column (default: CALENDAR_WEEK_START).")
    p.add_argument("--no-color", action="store_true", help="Plain glyphs, no colors.")
    return p


def local_report(path: str, scan_limit: int, today, tz, first_weekday: int):
    """Header info and calendar grid for a local repository."""
    source = GitCommitSource(path)
    workdir = source.workdir

    info = RepoInfo(
        name=source.name,
        branch=source.branch(),
        commit_count=source.count(),
        size=repo_size(workdir),
        contributors=rank_contributors(source.commits(sort_by_time=True), limit=scan_limit),
        languages=detect_languages(workdir),
    )
    grid = activity_calendar(source.commits(sort_by_time=True), today, tz, first_weekday)
    return info, grid


def github_report(full_name: str, scan_limit: int, today, tz, first_weekday: int):
    """Header info and calendar grid for a GitHub repository (last year only)."""
    source = GitHubCommitSource(full_name, GitHubClient(config.GITHUB_TOKEN))
    window = build_window(today, first_weekday=first_weekday)
    since = datetime.combine(window.window_start, time.min, tzinfo=tz)

    commits = list(source.commits(since=since))
    info = RepoInfo(
        name=source.name,
        branch=source.branch(),
        contributors=rank_contributors(commits, limit=scan_limit),
    )
    grid = activity_calendar(commits, today, tz, first_weekday)
    return info, grid


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = config.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level if level in config.LOG_LEVELS else "WARNING",
        format="%(levelname)s %(name)s: %(message)s",
    )

    color = not args.no_color
    console = make_console(color=color)
    errors = make_console(color=color, stderr=True)

    # Validate configuration
    try:
        config.validate_config()
        tz = config.resolve_timezone(args.timezone or config.CALENDAR_TIMEZONE)
        first_weekday = config.resolve_week_start(args.week_start or config.CALENDAR_WEEK_START)
        scan_limit = config.get_contributor_scan_limit()
    except ValueError as e:
        errors.print(Text.assemble(("Configuration Error:", "bold red"), " ", str(e)))
        return 1

    today = datetime.now(tz).date()

    try:
        if args.github:
            info, grid = github_report(args.github, scan_limit, today, tz, first_weekday)
        else:
            info, grid = local_report(args.path, scan_limit, today, tz, first_weekday)
    except (CommitSourceError, GitHubClientError) as e:
        errors.print(Text.assemble(("Error:", "bold red"), " ", str(e)))
        return 1

    logger.debug("Window starts %s, %d commits in range", grid.window.window_start, grid.summary.total_commits)

    display_repo_info(info, console)
    console.print()
    display_calendar(grid, console, color=color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
