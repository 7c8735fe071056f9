"""
Tests for CLI display functions.
"""

import io
from datetime import date

from rich.console import Console

from src.calendar_builder import build_grid
from src.cli import (
    RepoInfo,
    display_calendar,
    display_repo_info,
    format_contributors,
    language_style,
    make_console,
)
from src.code_stats import LanguageStats
from src.date_bucketizer import build_window


def capture_console() -> tuple[Console, io.StringIO]:
    output = io.StringIO()
    return Console(file=output, color_system=None, width=80, highlight=False), output


class TestFormatContributors:
    """Tests for contributor formatting."""

    def test_top_three(self):
        contributors = [("alice", 12), ("bob", 3), ("carol", 2), ("dave", 1)]

        assert format_contributors(contributors) == "alice (12), bob (3), carol (2)"

    def test_fewer_than_limit(self):
        assert format_contributors([("alice", 1)]) == "alice (1)"

    def test_empty(self):
        assert format_contributors([]) == ""


class TestLanguageStyle:
    """Tests for language colors."""

    def test_known_language(self):
        assert language_style("Python") == "rgb(55,118,171)"

    def test_unknown_language(self):
        assert language_style("COBOL") == "white"


class TestDisplayRepoInfo:
    """Tests for the repository header."""

    def test_full_header(self):
        console, output = capture_console()
        info = RepoInfo(
            name="repo-pulse",
            branch="main",
            commit_count=42,
            size=1536,
            contributors=[("alice", 30), ("bob", 12)],
            languages=[
                LanguageStats(name="Python", files=10, lines=1500),
                LanguageStats(name="Shell", files=1, lines=20),
            ],
        )

        display_repo_info(info, console)
        result = output.getvalue()

        assert "  repo-pulse" in result
        assert "─" * 40 in result
        assert "Branch:  main" in result
        assert "Commits:  42" in result
        assert "Size:  1.5 KB" in result
        assert "Authors:  alice (30), bob (12)" in result
        assert "LOC:  Python (1.5K), Shell (20)" in result

    def test_missing_fields_are_skipped(self):
        console, output = capture_console()

        display_repo_info(RepoInfo(name="remote", branch="trunk"), console)
        result = output.getvalue()

        assert "Branch:  trunk" in result
        assert "Commits:" not in result
        assert "Size:" not in result
        assert "Authors:" not in result
        assert "LOC:" not in result

    def test_author_names_are_not_markup(self):
        console, output = capture_console()
        info = RepoInfo(name="x", branch="main", contributors=[("dependabot[bot]", 4)])

        display_repo_info(info, console)

        assert "dependabot[bot] (4)" in output.getvalue()


class TestDisplayCalendar:
    """Tests for calendar display."""

    def test_rows_are_not_wrapped(self):
        """Calendar lines keep their full width on a narrow console."""
        today = date(2026, 1, 26)
        grid = build_grid({today: 1}, build_window(today))
        console, output = capture_console()

        display_calendar(grid, console, color=False)
        lines = output.getvalue().splitlines()

        assert len(lines) == 12
        assert lines[2].startswith(" Mon ")
        assert lines[2].endswith("█")
        assert lines[-1] == "     1 commits in the last year across 1 days"

    def test_color_mode_uses_block_glyphs(self):
        today = date(2026, 1, 26)
        grid = build_grid({}, build_window(today))
        console, output = capture_console()

        display_calendar(grid, console, color=True)

        assert "Less █ █ █ █ █ More" in output.getvalue()


class TestMakeConsole:
    """Tests for console construction."""

    def test_no_color(self):
        console = make_console(color=False, file=io.StringIO())

        assert console.color_system is None
