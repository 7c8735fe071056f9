"""
Tests for the repo-pulse entry point.
"""

import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from git import Actor, Repo

from src.github_client import GitHubClientError
from src.main import build_parser, main

ALICE = Actor("Alice", "alice@example.com")


@pytest.fixture
def repo_dir(tmp_path):
    """A repository with one commit made right now."""
    repo = Repo.init(str(tmp_path / "demo"))
    (tmp_path / "demo" / "app.py").write_text("print('hi')\n")
    repo.index.add(["app.py"])
    now = f"{int(time.time())} +0000"
    repo.index.commit("initial", author=ALICE, committer=ALICE, author_date=now, commit_date=now)
    return Path(repo.working_tree_dir)


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.path == "."
        assert args.github == ""
        assert not args.no_color

    def test_invalid_week_start(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--week-start", "friday"])


class TestMainLocal:
    """Tests for summarizing a local repository."""

    def test_report(self, repo_dir, capsys):
        exit_code = main([str(repo_dir), "--no-color"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "  demo" in out
        assert "Commits:  1" in out
        assert "Authors:  Alice (1)" in out
        assert "LOC:  Python (1)" in out
        assert "Less · ░ ▒ ▓ █ More" in out
        assert "1 commits in the last year across 1 days" in out

    def test_single_commit_is_top_intensity(self, repo_dir, capsys):
        main([str(repo_dir), "--no-color"])
        out = capsys.readouterr().out

        rows = [line for line in out.splitlines() if "·" in line and "Less" not in line]
        assert len(rows) == 7
        assert sum(row.count("█") for row in rows) == 1

    def test_monday_week_start(self, repo_dir, capsys):
        main([str(repo_dir), "--no-color", "--week-start", "monday"])
        out = capsys.readouterr().out

        assert " Tue " in out
        assert " Mon " not in out

    def test_empty_repository(self, tmp_path, capsys):
        Repo.init(str(tmp_path / "empty"))

        exit_code = main([str(tmp_path / "empty"), "--no-color"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "0 commits in the last year across 0 days" in out
        assert "█" not in out.split("Less")[0]

    def test_not_a_repository(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing"), "--no-color"])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_configuration_error(self, repo_dir, capsys):
        with patch("src.config.CALENDAR_TIMEZONE", "Mars/Olympus"):
            exit_code = main([str(repo_dir), "--no-color"])

        assert exit_code == 1
        assert "Configuration Error:" in capsys.readouterr().err


class TestMainGitHub:
    """Tests for summarizing a GitHub repository."""

    @patch("src.main.GitHubClient")
    def test_report(self, mock_client_cls, capsys):
        client = MagicMock()
        client.get_repo.return_value = {"default_branch": "main"}
        now = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        client.list_commits.return_value = [
            {"sha": "abc", "commit": {"author": {"name": "Alice", "date": now},
                                      "committer": {"name": "Alice", "date": now}}},
        ]
        mock_client_cls.return_value = client

        exit_code = main(["--github", "owner/widget", "--no-color"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "  widget" in out
        assert "Branch:  main" in out
        assert "Authors:  Alice (1)" in out
        assert "Size:" not in out
        assert "1 commits in the last year across 1 days" in out

    @patch("src.main.GitHubClient")
    def test_api_error(self, mock_client_cls, capsys):
        client = MagicMock()
        client.list_commits.side_effect = GitHubClientError("Not found on GitHub: owner/nope")
        mock_client_cls.return_value = client

        exit_code = main(["--github", "owner/nope", "--no-color"])

        assert exit_code == 1
        assert "Not found on GitHub" in capsys.readouterr().err
