"""Tests for the git snapshot history adapter."""

import subprocess
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from bikeshare_sync.adapters.git import GitSnapshotHistory
from bikeshare_sync.domain.errors import SnapshotHistoryError, SnapshotNotFoundError

SNAPSHOT = Path("data_results/Bixi/bikeshare.geojson")


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestGetLastCommittedVersion:
    """Tests for GitSnapshotHistory.get_last_committed_version."""

    def test_returns_head_content(self) -> None:
        """Given a committed file, then git show output is returned."""
        with patch("subprocess.run", return_value=_completed(stdout="\x1e{}\n")) as run:
            content = GitSnapshotHistory().get_last_committed_version(SNAPSHOT)

        assert content == "\x1e{}\n"
        command = run.call_args.args[0]
        assert command == ["git", "-C", "data_results/Bixi", "show", "HEAD:./bikeshare.geojson"]

    def test_missing_file_raises_not_found(self) -> None:
        """Given a file absent from HEAD, then SnapshotNotFoundError is raised."""
        stderr = "fatal: path 'data_results/Bixi/bikeshare.geojson' does not exist in 'HEAD'"
        with patch("subprocess.run", return_value=_completed(128, stderr=stderr)):
            with pytest.raises(SnapshotNotFoundError, match="might be a new system"):
                GitSnapshotHistory().get_last_committed_version(SNAPSHOT)

    def test_other_failures_raise_history_error(self) -> None:
        """Given an unexpected git error, then SnapshotHistoryError is raised."""
        with patch("subprocess.run", return_value=_completed(1, stderr="error: unknown option")):
            with pytest.raises(SnapshotHistoryError, match="Git command failed"):
                GitSnapshotHistory().get_last_committed_version(SNAPSHOT)

    def test_missing_git_executable(self) -> None:
        """Given no git binary, then SnapshotHistoryError names the executable."""
        with patch("subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(SnapshotHistoryError, match="'nogit' not found"):
                GitSnapshotHistory("nogit").get_last_committed_version(SNAPSHOT)

    def test_timeout_raises_history_error(self) -> None:
        """Given git hangs, when the snapshot is read, then SnapshotHistoryError reports the timeout."""
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="git", timeout=60)):
            with pytest.raises(SnapshotHistoryError, match="timed out"):
                GitSnapshotHistory().get_last_committed_version(SNAPSHOT)


class TestGetLastCommitDate:
    """Tests for GitSnapshotHistory.get_last_commit_date."""

    def test_parses_commit_date(self) -> None:
        """Given git log output, then an aware datetime is returned."""
        with patch("subprocess.run", return_value=_completed(stdout="2024-05-01 10:20:30 +0200\n")) as run:
            result = GitSnapshotHistory().get_last_commit_date(SNAPSHOT)

        assert result is not None
        assert (result.year, result.month, result.day, result.hour) == (2024, 5, 1, 10)
        assert result.utcoffset() == timedelta(hours=2)
        assert run.call_args.args[0][-2:] == ["--", "bikeshare.geojson"]

    @pytest.mark.parametrize(
        "completed",
        [_completed(stdout=""), _completed(128, stderr="fatal: not a git repository"), _completed(stdout="yesterday")],
    )
    def test_returns_none_without_usable_history(self, completed: subprocess.CompletedProcess[str]) -> None:
        """Given no commits, an error or unparseable output, then None is returned."""
        with patch("subprocess.run", return_value=completed):
            assert GitSnapshotHistory().get_last_commit_date(SNAPSHOT) is None

    def test_timeout_returns_none(self) -> None:
        """Given git times out, then None is returned."""
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="git", timeout=60)):
            assert GitSnapshotHistory().get_last_commit_date(SNAPSHOT) is None
