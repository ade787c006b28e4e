"""Snapshot history backed by the git repository holding the data directory."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

from bikeshare_sync.domain.errors import SnapshotHistoryError, SnapshotNotFoundError
from bikeshare_sync.domain.ports.snapshot_history import SnapshotHistory

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 60
COMMIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"
_NOT_FOUND_MARKERS = ("does not exist", "Path", "fatal")


class GitSnapshotHistory(SnapshotHistory):
    """Reads committed snapshot versions with the git command line."""

    def __init__(self, git_executable: str = "git") -> None:
        self._git = git_executable

    def _run(self, path: Path, *args: str) -> subprocess.CompletedProcess[str]:
        command = [self._git, "-C", str(path.parent), *args]
        try:
            return subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=GIT_TIMEOUT_SECONDS,
                check=False,
            )
        except FileNotFoundError as e:
            raise SnapshotHistoryError(f"git executable '{self._git}' not found") from e
        except subprocess.TimeoutExpired as e:
            raise SnapshotHistoryError(f"git timed out after {GIT_TIMEOUT_SECONDS}s") from e

    def get_last_committed_version(self, path: Path) -> str:
        """Return the content of path as of HEAD.

        Raises:
            SnapshotNotFoundError: If the file is not in HEAD (for example a new system).
            SnapshotHistoryError: If git is missing, times out or fails for another reason.
        """
        path = Path(path)
        result = self._run(path, "show", f"HEAD:./{path.name}")
        if result.returncode != 0:
            error = result.stderr.strip()
            if any(marker in error for marker in _NOT_FOUND_MARKERS):
                raise SnapshotNotFoundError(
                    f"File '{path}' not found in git repository. This might be a new system."
                )
            raise SnapshotHistoryError(f"Git command failed: {error}")
        return result.stdout

    def get_last_commit_date(self, path: Path) -> datetime | None:
        """Return the date of the last commit touching path, or None if never committed."""
        path = Path(path)
        try:
            result = self._run(path, "log", "-1", "--format=%ci", "--", path.name)
        except SnapshotHistoryError as e:
            logger.error(f"Error while getting last commit date for {path}: {e}")
            return None

        output = result.stdout.strip()
        if result.returncode != 0 or not output:
            logger.debug(f"No commit found for {path}: {result.stderr.strip()}")
            return None
        try:
            return datetime.strptime(output, COMMIT_DATE_FORMAT)
        except ValueError:
            logger.warning(f"Failed to parse commit date for {path}. Raw output: {output}")
            return None
