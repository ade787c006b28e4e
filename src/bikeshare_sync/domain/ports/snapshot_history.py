"""Snapshot history port."""

from datetime import datetime
from pathlib import Path
from typing import Protocol


class SnapshotHistory(Protocol):
    """Port for reading previously committed snapshot files."""

    def get_last_committed_version(self, path: Path) -> str:
        """Return the committed text of a snapshot file.

        Raises SnapshotNotFoundError when the file has never been committed and
        SnapshotHistoryError when the history cannot be read at all.
        """
        ...

    def get_last_commit_date(self, path: Path) -> datetime | None:
        """Return when the file was last committed, or None if never."""
        ...
