"""Changeset writer port."""

from pathlib import Path
from typing import Protocol

from bikeshare_sync.domain.models.station_comparison import RenamedStation


class ChangesetWriter(Protocol):
    """Port for turning renames into a bulk edit script for the map dataset."""

    def write_rename_changes(self, system_name: str, renamed: list[RenamedStation]) -> Path | None:
        """Write the edit script; returns None when there is nothing to write."""
        ...
