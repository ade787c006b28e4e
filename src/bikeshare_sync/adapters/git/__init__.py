"""Git adapters."""

from bikeshare_sync.adapters.git.git_snapshot_history import GitSnapshotHistory

__all__ = ["GitSnapshotHistory"]
