"""Ports (interfaces) for the ports-and-adapters architecture."""

from bikeshare_sync.domain.ports.changeset_writer import ChangesetWriter
from bikeshare_sync.domain.ports.confirmation_prompt import ConfirmationPrompt
from bikeshare_sync.domain.ports.map_station_repository import MapStationRepository
from bikeshare_sync.domain.ports.review_task_service import ReviewTaskService
from bikeshare_sync.domain.ports.snapshot_history import SnapshotHistory
from bikeshare_sync.domain.ports.snapshot_store import SnapshotStore
from bikeshare_sync.domain.ports.station_feed_repository import StationFeedRepository
from bikeshare_sync.domain.ports.system_catalog import SystemCatalog
from bikeshare_sync.domain.ports.system_setup import SystemSetup

__all__ = [
    "ChangesetWriter",
    "ConfirmationPrompt",
    "MapStationRepository",
    "ReviewTaskService",
    "SnapshotHistory",
    "SnapshotStore",
    "StationFeedRepository",
    "SystemCatalog",
    "SystemSetup",
]
