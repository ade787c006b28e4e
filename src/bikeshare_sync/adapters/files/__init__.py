"""File-system adapters for the per-system data directory."""

from bikeshare_sync.adapters.files.data_paths import DataPaths, sanitize_system_name
from bikeshare_sync.adapters.files.geojson_snapshot_store import GeoJsonSnapshotStore
from bikeshare_sync.adapters.files.system_setup import FileSystemSetup

__all__ = ["DataPaths", "FileSystemSetup", "GeoJsonSnapshotStore", "sanitize_system_name"]
