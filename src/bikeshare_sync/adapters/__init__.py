"""Adapters layer - external system integrations."""

from bikeshare_sync.adapters.config import AppConfig, JsonSystemCatalog
from bikeshare_sync.adapters.console import AutoConfirmationPrompt, ConsoleConfirmationPrompt
from bikeshare_sync.adapters.files import DataPaths, FileSystemSetup, GeoJsonSnapshotStore
from bikeshare_sync.adapters.gbfs_api import GbfsStationRepository
from bikeshare_sync.adapters.git import GitSnapshotHistory
from bikeshare_sync.adapters.maproulette_api import MaprouletteTaskService
from bikeshare_sync.adapters.osm import OsmChangeWriter
from bikeshare_sync.adapters.overpass_api import OverpassStationRepository

__all__ = [
    "AppConfig",
    "AutoConfirmationPrompt",
    "ConsoleConfirmationPrompt",
    "DataPaths",
    "FileSystemSetup",
    "GbfsStationRepository",
    "GeoJsonSnapshotStore",
    "GitSnapshotHistory",
    "JsonSystemCatalog",
    "MaprouletteTaskService",
    "OsmChangeWriter",
    "OverpassStationRepository",
]
