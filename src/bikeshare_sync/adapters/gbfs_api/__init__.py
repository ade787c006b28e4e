"""GBFS feed adapters."""

from bikeshare_sync.adapters.gbfs_api.gbfs_station_repository import GbfsStationRepository

__all__ = ["GbfsStationRepository"]
