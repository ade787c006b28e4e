"""Overpass API adapters for OpenStreetMap data."""

from bikeshare_sync.adapters.overpass_api.overpass_station_repository import (
    OverpassStationRepository,
)
from bikeshare_sync.adapters.overpass_api.queries import build_default_query

__all__ = ["OverpassStationRepository", "build_default_query"]
