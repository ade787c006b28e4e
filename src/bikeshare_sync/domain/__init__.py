"""Domain layer - core models, ports and the station record format."""

from bikeshare_sync.domain.models import (
    BikeShareSystem,
    RenamedStation,
    Station,
    StationComparison,
)
from bikeshare_sync.domain.ports import (
    MapStationRepository,
    SnapshotHistory,
    SnapshotStore,
    StationFeedRepository,
)

__all__ = [
    "BikeShareSystem",
    "MapStationRepository",
    "RenamedStation",
    "SnapshotHistory",
    "SnapshotStore",
    "Station",
    "StationComparison",
    "StationFeedRepository",
]
