"""Application services (use cases) for station reconciliation."""

from bikeshare_sync.application.services.station_comparison import (
    compare_stations,
    find_duplicate_ids,
    index_by_id,
)
from bikeshare_sync.application.services.station_name_prefixer import apply_station_name_prefix
from bikeshare_sync.application.services.sync_service import BikeShareSyncService

__all__ = [
    "BikeShareSyncService",
    "apply_station_name_prefix",
    "compare_stations",
    "find_duplicate_ids",
    "index_by_id",
]
