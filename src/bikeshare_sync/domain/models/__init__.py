"""Domain models for bike-share station syncing."""

from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem
from bikeshare_sync.domain.models.run_summary import RunSummary
from bikeshare_sync.domain.models.setup_validation import SetupValidation
from bikeshare_sync.domain.models.station import SourceElement, Station, normalize_station_name
from bikeshare_sync.domain.models.station_comparison import RenamedStation, StationComparison

__all__ = [
    "BikeShareSystem",
    "RenamedStation",
    "RunSummary",
    "SetupValidation",
    "SourceElement",
    "Station",
    "StationComparison",
    "normalize_station_name",
]
