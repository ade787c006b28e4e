"""Snapshot store port."""

from pathlib import Path
from typing import Protocol

from bikeshare_sync.domain.models.station import Station
from bikeshare_sync.domain.models.station_comparison import StationComparison


class SnapshotStore(Protocol):
    """Port for persisting snapshots and classification results."""

    def snapshot_path(self, system_name: str) -> Path:
        """Path of the full feed snapshot for a system."""
        ...

    def write_snapshot(self, system_name: str, stations: list[Station]) -> Path:
        """Write the full current feed snapshot."""
        ...

    def write_diff(self, system_name: str, comparison: StationComparison) -> list[Path]:
        """Write feed-vs-history classification files."""
        ...

    def write_map_snapshot(self, system_name: str, stations: list[Station]) -> Path:
        """Write the stations read from the map dataset."""
        ...

    def write_map_comparison(self, system_name: str, comparison: StationComparison) -> list[Path]:
        """Write feed-vs-map classification files."""
        ...

    def write_duplicate_report(
        self, system_name: str, stations: list[Station], duplicate_ids: list[str]
    ) -> Path | None:
        """Write map stations sharing an id, flagged for review."""
        ...
