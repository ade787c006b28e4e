"""Snapshot store writing line-oriented GeoJSON files per system."""

import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from bikeshare_sync.adapters.files.data_paths import DataPaths
from bikeshare_sync.domain.models.station import Station
from bikeshare_sync.domain.models.station_comparison import RenamedStation, StationComparison
from bikeshare_sync.domain.ports.snapshot_store import SnapshotStore
from bikeshare_sync.domain.station_records import (
    decode_snapshot,
    encode_flagged_station,
    encode_renamed_station,
    encode_station,
)

logger = logging.getLogger(__name__)

SNAPSHOT_FILE = "bikeshare.geojson"
ADDED_FILE = "bikeshare_added.geojson"
TO_REVIEW_FILE = "bikeshare_toreview.geojson"
REMOVED_FILE = "bikeshare_removed.geojson"
MOVED_FILE = "bikeshare_moved.geojson"
RENAMED_FILE = "bikeshare_renamed.geojson"

MISSING_IN_OSM_FILE = "bikeshare_missing_in_osm.geojson"
EXTRA_IN_OSM_FILE = "bikeshare_extra_in_osm.geojson"
MOVED_IN_OSM_FILE = "bikeshare_moved_in_osm.geojson"
RENAMED_IN_OSM_FILE = "bikeshare_renamed_in_osm.geojson"

OSM_SNAPSHOT_FILE = "bikeshare_osm.geojson"
OSM_DUPLICATES_FILE = "bikeshare_osm_duplicates.geojson"


class GeoJsonSnapshotStore(SnapshotStore):
    """Writes stations one record per line, sorted by id, under the data directory."""

    def __init__(self, paths: DataPaths) -> None:
        self._paths = paths

    def snapshot_path(self, system_name: str) -> Path:
        return self._paths.file_path(system_name, SNAPSHOT_FILE)

    def _write_stations(self, system_name: str, file_name: str, stations: Iterable[Station]) -> Path:
        lines = [
            encode_station(station, operator=system_name)
            for station in sorted(stations, key=lambda s: s.id)
        ]
        return self._paths.write_text(system_name, file_name, "\n".join(lines))

    def _write_renamed(
        self, system_name: str, file_name: str, renamed: Iterable[RenamedStation]
    ) -> Path:
        lines = [
            encode_renamed_station(pair.current, pair.previous_name, operator=system_name)
            for pair in sorted(renamed, key=lambda p: p.id)
        ]
        return self._paths.write_text(system_name, file_name, "\n".join(lines))

    def write_snapshot(self, system_name: str, stations: list[Station]) -> Path:
        path = self._write_stations(system_name, SNAPSHOT_FILE, stations)
        logger.info(f"Wrote {len(stations)} stations to {path}")
        return path

    def write_diff(self, system_name: str, comparison: StationComparison) -> list[Path]:
        logger.info(
            f"Generating diff files for {system_name}: added={len(comparison.added)} "
            f"removed={len(comparison.removed)} moved={len(comparison.moved)} "
            f"renamed={len(comparison.renamed)}"
        )
        return [
            self._write_renamed(system_name, RENAMED_FILE, comparison.renamed),
            self._write_stations(system_name, ADDED_FILE, comparison.added),
            self._write_stations(system_name, TO_REVIEW_FILE, comparison.added),
            self._write_stations(system_name, REMOVED_FILE, comparison.removed),
            self._write_stations(system_name, MOVED_FILE, comparison.moved),
        ]

    def write_map_snapshot(self, system_name: str, stations: list[Station]) -> Path:
        path = self._write_stations(system_name, OSM_SNAPSHOT_FILE, stations)
        logger.info(f"Saved {len(stations)} OSM stations to {path}")
        return path

    def write_map_comparison(self, system_name: str, comparison: StationComparison) -> list[Path]:
        """Write feed-vs-OSM files.

        Stations added relative to OSM are missing in OSM; removed ones only
        exist in OSM.
        """
        logger.info(
            f"Generating OSM comparison files for {system_name}: "
            f"missing={len(comparison.added)} extra={len(comparison.removed)} "
            f"moved={len(comparison.moved)} renamed={len(comparison.renamed)}"
        )
        return [
            self._write_stations(system_name, MISSING_IN_OSM_FILE, comparison.added),
            self._write_stations(system_name, EXTRA_IN_OSM_FILE, comparison.removed),
            self._write_stations(system_name, MOVED_IN_OSM_FILE, comparison.moved),
            self._write_renamed(system_name, RENAMED_IN_OSM_FILE, comparison.renamed),
        ]

    def write_duplicate_report(
        self, system_name: str, stations: list[Station], duplicate_ids: list[str]
    ) -> Path | None:
        if not duplicate_ids:
            return None

        wanted = set(duplicate_ids)
        flagged = [station for station in stations if station.id in wanted]
        counts = Counter(station.id for station in flagged)

        logger.warning(
            f"Found {len(wanted)} duplicate ref values in OSM data for {system_name}. "
            f"Total affected stations: {len(flagged)}"
        )
        lines = []
        for station in sorted(flagged, key=lambda s: s.id):
            message = f"Duplicate ref '{station.id}' appears {counts[station.id]} times in OSM"
            if station.source is not None:
                message += f" (this is OSM {station.source.element_type}/{station.source.element_id})"
            lines.append(encode_flagged_station(station, message, operator=system_name))

        path = self._paths.write_text(system_name, OSM_DUPLICATES_FILE, "\n".join(lines))
        logger.info(f"Duplicate validation report saved to {path}")
        return path

    def read_snapshot(self, system_name: str, file_name: str = SNAPSHOT_FILE) -> list[Station]:
        """Decode a stored snapshot file.

        Raises:
            FileNotFoundError: If the file does not exist.
            StationRecordFormatError: If a line is malformed.
        """
        return decode_snapshot(self._paths.read_text(system_name, file_name))
