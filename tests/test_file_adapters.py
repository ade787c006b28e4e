"""Tests for data directory adapters."""

from pathlib import Path

import pytest

from bikeshare_sync.adapters.files import (
    DataPaths,
    FileSystemSetup,
    GeoJsonSnapshotStore,
    sanitize_system_name,
)
from bikeshare_sync.adapters.files.system_setup import build_added_instructions
from bikeshare_sync.domain.errors import SystemSetupError
from bikeshare_sync.domain.models import (
    BikeShareSystem,
    RenamedStation,
    SourceElement,
    Station,
    StationComparison,
)
from bikeshare_sync.domain.station_records import decode_station

SYSTEM_NAME = "Bike Share Toronto"


@pytest.fixture
def paths(tmp_path: Path) -> DataPaths:
    return DataPaths(tmp_path)


@pytest.fixture
def system() -> BikeShareSystem:
    return BikeShareSystem.model_validate(
        {
            "id": 1,
            "name": SYSTEM_NAME,
            "city": "Toronto",
            "gbfs_api": "https://x",
            "brand:wikidata": "Q17018523",
        }
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Bike Share Toronto", "Bike Share Toronto"),
        ("a/b\\c:d", "a_b_c_d"),
        ("../etc", "_etc"),
        ("Vélo.Paris", "VéloParis"),
        ("...", "unnamed_system"),
        ("   ", "unnamed_system"),
    ],
)
def test_sanitize_system_name(name: str, expected: str) -> None:
    """Given a system name, when sanitizing, then it is a single safe directory name."""
    assert sanitize_system_name(name) == expected


def test_data_paths_stay_inside_data_dir(tmp_path: Path) -> None:
    """Given a traversal attempt, then the system directory stays inside the data directory."""
    paths = DataPaths(tmp_path)

    assert paths.system_dir("../../outside").parent == tmp_path


class TestGeoJsonSnapshotStore:
    """Tests for GeoJsonSnapshotStore."""

    def test_write_snapshot_sorts_by_id(self, paths: DataPaths) -> None:
        """Given unsorted stations, when writing, then records are sorted by id with operator set."""
        store = GeoJsonSnapshotStore(paths)

        path = store.write_snapshot(SYSTEM_NAME, [Station("b", "B", 43.0, -79.0), Station("a", "A", 43.1, -79.1)])

        lines = path.read_text(encoding="utf-8").split("\n")
        assert [decode_station(line).id for line in lines] == ["a", "b"]
        assert '"operator":"Bike Share Toronto"' in lines[0]
        assert path == store.snapshot_path(SYSTEM_NAME)

    def test_read_snapshot_round_trip(self, paths: DataPaths) -> None:
        """Given a written snapshot, when reading, then the stations come back."""
        store = GeoJsonSnapshotStore(paths)
        stations = [Station("1", "A", 43.12346, -79.65432, 9)]
        store.write_snapshot(SYSTEM_NAME, stations)

        assert store.read_snapshot(SYSTEM_NAME) == stations

    def test_write_diff_files(self, paths: DataPaths) -> None:
        """Given a comparison, when writing the diff, then every category file is written."""
        store = GeoJsonSnapshotStore(paths)
        added = Station("1", "New", 43.0, -79.0)
        renamed = RenamedStation(Station("2", "Now", 43.0, -79.0), Station("2", "Before", 43.0, -79.0))

        written = store.write_diff(SYSTEM_NAME, StationComparison(added=[added], renamed=[renamed]))

        assert [p.name for p in written] == [
            "bikeshare_renamed.geojson",
            "bikeshare_added.geojson",
            "bikeshare_toreview.geojson",
            "bikeshare_removed.geojson",
            "bikeshare_moved.geojson",
        ]
        assert written[1].read_text(encoding="utf-8") == written[2].read_text(encoding="utf-8")
        assert written[3].read_text(encoding="utf-8") == ""
        assert '"oldName":"Before"' in written[0].read_text(encoding="utf-8")

    def test_write_map_comparison_names(self, paths: DataPaths) -> None:
        """Given a feed-vs-OSM comparison, then added stations are missing in OSM."""
        store = GeoJsonSnapshotStore(paths)

        written = store.write_map_comparison(
            SYSTEM_NAME, StationComparison(added=[Station("1", "A", 43.0, -79.0)])
        )

        assert [p.name for p in written] == [
            "bikeshare_missing_in_osm.geojson",
            "bikeshare_extra_in_osm.geojson",
            "bikeshare_moved_in_osm.geojson",
            "bikeshare_renamed_in_osm.geojson",
        ]
        assert decode_station(written[0].read_text(encoding="utf-8")).id == "1"

    def test_duplicate_report(self, paths: DataPaths) -> None:
        """Given duplicate refs, when reporting, then each occurrence is flagged with its element."""
        store = GeoJsonSnapshotStore(paths)
        stations = [
            Station("7", "A", 43.0, -79.0, source=SourceElement("10", "node")),
            Station("7", "A", 43.1, -79.1, source=SourceElement("11", "way")),
            Station("8", "B", 43.2, -79.2),
        ]

        path = store.write_duplicate_report(SYSTEM_NAME, stations, ["7"])

        assert path is not None and path.name == "bikeshare_osm_duplicates.geojson"
        content = path.read_text(encoding="utf-8")
        assert content.count("\n") == 1
        assert "Duplicate ref '7' appears 2 times in OSM (this is OSM node/10)" in content
        assert "(this is OSM way/11)" in content

    def test_no_duplicate_report_without_duplicates(self, paths: DataPaths) -> None:
        """Given no duplicate ids, then no report is written."""
        assert GeoJsonSnapshotStore(paths).write_duplicate_report(SYSTEM_NAME, [], []) is None


class TestFileSystemSetup:
    """Tests for FileSystemSetup."""

    def test_new_system_is_invalid(self, paths: DataPaths) -> None:
        """Given no directory, when validating, then the directory is reported missing."""
        validation = FileSystemSetup(paths).validate(SYSTEM_NAME)

        assert validation.is_valid is False
        assert "System directory does not exist" in (validation.error_message or "")
        assert len(validation.missing_files) == 4

    def test_ensure_creates_files(self, paths: DataPaths, system: BikeShareSystem) -> None:
        """Given a new system, when ensuring, then instructions and the query are created."""
        setup = FileSystemSetup(paths)

        setup.ensure(system)

        assert setup.validate(SYSTEM_NAME).is_valid is True
        assert paths.exists(SYSTEM_NAME, "stations.overpass")
        added = paths.read_text(SYSTEM_NAME, "instructions/added.md")
        assert "brand:wikidata=Q17018523" in added
        assert "operator=Bike Share Toronto" in added
        setup.validate_instruction_files(SYSTEM_NAME)

    def test_ensure_keeps_existing_files(self, paths: DataPaths, system: BikeShareSystem) -> None:
        """Given customized files, when ensuring, then they are not overwritten."""
        paths.write_text(SYSTEM_NAME, "instructions/removed.md", "custom")
        paths.write_text(SYSTEM_NAME, "stations.overpass", "custom query")

        FileSystemSetup(paths).ensure(system)

        assert paths.read_text(SYSTEM_NAME, "instructions/removed.md") == "custom"
        assert paths.read_text(SYSTEM_NAME, "stations.overpass") == "custom query"

    def test_missing_files_are_listed(self, paths: DataPaths, system: BikeShareSystem) -> None:
        """Given a deleted instruction file, when validating, then it is listed."""
        setup = FileSystemSetup(paths)
        setup.ensure(system)
        paths.file_path(SYSTEM_NAME, "instructions/moved.md").unlink()

        validation = setup.validate(SYSTEM_NAME)

        assert validation.missing_files == ["instructions/moved.md"]
        assert "is missing required files" in (validation.error_message or "")

    def test_empty_instruction_file_blocks_tasks(self, paths: DataPaths, system: BikeShareSystem) -> None:
        """Given an empty instruction file, when validating for tasks, then SystemSetupError is raised."""
        setup = FileSystemSetup(paths)
        setup.ensure(system)
        paths.write_text(SYSTEM_NAME, "instructions/added.md", "  \n")

        with pytest.raises(SystemSetupError, match=r"instructions/added.md \(empty\)"):
            setup.validate_instruction_files(SYSTEM_NAME)

    def test_renamed_instructions_not_required_for_tasks(
        self, paths: DataPaths, system: BikeShareSystem
    ) -> None:
        """Given no renamed instructions, then task validation still passes."""
        setup = FileSystemSetup(paths)
        setup.ensure(system)
        paths.file_path(SYSTEM_NAME, "instructions/renamed.md").unlink()

        setup.validate_instruction_files(SYSTEM_NAME)


def test_added_instructions_with_network_brand() -> None:
    """Given a brand differing from the operator, then network tags are included."""
    text = build_added_instructions("City of Toronto", "Bike Share Toronto", "Q1")

    assert "network=Bike Share Toronto" in text
    assert "network:wikidata=Q1" in text
    assert "operator:type=public" in text
    assert "ref={{address}}" in text
