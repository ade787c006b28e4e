"""Station reconciliation: classify stations between two snapshots."""

from collections import Counter
from collections.abc import Iterable

from bikeshare_sync.domain.geo import distance_meters
from bikeshare_sync.domain.models import RenamedStation, Station, StationComparison


def index_by_id(stations: Iterable[Station]) -> dict[str, Station]:
    """Map station id to station; when an id repeats, the last occurrence wins."""
    return {station.id: station for station in stations}


def find_duplicate_ids(stations: Iterable[Station]) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    counts = Counter(station.id for station in stations)
    return [station_id for station_id, count in counts.items() if count > 1]


def compare_stations(
    current: Iterable[Station],
    reference: Iterable[Station],
    move_tolerance_meters: float,
) -> StationComparison:
    """Classify stations as added, removed, moved or renamed.

    Stations are matched by id. A matched station further away than
    move_tolerance_meters is reported as moved only, even if its name also
    changed; within tolerance, a differing name makes it renamed. Unchanged
    stations are not reported. The order of each list is not significant;
    callers that need stable output sort by id.

    Args:
        current: The newer snapshot.
        reference: The snapshot to compare against.
        move_tolerance_meters: Largest distance still treated as the same position.

    Returns:
        StationComparison with the four classified lists.
    """
    current_by_id = index_by_id(current)
    reference_by_id = index_by_id(reference)

    added: list[Station] = []
    moved: list[Station] = []
    renamed: list[RenamedStation] = []

    for station_id, current_station in current_by_id.items():
        reference_station = reference_by_id.get(station_id)
        if reference_station is None:
            added.append(current_station)
            continue

        distance = distance_meters(
            reference_station.latitude,
            reference_station.longitude,
            current_station.latitude,
            current_station.longitude,
        )
        if distance > move_tolerance_meters:
            moved.append(current_station)
        elif current_station.name != reference_station.name:
            renamed.append(RenamedStation(current=current_station, previous=reference_station))

    removed = [
        station for station_id, station in reference_by_id.items() if station_id not in current_by_id
    ]

    return StationComparison(added=added, removed=removed, moved=moved, renamed=renamed)
