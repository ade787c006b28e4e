"""Operator prefix for station names."""

from dataclasses import replace

from bikeshare_sync.domain.models import Station


def apply_station_name_prefix(
    stations: list[Station], prefix: str | None
) -> tuple[list[Station], int]:
    """Prefix station names that do not already start with the prefix.

    The check is case-insensitive. Returns the new station list and the
    number of names changed.
    """
    if not prefix or not prefix.strip():
        return list(stations), 0

    prefixed: list[Station] = []
    applied = 0
    for station in stations:
        if station.name and not station.name.lower().startswith(prefix.lower()):
            prefixed.append(replace(station, name=prefix + station.name))
            applied += 1
        else:
            prefixed.append(station)
    return prefixed, applied
