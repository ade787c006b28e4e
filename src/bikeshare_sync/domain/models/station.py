"""Station domain model."""

import re
from dataclasses import dataclass, field
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_station_name(name: str | None) -> str:
    """Collapse whitespace runs to a single space and trim."""
    if not name:
        return ""
    return _WHITESPACE_RUN.sub(" ", name).strip()


@dataclass(frozen=True)
class SourceElement:
    """Map-data element a station was read from (OSM node, way or relation)."""

    element_id: str
    element_type: str
    version: int = 0
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)


@dataclass(frozen=True)
class Station:
    """Represents a bike-share docking station.

    The name is whitespace-normalized on construction, so stations that only
    differ in spacing compare equal.
    """

    id: str
    name: str
    latitude: float
    longitude: float
    capacity: int = 0
    source: SourceElement | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_station_name(self.name))
        object.__setattr__(self, "capacity", _coerce_capacity(self.capacity))


def _coerce_capacity(value: Any) -> int:
    try:
        capacity = int(value)
    except (TypeError, ValueError):
        return 0
    return capacity if capacity > 0 else 0
