"""Line-oriented GeoJSON records for station snapshots.

Each station is serialized as a single line: an ASCII record separator
(0x1E) followed by a one-feature GeoJSON FeatureCollection. One record per
line keeps version-control diffs at whole-record granularity.
"""

import json
from collections.abc import Iterable
from typing import Any, NoReturn

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bikeshare_sync.domain.errors import StationRecordFormatError
from bikeshare_sync.domain.geo import format_coordinate, round_coordinate
from bikeshare_sync.domain.models.station import Station, normalize_station_name

RECORD_SEPARATOR = "\x1e"


class _RecordProperties(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    address: str
    name: str
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)
    capacity: int = 0

    @field_validator("capacity", mode="before")
    @classmethod
    def parse_capacity(cls, value: Any) -> int:
        """Fall back to 0 for capacities that are not integers."""
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0


class _Feature(BaseModel):
    model_config = ConfigDict(extra="allow")

    properties: _RecordProperties


class _FeatureCollection(BaseModel):
    model_config = ConfigDict(extra="allow")

    features: list[Any] = Field(min_length=1)


def _build_record(station: Station, extra_properties: dict[str, str], operator: str | None) -> str:
    latitude = round_coordinate(station.latitude)
    longitude = round_coordinate(station.longitude)

    properties: dict[str, str] = {
        "address": station.id,
        "latitude": format_coordinate(latitude),
        "longitude": format_coordinate(longitude),
        "name": station.name.strip(),
    }
    properties.update(extra_properties)
    properties["capacity"] = str(station.capacity)
    if operator is not None:
        properties["operator"] = operator

    document = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
                "properties": properties,
            }
        ],
    }
    return RECORD_SEPARATOR + json.dumps(document, ensure_ascii=False, separators=(",", ":"))


def encode_station(station: Station, operator: str | None = None) -> str:
    """Serialize a station as one self-delimited record line."""
    return _build_record(station, {}, operator)


def encode_renamed_station(station: Station, old_name: str, operator: str | None = None) -> str:
    """Serialize a renamed station; the record carries the previous name as oldName."""
    return _build_record(station, {"oldName": old_name.strip()}, operator)


def encode_flagged_station(station: Station, error: str, operator: str | None = None) -> str:
    """Serialize a station together with a data-quality message for reviewers."""
    return _build_record(station, {"error": error}, operator)


def encode_snapshot(stations: Iterable[Station], operator: str | None = None) -> str:
    """Serialize stations one record per line, in the order given."""
    return "\n".join(encode_station(station, operator) for station in stations)


def _describe_error(error: dict[str, Any]) -> tuple[str, str | None]:
    loc = tuple(error.get("loc", ()))
    error_type = error.get("type", "")

    if error_type == "json_invalid":
        return f"Invalid JSON: {error.get('msg', '')}", None
    if loc == () and error_type == "model_type":
        return "Record is not a JSON object", None
    if loc == ("features",):
        if error_type == "missing":
            return "Missing features array", "features"
        if error_type == "too_short":
            return "Features array empty", "features"
        return "features must be an array", "features"
    if loc == ("properties",):
        if error_type == "missing":
            return "Missing properties object", "properties"
        return "properties must be an object", "properties"
    if len(loc) >= 2 and loc[0] == "properties":
        field = str(loc[1])
        if error_type == "missing" or error.get("input", ...) is None:
            return f"Missing required property '{field}'", field
        if field in ("latitude", "longitude"):
            return f"Property '{field}' is not a valid coordinate", field
        return f"Property '{field}' is invalid: {error.get('msg', '')}", field
    return f"Invalid record: {error.get('msg', '')}", None


def _raise_format_error(exc: ValidationError, feature_level: bool = False) -> NoReturn:
    first = exc.errors()[0]
    if feature_level and tuple(first.get("loc", ())) == () and first.get("type") == "model_type":
        raise StationRecordFormatError("First feature is not an object", "features") from exc
    message, field = _describe_error(first)
    raise StationRecordFormatError(message, field) from exc


def decode_station(line: str) -> Station:
    """Parse one record line back into a Station.

    Raises:
        StationRecordFormatError: If the line is empty, not valid JSON, has no
            features, or lacks one of address, name, latitude or longitude.
    """
    if line is None or not line.strip():
        raise StationRecordFormatError("Record line is empty")

    text = line.strip().lstrip(RECORD_SEPARATOR)

    try:
        collection = _FeatureCollection.model_validate_json(text)
    except ValidationError as exc:
        _raise_format_error(exc)

    try:
        feature = _Feature.model_validate(collection.features[0])
    except ValidationError as exc:
        _raise_format_error(exc, feature_level=True)

    properties = feature.properties
    return Station(
        id=properties.address,
        name=normalize_station_name(properties.name),
        capacity=properties.capacity,
        latitude=round_coordinate(properties.latitude),
        longitude=round_coordinate(properties.longitude),
    )


def decode_snapshot(text: str) -> list[Station]:
    """Parse a snapshot file: one record per line, blank lines ignored.

    Raises:
        StationRecordFormatError: For the first malformed line, with its line number.
    """
    stations: list[Station] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            stations.append(decode_station(line))
        except StationRecordFormatError as exc:
            raise StationRecordFormatError(
                str(exc), field=exc.field, line_number=line_number
            ) from exc
    return stations
