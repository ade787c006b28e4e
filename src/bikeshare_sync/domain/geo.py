"""Geodesic distance and coordinate rounding."""

import math

EARTH_RADIUS_METERS = 6_371_000.0
COORDINATE_PRECISION = 5


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points using the haversine formula.

    Args:
        lat1: Latitude of the first point (degrees).
        lon1: Longitude of the first point (degrees).
        lat2: Latitude of the second point (degrees).
        lon2: Longitude of the second point (degrees).

    Returns:
        Distance in meters.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def round_coordinate(value: float) -> float:
    """Round a coordinate to 5 decimal places (about 1.1 m at the equator)."""
    rounded = round(float(value), COORDINATE_PRECISION)
    # avoid "-0" in serialized output
    return rounded + 0.0


def format_coordinate(value: float) -> str:
    """Render a rounded coordinate with a '.' decimal point and no exponent.

    Trailing zeros are dropped, so 43.20000 becomes "43.2" and -79.0 becomes "-79".
    """
    text = f"{round_coordinate(value):.{COORDINATE_PRECISION}f}"
    text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
