"""Tests for distance and coordinate rounding."""

import pytest

from bikeshare_sync.domain.geo import distance_meters, format_coordinate, round_coordinate


class TestDistanceMeters:
    """Tests for distance_meters."""

    @pytest.mark.parametrize(
        ("lat", "lon"), [(0.0, 0.0), (43.65, -79.38), (-33.86, 151.21), (89.9, 179.9)]
    )
    def test_same_point_is_zero(self, lat: float, lon: float) -> None:
        """Given one point twice, when measuring, then distance is zero."""
        assert distance_meters(lat, lon, lat, lon) == 0.0

    def test_is_symmetric(self) -> None:
        """Given two points, when swapping them, then distance is unchanged."""
        forward = distance_meters(43.6532, -79.3832, 45.5017, -73.5673)
        backward = distance_meters(45.5017, -73.5673, 43.6532, -79.3832)

        assert forward == pytest.approx(backward)

    def test_thousandth_degree_latitude_at_equator(self) -> None:
        """Given 0.001 degrees of latitude at the equator, then distance is about 111 m."""
        distance = distance_meters(0.0, 0.0, 0.001, 0.0)

        assert 100 <= distance <= 120
        assert distance == pytest.approx(111.19, abs=0.1)

    def test_small_separations_scale_linearly(self) -> None:
        """Given sub-kilometer offsets, when doubling the offset, then distance doubles."""
        single = distance_meters(43.0, -79.0, 43.0001, -79.0)
        double = distance_meters(43.0, -79.0, 43.0002, -79.0)

        assert double == pytest.approx(2 * single, rel=1e-6)

    def test_toronto_to_montreal(self) -> None:
        """Given two cities, when measuring, then distance matches the known value."""
        distance = distance_meters(43.6532, -79.3832, 45.5017, -73.5673)

        assert distance == pytest.approx(504_000, rel=0.01)


class TestRoundCoordinate:
    """Tests for round_coordinate and format_coordinate."""

    @pytest.mark.parametrize("value", [43.123456789, -79.000004, 0.000005, 12.3, -0.0000001])
    def test_rounding_is_idempotent(self, value: float) -> None:
        """Given any coordinate, when rounding twice, then result equals rounding once."""
        once = round_coordinate(value)

        assert round_coordinate(once) == once

    def test_rounds_to_five_decimals(self) -> None:
        """Given a long coordinate, when rounding, then 5 decimals remain."""
        assert round_coordinate(43.6532149) == 43.65321

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (43.2, "43.2"),
            (-79.0, "-79"),
            (43.123456, "43.12346"),
            (0.00001, "0.00001"),
            (-0.000001, "0"),
            (0.0, "0"),
        ],
    )
    def test_format_coordinate(self, value: float, expected: str) -> None:
        """Given a coordinate, when formatting, then no exponent and no trailing zeros."""
        assert format_coordinate(value) == expected
