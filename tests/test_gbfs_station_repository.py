"""Tests for the GBFS station feed adapter."""

import logging
from unittest.mock import MagicMock

import aiohttp
import pytest

from bikeshare_sync.adapters.gbfs_api import GbfsStationRepository
from bikeshare_sync.adapters.gbfs_api.gbfs_station_repository import parse_station_information
from bikeshare_sync.domain.errors import FeedFetchError
from bikeshare_sync.domain.models import Station

FEED_URL = "https://tor.publicbikesystem.net/ube/gbfs/v1/en/station_information"


def _feed(*entries: dict) -> dict:
    return {"last_updated": 1700000000, "ttl": 10, "data": {"stations": list(entries)}}


class TestParseStationInformation:
    """Tests for parse_station_information."""

    def test_parses_valid_entries(self) -> None:
        """Given well-formed entries, when parsing, then stations keep feed order."""
        stations = parse_station_information(
            _feed(
                {"station_id": "7000", "name": "Fort York  Blvd", "lat": 43.6, "lon": -79.3, "capacity": 35},
                {"station_id": "7001", "name": "Wellesley", "lat": 43.66, "lon": -79.38},
            )
        )

        assert stations == [
            Station("7000", "Fort York Blvd", 43.6, -79.3, 35),
            Station("7001", "Wellesley", 43.66, -79.38, 0),
        ]

    def test_numeric_station_id_becomes_text(self) -> None:
        """Given a numeric station_id, when parsing, then the id is a string."""
        stations = parse_station_information(_feed({"station_id": 42, "name": "A", "lat": 1.0, "lon": 2.0}))

        assert stations[0].id == "42"

    @pytest.mark.parametrize(
        "entry",
        [
            {"name": "No id", "lat": 1.0, "lon": 2.0},
            {"station_id": "", "name": "Empty id", "lat": 1.0, "lon": 2.0},
            {"station_id": "1", "lat": 1.0, "lon": 2.0},
            {"station_id": "1", "name": "", "lat": 1.0, "lon": 2.0},
            {"station_id": "1", "name": "Text lat", "lat": "1.0", "lon": 2.0},
            {"station_id": "1", "name": "Bool lon", "lat": 1.0, "lon": True},
            {"station_id": "1", "name": "Zero lat", "lat": 0, "lon": 2.0},
            {"station_id": "1", "name": "Zero lon", "lat": 1.0, "lon": 0.0},
            "not an object",
        ],
    )
    def test_malformed_entries_are_skipped(self, entry: object) -> None:
        """Given a malformed entry, when parsing, then it is skipped."""
        stations = parse_station_information(
            _feed(entry, {"station_id": "ok", "name": "Valid", "lat": 1.0, "lon": 2.0})  # type: ignore[arg-type]
        )

        assert [s.id for s in stations] == ["ok"]

    def test_non_numeric_capacity_defaults_to_zero(self) -> None:
        """Given a text capacity, when parsing, then capacity is 0."""
        stations = parse_station_information(
            _feed({"station_id": "1", "name": "A", "lat": 1.0, "lon": 2.0, "capacity": "ten"})
        )

        assert stations[0].capacity == 0

    @pytest.mark.parametrize("document", [{}, {"data": {}}, {"data": {"stations": {}}}, [], None])
    def test_missing_stations_array(self, document: object) -> None:
        """Given no data.stations array, when parsing, then FeedFetchError is raised."""
        with pytest.raises(FeedFetchError, match="missing data.stations"):
            parse_station_information(document)


class TestGbfsStationRepository:
    """Tests for GbfsStationRepository."""

    @pytest.mark.asyncio
    async def test_fetch_stations(self, fake_response: type) -> None:
        """Given a 200 response, when fetching, then parsed stations are returned."""
        session = MagicMock()
        session.get.return_value = fake_response(
            200, _feed({"station_id": "1", "name": "A", "lat": 1.0, "lon": 2.0})
        )

        stations = await GbfsStationRepository(session).fetch_stations(FEED_URL)

        assert stations == [Station("1", "A", 1.0, 2.0)]
        assert session.get.call_args.args == (FEED_URL,)

    @pytest.mark.asyncio
    async def test_non_200_raises(self, fake_response: type) -> None:
        """Given a server error, when fetching, then FeedFetchError carries the status."""
        session = MagicMock()
        session.get.return_value = fake_response(503, text="Service Unavailable")

        with pytest.raises(FeedFetchError, match="503"):
            await GbfsStationRepository(session).fetch_stations(FEED_URL)

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped(self) -> None:
        """Given a client error, when fetching, then FeedFetchError is raised."""
        session = MagicMock()
        session.get.side_effect = aiohttp.ClientError("connection reset")

        with pytest.raises(FeedFetchError, match="Failed to fetch bike share data"):
            await GbfsStationRepository(session).fetch_stations(FEED_URL)

    @pytest.mark.asyncio
    async def test_invalid_json_is_wrapped(self, fake_response: type) -> None:
        """Given an unparseable body, when fetching, then FeedFetchError is raised."""
        session = MagicMock()
        session.get.return_value = fake_response(200, ValueError("Expecting value"))

        with pytest.raises(FeedFetchError):
            await GbfsStationRepository(session).fetch_stations(FEED_URL)

    @pytest.mark.asyncio
    async def test_empty_url_rejected(self) -> None:
        """Given an empty URL, when fetching, then ValueError is raised."""
        with pytest.raises(ValueError, match="API URL must be provided"):
            await GbfsStationRepository(MagicMock()).fetch_stations("  ")

    @pytest.mark.asyncio
    async def test_request_logged_when_enabled(
        self, fake_response: type, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given BIKESHARE_LOG_REQUESTS=true, when fetching, then the request is logged."""
        monkeypatch.setenv("BIKESHARE_LOG_REQUESTS", "true")
        session = MagicMock()
        session.get.return_value = fake_response(200, _feed())

        with caplog.at_level(logging.INFO):
            await GbfsStationRepository(session).fetch_stations(FEED_URL)

        assert f"GET {FEED_URL}" in caplog.text
