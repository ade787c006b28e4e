"""Station feed repository reading GBFS station_information."""

import logging
from typing import TYPE_CHECKING, Any

from bikeshare_sync.adapters.gbfs_api.http_client import DEFAULT_TIMEOUT_SECONDS, GbfsHttpClient
from bikeshare_sync.domain.errors import FeedFetchError
from bikeshare_sync.domain.models.station import Station
from bikeshare_sync.domain.ports.station_feed_repository import StationFeedRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class GbfsStationRepository(StationFeedRepository):
    """Adapter turning a GBFS station_information document into stations."""

    def __init__(
        self, session: "ClientSession", timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            timeout_seconds: Total timeout for one feed request.
        """
        self._http_client = GbfsHttpClient(session, timeout_seconds)

    async def fetch_stations(self, url: str) -> list[Station]:
        """Fetch all stations listed by a station_information feed.

        Args:
            url: station_information endpoint of the system.

        Returns:
            Stations in feed order; malformed entries are skipped.

        Raises:
            ValueError: If url is empty.
            FeedFetchError: If the feed cannot be fetched or has no data.stations array.
        """
        if not url or not url.strip():
            raise ValueError("API URL must be provided")

        logger.info(f"Fetching bike share data from {url}")
        document = await self._http_client.fetch_json(url)
        stations = parse_station_information(document)
        logger.info(f"Fetched {len(stations)} bike share stations from {url}")
        return stations


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _parse_entry(entry: Any) -> Station | None:
    if not isinstance(entry, dict):
        return None

    station_id = entry.get("station_id")
    if _is_number(station_id):
        station_id = str(station_id)
    name = entry.get("name")
    latitude = entry.get("lat")
    longitude = entry.get("lon")

    if not isinstance(station_id, str) or not station_id:
        return None
    if not isinstance(name, str) or not name:
        return None
    if not _is_number(latitude) or not _is_number(longitude):
        return None
    if latitude == 0 or longitude == 0:
        return None

    capacity = entry.get("capacity")
    return Station(
        id=station_id,
        name=name,
        latitude=float(latitude),
        longitude=float(longitude),
        capacity=capacity if _is_number(capacity) else 0,
    )


def parse_station_information(document: Any) -> list[Station]:
    """Parse a decoded station_information document.

    Raises:
        FeedFetchError: If the document has no data.stations array.
    """
    data = document.get("data") if isinstance(document, dict) else None
    entries = data.get("stations") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise FeedFetchError("GBFS station feed missing data.stations array")

    stations: list[Station] = []
    for entry in entries:
        station = _parse_entry(entry)
        if station is None:
            logger.debug(f"Skipping malformed station entry in GBFS feed: {entry!r}")
            continue
        stations.append(station)
    return stations
