"""Station feed repository port."""

from typing import Protocol

from bikeshare_sync.domain.models.station import Station


class StationFeedRepository(Protocol):
    """Port for reading the official real-time station feed."""

    async def fetch_stations(self, url: str) -> list[Station]:
        """Fetch all stations published at a station_information URL."""
        ...
