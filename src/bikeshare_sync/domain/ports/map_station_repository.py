"""Map-data station repository port."""

from typing import Protocol

from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem
from bikeshare_sync.domain.models.station import Station


class MapStationRepository(Protocol):
    """Port for reading stations from the community-maintained map dataset."""

    async def ensure_query(self, system: BikeShareSystem) -> None:
        """Make sure a stored query exists for the system."""
        ...

    async def fetch_stations(self, system: BikeShareSystem) -> list[Station]:
        """Fetch the stations mapped for the system."""
        ...
