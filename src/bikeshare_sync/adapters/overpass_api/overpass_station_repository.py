"""Map station repository reading docking stations from OpenStreetMap."""

import logging
from typing import TYPE_CHECKING, Any

from bikeshare_sync.adapters.files.data_paths import DataPaths
from bikeshare_sync.adapters.overpass_api.element_parser import (
    index_nodes,
    missing_way_node_ids,
    parse_elements,
)
from bikeshare_sync.adapters.overpass_api.http_client import (
    DEFAULT_OVERPASS_URL,
    DEFAULT_TIMEOUT_SECONDS,
    OVERPASS_MIN_DELAY_SECONDS,
    OverpassHttpClient,
)
from bikeshare_sync.adapters.overpass_api.queries import build_default_query, build_nodes_query
from bikeshare_sync.domain.errors import MapDataError
from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem
from bikeshare_sync.domain.models.station import Station
from bikeshare_sync.domain.ports.map_station_repository import MapStationRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

QUERY_FILE = "stations.overpass"


class OverpassStationRepository(MapStationRepository):
    """Adapter running each system's stations.overpass query."""

    def __init__(
        self,
        session: "ClientSession",
        paths: DataPaths,
        url: str = DEFAULT_OVERPASS_URL,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        min_delay_seconds: float = OVERPASS_MIN_DELAY_SECONDS,
    ) -> None:
        """Initialize the repository.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            paths: Data directory layout holding stations.overpass.
            url: Overpass interpreter endpoint.
            timeout_seconds: Total timeout for one query.
            min_delay_seconds: Minimum delay between consecutive queries.
        """
        self._paths = paths
        self._http_client = OverpassHttpClient(session, url, timeout_seconds, min_delay_seconds)

    async def ensure_query(self, system: BikeShareSystem) -> None:
        """Write a default stations.overpass for the system's city if none exists."""
        if self._paths.exists(system.name, QUERY_FILE):
            return
        self._paths.write_text(system.name, QUERY_FILE, build_default_query(system.city or system.name))
        logger.info(f"Created default {QUERY_FILE} for {system.name}")

    def _load_query(self, system: BikeShareSystem) -> str:
        try:
            query = self._paths.read_text(system.name, QUERY_FILE)
        except FileNotFoundError:
            logger.warning(
                f"{QUERY_FILE} not found for {system.name}. Using default query for "
                f"'{system.city or system.name}'."
            )
            return build_default_query(system.city or system.name)
        logger.info(f"Using system-specific Overpass query {self._paths.file_path(system.name, QUERY_FILE)}")
        return query

    async def _fetch_nodes(self, node_ids: set[int]) -> dict[int, dict[str, Any]]:
        logger.debug(f"Fetching {len(node_ids)} missing nodes in batch for way locations")
        try:
            response = await self._http_client.run_query(build_nodes_query(node_ids))
        except MapDataError as e:
            logger.warning(f"Batch node fetch failed: {e}")
            return {}
        elements = response.get("elements")
        return index_nodes(elements) if isinstance(elements, list) else {}

    async def fetch_stations(self, system: BikeShareSystem) -> list[Station]:
        """Fetch docking stations mapped in OSM for a system.

        Raises:
            MapDataError: If the Overpass request fails or returns no elements array.
        """
        response = await self._http_client.run_query(self._load_query(system))
        elements = response.get("elements")
        if not isinstance(elements, list):
            raise MapDataError("Overpass response missing elements array")

        nodes = index_nodes(elements)
        missing = missing_way_node_ids(elements, nodes)
        if missing:
            nodes.update(await self._fetch_nodes(missing))

        return parse_elements(elements, nodes)
