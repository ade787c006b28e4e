"""HTTP client for the Overpass API.

API Documentation: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientTimeout

from bikeshare_sync.adapters.api_rate_limiter import ApiRateLimiter
from bikeshare_sync.adapters.api_request_logger import log_api_request
from bikeshare_sync.domain.errors import MapDataError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_TIMEOUT_SECONDS = 180
# Public Overpass instances allow roughly two concurrent slots per client.
OVERPASS_MIN_DELAY_SECONDS = 1.0


class OverpassHttpClient:
    """Posts Overpass QL queries and returns the decoded JSON response."""

    def __init__(
        self,
        session: "ClientSession",
        url: str = DEFAULT_OVERPASS_URL,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        min_delay_seconds: float = OVERPASS_MIN_DELAY_SECONDS,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            url: Overpass interpreter endpoint.
            timeout_seconds: Total timeout for one query.
            min_delay_seconds: Minimum delay between consecutive queries.
        """
        self._session = session
        self._url = url
        self._timeout = ClientTimeout(total=timeout_seconds)
        self._rate_limiter = ApiRateLimiter.get_instance("overpass_api", min_delay_seconds)

    async def run_query(self, query: str) -> dict[str, Any]:
        """Run a query (sent as the form field `data`).

        Raises:
            MapDataError: On non-200 responses, network errors and invalid JSON.
        """
        await self._rate_limiter.acquire()
        log_api_request("POST", self._url, payload=query)
        try:
            async with self._session.post(
                self._url, data={"data": query}, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    response_text = await response.text()
                    raise MapDataError(
                        f"Overpass API request failed: {response.status} - {response_text[:200]}"
                    )
                data = await response.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise MapDataError(f"Overpass API request failed: {e}") from e

        if not isinstance(data, dict):
            raise MapDataError("Overpass API returned a non-object response")
        return data
