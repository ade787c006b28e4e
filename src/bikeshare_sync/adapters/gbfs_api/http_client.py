"""HTTP client for GBFS station_information feeds.

GBFS reference: https://github.com/MobilityData/gbfs
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientTimeout

from bikeshare_sync.adapters.api_request_logger import log_api_request
from bikeshare_sync.domain.errors import FeedFetchError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_TIMEOUT_SECONDS = 30


class GbfsHttpClient:
    """Fetches GBFS JSON documents."""

    def __init__(
        self, session: "ClientSession", timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        """Initialize with an aiohttp session shared by the whole run."""
        self._session = session
        self._timeout = ClientTimeout(total=timeout_seconds)

    async def fetch_json(self, url: str) -> Any:
        """GET a feed document and decode it as JSON.

        Raises:
            FeedFetchError: On non-200 responses, network errors and invalid JSON.
        """
        log_api_request("GET", url)
        try:
            async with self._session.get(url, timeout=self._timeout) as response:
                if response.status != 200:
                    response_text = await response.text()
                    raise FeedFetchError(
                        f"GBFS feed {url} returned status {response.status}: {response_text[:200]}"
                    )
                # Some operators serve GBFS as text/plain.
                return await response.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise FeedFetchError(f"Failed to fetch bike share data from {url}: {e}") from e
