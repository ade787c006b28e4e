"""Rate limiter for outgoing API requests.

Overpass and MapRoulette are shared community services; every adapter
talking to them waits a minimum delay between consecutive requests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Minimum-interval rate limiter for one API.

    Async-safe using asyncio.Lock; concurrent callers are serialized.
    """

    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        """Initialize the rate limiter.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Get or create the shared rate limiter for an API.

        The delay of the first registration wins for the lifetime of the process.
        """
        if api_name not in cls._instances:
            cls._instances[api_name] = cls(api_name, min_delay_seconds)
            logger.info(f"Created rate limiter for {api_name} with {min_delay_seconds}s minimum delay")
        return cls._instances[api_name]

    @classmethod
    def reset(cls) -> None:
        """Forget all shared instances."""
        cls._instances.clear()

    async def acquire(self) -> None:
        """Acquire permission to make a request.

        Blocks until enough time has passed since the last request.
        """
        async with self._lock:
            if self._last_request_time is not None:
                elapsed = time.monotonic() - self._last_request_time
                wait_time = self.min_delay_seconds - elapsed
                if wait_time > 0:
                    logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                    await asyncio.sleep(wait_time)

            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> ApiRateLimiter:
        """Context manager entry - acquire rate limit."""
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: Exception | None, _exc_tb: object
    ) -> None:
        """Context manager exit - nothing to do."""
