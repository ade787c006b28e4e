"""Shared fixtures for bikeshare_sync tests."""

from collections.abc import Iterator
from typing import Any

import pytest

from bikeshare_sync.adapters.api_rate_limiter import ApiRateLimiter


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, payload: Any = None, text: str = "") -> None:
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self, content_type: str | None = None) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    """Factory for fake aiohttp responses."""
    return FakeResponse


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset shared rate limiters and request logging between tests."""
    ApiRateLimiter.reset()
    monkeypatch.delenv("BIKESHARE_LOG_REQUESTS", raising=False)
    yield
    ApiRateLimiter.reset()
