from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import NBAConfig
from .exceptions import (
    NBAAPIError,
    NBAAuthError,
    NBANetworkError,
    NBARateLimitError,
)
from .models import Game

logger = logging.getLogger(__name__)


class NBAClient:
    """Async client for the RapidAPI NBA games endpoint.

    Requests are made once; failures are raised to the caller, not retried.
    """

    def __init__(
        self,
        api_key: str = "",
        config: NBAConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.config = config or NBAConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        logger.info(
            f"Initialized NBAClient (auth={'enabled' if api_key else 'disabled'})"
        )

    async def __aenter__(self) -> NBAClient:
        limits = httpx.Limits(
            max_connections=self.config.max_connections,
            max_keepalive_connections=self.config.max_keepalive_connections,
        )
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            limits=limits,
            headers={
                "x-rapidapi-key": self.api_key,
                "x-rapidapi-host": self.config.host,
            },
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed NBAClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("NBAClient must be used as async context manager")
        return self._client

    async def _request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self.client.get(endpoint, params=params)
        except httpx.TimeoutException as e:
            raise NBANetworkError(f"Timed out requesting {endpoint}: {e}")
        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            raise NBANetworkError(f"Network error requesting {endpoint}: {e}")

        if response.status_code in (401, 403):
            raise NBAAuthError("Authentication failed", status_code=response.status_code)
        elif response.status_code == 429:
            raise NBARateLimitError("Rate limit exceeded", status_code=429)
        elif response.is_error:
            raise NBAAPIError(
                f"{endpoint} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NBAAPIError(f"Invalid JSON from {endpoint}: {e}")
        if not isinstance(data, dict):
            raise NBAAPIError(f"Expected a JSON object from {endpoint}, got {type(data).__name__}")
        return data

    async def get_games(self, date: str) -> list[Game]:
        """Fetch all games scheduled on a ``YYYY-MM-DD`` date."""
        data = await self._request("/games", params={"date": date})
        try:
            games = [Game.from_api(g) for g in data.get("response") or []]
        except ValidationError as e:
            raise NBAAPIError(f"Unexpected games payload for {date}: {e}")
        logger.info(f"Fetched {len(games)} NBA games for {date}")
        return games


def create_nba_client(api_key: str, config: NBAConfig | None = None) -> NBAClient:
    """Factory function to create NBAClient with default config."""
    return NBAClient(api_key=api_key, config=config or NBAConfig())
