from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cny_rates.providers.http_client import HTTPClient, HTTPClientConfig, HTTPClientError

logger = logging.getLogger(__name__)


class MarketAPIError(RuntimeError):
    """Raised when a market-rate API returns an error response."""


class MarketClientConfig:
    """Configuration parameters for a market-rate API client."""

    def __init__(self, base_url: str, timeout: float, max_retries: int = 1) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries


class MarketAPIClient:
    """HTTP client for "latest rates" JSON APIs built on the shared wrapper."""

    def __init__(self, config: MarketClientConfig, client: HTTPClient | None = None) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(
                base_url=config.base_url,
                timeout=config.timeout,
                max_retries=config.max_retries,
            )
        )

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        try:
            payload = self._client.get(path, params=params)
        except HTTPClientError as exc:
            raise MarketAPIError(str(exc)) from exc

        # open.er-api reports failures in-band with a 200 status.
        if payload.get("result") == "error":
            raise MarketAPIError(f"Market API error payload: {payload.get('error-type', 'unknown')}")

        if not isinstance(payload.get("rates"), dict):
            raise MarketAPIError("Market API response missing 'rates' mapping")

        return payload
