"""Market-rate provider for exchangerate-api.com style "latest" endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from cny_rates.providers.base import BaseRateProvider, ProviderUnavailable
from cny_rates.providers.schemas import RateSnapshot
from cny_rates.utils.datetime import utc_now

from .market_client import MarketAPIClient, MarketAPIError, MarketClientConfig

TIMESTAMP_FIELDS = ("time_last_update_unix", "time_last_updated")


class MarketRateProvider(BaseRateProvider):
    """Provider reading ``GET {base_url}/latest/{code}`` rate tables."""

    def __init__(self, name: str, client: MarketAPIClient) -> None:
        self.name = name
        self._client = client

    @classmethod
    def from_config(
        cls, name: str, config: Mapping[str, Any], *, base_url_key: str
    ) -> MarketRateProvider:
        base_url = config.get(base_url_key)
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValueError(f"{base_url_key} must be configured for provider '{name}'")
        client_config = MarketClientConfig(
            base_url=base_url,
            timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 8)),
        )
        return cls(name, MarketAPIClient(client_config))

    def get_latest(self, base: str) -> RateSnapshot:
        base_currency = self._normalize_symbol(base)
        try:
            payload = self._client.get(f"/latest/{base_currency}")
        except MarketAPIError as exc:
            raise ProviderUnavailable(f"{self.name}: {exc}") from exc

        try:
            return RateSnapshot(
                base_currency=base_currency,
                source=self.name,
                timestamp=self._parse_timestamp(payload),
                rates=payload["rates"],
            )
        except (ValueError, ArithmeticError) as exc:
            raise ProviderUnavailable(f"{self.name}: malformed rates payload") from exc

    @staticmethod
    def _parse_timestamp(payload: Mapping[str, Any]) -> datetime:
        for key in TIMESTAMP_FIELDS:
            value = payload.get(key)
            if isinstance(value, int | float) and not isinstance(value, bool):
                return datetime.fromtimestamp(value, tz=UTC)
        return utc_now()

    @staticmethod
    def _normalize_symbol(value: str) -> str:
        if not value or not str(value).strip():
            raise ProviderUnavailable("Currency symbol cannot be empty.")
        return str(value).strip().upper()
