from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cny_rates.providers.base import ProviderError
from cny_rates.providers.http_client import HTTPClient, HTTPClientConfig, HTTPClientError

logger = logging.getLogger(__name__)


class BocFetchError(ProviderError):
    """Raised when the BOC quotation page cannot be downloaded."""


class BocClientConfig:
    """Configuration parameters for the BOC page client."""

    def __init__(
        self,
        url: str,
        timeout: float,
        user_agent: str,
        max_retries: int = 1,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_retries = max_retries


class BocClient:
    """Downloads the BOC quotation page; the site rejects non-browser agents."""

    def __init__(self, config: BocClientConfig, client: HTTPClient | None = None) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(
                base_url=config.url,
                timeout=config.timeout,
                max_retries=config.max_retries,
                headers={"User-Agent": config.user_agent},
                encoding="utf-8",
            )
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> BocClient:
        return cls(
            BocClientConfig(
                url=str(config.get("BOC_RATES_URL")),
                timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 8)),
                user_agent=str(config.get("BOC_USER_AGENT")),
                max_retries=int(config.get("BOC_MAX_RETRIES", 1)),
            )
        )

    def fetch_page(self) -> str:
        try:
            html = self._client.get_text()
        except HTTPClientError as exc:
            raise BocFetchError(str(exc)) from exc
        logger.debug("Fetched BOC quotation page (%s chars)", len(html))
        return html
