"""Market-rate fetchers chaining the configured third-party providers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from time import perf_counter

from cny_rates.logging import provider_log_extra
from cny_rates.providers.base import BaseRateProvider, ProviderError, ProviderUnavailable

from .currency_registry import CNY, GBP
from .rate_result import MarketQuote

logger = logging.getLogger(__name__)


class AllSourcesUnavailable(ProviderError):
    """Every market provider in the chain failed."""


class MarketRateFetcher:
    """Try each provider once, in order, until one quotes the target currency."""

    def __init__(self, providers: Sequence[BaseRateProvider]) -> None:
        self._providers = tuple(providers)

    def fetch(self, code: str, target: str = CNY) -> MarketQuote:
        """Return units of ``target`` per one unit of ``code``.

        Raises:
            AllSourcesUnavailable: If no provider yields a usable rate.
        """

        currency = code.strip().upper()
        target_code = target.strip().upper()
        errors: list[str] = []

        for provider in self._providers:
            provider_name = self._provider_name(provider)
            start = perf_counter()
            try:
                rate = self._fetch_from(provider, currency, target_code)
            except ProviderError as exc:
                duration = (perf_counter() - start) * 1000
                errors.append(f"{provider_name}: {exc}")
                logger.warning(
                    "Market provider %s failed for %s/%s: %s",
                    provider_name,
                    currency,
                    target_code,
                    exc,
                    extra=provider_log_extra(
                        provider=provider_name,
                        currency=currency,
                        event="provider.fetch",
                        status="error",
                        duration_ms=duration,
                        error=str(exc),
                    ),
                )
                continue

            duration = (perf_counter() - start) * 1000
            logger.info(
                "Market provider %s quoted %s/%s at %.4f",
                provider_name,
                currency,
                target_code,
                rate,
                extra=provider_log_extra(
                    provider=provider_name,
                    currency=currency,
                    event="provider.fetch",
                    status="success",
                    duration_ms=duration,
                ),
            )
            return MarketQuote(rate=rate, provider=provider_name)

        detail = "; ".join(errors) or "no providers configured"
        raise AllSourcesUnavailable(
            f"No market rate for {currency}/{target_code} from any provider ({detail})"
        )

    @staticmethod
    def _fetch_from(provider: BaseRateProvider, currency: str, target: str) -> float:
        snapshot = provider.get_latest(currency)
        value = snapshot.rate_for(target)
        if value is None or not value.is_finite() or value <= 0:
            raise ProviderUnavailable(f"response has no usable '{target}' rate")
        return float(value)

    @staticmethod
    def _provider_name(provider: BaseRateProvider) -> str:
        return getattr(provider, "name", provider.__class__.__name__)


class GbpCrossRateFetcher:
    """Resolve a currency against GBP; absence is tolerated and reported as None."""

    def __init__(self, market: MarketRateFetcher) -> None:
        self._market = market

    def fetch(self, code: str) -> float | None:
        currency = code.strip().upper()
        if currency == GBP:
            return 1.0
        try:
            return self._market.fetch(currency, target=GBP).rate
        except AllSourcesUnavailable as exc:
            logger.warning("GBP cross-rate unavailable for %s: %s", currency, exc)
            return None
