"""Orchestrator reconciling the BOC rate with the market-rate fallbacks."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from cny_rates.providers.base import ProviderError

from .currency_registry import CNY
from .market_fetcher import AllSourcesUnavailable, GbpCrossRateFetcher, MarketRateFetcher
from .primary_fetcher import BocRateFetcher, PrimaryUnavailable
from .rate_result import RateResult, RateSource

logger = logging.getLogger(__name__)

NOTICE_CNY = "cny"
NOTICE_PRIMARY = "primary"
NOTICE_PRIMARY_FAILED = "primary_failed"
NOTICE_NOT_SUPPORTED = "not_supported"


class RateUnavailable(ProviderError):
    """Neither BOC nor any market provider produced a rate."""

    def __init__(self, message: str, *, gbp_rate: float | None = None) -> None:
        super().__init__(message)
        self.gbp_rate = gbp_rate


@dataclass(frozen=True)
class ResolvedRate:
    currency: str
    result: RateResult
    gbp_rate: float | None

    @property
    def notice(self) -> str:
        """Which user-facing message applies to this result."""

        if self.result.source is RateSource.CNY:
            return NOTICE_CNY
        if self.result.source is RateSource.PRIMARY:
            return NOTICE_PRIMARY
        if self.result.primary_attempt_failed:
            return NOTICE_PRIMARY_FAILED
        return NOTICE_NOT_SUPPORTED


class RateOrchestrator:
    """Pick the rate source per currency and tag the result accordingly.

    ``source`` distinguishes a currency BOC never quotes (``market``) from one
    whose BOC lookup failed just now (``fallback``); fee tiers treat both as
    non-primary but users are told different things.
    """

    def __init__(
        self,
        primary: BocRateFetcher,
        market: MarketRateFetcher,
        gbp: GbpCrossRateFetcher | None = None,
    ) -> None:
        self._primary = primary
        self._market = market
        self._gbp = gbp or GbpCrossRateFetcher(market)

    def resolve(self, code: str) -> RateResult:
        currency = code.strip().upper()
        if currency == CNY:
            return RateResult(rate=1.0, source=RateSource.CNY)

        primary_failed = False
        if self._primary.supports(currency):
            try:
                return self._primary.fetch(currency)
            except PrimaryUnavailable as exc:
                logger.warning("Falling back to market rates for %s: %s", currency, exc)
                primary_failed = True

        try:
            quote = self._market.fetch(currency)
        except AllSourcesUnavailable as exc:
            logger.error("No rate obtainable for %s: %s", currency, exc)
            raise RateUnavailable(f"No exchange rate obtainable for {currency}") from exc

        return RateResult(
            rate=quote.rate,
            source=RateSource.FALLBACK if primary_failed else RateSource.MARKET,
            primary_attempt_failed=primary_failed,
            provider=quote.provider,
        )

    def fetch_gbp_rate(self, code: str) -> float | None:
        return self._gbp.fetch(code)

    def resolve_with_gbp(self, code: str) -> ResolvedRate:
        """Resolve the CNY rate and the GBP cross-rate concurrently.

        A missing GBP rate degrades to ``None``; only a CNY failure raises,
        and the ``RateUnavailable`` still carries whatever GBP rate was found.
        """

        currency = code.strip().upper()
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="rate-resolve") as pool:
            rate_future = pool.submit(self.resolve, currency)
            gbp_future = pool.submit(self.fetch_gbp_rate, currency)
            gbp_rate = gbp_future.result()
            try:
                result = rate_future.result()
            except RateUnavailable as exc:
                exc.gbp_rate = gbp_rate
                raise

        return ResolvedRate(currency=currency, result=result, gbp_rate=gbp_rate)


def init_orchestrator(app) -> RateOrchestrator:
    """Wire the cache, BOC fetcher and market chain onto the Flask app."""

    from cny_rates.providers.boc_client import BocClient
    from cny_rates.providers.registry import init_market_providers

    from .document_cache import RateDocumentCache

    cache = RateDocumentCache(ttl_seconds=float(app.config.get("BOC_CACHE_TTL_SECONDS", 300)))
    primary = BocRateFetcher(BocClient.from_config(app.config), cache)
    market = MarketRateFetcher(init_market_providers(app))

    orchestrator = RateOrchestrator(primary=primary, market=market)
    app.extensions["boc_cache"] = cache
    app.extensions["boc_fetcher"] = primary
    app.extensions["rate_orchestrator"] = orchestrator
    return orchestrator
