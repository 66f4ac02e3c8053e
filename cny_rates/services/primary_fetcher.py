"""Primary rate source: the Bank of China posted sell rates."""

from __future__ import annotations

import logging
from time import perf_counter

from cny_rates.logging import provider_log_extra
from cny_rates.providers.base import ProviderError
from cny_rates.providers.boc_client import BocClient
from cny_rates.providers.boc_parser import find_rate_row
from cny_rates.providers.schemas import RateDocument

from .currency_registry import CurrencyRegistry, registry
from .document_cache import RateDocumentCache
from .rate_result import BocQuote, RateResult, RateSource

logger = logging.getLogger(__name__)


class UnsupportedCurrency(ProviderError):
    """The currency is not quoted on the BOC page."""


class PrimaryUnavailable(ProviderError):
    """The BOC rate could not be obtained for any reason."""


class BocRateFetcher:
    """Read one currency's rate out of the (cached) BOC quotation page.

    Falls back from the remittance to the cash sell price within the page but
    never to another data source; that decision belongs to the caller.
    """

    name = "boc"

    def __init__(
        self,
        client: BocClient,
        cache: RateDocumentCache,
        currencies: CurrencyRegistry = registry,
    ) -> None:
        self._client = client
        self._cache = cache
        self._currencies = currencies

    def supports(self, code: str) -> bool:
        return self._currencies.is_supported(code)

    def fetch(self, code: str) -> RateResult:
        """Resolve ``code`` via BOC, raising ``PrimaryUnavailable`` on any failure."""

        currency = code.strip().upper()
        start = perf_counter()
        try:
            quote = self.fetch_quote(currency)
        except ProviderError as exc:
            duration = (perf_counter() - start) * 1000
            logger.warning(
                "BOC rate unavailable for %s: %s",
                currency,
                exc,
                extra=provider_log_extra(
                    provider=self.name,
                    currency=currency,
                    event="provider.fetch",
                    status="error",
                    duration_ms=duration,
                    error=str(exc),
                ),
            )
            raise PrimaryUnavailable(str(exc)) from exc

        return RateResult(
            rate=quote.rate,
            source=RateSource.PRIMARY,
            primary_attempt_failed=False,
            rate_type=quote.rate_type,
            provider=self.name,
        )

    def fetch_quote(self, code: str) -> BocQuote:
        """Return the detailed BOC quote, raising the specific lookup error on failure."""

        currency = code.strip().upper()
        start = perf_counter()
        document, cached = self._load_document()

        display_name = self._currencies.display_name(currency)
        if display_name is None:
            raise UnsupportedCurrency(f"Currency '{currency}' is not quoted by BOC")

        row = find_rate_row(document.content, display_name)
        rate = row.per_unit_rate
        duration = (perf_counter() - start) * 1000
        logger.info(
            "BOC rate for %s (%s): %.4f",
            display_name,
            row.rate_type,
            rate,
            extra=provider_log_extra(
                provider=self.name,
                currency=currency,
                event="provider.fetch",
                status="success",
                duration_ms=duration,
                cached=cached,
            ),
        )
        return BocQuote(
            rate=rate,
            currency=currency,
            currency_name=display_name,
            rate_type=row.rate_type,
            cached=cached,
            fetched_at=document.fetched_at,
        )

    def _load_document(self) -> tuple[RateDocument, bool]:
        lookup = self._cache.get()
        if lookup.hit and lookup.document is not None:
            logger.debug("Serving BOC page cached at %s", lookup.fetched_at)
            return lookup.document, True

        logger.info("BOC page cache %s; fetching from source", "expired" if lookup.document else "empty")
        content = self._client.fetch_page()
        fetched_at = self._cache.put(content)
        return RateDocument(content=content, fetched_at=fetched_at), False
