"""Mock market provider for testing and local development."""

from __future__ import annotations

from decimal import Decimal

from cny_rates.utils.datetime import utc_now

from .base import BaseRateProvider, ProviderUnavailable
from .schemas import RateSnapshot
from .utils import RebaseError, rebase_rates

# Units of each currency per 1 USD.
USD_TABLE: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "CNY": Decimal("7.10"),
    "GBP": Decimal("0.78"),
    "EUR": Decimal("0.90"),
    "JPY": Decimal("150.12"),
    "HKD": Decimal("7.80"),
    "INR": Decimal("83.20"),
}


class MockRateProvider(BaseRateProvider):
    """Deterministic provider returning synthetic rates for a fixed currency set."""

    name = "mock"

    def get_latest(self, base: str) -> RateSnapshot:
        base_currency = str(base).strip().upper()
        try:
            rates = rebase_rates(USD_TABLE, base_currency)
        except RebaseError as exc:
            raise ProviderUnavailable(f"{self.name}: {exc}") from exc
        return RateSnapshot(
            base_currency=base_currency,
            source=self.name,
            timestamp=utc_now(),
            rates=rates,
        )
