"""Dataclasses describing normalized rate-source payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Mapping

from cny_rates.utils.datetime import ensure_utc

REMITTANCE = "remittance"
CASH = "cash"


def _normalize_code(code: str) -> str:
    normalized = code.strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    return normalized


def _normalize_rates(rates: Mapping[str, Decimal | float | int]) -> Dict[str, Decimal]:
    normalized: Dict[str, Decimal] = {}
    for code, value in rates.items():
        if value is None:
            continue
        normalized[_normalize_code(code)] = Decimal(str(value))
    return normalized


@dataclass(frozen=True)
class RateSnapshot:
    """Latest market rates quoted against a base currency."""

    base_currency: str
    source: str
    timestamp: datetime
    rates: Dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", _normalize_code(self.base_currency))
        object.__setattr__(self, "rates", _normalize_rates(self.rates))
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))
        if not self.source or not self.source.strip():
            raise ValueError("source must be provided for RateSnapshot")

    def rate_for(self, code: str) -> Decimal | None:
        return self.rates.get(_normalize_code(code))


@dataclass(frozen=True)
class RateDocument:
    """Raw BOC rate table as fetched, covering every quoted currency."""

    content: str
    fetched_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "fetched_at", ensure_utc(self.fetched_at))


@dataclass(frozen=True)
class RateQuoteRow:
    """One currency's usable sell price from the BOC table, quoted per 100 units."""

    display_name: str
    remittance_sell_price: float | None = None
    cash_sell_price: float | None = None

    def __post_init__(self) -> None:
        if self.remittance_sell_price is None and self.cash_sell_price is None:
            raise ValueError(f"No sell price available for {self.display_name!r}")

    @property
    def rate_type(self) -> str:
        return REMITTANCE if self.remittance_sell_price is not None else CASH

    @property
    def price(self) -> float:
        if self.remittance_sell_price is not None:
            return self.remittance_sell_price
        return self.cash_sell_price  # type: ignore[return-value]

    @property
    def per_unit_rate(self) -> float:
        """Price converted to CNY per single unit of the foreign currency."""

        return self.price / 100
