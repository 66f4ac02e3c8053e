"""Service-fee tiers applied on top of the resolved CNY amount."""

from __future__ import annotations

from dataclasses import dataclass

from .currency_registry import GBP
from .rate_result import RateResult, RateSource

STANDARD_MULTIPLIERS = (1.06, 1.06, 1.05)
# Market-derived rates carry a 1% surcharge.
SURCHARGED_MULTIPLIERS = (1.07, 1.07, 1.06)
TIER_FLAT_FEES = (5.0, 0.0, 0.0)
NET_RECEIPT_FACTOR = 0.988
GBP_SUGGESTION_FACTOR = 1.01
# (minimum base CNY amount, tier number), checked top-down.
HIGHLIGHT_THRESHOLDS = ((1000.0, 3), (100.0, 2))


@dataclass(frozen=True)
class TierQuote:
    tier: int
    multiplier: float
    flat_fee: float
    total: float
    difference: float
    profit: float
    highlighted: bool


@dataclass(frozen=True)
class GbpQuote:
    rate: float
    amount: float
    suggested: float


@dataclass(frozen=True)
class FeeQuote:
    amount: float
    currency: str
    rate: float
    base_amount: float
    tiers: tuple[TierQuote, ...]
    gbp: GbpQuote | None


def multipliers_for(result: RateResult) -> tuple[float, ...]:
    if result.source in (RateSource.CNY, RateSource.PRIMARY):
        return STANDARD_MULTIPLIERS
    return SURCHARGED_MULTIPLIERS


def highlighted_tier(base_amount: float) -> int | None:
    if base_amount <= 0:
        return None
    for minimum, tier in HIGHLIGHT_THRESHOLDS:
        if base_amount >= minimum:
            return tier
    return 1


def calculate_fee_quote(
    amount: float,
    currency: str,
    result: RateResult,
    gbp_rate: float | None = None,
) -> FeeQuote:
    """Price ``amount`` of ``currency`` under every fee tier.

    Non-positive amounts produce an all-zero quote with no highlighted tier.
    """

    currency = currency.strip().upper()
    amount = max(float(amount), 0.0)
    base_amount = amount * result.rate if amount > 0 else 0.0
    highlight = highlighted_tier(base_amount)

    tiers: list[TierQuote] = []
    for index, (multiplier, flat_fee) in enumerate(zip(multipliers_for(result), TIER_FLAT_FEES), 1):
        if base_amount > 0:
            total = base_amount * multiplier + flat_fee
            profit = total * NET_RECEIPT_FACTOR - base_amount
        else:
            total = profit = 0.0
        tiers.append(
            TierQuote(
                tier=index,
                multiplier=multiplier,
                flat_fee=flat_fee,
                total=total,
                difference=total - base_amount,
                profit=profit,
                highlighted=index == highlight,
            )
        )

    return FeeQuote(
        amount=amount,
        currency=currency,
        rate=result.rate,
        base_amount=base_amount,
        tiers=tuple(tiers),
        gbp=_gbp_quote(amount, currency, gbp_rate),
    )


def _gbp_quote(amount: float, currency: str, gbp_rate: float | None) -> GbpQuote | None:
    if not gbp_rate or amount <= 0:
        return None
    gbp_amount = amount * gbp_rate
    suggested = gbp_amount if currency == GBP else gbp_amount * GBP_SUGGESTION_FACTOR
    return GbpQuote(rate=gbp_rate, amount=gbp_amount, suggested=suggested)
