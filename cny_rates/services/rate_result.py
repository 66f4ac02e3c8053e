"""Result types shared by the rate fetchers and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RateSource(str, Enum):
    CNY = "cny"
    PRIMARY = "primary"
    MARKET = "market"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RateResult:
    """CNY per one unit of the requested currency, tagged with where it came from."""

    rate: float
    source: RateSource
    primary_attempt_failed: bool = False
    rate_type: str | None = None
    provider: str | None = None


@dataclass(frozen=True)
class BocQuote:
    rate: float
    currency: str
    currency_name: str
    rate_type: str
    cached: bool
    fetched_at: datetime


@dataclass(frozen=True)
class MarketQuote:
    rate: float
    provider: str
