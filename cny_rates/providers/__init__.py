"""Rate sources: the BOC quotation page and third-party market-rate APIs."""

from .base import BaseRateProvider, ProviderError, ProviderUnavailable
from .boc_client import BocClient, BocClientConfig, BocFetchError
from .boc_parser import BocParseError, CurrencyNotFound, NoUsableRate, find_rate_row
from .market_client import MarketAPIClient, MarketAPIError, MarketClientConfig
from .market_provider import MarketRateProvider
from .schemas import CASH, REMITTANCE, RateDocument, RateQuoteRow, RateSnapshot

__all__ = [
    "BaseRateProvider",
    "ProviderError",
    "ProviderUnavailable",
    "BocClient",
    "BocClientConfig",
    "BocFetchError",
    "BocParseError",
    "CurrencyNotFound",
    "NoUsableRate",
    "find_rate_row",
    "MarketAPIClient",
    "MarketAPIError",
    "MarketClientConfig",
    "MarketRateProvider",
    "CASH",
    "REMITTANCE",
    "RateDocument",
    "RateQuoteRow",
    "RateSnapshot",
]
