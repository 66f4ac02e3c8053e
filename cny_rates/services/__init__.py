"""Service layer modules."""

from .currency_registry import BOC_DISPLAY_NAMES, CurrencyRegistry, registry
from .document_cache import CacheLookup, CacheStatus, RateDocumentCache
from .fee_tiers import FeeQuote, GbpQuote, TierQuote, calculate_fee_quote
from .market_fetcher import AllSourcesUnavailable, GbpCrossRateFetcher, MarketRateFetcher
from .orchestrator import RateOrchestrator, RateUnavailable, ResolvedRate, init_orchestrator
from .primary_fetcher import BocRateFetcher, PrimaryUnavailable, UnsupportedCurrency
from .rate_result import BocQuote, MarketQuote, RateResult, RateSource
