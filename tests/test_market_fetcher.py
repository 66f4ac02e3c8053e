from __future__ import annotations

from unittest.mock import patch

import pytest

from cny_rates.providers.base import ProviderUnavailable
from cny_rates.services import market_fetcher as market_fetcher_module
from cny_rates.services.market_fetcher import (
    AllSourcesUnavailable,
    GbpCrossRateFetcher,
    MarketRateFetcher,
)
from tests.fakes import SequencedProvider, make_snapshot


def test_first_provider_success_skips_second():
    first = SequencedProvider("first", [make_snapshot("first", "USD", CNY=7.2, GBP=0.75)])
    second = SequencedProvider("second", [make_snapshot("second", "USD", CNY=9.9)])

    quote = MarketRateFetcher([first, second]).fetch("usd")

    assert quote.rate == 7.2
    assert quote.provider == "first"
    assert first.calls == ["USD"]
    assert second.calls == []


def test_second_provider_used_when_first_fails():
    first = SequencedProvider("first", [ProviderUnavailable("down")])
    second = SequencedProvider("second", [make_snapshot("second", "XXX", CNY=3.5)])

    quote = MarketRateFetcher([first, second]).fetch("XXX")

    assert quote.rate == 3.5
    assert quote.provider == "second"


def test_second_provider_used_when_first_lacks_target_entry():
    first = SequencedProvider("first", [make_snapshot("first", "USD", EUR=0.9)])
    second = SequencedProvider("second", [make_snapshot("second", "USD", CNY=7.1)])

    assert MarketRateFetcher([first, second]).fetch("USD").rate == 7.1


def test_each_provider_is_tried_exactly_once():
    first = SequencedProvider("first", [ProviderUnavailable("down"), make_snapshot("first", "USD", CNY=1)])
    second = SequencedProvider("second", [ProviderUnavailable("down")])

    with pytest.raises(AllSourcesUnavailable) as exc_info:
        MarketRateFetcher([first, second]).fetch("USD")

    assert first.calls == ["USD"]
    assert second.calls == ["USD"]
    assert "first" in str(exc_info.value) and "second" in str(exc_info.value)


def test_reads_gbp_entry_when_requested():
    provider = SequencedProvider("first", [make_snapshot("first", "USD", CNY=7.2, GBP=0.75)])

    assert MarketRateFetcher([provider]).fetch("USD", target="GBP").rate == 0.75


def test_failure_is_logged_with_provider_fields():
    first = SequencedProvider("first", [ProviderUnavailable("down")])
    second = SequencedProvider("second", [make_snapshot("second", "USD", CNY=7.1)])

    with patch.object(market_fetcher_module.logger, "warning") as mock_warning:
        MarketRateFetcher([first, second]).fetch("USD")

    extra = mock_warning.call_args.kwargs["extra"]
    assert extra["event"] == "provider.fetch"
    assert extra["provider"] == "first"
    assert extra["status"] == "error"
    assert extra["currency"] == "USD"
    assert extra["duration_ms"] >= 0


def test_gbp_identity_makes_no_calls():
    provider = SequencedProvider("first")

    assert GbpCrossRateFetcher(MarketRateFetcher([provider])).fetch("gbp") == 1.0
    assert provider.calls == []


def test_gbp_cross_rate_uses_fallback_chain():
    first = SequencedProvider("first", [ProviderUnavailable("down")])
    second = SequencedProvider("second", [make_snapshot("second", "USD", CNY=7.1, GBP=0.74)])

    assert GbpCrossRateFetcher(MarketRateFetcher([first, second])).fetch("USD") == 0.74


def test_gbp_cross_rate_degrades_to_none():
    first = SequencedProvider("first", [ProviderUnavailable("down")])
    second = SequencedProvider("second", [ProviderUnavailable("down")])

    assert GbpCrossRateFetcher(MarketRateFetcher([first, second])).fetch("USD") is None


@pytest.mark.parametrize("bad_rate", [float("nan"), float("inf"), 0, -7.1])
def test_second_provider_used_when_first_rate_is_unusable(bad_rate):
    first = SequencedProvider("first", [make_snapshot("first", "USD", CNY=bad_rate)])
    second = SequencedProvider("second", [make_snapshot("second", "USD", CNY=7.1)])

    quote = MarketRateFetcher([first, second]).fetch("USD")

    assert quote.rate == 7.1
    assert quote.provider == "second"


def test_gbp_cross_rate_with_only_nan_rates_degrades_to_none():
    first = SequencedProvider("first", [make_snapshot("first", "USD", GBP=float("nan"))])
    second = SequencedProvider("second", [make_snapshot("second", "USD", GBP=float("nan"))])

    assert GbpCrossRateFetcher(MarketRateFetcher([first, second])).fetch("USD") is None
