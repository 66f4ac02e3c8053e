from __future__ import annotations

import pytest

import config


def test_defaults_match_upstream_sources():
    cfg = config.get_config("production")

    assert cfg.BOC_RATES_URL == "https://www.boc.cn/sourcedb/whpj/"
    assert cfg.BOC_CACHE_TTL_SECONDS == 300
    assert cfg.MARKET_PRIMARY_PROVIDER == "exchangerate_api"
    assert cfg.MARKET_FALLBACK_PROVIDER == "open_er_api"
    assert "Mozilla" in cfg.BOC_USER_AGENT


def test_unknown_environment_raises():
    with pytest.raises(KeyError):
        config.get_config("staging")


def test_provider_aliases_are_normalized(monkeypatch):
    monkeypatch.setattr(config.DevelopmentConfig, "MARKET_PRIMARY_PROVIDER", "Open-ER-API")
    monkeypatch.setattr(config.DevelopmentConfig, "MARKET_FALLBACK_PROVIDER", "")

    cfg = config.get_config("development")

    assert cfg.MARKET_PRIMARY_PROVIDER == "open_er_api"
    assert cfg.MARKET_FALLBACK_PROVIDER is None


def test_unsupported_provider_is_rejected(monkeypatch):
    monkeypatch.setattr(config.DevelopmentConfig, "MARKET_PRIMARY_PROVIDER", "frankfurter")

    with pytest.raises(ValueError, match="MARKET_PRIMARY_PROVIDER"):
        config.get_config("development")
