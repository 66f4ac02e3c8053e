"""Registry and factory for market-rate providers."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from .base import BaseRateProvider, ProviderError

ProviderFactory = Callable[[], BaseRateProvider]

_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {}


def _default_factories() -> Iterable[tuple[str, ProviderFactory]]:
    from flask import current_app

    from .market_provider import MarketRateProvider
    from .mock import MockRateProvider

    def exchangerate_api_factory() -> MarketRateProvider:
        return MarketRateProvider.from_config(
            "exchangerate_api", current_app.config, base_url_key="EXCHANGERATE_API_BASE_URL"
        )

    def open_er_api_factory() -> MarketRateProvider:
        return MarketRateProvider.from_config(
            "open_er_api", current_app.config, base_url_key="OPEN_ER_API_BASE_URL"
        )

    return [
        (MockRateProvider.name, MockRateProvider),
        ("exchangerate_api", exchangerate_api_factory),
        ("open_er_api", open_er_api_factory),
    ]


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under the given name."""

    if not name:
        raise ValueError("Provider name cannot be empty.")
    _PROVIDER_FACTORIES[name.lower()] = factory


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""

    return sorted(_PROVIDER_FACTORIES.keys())


def get_provider(name: str) -> BaseRateProvider:
    """Instantiate the provider registered under ``name``.

    Factories for the HTTP-backed providers read ``current_app.config`` and
    must be called inside an application context.
    """

    provider_name = (name or "").lower()
    try:
        factory = _PROVIDER_FACTORIES[provider_name]
    except KeyError as exc:
        available = ", ".join(list_providers()) or "none registered"
        raise ProviderError(
            f"Unknown provider '{provider_name}'. Available providers: {available}"
        ) from exc
    return factory()


def init_market_providers(app) -> list[BaseRateProvider]:
    """Build the ordered market provider chain and attach it to the app."""

    names = [app.config.get("MARKET_PRIMARY_PROVIDER"), app.config.get("MARKET_FALLBACK_PROVIDER")]
    providers: list[BaseRateProvider] = []
    with app.app_context():
        for name in names:
            if name:
                providers.append(get_provider(name))
    app.extensions["market_providers"] = providers
    return providers


def reset_registry(default_factories: Iterable[tuple[str, ProviderFactory]] | None = None) -> None:
    """Reset provider registry; useful for tests."""

    _PROVIDER_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_provider(name, factory)


reset_registry()
