"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_MARKET_PROVIDERS = {"exchangerate_api", "open_er_api", "mock"}
PROVIDER_ALIASES = {
    "exchangerate-api": "exchangerate_api",
    "er_api": "open_er_api",
    "open-er-api": "open_er_api",
}

DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "cny-rate-service"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "8"))
    BOC_RATES_URL = _get_env("BOC_RATES_URL", "https://www.boc.cn/sourcedb/whpj/")
    BOC_USER_AGENT = _get_env("BOC_USER_AGENT", DEFAULT_BROWSER_USER_AGENT)
    BOC_CACHE_TTL_SECONDS = int(_get_env("BOC_CACHE_TTL_SECONDS", "300"))
    BOC_MAX_RETRIES = int(_get_env("BOC_MAX_RETRIES", "1"))
    MARKET_PRIMARY_PROVIDER = _get_env("MARKET_PRIMARY_PROVIDER", "exchangerate_api")
    MARKET_FALLBACK_PROVIDER: str | None = _get_env("MARKET_FALLBACK_PROVIDER", "open_er_api")
    EXCHANGERATE_API_BASE_URL = _get_env(
        "EXCHANGERATE_API_BASE_URL", "https://api.exchangerate-api.com/v4"
    )
    OPEN_ER_API_BASE_URL = _get_env("OPEN_ER_API_BASE_URL", "https://open.er-api.com/v6")
    DISPLAY_TIMEZONE = _get_env("DISPLAY_TIMEZONE", "Asia/Shanghai")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
    CORS_ALLOWED_ORIGINS = _get_env("CORS_ALLOWED_ORIGINS", "*")
    CORS_ALLOWED_HEADERS = _get_env("CORS_ALLOWED_HEADERS", "Content-Type,Authorization")
    CORS_ALLOWED_METHODS = _get_env("CORS_ALLOWED_METHODS", "GET,OPTIONS")
    CORS_MAX_AGE = int(_get_env("CORS_MAX_AGE", "600"))


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If a configured market provider is not supported.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_providers(config_cls)
    return config_cls


def _validate_providers(config_cls: type[BaseConfig]) -> None:
    primary_normalized = _normalize_provider(config_cls.MARKET_PRIMARY_PROVIDER)
    if primary_normalized not in SUPPORTED_MARKET_PROVIDERS:
        raise ValueError(
            f"Unsupported MARKET_PRIMARY_PROVIDER '{config_cls.MARKET_PRIMARY_PROVIDER}'. "
            f"Allowed values: {sorted(SUPPORTED_MARKET_PROVIDERS)}"
        )
    config_cls.MARKET_PRIMARY_PROVIDER = primary_normalized

    fallback_raw = config_cls.MARKET_FALLBACK_PROVIDER
    if fallback_raw:
        fallback_normalized = _normalize_provider(fallback_raw)
        if fallback_normalized not in SUPPORTED_MARKET_PROVIDERS:
            raise ValueError(
                f"Unsupported MARKET_FALLBACK_PROVIDER '{fallback_raw}'. Allowed values: "
                f"{sorted(SUPPORTED_MARKET_PROVIDERS)}"
            )
        config_cls.MARKET_FALLBACK_PROVIDER = fallback_normalized
    else:
        config_cls.MARKET_FALLBACK_PROVIDER = None


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
