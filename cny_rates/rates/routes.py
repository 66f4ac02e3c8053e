"""Route handlers for exchange rates and fee quotes."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from flask import current_app
from flask.views import MethodView

from cny_rates.errors import DEFAULT_STATUS_MESSAGES, APIError, NotFoundError, ServiceUnavailableError
from cny_rates.providers.base import ProviderError
from cny_rates.providers.boc_parser import CurrencyNotFound, NoUsableRate
from cny_rates.schemas import (
    BocRateSchema,
    ErrorMessageSchema,
    QuoteQuerySchema,
    QuoteResponseSchema,
    ResolvedRateSchema,
)
from cny_rates.services.fee_tiers import calculate_fee_quote
from cny_rates.services.orchestrator import RateOrchestrator, RateUnavailable, ResolvedRate
from cny_rates.services.primary_fetcher import BocRateFetcher, UnsupportedCurrency
from cny_rates.utils.datetime import format_local
from cny_rates.validation import validate_currency_code

from . import blp

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGES: dict[type[ProviderError], str] = {
    UnsupportedCurrency: "Unsupported currency.",
    CurrencyNotFound: "No exchange rate found for this currency.",
    NoUsableRate: "No usable exchange rate for this currency.",
}


@blp.route("/boc-rate/<string:currency>")
class BocRate(MethodView):
    @blp.response(200, BocRateSchema())
    @blp.alt_response(404, schema=ErrorMessageSchema, description="Currency not quoted by BOC.")
    @blp.alt_response(500, schema=ErrorMessageSchema, description="Rate lookup failed.")
    def get(self, currency: str):
        """Bank of China sell rate for one currency, per single unit."""

        fetcher: BocRateFetcher = current_app.extensions["boc_fetcher"]
        code = currency.strip().upper()
        try:
            quote = fetcher.fetch_quote(code)
        except (UnsupportedCurrency, CurrencyNotFound, NoUsableRate) as exc:
            raise NotFoundError(NOT_FOUND_MESSAGES[type(exc)]) from exc
        except ProviderError as exc:
            logger.error("BOC rate lookup failed for %s: %s", code, exc)
            raise APIError(DEFAULT_STATUS_MESSAGES[500], status_code=500) from exc

        return {
            "rate": quote.rate,
            "currency": quote.currency,
            "currency_name": quote.currency_name,
            "rate_type": quote.rate_type,
            "cached": quote.cached,
            "cache_time": format_local(quote.fetched_at, current_app.config["DISPLAY_TIMEZONE"]),
        }


@blp.route("/rates/<string:currency>")
class ResolvedRateView(MethodView):
    @blp.response(200, ResolvedRateSchema())
    @blp.alt_response(422, schema=ErrorMessageSchema, description="Malformed currency code.")
    @blp.alt_response(503, schema=ErrorMessageSchema, description="No rate source available.")
    def get(self, currency: str):
        """CNY rate from the best available source, plus the GBP cross-rate."""

        return _resolved_payload(_resolve(currency))


@blp.route("/quote/<string:currency>")
class FeeQuoteView(MethodView):
    @blp.arguments(QuoteQuerySchema, location="query")
    @blp.response(200, QuoteResponseSchema())
    @blp.alt_response(503, schema=ErrorMessageSchema, description="No rate source available.")
    def get(self, query: dict[str, Any], currency: str):
        """Price an amount under every service-fee tier."""

        resolved = _resolve(currency)
        quote = calculate_fee_quote(
            query["amount"], resolved.currency, resolved.result, resolved.gbp_rate
        )
        return {"rate": _resolved_payload(resolved), "quote": asdict(quote)}


def _resolve(currency: str) -> ResolvedRate:
    code = validate_currency_code(currency)
    orchestrator: RateOrchestrator = current_app.extensions["rate_orchestrator"]
    try:
        return orchestrator.resolve_with_gbp(code)
    except RateUnavailable as exc:
        raise ServiceUnavailableError(
            "Unable to obtain an exchange rate right now. Please retry later.",
            payload={"gbpRate": exc.gbp_rate},
        ) from exc


def _resolved_payload(resolved: ResolvedRate) -> dict[str, Any]:
    result = resolved.result
    return {
        "currency": resolved.currency,
        "rate": result.rate,
        "source": result.source.value,
        "primary_attempt_failed": result.primary_attempt_failed,
        "rate_type": result.rate_type,
        "provider": result.provider,
        "gbp_rate": resolved.gbp_rate,
        "notice": resolved.notice,
    }
