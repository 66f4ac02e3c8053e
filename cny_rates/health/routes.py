"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from cny_rates.schemas import HealthRatesSchema, HealthStatusSchema
from cny_rates.services.document_cache import RateDocumentCache

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "cny-rate-service"),
        }


@blp.route("/rates")
class HealthRates(MethodView):
    @blp.response(200, HealthRatesSchema())
    def get(self):
        """Report whether the cached BOC page is empty, fresh or expired."""

        cache: RateDocumentCache = current_app.extensions["boc_cache"]
        status = cache.status()
        return {
            "status": status.state,
            "fetched_at": status.fetched_at.isoformat() if status.fetched_at else None,
            "age_seconds": round(status.age_seconds, 3) if status.age_seconds is not None else None,
            "ttl_seconds": status.ttl_seconds,
        }
