"""CORS handling so browser front-ends on other origins can read the rate API."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Response, make_response, request


def init_cors(app) -> None:
    """Answer preflights and tag responses per the CORS_* settings.

    ``CORS_ALLOWED_ORIGINS`` defaults to ``*``, which allows any origin.
    """

    if app.config.get("_cors_configured"):
        return

    allowed_origins = _split(app.config.get("CORS_ALLOWED_ORIGINS", "*"))
    if not allowed_origins:
        return

    allowed_headers = ", ".join(_split(app.config.get("CORS_ALLOWED_HEADERS", "Content-Type")))
    allowed_methods = ", ".join(_split(app.config.get("CORS_ALLOWED_METHODS", "GET,OPTIONS")))
    max_age = str(int(app.config.get("CORS_MAX_AGE", 600)))
    allow_any = "*" in allowed_origins

    def origin_allowed(origin: str | None) -> bool:
        return bool(origin) and (allow_any or origin in allowed_origins)

    @app.before_request
    def handle_preflight():
        if request.method != "OPTIONS":
            return None
        origin = request.headers.get("Origin")
        if origin is None:
            return None
        if not origin_allowed(origin):
            return make_response("", 403)

        response = make_response("", 204)
        _tag_origin(response, origin, allow_any)
        response.headers["Access-Control-Allow-Methods"] = allowed_methods
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers", allowed_headers
        )
        response.headers["Access-Control-Max-Age"] = max_age
        return response

    @app.after_request
    def apply_cors(response: Response):
        origin = request.headers.get("Origin")
        if origin_allowed(origin):
            _tag_origin(response, origin, allow_any)  # type: ignore[arg-type]
        return response

    app.config["_cors_configured"] = True


def _split(raw: str | Iterable[str]) -> tuple[str, ...]:
    candidates = raw.split(",") if isinstance(raw, str) else list(raw)
    return tuple(item.strip() for item in candidates if item and item.strip())


def _tag_origin(response: Response, origin: str, allow_any: bool) -> None:
    response.headers["Access-Control-Allow-Origin"] = "*" if allow_any else origin
    if not allow_any:
        response.vary.add("Origin")
