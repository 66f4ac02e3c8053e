"""Application-wide error types and JSON error handlers."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for API-level errors rendered as ``{"error": message}``."""

    status_code: int = 400

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class NotFoundError(APIError):
    """The requested currency has no usable rate at this source."""

    status_code = 404


class ValidationError(APIError):
    """Error raised for malformed request input."""

    status_code = 422


class ServiceUnavailableError(APIError):
    """No rate source could answer right now."""

    status_code = 503


DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Request could not be processed.",
    404: "Resource not found.",
    422: "Submitted data is invalid.",
    500: "Failed to fetch exchange rate.",
    503: "Exchange rate temporarily unavailable. Please retry in a moment.",
}


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        message = error.message or DEFAULT_STATUS_MESSAGES.get(error.status_code, "Request failed.")
        response: dict[str, Any] = {"error": message}
        response.update(error.payload)
        return jsonify(response), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        # Internal details go to the log only.
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": DEFAULT_STATUS_MESSAGES[500]}), 500
