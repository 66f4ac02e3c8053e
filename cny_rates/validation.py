"""Validation helpers for request input."""

from __future__ import annotations

from cny_rates.errors import ValidationError


def validate_currency_code(value: str | None, *, field: str = "currency") -> str:
    """Normalize a currency path parameter to an upper-case three-letter code."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    normalized = str(value).strip().upper()
    if len(normalized) != 3 or not normalized.isascii() or not normalized.isalpha():
        raise ValidationError(
            f"Invalid currency code '{normalized}'. Please use a three-letter ISO 4217 code.",
            payload={"field": field},
        )
    return normalized
