"""Helper utilities for provider rate transformations."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Mapping


class RebaseError(ValueError):
    """Raised when rebasing rates fails due to missing data."""


def rebase_rates(rates: Mapping[str, Decimal], new_base: str) -> Dict[str, Decimal]:
    """Re-express a rate table quoted against one currency against ``new_base``.

    Args:
        rates: Units of each currency per one unit of the table's base. The
            table's own base must be present with value 1.
        new_base: ISO code to rebase to.

    Raises:
        RebaseError: If ``new_base`` is missing from the table or has a zero rate.
    """

    normalized_rates = {code.upper(): Decimal(rate) for code, rate in rates.items()}
    normalized_new_base = new_base.strip().upper()

    base_rate = normalized_rates.get(normalized_new_base)
    if base_rate is None:
        raise RebaseError(f"No rate for {normalized_new_base} in the source table.")
    if base_rate == 0:
        raise RebaseError(f"Cannot rebase using {normalized_new_base} with zero rate.")

    return {code: value / base_rate for code, value in normalized_rates.items()}
