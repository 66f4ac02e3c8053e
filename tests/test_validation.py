from __future__ import annotations

import pytest

from cny_rates.errors import ValidationError
from cny_rates.validation import validate_currency_code


@pytest.mark.parametrize("raw", ["usd", " Usd ", "USD"])
def test_currency_code_is_normalized(raw):
    assert validate_currency_code(raw) == "USD"


@pytest.mark.parametrize("raw", ["", "US", "USDT", "U5D", "美元"])
def test_invalid_currency_codes_are_rejected(raw):
    with pytest.raises(ValidationError) as excinfo:
        validate_currency_code(raw)

    assert excinfo.value.status_code == 422
    assert excinfo.value.payload == {"field": "currency"}
