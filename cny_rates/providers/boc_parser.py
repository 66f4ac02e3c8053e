"""Parser for the Bank of China foreign exchange quotation table.

The page lists every quoted currency in one ``<table>``; each data row reads::

    货币名称 | 现汇买入价 | 现钞买入价 | 现汇卖出价 | 现钞卖出价 | 中行折算价 | 发布日期 | 发布时间

Rows are keyed by the Chinese display name rather than the ISO code, and all
prices are quoted per 100 units of the foreign currency.
"""

from __future__ import annotations

import math

from bs4 import BeautifulSoup

from .base import ProviderError
from .schemas import CASH, REMITTANCE, RateQuoteRow

MIN_CELLS = 6
NAME_COLUMN = 0
REMITTANCE_SELL_COLUMN = 3
CASH_SELL_COLUMN = 4

# Remittance is preferred; cash only stands in when remittance is not quoted.
SELL_PRICE_COLUMNS: tuple[tuple[int, str], ...] = (
    (REMITTANCE_SELL_COLUMN, REMITTANCE),
    (CASH_SELL_COLUMN, CASH),
)


class BocParseError(ProviderError):
    """Base class for failures to read a rate out of the BOC table."""


class CurrencyNotFound(BocParseError):
    """No table row carries the requested display name."""


class NoUsableRate(BocParseError):
    """The currency's row has neither a remittance nor a cash sell price."""


def parse_price(text: str | None) -> float | None:
    """Return the cell value as a float, or None for placeholders such as ``--``."""

    if text is None:
        return None
    cleaned = text.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def find_rate_row(html: str, display_name: str) -> RateQuoteRow:
    """Locate ``display_name`` in the rate table and read its sell price.

    Raises:
        CurrencyNotFound: If no row's first cell equals ``display_name``.
        NoUsableRate: If the matching row has no numeric sell price.
    """

    soup = BeautifulSoup(html, "html.parser")
    for row in soup.select("table tr"):
        cells = row.find_all("td")
        if len(cells) < MIN_CELLS:
            continue
        if cells[NAME_COLUMN].get_text().strip() != display_name:
            continue
        return _read_sell_price(display_name, [cell.get_text() for cell in cells])

    raise CurrencyNotFound(f"No rate row found for {display_name}")


def _read_sell_price(display_name: str, cells: list[str]) -> RateQuoteRow:
    for column, rate_type in SELL_PRICE_COLUMNS:
        price = parse_price(cells[column])
        if price is None:
            continue
        if rate_type == REMITTANCE:
            return RateQuoteRow(display_name=display_name, remittance_sell_price=price)
        return RateQuoteRow(display_name=display_name, cash_sell_price=price)

    raise NoUsableRate(f"No usable sell price for {display_name}")
