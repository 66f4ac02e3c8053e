"""Currencies quoted on the BOC page and their table display names."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

CNY = "CNY"
GBP = "GBP"

BOC_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "USD": "美元",
        "EUR": "欧元",
        "GBP": "英镑",
        "JPY": "日元",
        "HKD": "港币",
        "AUD": "澳大利亚元",
        "CAD": "加拿大元",
        "SGD": "新加坡元",
        "CHF": "瑞士法郎",
        "NZD": "新西兰元",
        "KRW": "韩国元",
        "THB": "泰国铢",
        "MYR": "林吉特",
        "RUB": "卢布",
        "ZAR": "南非兰特",
        "SEK": "瑞典克朗",
        "DKK": "丹麦克朗",
        "NOK": "挪威克朗",
        "TWD": "新台币",
        "AED": "阿联酋迪拉姆",
        "SAR": "沙特里亚尔",
    }
)


@dataclass(frozen=True)
class CurrencyRegistry:
    """Fast lookup of BOC-quoted currency codes."""

    names: Mapping[str, str] = field(default_factory=lambda: BOC_DISPLAY_NAMES)

    def is_supported(self, code: str) -> bool:
        """Check whether BOC quotes the given code."""

        return code.strip().upper() in self.names

    def display_name(self, code: str) -> str | None:
        return self.names.get(code.strip().upper())


registry = CurrencyRegistry()
