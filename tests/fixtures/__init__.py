"""Test fixture helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

_FIXTURE_ROOT = Path(__file__).parent


def load_json(name: str) -> dict[str, Any]:
    """Load a JSON fixture by filename."""

    data = json.loads((_FIXTURE_ROOT / name).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Fixture '{name}' does not contain a JSON object.")
    return cast(dict[str, Any], data)


def load_text(name: str) -> str:
    """Load a text (HTML) fixture by filename."""

    return (_FIXTURE_ROOT / name).read_text(encoding="utf-8")


def boc_page(rows: list[list[str]]) -> str:
    """Render a minimal BOC-style quotation page from raw cell values."""

    header = (
        "<tr><th>货币名称</th><th>现汇买入价</th><th>现钞买入价</th><th>现汇卖出价</th>"
        "<th>现钞卖出价</th><th>中行折算价</th><th>发布日期</th><th>发布时间</th></tr>"
    )
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows
    )
    return f"<html><body><table>{header}{body}</table></body></html>"
