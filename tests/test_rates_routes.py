from __future__ import annotations

import pytest
import responses

from tests.fixtures import load_json, load_text

BOC_URL = "https://www.boc.cn/sourcedb/whpj/"
EXCHANGERATE_API_URL = "https://api.exchangerate-api.com/v4/latest"
OPEN_ER_API_URL = "https://open.er-api.com/v6/latest"


def mock_boc_page(status: int = 200) -> None:
    if status == 200:
        responses.add(
            responses.GET,
            BOC_URL,
            body=load_text("boc_whpj.html"),
            content_type="text/html; charset=utf-8",
        )
    else:
        responses.add(responses.GET, BOC_URL, status=status)


@responses.activate
def test_boc_rate_returns_remittance_quote(client):
    mock_boc_page()

    response = client.get("/api/boc-rate/USD")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["rate"] == 710.50 / 100
    assert payload["currency"] == "USD"
    assert payload["currencyName"] == "美元"
    assert payload["rateType"] == "remittance"
    assert payload["cached"] is False
    assert payload["cacheTime"]


@responses.activate
def test_boc_rate_second_request_is_served_from_cache(client):
    mock_boc_page()

    client.get("/api/boc-rate/USD")
    response = client.get("/api/boc-rate/AED")

    payload = response.get_json()
    assert payload["cached"] is True
    assert payload["rateType"] == "cash"
    assert len(responses.calls) == 1


@responses.activate
@pytest.mark.parametrize("currency", ["XXX", "CHF", "SAR"])
def test_boc_rate_lookup_failures_are_404(client, currency):
    mock_boc_page()

    response = client.get(f"/api/boc-rate/{currency}")

    assert response.status_code == 404
    assert set(response.get_json()) == {"error"}


@responses.activate
def test_boc_rate_upstream_failure_is_generic_500(client):
    mock_boc_page(status=502)

    response = client.get("/api/boc-rate/USD")

    assert response.status_code == 500
    payload = response.get_json()
    assert payload == {"error": "Failed to fetch exchange rate."}


@responses.activate
def test_resolved_rate_prefers_boc_and_includes_gbp(client):
    mock_boc_page()
    responses.add(
        responses.GET,
        f"{EXCHANGERATE_API_URL}/USD",
        json=load_json("exchangerate_api_usd.json"),
    )

    response = client.get("/api/rates/usd")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["currency"] == "USD"
    assert payload["rate"] == 710.50 / 100
    assert payload["source"] == "primary"
    assert payload["primaryAttemptFailed"] is False
    assert payload["rateType"] == "remittance"
    assert payload["gbpRate"] == 0.746
    assert payload["notice"] == "primary"


@responses.activate
def test_resolved_rate_falls_back_when_boc_is_down(client):
    mock_boc_page(status=503)
    responses.add(responses.GET, f"{EXCHANGERATE_API_URL}/USD", status=500)
    responses.add(
        responses.GET,
        f"{OPEN_ER_API_URL}/USD",
        json=load_json("open_er_api_usd.json"),
    )

    payload = client.get("/api/rates/USD").get_json()

    assert payload["source"] == "fallback"
    assert payload["primaryAttemptFailed"] is True
    assert payload["rate"] == 7.19
    assert payload["provider"] == "open_er_api"
    assert payload["gbpRate"] == 0.745
    assert payload["notice"] == "primary_failed"


@responses.activate
def test_resolved_rate_unavailable_is_503(client):
    mock_boc_page(status=503)
    responses.add(responses.GET, f"{EXCHANGERATE_API_URL}/USD", status=500)
    responses.add(responses.GET, f"{OPEN_ER_API_URL}/USD", status=500)

    response = client.get("/api/rates/USD")

    assert response.status_code == 503
    payload = response.get_json()
    assert "error" in payload
    assert payload["gbpRate"] is None


def test_resolved_rate_for_cny_needs_no_boc(client, app):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{EXCHANGERATE_API_URL}/CNY", json={"rates": {"CNY": 1, "GBP": 0.105}})

        payload = client.get("/api/rates/CNY").get_json()

    assert payload["rate"] == 1
    assert payload["source"] == "cny"
    assert payload["gbpRate"] == 0.105
    assert app.extensions["boc_cache"].get().document is None


def test_resolved_rate_rejects_malformed_code(client):
    response = client.get("/api/rates/US1")

    assert response.status_code == 422
    assert "error" in response.get_json()


@responses.activate
def test_quote_prices_every_tier(client):
    responses.add(
        responses.GET,
        f"{EXCHANGERATE_API_URL}/XXX",
        json={"rates": {"CNY": 3.5, "GBP": 0.4}},
    )

    response = client.get("/api/quote/XXX?amount=100")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["rate"]["source"] == "market"
    assert payload["rate"]["notice"] == "not_supported"
    quote = payload["quote"]
    assert quote["baseAmount"] == pytest.approx(350)
    assert [tier["multiplier"] for tier in quote["tiers"]] == [1.07, 1.07, 1.06]
    assert quote["tiers"][0]["flatFee"] == 5
    assert [tier["highlighted"] for tier in quote["tiers"]] == [False, True, False]
    assert quote["gbp"]["suggested"] == pytest.approx(40.4)


def test_quote_requires_amount(client):
    response = client.get("/api/quote/USD")

    assert response.status_code == 422


@responses.activate
def test_quote_with_negative_amount_is_all_zero(client):
    responses.add(
        responses.GET,
        f"{EXCHANGERATE_API_URL}/CNY",
        json={"rates": {"CNY": 1, "GBP": 0.105}},
    )

    response = client.get("/api/quote/CNY?amount=-50")

    assert response.status_code == 200
    quote = response.get_json()["quote"]
    assert quote["amount"] == 0
    assert quote["baseAmount"] == 0
    assert all(tier["total"] == 0 and tier["profit"] == 0 for tier in quote["tiers"])
    assert not any(tier["highlighted"] for tier in quote["tiers"])
    assert quote["gbp"] is None
