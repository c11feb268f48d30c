from __future__ import annotations


def _deal_body(**overrides):
    body = {
        "companyName": "Northwind Talent",
        "revenueIncVat": 1200,
        "leadsSold": 10,
        "leadSalePrice": 120,
        "setterCommissionPercent": 10,
        "salesRepCommissionPercent": 5,
        "closeDate": "2026-10-19",
    }
    body.update(overrides)
    return body


def test_list_deals_reports_period_window(client):
    response = client.get(
        "/api/v1/deals",
        params={"period": "custom", "start_date": "2026-09-01", "end_date": "2026-09-30"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["meta"]["periodStart"] == "2026-09-01"
    assert payload["meta"]["periodEnd"] == "2026-09-30"
    assert payload["meta"]["currency"] == "GBP"
    assert payload["data"][0]["financials"]["grossProfit"] == 450


def test_list_deals_custom_period_requires_dates(client):
    response = client.get("/api/v1/deals", params={"period": "custom", "start_date": "2026-09-01"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "bad_request"


def test_list_deals_rejects_unknown_period(client):
    response = client.get("/api/v1/deals", params={"period": "fortnightly"})
    assert response.status_code == 422


def test_preview_deal(client):
    response = client.post(
        "/api/v1/deals/preview",
        json={
            "revenueIncVat": 1200,
            "leadsSold": 10,
            "setterCommissionPercent": 10,
            "salesRepCommissionPercent": 5,
        },
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["revenueNet"] == 1000
    assert data["vatDeducted"] == 200
    assert data["leadFulfillmentCost"] == 200
    assert data["totalCosts"] == 550
    assert data["profitMargin"] == 45


def test_create_deal_returns_201(client):
    response = client.post("/api/v1/deals", json=_deal_body())
    assert response.status_code == 201
    assert response.json()["data"]["companyName"] == "Northwind Talent"


def test_create_deal_validation_envelope(client):
    response = client.post("/api/v1/deals", json=_deal_body(setterCommissionPercent=120))
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["details"]["errors"]


def test_create_deal_rejects_unknown_fields(client):
    response = client.post("/api/v1/deals", json=_deal_body(revenueNet=1000))
    assert response.status_code == 422


def test_update_deal(client):
    response = client.patch("/api/v1/deals/deal-9", json={"companyName": "Acme Group"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == "deal-9"
    assert data["companyName"] == "Acme Group"


def test_update_missing_deal_returns_404(client):
    response = client.patch("/api/v1/deals/missing", json={"leadsSold": 5})
    assert response.status_code == 404
    assert response.json() == {
        "error": {"code": "not_found", "message": "Deal not found", "details": None}
    }


def test_update_rejects_zero_leads(client):
    response = client.patch("/api/v1/deals/deal-1", json={"leadsSold": 0})
    assert response.status_code == 422
