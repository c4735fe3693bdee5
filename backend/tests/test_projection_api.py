from __future__ import annotations

import json

import pytest
from flask.testing import FlaskClient


def performance_payload() -> dict:
    return {
        "startingBalance": 1000,
        "entries": [
            {"id": "e1", "year": 2024, "month": 1, "growthAmount": 100, "growthPercentage": 10},
            {"id": "e2", "year": 2024, "month": 2, "growthAmount": 110, "growthPercentage": 10, "deposit": 100},
        ],
    }


def test_series_endpoint_returns_running_balance(client: FlaskClient):
    resp = client.post("/api/performance/series", json=performance_payload())

    assert resp.status_code == 200
    series = resp.get_json()["series"]
    assert [row["balance"] for row in series] == [1100, 1310]
    assert [row["label"] for row in series] == ["Jan 2024", "Feb 2024"]
    assert set(series[0]) == {"label", "balance", "growth", "growthPercentage", "deposit", "withdrawal"}


def test_series_endpoint_tolerates_sparse_entries(client: FlaskClient):
    resp = client.post(
        "/api/performance/series",
        json={"startingBalance": 1000, "entries": [{}, {"growthAmount": None, "deposit": 5}]},
    )

    assert resp.status_code == 200
    assert [row["balance"] for row in resp.get_json()["series"]] == [1000, 1005]


def test_summary_endpoint(client: FlaskClient):
    resp = client.post("/api/performance/summary", json=performance_payload())

    assert resp.status_code == 200
    summary = resp.get_json()["summary"]
    assert summary["currentBalance"] == 1310
    assert summary["averageGrowthPercentage"] == 10


def test_summary_endpoint_without_entries(client: FlaskClient):
    resp = client.post("/api/performance/summary", json={"startingBalance": 1000, "entries": []})

    assert resp.status_code == 200
    assert resp.get_json() == {"summary": None}


def test_chart_endpoint_uses_configured_horizon(client: FlaskClient):
    payload = performance_payload()
    payload["customDeposit"] = 250

    resp = client.post("/api/performance/chart", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["projection"]) == 12
    assert len(body["customProjection"]) == 12
    assert body["projection"][0]["periodIndex"] == 1
    assert body["avgMonthlyDeposit"] == 50
    assert body["customProjectedBalance"] > body["projectedBalance"]


def test_chart_endpoint_accepts_horizon_override(client: FlaskClient):
    payload = performance_payload()
    payload["horizon"] = 3

    resp = client.post("/api/performance/chart", json=payload)

    assert resp.status_code == 200
    assert [p["periodIndex"] for p in resp.get_json()["projection"]] == [1, 2, 3]


def test_investor_endpoint_sorts_entries_before_folding(client: FlaskClient):
    payload = {
        "investor": {
            "id": 7,
            "name": "Investor Seven",
            "investmentAmount": 5000,
            "performance": [
                {"year": 2024, "month": 3, "growthAmount": 30},
                {"year": 2023, "month": 12, "growthAmount": 10},
                {"year": 2024, "month": 1, "growthAmount": 20},
            ],
        },
        "horizon": 1,
    }

    resp = client.post("/api/performance/investor", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["investorId"] == "7"
    assert [row["label"] for row in body["chart"]["series"]] == ["Dec 2023", "Jan 2024", "Mar 2024"]
    assert [row["balance"] for row in body["chart"]["series"]] == [5010, 5030, 5060]
    assert body["summary"]["currentBalance"] == 5060


def test_projection_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection",
        json={"lastBalance": 1000, "avgGrowthRatePercent": 2, "periodicContribution": 100, "horizonPeriods": 3},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert [p["balance"] for p in body["points"]] == pytest.approx([1120, 1242.4, 1367.248])
    assert body["totalContributed"] == 1300
    assert body["finalBalance"] == pytest.approx(1367.248)
    assert body["growth"] == pytest.approx(67.248)


def test_projection_endpoint_with_negative_horizon(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection",
        json={"lastBalance": 1000, "avgGrowthRatePercent": 2, "periodicContribution": 100, "horizonPeriods": -4},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["points"] == []
    assert body["finalBalance"] == 1000
    assert body["totalContributed"] == 1000


def test_investment_calculator_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/calc/investment",
        json={"investmentType": "active", "initialInvestment": 1000, "monthlyInvestment": 100, "durationYears": 1},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["monthlyGrowthRate"] == 4
    assert len(body["schedule"]) == 13
    assert body["schedule"][0] == {"month": 0, "balance": 1000, "year": 0, "monthOfYear": 0}
    assert body["totalInvestment"] == 2200


def test_invalid_payload_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/projection", json={"avgGrowthRatePercent": 2})

    assert resp.status_code == 422
    body = resp.get_json()
    assert any(error["loc"] == ["lastBalance"] for error in body["detail"])


def test_non_finite_numbers_are_rejected(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection",
        data='{"lastBalance": NaN, "avgGrowthRatePercent": 2}',
        content_type="application/json",
    )

    assert resp.status_code == 422


def test_non_json_body_validates_as_empty(client: FlaskClient):
    resp = client.post("/api/calc/investment", data="not json", content_type="text/plain")

    # every calculator field has a default, so an empty body is a valid request
    assert resp.status_code == 200

    resp = client.post("/api/calc/projection", data="not json", content_type="text/plain")
    assert resp.status_code == 422


def strict_json(resp) -> dict:
    """Parse a response body, failing on the NaN/Infinity tokens JSON does not allow."""

    def reject(token):
        raise AssertionError(f"response body is not valid JSON: {token}")

    return json.loads(resp.get_data(as_text=True), parse_constant=reject)


OVERFLOWING_ENTRIES = [
    {"year": 2024, "month": 1, "growthAmount": 1e308},
    {"year": 2024, "month": 2, "growthAmount": 1e308},
]


@pytest.mark.parametrize(
    "url, payload",
    [
        (
            "/api/calc/projection",
            {"lastBalance": 1000, "avgGrowthRatePercent": 1e6, "horizonPeriods": 100},
        ),
        ("/api/calc/investment", {"monthlyGrowthRate": 1e6, "durationYears": 50}),
        ("/api/performance/series", {"startingBalance": 0, "entries": OVERFLOWING_ENTRIES}),
        ("/api/performance/summary", {"startingBalance": 0, "entries": OVERFLOWING_ENTRIES}),
        ("/api/performance/chart", {"startingBalance": 0, "entries": OVERFLOWING_ENTRIES}),
        (
            "/api/performance/investor",
            {
                "investor": {
                    "id": "inv-1",
                    "name": "Ada",
                    "investmentAmount": 0,
                    "performance": OVERFLOWING_ENTRIES,
                }
            },
        ),
    ],
)
def test_overflowing_results_return_422(client: FlaskClient, url, payload):
    resp = client.post(url, json=payload)

    assert resp.status_code == 422
    detail = strict_json(resp)["detail"]
    assert detail
    assert all(error["type"] == "non_finite_result" for error in detail)


def test_overflow_error_points_at_the_offending_figure(client: FlaskClient):
    resp = client.post(
        "/api/performance/series",
        json={"startingBalance": 0, "entries": OVERFLOWING_ENTRIES},
    )

    assert resp.status_code == 422
    assert strict_json(resp)["detail"] == [
        {"loc": ["series", 1, "balance"], "msg": "Result is too large to represent", "type": "non_finite_result"}
    ]


def test_rejected_nan_input_is_not_echoed(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection",
        data='{"lastBalance": NaN, "avgGrowthRatePercent": 2}',
        content_type="application/json",
    )

    assert resp.status_code == 422
    detail = strict_json(resp)["detail"]
    assert any(error["loc"] == ["lastBalance"] for error in detail)
    assert all("input" not in error for error in detail)
