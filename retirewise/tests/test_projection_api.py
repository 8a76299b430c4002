from __future__ import annotations

from flask.testing import FlaskClient


def projection_payload() -> dict:
    return {
        "currentAge": 30,
        "targetRetirementAge": 65,
        "currentSavings": 50000,
        "currentMonthlySavings": 500,
        "monthlySpending": 4000,
        "expectedAnnualReturn": 7.0,
        "inflationRate": 2.5,
    }


def test_projection_endpoint_returns_full_result(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["yearsToRetire"] == 35
    assert body["nestEggTarget"] == 1_200_000
    assert body["isPossible"] is True

    rows = body["projection"]
    assert rows[0] == {
        "age": 30,
        "savingsCurrent": 50000,
        "savingsRequired": 0.0,
        "totalContributedRequired": 0.0,
        "totalContributedCurrent": 0.0,
    }
    assert rows[-1]["age"] == 100
    retirement_row = next(row for row in rows if row["age"] == 65)
    assert body["projectedNestEgg"] == retirement_row["savingsCurrent"]


def test_partial_payload_is_merged_with_defaults(client: FlaskClient):
    resp = client.post("/api/projection", json={"monthlySpending": 2000})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["nestEggTarget"] == 2000 * 12 * 25
    assert body["projection"][0]["age"] == 30


def test_degenerate_ages_return_zeroed_result(client: FlaskClient):
    payload = projection_payload()
    payload["targetRetirementAge"] = 25

    resp = client.post("/api/projection", json=payload)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["projection"] == []
    assert body["isPossible"] is False
    assert body["projectedNestEgg"] == 50000


def test_invalid_payload_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", json={"currentAge": "thirty"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert "detail" in body
    assert any("currentAge" in message for message in body["detail"])


def test_non_object_payload_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", json=[1, 2, 3])
    assert resp.status_code == 400


def test_default_inputs_endpoint(client: FlaskClient):
    resp = client.get("/api/inputs/default")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["currentSavings"] == 50000
    assert body["stockHoldings"] == []


def test_inputs_update_recomputes_total(client: FlaskClient):
    resp = client.post("/api/inputs/update", json={"changes": {"savingsCash": 20000}})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["savingsCash"] == 20000
    assert body["currentSavings"] == 20000 + 25000 + 10000 + 5000


def test_inputs_update_rejects_unknown_field(client: FlaskClient):
    resp = client.post("/api/inputs/update", json={"changes": {"favouriteColour": "blue"}})

    assert resp.status_code == 400
    assert any("favouriteColour" in message for message in resp.get_json()["detail"])


def test_inputs_update_requires_changes(client: FlaskClient):
    resp = client.post("/api/inputs/update", json={"inputs": {}})
    assert resp.status_code == 400


def test_non_finite_numbers_return_400(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        data='{"expectedAnnualReturn": NaN, "monthlySpending": Infinity}',
        content_type="application/json",
    )

    assert resp.status_code == 400
    detail = resp.get_json()["detail"]
    assert any(message.startswith("expectedAnnualReturn") for message in detail)
    assert any(message.startswith("monthlySpending") for message in detail)
