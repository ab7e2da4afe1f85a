from datetime import date

import pytest
from fastapi.testclient import TestClient

try:  # pragma: no cover - compatibility for local vs packaged imports
    from asset_ledger.app.main import create_app
    from asset_ledger.app.schemas.asset import Asset
    from asset_ledger.app.services.depreciation import calculate_depreciation
    from asset_ledger.examples.sample_requests import ASSET_SAMPLES
except ModuleNotFoundError:  # pragma: no cover
    from app.main import create_app
    from app.schemas.asset import Asset
    from app.services.depreciation import calculate_depreciation
    from examples.sample_requests import ASSET_SAMPLES


client = TestClient(create_app())

FORKLIFT = {
    "id": "asset-1",
    "name": "Forklift",
    "category": "Machinery",
    "purchase_date": "2020-01-01",
    "purchase_cost": 10000.0,
    "salvage_value": 1000.0,
    "useful_life_years": 5,
    "depreciation_method": "straight_line",
}


def test_health_endpoint():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_asset_depreciation_endpoint():
    response = client.post("/asset/depreciation", json={"asset": FORKLIFT, "as_of": "2022-01-01"})
    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2022-01-01"
    assert data["accumulated_depreciation"] == pytest.approx(3600.0)
    assert data["net_book_value"] == pytest.approx(6400.0)
    assert data["annual_depreciation"] == pytest.approx(1800.0)
    assert data["percent_depreciated"] == pytest.approx(40.0)
    assert data["is_fully_depreciated"] is False
    assert data["disposal_gain_loss"] is None


def test_asset_depreciation_matches_service():
    asset = dict(FORKLIFT, depreciation_method="reducing_balance")
    response = client.post("/asset/depreciation", json={"asset": asset, "as_of": "2023-08-09"})
    assert response.status_code == 200

    expected = calculate_depreciation(Asset(**asset), date(2023, 8, 9))
    data = response.json()
    for key in ("accumulated_depreciation", "net_book_value", "annual_depreciation", "years_elapsed"):
        assert data[key] == pytest.approx(getattr(expected, key))
    assert data["is_fully_depreciated"] == expected.is_fully_depreciated


def test_asset_depreciation_rate_override():
    asset = dict(FORKLIFT, depreciation_method="reducing_balance")
    response = client.post("/asset/depreciation", json={"asset": asset, "as_of": "2021-01-01", "rate": 0.25})
    assert response.status_code == 200
    assert response.json()["net_book_value"] == pytest.approx(7500.0)


def test_asset_schedule_endpoint():
    asset = dict(FORKLIFT, depreciation_method="reducing_balance")
    response = client.post("/asset/schedule", json={"asset": asset, "as_of": "2021-06-30"})
    assert response.status_code == 200
    data = response.json()
    assert data["asset_label"] == "Forklift"
    assert data["method"] == "reducing_balance"
    assert [row["year_label"] for row in data["schedule"]] == ["2020", "2021", "2022", "2023", "2024"]
    assert [row["period"] for row in data["schedule"]][:3] == ["past", "current", "future"]
    assert data["schedule"][-1]["closing_value"] == pytest.approx(1000.0)
    assert data["total_depreciation"] == pytest.approx(9000.0)


def test_asset_schedule_csv_endpoint():
    response = client.post("/asset/schedule/csv", json={"asset": FORKLIFT})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.splitlines()
    assert lines[0] == "Year,Opening Value,Depreciation,Accumulated,Closing Value"
    assert len(lines) == 6


def test_register_summary_endpoint():
    disposed = dict(FORKLIFT, name="Old Forklift", status="disposed", disposal_date="2021-01-01")
    response = client.post(
        "/asset/register/summary",
        json={"assets": [FORKLIFT, disposed], "as_of": "2022-01-01"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "total_assets": 1,
        "total_net_book_value": pytest.approx(6400.0),
        "monthly_depreciation": pytest.approx(150.0),
        "disposed_count": 1,
    }


def test_register_csv_endpoint():
    response = client.post("/asset/register/csv", json={"assets": [FORKLIFT], "as_of": "2022-01-01"})
    assert response.status_code == 200
    assert response.text.splitlines()[1] == (
        "Forklift,Machinery,,2020-01-01,10000.00,Straight-Line,5,1000.00,6400.00,active"
    )


def test_format_endpoint():
    response = client.post("/asset/format", json={"amount": 1234567.891, "symbol": "K"})
    assert response.status_code == 200
    assert response.json() == {"formatted": "K 1,234,567.89"}


def test_catalogue_endpoint():
    response = client.get("/asset/catalogue")
    assert response.status_code == 200
    data = response.json()
    assert {item["value"] for item in data["methods"]} == {"straight_line", "reducing_balance"}
    assert len(data["categories"]) == 6


def test_invalid_useful_life_is_rejected():
    asset = dict(FORKLIFT, useful_life_years=0)
    response = client.post("/asset/depreciation", json={"asset": asset, "as_of": "2022-01-01"})
    assert response.status_code == 422
    assert response.json()["field"] == "useful_life_years"


def test_negative_cost_is_rejected_on_schedule():
    asset = dict(FORKLIFT, purchase_cost=-10.0)
    response = client.post("/asset/schedule", json={"asset": asset})
    assert response.status_code == 422
    assert response.json()["field"] == "purchase_cost"


def test_unknown_method_fails_request_validation():
    asset = dict(FORKLIFT, depreciation_method="sum_of_years")
    response = client.post("/asset/depreciation", json={"asset": asset})
    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


@pytest.mark.parametrize("path, payload", ASSET_SAMPLES)
def test_sample_requests_succeed(path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 200
