from __future__ import annotations

from fastapi.testclient import TestClient

from pallet_optimizer.api import app

client = TestClient(app)


def make_payload(**overrides):
    payload = {
        "products": [
            {
                "product": {
                    "id": "carton-1",
                    "name": "Carton",
                    "weight": 18,
                    "dimensions": {"length": 50, "width": 40, "height": 30, "unit": "cm"},
                },
                "quantity": 10,
            }
        ],
        "container_preset": "40HC",
        "pallet_preset": "EUR",
    }
    payload.update(overrides)
    return payload


def test_health() -> None:
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_presets() -> None:
    data = client.get("/presets").json()

    assert "40HC" in data["containers"]
    assert data["pallets"]["US"]["unit"] == "in"


def test_optimize_with_presets() -> None:
    r = client.post("/optimize", json=make_payload())

    assert r.status_code == 200, r.text
    data = r.json()
    assert data["result"]["success"] is True
    assert data["result"]["status"] == "success"
    assert len(data["result"]["pallet_arrangements"]) == 1
    assert data["summary"] is None


def test_optimize_with_summary() -> None:
    r = client.post("/optimize?summary=1", json=make_payload())

    assert r.status_code == 200, r.text
    summary = r.json()["summary"]
    assert summary["total_products"] == 10
    assert summary["remaining_products"] == 0


def test_optimize_with_explicit_container_and_message() -> None:
    payload = make_payload(
        container={"length": 200, "width": 200, "height": 200, "max_weight": 1000},
        container_preset=None,
        message="Quote ready",
    )

    r = client.post("/optimize", json=payload)

    assert r.status_code == 200, r.text
    assert r.json()["result"]["message"] == "Quote ready"


def test_optimize_reports_invalid_products_in_result() -> None:
    payload = make_payload(products=[{"product": {"id": "x", "name": "Mystery Box", "weight": 1}, "quantity": 1}])

    r = client.post("/optimize", json=payload)

    assert r.status_code == 200
    result = r.json()["result"]
    assert result["success"] is False
    assert result["invalid_products"] == ["Mystery Box"]


def test_missing_container_is_friendly_422() -> None:
    r = client.post("/optimize", json=make_payload(container_preset=None))

    assert r.status_code == 422
    data = r.json()
    assert data["error"] == "MISSING_INFORMATION"
    assert data["details"]


def test_unknown_preset_is_friendly_422() -> None:
    r = client.post("/optimize", json=make_payload(container_preset="99XL"))

    assert r.status_code == 422
    assert r.json()["error"] == "UNKNOWN_PRESET"


def test_malformed_container_is_rejected() -> None:
    payload = make_payload(container={"length": -1, "width": 100, "height": 100}, container_preset=None)

    r = client.post("/optimize", json=payload)

    assert r.status_code == 422


def test_validate() -> None:
    payload = {
        "products": [
            {"product": {"id": "ok", "weight": 1, "dimensions": {"length": 1, "width": 1, "height": 1}}, "quantity": 1},
            {"product": {"id": "bad", "sku": "BAD-1", "weight": -1, "dimensions": {"length": 1, "width": 1, "height": 1}}, "quantity": 1},
        ]
    }

    r = client.post("/validate", json=payload)

    assert r.status_code == 200
    assert r.json() == {"valid": False, "invalid_products": ["BAD-1"]}


def test_summary_of_posted_result() -> None:
    result = client.post("/optimize", json=make_payload()).json()["result"]

    r = client.post("/summary", json=result)

    assert r.status_code == 200, r.text
    assert r.json()["total_pallets"] == 1
    assert r.json()["success"] is True
