"""
API tests for the BoxSim backend.

Each test gets a fresh app lifespan whose driver database is loaded from a
temporary directory.
"""

import copy
import json
import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

WOOFER_ID = "5d1b7c3e-2a4f-4c86-9e0d-8f3a6b2c1d47"

RECORD = {
    "general_info": {
        "uuid": WOOFER_ID,
        "brand": "Acme",
        "manufacturer": "Acme Audio",
        "providedby": "datasheet",
        "comment": "",
        "model": "W8-100",
        "indexed": True,
        "speaker_type": "Woofer",
    },
    "electrical_parameters": {
        "re": {"value": 6.0, "unit": "Ohm"},
        "bl": {"value": 7.5, "unit": "Tm"},
        "impedance": {"value": 8.0, "unit": "Ohm"},
        "le": {"value": 0.0005, "unit": "H"},
        "znom": {"value": 8.0, "unit": "Ohm"},
        "pe": {"value": 60.0, "unit": "W"},
        "pmax": {"value": 120.0, "unit": "W"},
        "motor_constant": {"value": 3.06, "unit": "N/sqrt(W)"},
        "flux_density": {"value": 1.1, "unit": "T"},
    },
    "thiele_small_parameters": {
        "fs": {"value": 40.0, "unit": "Hz"},
        "qms": {"value": 3.5, "unit": ""},
        "mms": {"value": 15.0, "unit": "g"},
        "sd": {"value": 200.0, "unit": "cm2"},
        "mmd": {"value": 13.0, "unit": "g"},
        "rms": {"value": 1.08, "unit": "kg/s"},
        "xmax": {"value": 5.0, "unit": "mm"},
        "xlim": {"value": 10.0, "unit": "mm"},
    },
    "physical_dimensions": {
        "nominal_diameter": "8\"",
        "vc_diameter": {"value": 38.0, "unit": "mm"},
        "winding_height": {"value": 12.0, "unit": "mm"},
        "air_gap_height": {"value": 6.0, "unit": "mm"},
        "effective_diameter": {"value": 16.0, "unit": "cm"},
        "baffle_cutout_diameter": {"value": 183.0, "unit": "mm"},
        "volume_occupied": {"value": 0.9, "unit": "L"},
        "net_weight": {"value": 2.1, "unit": "kg"},
        "material": "paper",
    },
}

SEALED_BOX = {"type": "Sealed", "volume": {"value": 20.0, "unit": "L"}}


@pytest.fixture
def client(tmp_path, monkeypatch):
    tweeter = copy.deepcopy(RECORD)
    tweeter["general_info"].update({
        "uuid": "tweeter-1", "model": "T25", "manufacturer": "Sonora", "speaker_type": "Tweeter",
    })
    broken = copy.deepcopy(RECORD)
    broken["general_info"]["uuid"] = "broken-1"
    del broken["thiele_small_parameters"]["fs"]

    for name, record in (("woofer", RECORD), ("tweeter", tweeter), ("broken", broken)):
        (tmp_path / f"{name}.json").write_text(json.dumps(record))

    monkeypatch.setenv("BOXSIM_DRIVER_DIR", str(tmp_path))
    monkeypatch.delenv("BOXSIM_STRICT", raising=False)
    from backend.main import create_app
    with TestClient(create_app()) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["drivers"] == 3


def test_settings_shared_with_startup(tmp_path):
    from backend.main import create_app
    from boxsim.config import Settings

    (tmp_path / "woofer.json").write_text(json.dumps(RECORD))
    settings = Settings(driver_dir=str(tmp_path), speed_of_sound=340.0, frontend_url="https://boxsim.example")
    app = create_app(settings)
    with TestClient(app) as test_client:
        assert app.state.settings is settings
        assert app.state.environment.speed_of_sound == 340.0
        assert app.state.driver_db.count == 1
        response = test_client.get("/api/health", headers={"Origin": "https://boxsim.example"})
        assert response.headers["access-control-allow-origin"] == "https://boxsim.example"


class TestLibrary:

    def test_list(self, client):
        data = client.get("/api/library/drivers").json()
        assert data["total"] == 3

    def test_filter_and_paginate(self, client):
        data = client.get("/api/library/drivers", params={"speaker_type": "woofer"}).json()
        assert data["total"] == 2
        page = client.get("/api/library/drivers", params={"limit": 1, "offset": 2}).json()
        assert page["total"] == 3
        assert len(page["drivers"]) == 1

    def test_search(self, client):
        data = client.get("/api/library/drivers", params={"q": "sonora"}).json()
        assert [d["model"] for d in data["drivers"]] == ["T25"]

    def test_list_with_null_fields(self, client):
        record = copy.deepcopy(RECORD)
        record["general_info"].update({"uuid": "anon-1", "manufacturer": None, "model": None})
        client.app.state.driver_db.add_record(record)

        response = client.get("/api/library/drivers", params={"q": "acme"})
        assert response.status_code == 200
        anon = [d for d in response.json()["drivers"] if d["id"] == "anon-1"]
        assert anon[0]["manufacturer"] == ""
        assert anon[0]["model"] == ""

    def test_get_derived_parameters(self, client):
        response = client.get(f"/api/library/drivers/{WOOFER_ID}")
        assert response.status_code == 200
        data = response.json()
        assert data["mms"] == pytest.approx(0.015)
        assert data["sd"] == pytest.approx(0.02)
        assert data["qes"] == pytest.approx(0.4021, abs=1e-4)
        assert data["vd"] == pytest.approx(1e-4)

    def test_unknown_driver(self, client):
        assert client.get("/api/library/drivers/nope").status_code == 404

    def test_invalid_record(self, client):
        response = client.get("/api/library/drivers/broken-1")
        assert response.status_code == 422
        assert "thiele_small_parameters.fs" in response.json()["detail"]


class TestCalculateResponse:

    def test_impedance(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID,
            "enclosure": SEALED_BOX,
            "response_type": "Impedance",
            "freq_start": 20.0,
            "freq_end": 200.0,
            "num_points": 50,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["unit"] == "Ohm"
        assert len(data["frequency"]) == 50
        assert len(data["values"]) == 50
        assert max(data["values"]) > 6.0

    def test_spl(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID,
            "enclosure": SEALED_BOX,
            "response_type": "Spl",
            "count": 2,
            "num_points": 20,
        })
        assert response.status_code == 200
        assert response.json()["unit"] == "dB"

    def test_unknown_driver(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": "nope", "enclosure": SEALED_BOX,
        })
        assert response.status_code == 404

    def test_vented_spl_unsupported(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID,
            "enclosure": {
                "type": "Vented",
                "volume": {"value": 20.0, "unit": "L"},
                "tuning_frequency": {"value": 35.0, "unit": "Hz"},
            },
            "response_type": "Spl",
        })
        assert response.status_code == 422

    def test_zero_volume(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID,
            "enclosure": {"type": "Sealed", "volume": {"value": 0.0, "unit": "L"}},
        })
        assert response.status_code == 422

    def test_bad_enclosure(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID, "enclosure": {"type": "Sealed"},
        })
        assert response.status_code == 422

    def test_invalid_count(self, client):
        response = client.post("/api/calculate-response", json={
            "driver_id": WOOFER_ID, "enclosure": SEALED_BOX, "count": 0,
        })
        assert response.status_code == 422
