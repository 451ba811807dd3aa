"""
Tests for Flask API endpoints.

Integration tests that validate the REST API returns correct status
codes, JSON structure, and values consistent with the engine.
"""

import json

import pytest

BASE_VALUE = 6.674e-11 * 2.984e30 / 1e4 ** 2


def post(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


class TestRoot:
    """GET /."""

    def test_overview(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["terms"] == 61
        assert "muge_resonance" in data["categories"]


class TestTermsEndpoint:
    """GET /api/terms, /api/terms/<name>, /api/categories."""

    def test_list_terms(self, client):
        resp = client.get("/api/terms")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["count"] == 61
        assert data["terms"][0]["name"] == "UniversalGravity1"

    def test_category_filter(self, client):
        data = client.get("/api/terms?category=muge_resonance").get_json()
        assert data["count"] == 13
        assert all(t["category"] == "muge_resonance" for t in data["terms"])

    def test_unknown_category_empty(self, client):
        assert client.get("/api/terms?category=nope").get_json()["count"] == 0

    def test_term_by_name(self, client):
        resp = client.get("/api/terms/SGR1745Magnetar")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["category"] == "astrophysics"
        assert "system_params" in data

    def test_term_not_found(self, client):
        resp = client.get("/api/terms/NoSuchTerm")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_categories(self, client):
        data = client.get("/api/categories").get_json()
        assert len(data) == 7
        assert len(data["muge_compressed"]) == 9


class TestSystemsEndpoint:
    """GET /api/systems, /api/systems/<id>, /api/bodies."""

    def test_list_systems(self, client):
        data = client.get("/api/systems").get_json()
        assert [s["id"] for s in data] == ["SGR1745", "SGRA_STAR", "M82", "TEMPLATE"]

    def test_system_by_id(self, client):
        data = client.get("/api/systems/M82").get_json()
        assert data["found"] is True
        assert data["type"] == "GALAXY"

    def test_unknown_system_default_record(self, client):
        resp = client.get("/api/systems/NOPE")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["found"] is False
        assert data["name"] == "Unknown"

    def test_bodies(self, client):
        data = client.get("/api/bodies").get_json()
        assert [b["name"] for b in data] == ["Sun", "Earth", "Jupiter", "Neptune"]


class TestEvaluateEndpoint:
    """POST /api/evaluate."""

    def test_single_term(self, client):
        resp = post(client, "/api/evaluate", {"t": 0, "terms": ["MUGECompressedBase"]})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["t"] == 0.0
        assert abs(data["values"]["MUGECompressedBase"] - BASE_VALUE) / BASE_VALUE < 1e-12
        assert data["total_resonance"] == 0.0

    def test_all_terms_default(self, client):
        data = post(client, "/api/evaluate", {}).get_json()
        assert len(data["values"]) == 61
        assert data["injected"] is not None

    def test_params_override(self, client):
        data = post(client, "/api/evaluate", {
            "terms": ["MUGEResonanceFTRZ"], "params": {"fTRZ": 0.7},
        }).get_json()
        assert data["values"]["MUGEResonanceFTRZ"] == 0.7

    def test_system_seed(self, client):
        data = post(client, "/api/evaluate", {
            "t": 0, "system": "SGR1745", "terms": ["UniversalGravity4"],
        }).get_json()
        assert data["values"]["UniversalGravity4"] != 0.0

    def test_body_seed(self, client):
        resp = post(client, "/api/evaluate", {
            "t": 10, "body": "Earth", "terms": ["GradientMassRadiusSource6"],
        })
        expected = 6.67430e-11 * 5.972e24 / 6.371e6 ** 2
        value = resp.get_json()["values"]["GradientMassRadiusSource6"]
        assert abs(value - expected) / expected < 1e-12

    def test_unknown_body(self, client):
        assert post(client, "/api/evaluate", {"body": "Pluto"}).status_code == 400

    def test_bad_params(self, client):
        resp = post(client, "/api/evaluate", {"params": {"M": "heavy"}})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_bad_terms(self, client):
        assert post(client, "/api/evaluate", {"terms": "MUGEEnvelope"}).status_code == 400

    def test_not_json(self, client):
        resp = client.post("/api/evaluate", data="t=1", content_type="text/plain")
        assert resp.status_code == 400


class TestTimeSeriesEndpoint:
    """POST /api/time-series."""

    def test_three_rounds(self, client):
        resp = post(client, "/api/time-series", {
            "t_start": 0, "t_end": 100, "dt": 50, "terms": ["MUGECompressedBase"],
        })
        assert resp.status_code == 200
        data = resp.get_json()
        rounds = data["series"]["rounds"]
        assert [r["t"] for r in rounds] == [0.0, 50.0, 100.0]
        assert data["config"]["num_steps"] == 3
        assert data["summary"]["rounds"] == 3

    @pytest.mark.parametrize("payload", [
        {"t_start": 0, "t_end": 100, "dt": 0},
        {"t_start": 100, "t_end": 0, "dt": 1},
        {"t_start": 0, "dt": 1},
        {"t_start": 0, "t_end": 1e9, "dt": 1},
        {"t_start": 0, "t_end": 1e300, "dt": 1e-300},
    ])
    def test_bad_config(self, client, payload):
        resp = post(client, "/api/time-series", payload)
        assert resp.status_code == 400
        assert "error" in resp.get_json()


class TestSweepEndpoint:
    """POST /api/sweep."""

    def test_sweep(self, client):
        resp = post(client, "/api/sweep", {
            "param": "fTRZ", "min": 0, "max": 1, "steps": 3,
            "terms": ["MUGEResonanceFTRZ"],
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["series"]["axis"] == "fTRZ"
        values = [r["values"]["MUGEResonanceFTRZ"] for r in data["series"]["rounds"]]
        assert values == [0.0, 0.5, 1.0]
        assert data["summary"]["mode"] == "sweep"

    @pytest.mark.parametrize("payload", [
        {"param": "B", "min": 0, "max": 1, "steps": 1},
        {"param": "B", "min": 1, "max": 1, "steps": 3},
        {"param": "", "min": 0, "max": 1, "steps": 3},
        {"min": 0, "max": 1, "steps": 3},
    ])
    def test_bad_config(self, client, payload):
        resp = post(client, "/api/sweep", payload)
        assert resp.status_code == 400
        assert "error" in resp.get_json()
