from fastapi.testclient import TestClient

from birthchart.app import app

CHART = {"placements": [{"body": "Sun", "eclipticLongitude": 125.0}]}


def test_reject_without_key(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.post("/v1/charts/analyze", json=CHART)
    assert r.status_code == 401


def test_reject_with_invalid_key(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("API_KEYS", "valid123")
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.post(
            "/v1/charts/analyze",
            headers={"Authorization": "Bearer nope"},
            json=CHART,
        )
    assert r.status_code == 403


def test_allow_with_valid_key(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("API_KEYS", "other, valid123")
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.post("/v1/charts/analyze", headers={"X-API-Key": "valid123"}, json=CHART)
    assert r.status_code == 200


def test_health_is_open(monkeypatch):
    monkeypatch.setenv("AUTH_ENABLED", "true")
    with TestClient(app) as client:
        assert client.get("/__health").status_code == 200


def test_rate_limit(monkeypatch):
    from birthchart.middleware.ratelimit import _counters

    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "2")
    monkeypatch.setenv("AUTH_ENABLED", "false")
    _counters.clear()
    with TestClient(app, raise_server_exceptions=False) as client:
        for i in range(3):
            r = client.post("/v1/charts/analyze", json=CHART)
            if i < 2:
                assert r.status_code == 200
    assert r.status_code == 429
    assert "Retry-After" in r.headers
    _counters.clear()
