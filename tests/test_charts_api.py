from fastapi.testclient import TestClient

from birthchart.app import app

client = TestClient(app)

CHART = {
    "placements": [
        {"body": "Sun", "eclipticLongitude": 125.0, "retrograde": False},
        {"body": "Moon", "eclipticLongitude": 95.0, "retrograde": False},
        {"body": "Ascendant", "eclipticLongitude": 5.0, "retrograde": False},
    ]
}


def test_health():
    r = client.get("/__health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_analyze_chart():
    res = client.post("/v1/charts/analyze", json=CHART)
    assert res.status_code == 200, res.text
    data = res.json()
    assert data["meta"]["engine_version"].startswith("birthchart-")
    assert data["chartRuler"]["body"] == "Mars"
    sun = next(p for p in data["placements"] if p["body"] == "Sun")
    assert sun["house"] == 5
    assert [a["type"] for a in data["aspects"]] == ["square", "trine"]
    assert data["mostAspectedBody"] == "Ascendant"


def test_analyze_without_ascendant():
    res = client.post("/v1/charts/analyze", json={"placements": CHART["placements"][:2]})
    assert res.status_code == 200, res.text
    data = res.json()
    assert data["houses"] is None
    assert data["chartRuler"] is None
    assert data["meta"]["warnings"]


def test_analyze_tolerates_bad_entries():
    body = {
        "placements": CHART["placements"]
        + [{"body": "Vulcan", "eclipticLongitude": 3.0}, {"name": "Mars", "lon": "not a number"}]
    }
    res = client.post("/v1/charts/analyze", json=body)
    assert res.status_code == 200, res.text
    assert res.json()["meta"]["dropped"] == 2


def test_null_placements_rejected():
    assert client.post("/v1/charts/analyze", json={"placements": None}).status_code == 400
    assert client.post("/v1/charts/analyze", json={}).status_code == 400
    assert client.post("/v1/charts/interpret", json={}).status_code == 400


def test_max_aspects_option():
    body = dict(CHART, options={"max_aspects": 1})
    res = client.post("/v1/charts/analyze", json=body)
    assert len(res.json()["aspects"]) == 1

    bad = dict(CHART, options={"max_aspects": -1})
    assert client.post("/v1/charts/analyze", json=bad).status_code == 422


def test_default_max_aspects_from_env(monkeypatch):
    monkeypatch.setenv("DEFAULT_MAX_ASPECTS", "1")
    res = client.post("/v1/charts/analyze", json=CHART)
    assert len(res.json()["aspects"]) == 1


def test_interpret():
    res = client.post("/v1/charts/interpret", json=CHART)
    assert res.status_code == 200, res.text
    data = res.json()
    assert set(data["planets"]) == {"Sun", "Moon"}
    assert "Leo" in data["planets"]["Sun"]
    assert any(i["category"] == "Chart Ruler" for i in data["insights"])
