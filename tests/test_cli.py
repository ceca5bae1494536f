import json

from cli import main


def test_cli_writes_analysis(tmp_path):
    src = tmp_path / "chart.json"
    out = tmp_path / "analysis.json"
    src.write_text(
        json.dumps(
            {
                "placements": [
                    {"body": "Sun", "eclipticLongitude": 0.0},
                    {"body": "Moon", "eclipticLongitude": 180.0},
                ]
            }
        ),
        encoding="utf-8",
    )
    assert main([str(src), str(out), "--max-aspects", "5"]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["aspects"][0]["type"] == "opposition"
    assert data["houses"] is None


def test_cli_accepts_bare_list(tmp_path):
    src = tmp_path / "chart.json"
    out = tmp_path / "analysis.json"
    src.write_text(json.dumps([{"body": "Ascendant", "eclipticLongitude": 5.0}]), encoding="utf-8")
    assert main([str(src), str(out), "--derive-descendant"]) == 0
    bodies = [p["body"] for p in json.loads(out.read_text(encoding="utf-8"))["placements"]]
    assert bodies == ["Ascendant", "Descendant"]


def test_cli_rejects_missing_placements(tmp_path, capsys):
    src = tmp_path / "chart.json"
    src.write_text(json.dumps({"chart": {}}), encoding="utf-8")
    assert main([str(src), str(tmp_path / "out.json")]) == 1
    assert "placements are required" in capsys.readouterr().err


def test_cli_rejects_scalar_input(tmp_path, capsys):
    src = tmp_path / "chart.json"
    src.write_text("5", encoding="utf-8")
    assert main([str(src), str(tmp_path / "out.json")]) == 1
    assert "placements are required" in capsys.readouterr().err

    src.write_text(json.dumps({"placements": "Sun"}), encoding="utf-8")
    assert main([str(src), str(tmp_path / "out.json")]) == 1
