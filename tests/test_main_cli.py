import json

import main_cli

ROUTES = {
    "jeepney_routes": [
        {"route_code": "17B", "origin": "Apas", "destination": "Carbon", "route_landmarks": ["IT Park"],
         "last_verified": "2024-01-15"},
        {"route_code": "04L", "origin": "Apas", "destination": "Fuente"},
    ],
    "modern_jeepney_routes": [
        {"route_code": "01C", "origin": "Fuente", "destination": "Ayala"},
    ],
}


def write_catalog(tmp_path):
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(ROUTES), encoding="utf-8")
    return str(path)


def test_route_command(tmp_path, capsys):
    assert main_cli.main(["--catalog", write_catalog(tmp_path), "route", "Apas", "Ayala"]) == 0
    out = capsys.readouterr().out
    assert "Step 1: Take 04L" in out
    assert "Ride 2: 01C" in out


def test_route_command_json(tmp_path, capsys):
    main_cli.main(["--catalog", write_catalog(tmp_path), "route", "Carbon", "Apas", "--json"])
    result = json.loads(capsys.readouterr().out)
    assert result["type"] == "direct"
    assert result["routes"][0]["route_code"] == "17B"


def test_show_command(tmp_path, capsys):
    main_cli.main(["--catalog", write_catalog(tmp_path), "show", "17b"])
    out = capsys.readouterr().out
    assert "Route 17B (jeepney)" in out
    assert "IT Park" in out
    assert "2024-01-15" in out


def test_stats_command(tmp_path, capsys):
    main_cli.main(["--catalog", write_catalog(tmp_path), "stats"])
    out = capsys.readouterr().out
    assert "Total routes: 3" in out
    assert "modern_jeep: 1" in out


def test_missing_catalog_file(tmp_path, capsys):
    assert main_cli.main(["--catalog", str(tmp_path / "nope.json"), "stats"]) == 1
    assert "Route catalog unavailable" in capsys.readouterr().out
