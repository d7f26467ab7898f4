"""
Tests for the HTTP API: status mapping, response shape and health check.
"""

import json

import pytest
from pydantic import ValidationError

from options_pl_bt.api import create_app
from options_pl_bt.api.__main__ import main as server_main
from options_pl_bt.api.__main__ import resolve_config as resolve_server_config
from options_pl_bt.config import RunConfig


@pytest.fixture
def client(market_data):
    app = create_app(index=market_data)
    app.config["TESTING"] = True
    return app.test_client()


def test_backtest_ok(client, long_call_request):
    resp = client.post("/api/backtest", json=long_call_request)
    assert resp.status_code == 200

    body = resp.get_json()
    assert [p["date"] for p in body["timeseries"]] == ["2025-01-02", "2025-01-03", "2025-01-06"]
    assert [p["pl"] for p in body["timeseries"]] == [0.0, 1750.0, 15750.0]
    assert body["summary"]["netPL"] == 15750.0
    assert body["summary"]["win"] is True
    assert body["summary"]["totalDays"] == 3


def test_backtest_iron_condor_free_form_kind(client, iron_condor_request):
    resp = client.post("/api/backtest", json=iron_condor_request)
    assert resp.status_code == 200
    assert resp.get_json()["summary"]["maxDrawdown"] == -3000.0


def test_invalid_strategy_is_400(client, iron_condor_request):
    iron_condor_request["legs"][1]["strike"] = 4875
    resp = client.post("/api/backtest", json=iron_condor_request)
    assert resp.status_code == 400
    assert resp.get_json() == {
        "error": "Iron condor: put short strike (4875) must be less than call short strike (4850)."
    }


def test_entry_after_expiry_is_400(client, long_call_request):
    long_call_request["entryDate"] = "2025-01-07"
    resp = client.post("/api/backtest", json=long_call_request)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "No trading days between entry and expiry."


def test_missing_quote_is_422(client, long_call_request):
    long_call_request["legs"][0]["strike"] = 4825
    resp = client.post("/api/backtest", json=long_call_request)
    assert resp.status_code == 422
    assert resp.get_json()["error"].startswith("Missing mid for leg before expiry on 2025-01-02")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda body: body.pop("entryDate"),
        lambda body: body.update(entryDate="02/01/2025"),
        lambda body: body["legs"][0].update(type="Straddle"),
        lambda body: body["legs"][0].update(contracts=0),
        lambda body: body["legs"][0].update(strike=-5),
    ],
)
def test_malformed_request_is_400(client, long_call_request, mutate):
    mutate(long_call_request)
    resp = client.post("/api/backtest", json=long_call_request)
    assert resp.status_code == 400
    assert resp.get_json()["error"]


def test_non_object_body_is_400(client):
    resp = client.post("/api/backtest", data="not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object."}

    resp = client.post("/api/backtest", json=[1, 2, 3])
    assert resp.status_code == 400


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["name"] == "Options Strategy P/L Backtester"
    assert body["tradingDays"] == 4
    assert body["quotes"] == 12


def test_create_app_from_config(quotes_csv, long_call_request):
    config = RunConfig(data={"csv_path": str(quotes_csv)}, server={"cors_origins": "http://localhost:3000"})
    client = create_app(config).test_client()

    resp = client.post("/api/backtest", json=long_call_request, headers={"Origin": "http://localhost:3000"})
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"


def test_create_app_requires_data(temp_dir):
    with pytest.raises(ValueError):
        create_app()
    with pytest.raises(FileNotFoundError):
        create_app(RunConfig(data={"csv_path": str(temp_dir / "missing.csv")}))


def test_backtest_accepts_strategy_kind_field(client, iron_condor_request):
    body = dict(iron_condor_request)
    body["strategyKind"] = body.pop("strategyType")
    resp = client.post("/api/backtest", json=body)
    assert resp.status_code == 200
    assert resp.get_json()["summary"]["netPL"] == -3000.0


@pytest.fixture
def server_config_file(temp_dir, quotes_csv):
    path = temp_dir / "server.json"
    path.write_text(json.dumps({"data": {"csv_path": str(quotes_csv)}}), encoding="utf-8")
    return path


def test_server_overrides_are_validated(server_config_file):
    config = resolve_server_config(str(server_config_file), host="0.0.0.0", port=9001)
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9001

    with pytest.raises(ValidationError):
        resolve_server_config(str(server_config_file), port=70000)


def test_server_main_rejects_bad_port(server_config_file, capsys):
    assert server_main(["--config", str(server_config_file), "--port", "0"]) == 1
    assert "ERROR" in capsys.readouterr().err
