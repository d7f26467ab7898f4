"""
HTTP API for backtests.

POST /api/backtest  -> run a strategy request
GET  /health        -> liveness plus market data snapshot size

InvalidInputError and request schema errors map to 400, DataUnavailableError to 422.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from ..config import RunConfig
from ..data import MarketDataIndex, load_market_data
from ..errors import DataUnavailableError, InvalidInputError
from ..run.engine import BacktestEngine
from ..strategy.schemas import BacktestRequest

logger = logging.getLogger(__name__)

APP_NAME = "Options Strategy P/L Backtester"


def _schema_error_message(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def _cors_origins(value: str):
    if value.strip() == "*":
        return "*"
    return [o.strip() for o in value.split(",") if o.strip()]


def create_app(config: Optional[RunConfig] = None, index: Optional[MarketDataIndex] = None) -> Flask:
    """
    Application factory.

    The market data index is built once here (from config.data unless given) and shared
    read-only by every request. A missing or unreadable data file fails app creation.
    """
    if index is None:
        if config is None:
            raise ValueError("create_app needs a RunConfig or a pre-built market data index")
        index = load_market_data(config.data)

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["backtest_engine"] = BacktestEngine(index)

    origins = _cors_origins(config.server.cors_origins) if config is not None else "*"
    CORS(app, origins=origins)

    @app.post("/api/backtest")
    def backtest():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400

        try:
            req = BacktestRequest.model_validate(payload)
        except ValidationError as e:
            msg = _schema_error_message(e)
            logger.warning(f"Rejected backtest request: {msg}")
            return jsonify({"error": msg}), 400

        engine: BacktestEngine = current_app.extensions["backtest_engine"]
        try:
            result = engine.run_request(req)
        except InvalidInputError as e:
            logger.warning(f"Invalid backtest request: {e}")
            return jsonify({"error": str(e)}), 400
        except DataUnavailableError as e:
            logger.warning(f"Data unavailable for backtest request: {e}")
            return jsonify({"error": str(e)}), 422

        return jsonify(result.to_dict())

    @app.get("/health")
    def health():
        engine: BacktestEngine = current_app.extensions["backtest_engine"]
        body = {"ok": True, "name": APP_NAME}
        describe = getattr(engine.index, "describe", None)
        if callable(describe):
            stats = describe()
            body["tradingDays"] = stats.get("trading_days")
            body["quotes"] = stats.get("quotes")
        return jsonify(body)

    return app
