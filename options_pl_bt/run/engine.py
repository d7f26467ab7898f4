"""
Backtest engine: validate a strategy, walk the trading calendar, value the position
each day and fold the values into a P/L series and summary.

The engine keeps no state between runs; the only shared object is the read-only
market data index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Tuple

import pandas as pd

from ..data.models import MarketDataIndex
from ..errors import InvalidInputError
from ..portfolio.valuation import position_value_on
from ..risk.metrics import RunningStats, Summary
from ..strategy.models import Strategy
from ..strategy.validator import validate_strategy
from ..strategy.schemas import BacktestRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeSeriesPoint:
    date: date
    value: Decimal
    pl: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": float(self.value), "pl": float(self.pl)}


@dataclass(frozen=True)
class BacktestResult:
    """Daily series in ascending date order plus the summary derived from it"""
    timeseries: Tuple[TimeSeriesPoint, ...]
    summary: Summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeseries": [p.to_dict() for p in self.timeseries],
            "summary": self.summary.to_dict(),
        }

    def to_frame(self) -> pd.DataFrame:
        """Series as a DataFrame (float columns) with the running drawdown added"""
        df = pd.DataFrame(
            [{"date": p.date, "value": float(p.value), "pl": float(p.pl)} for p in self.timeseries],
            columns=["date", "value", "pl"],
        )
        df["drawdown"] = df["pl"] - df["pl"].cummax()
        return df


class BacktestEngine:
    """
    Runs strategies against one market data index.

    Safe to share across threads: run() only reads the index and keeps its state local.
    """

    def __init__(self, index: MarketDataIndex):
        self.index = index

    def run(self, strategy: Strategy, entry_date: date) -> BacktestResult:
        """
        Backtest a strategy from entry_date through its earliest leg expiry.

        Raises:
            InvalidInputError: Empty legs, bad kind, failed structural rule, empty window
            DataUnavailableError: A leg is unquoted on a pre-expiry trading day
        """
        if not strategy.legs:
            raise InvalidInputError("No legs supplied.")

        kind = validate_strategy(strategy)

        # multi-expiry strategies are valued only through the earliest expiry
        end_date = strategy.min_expiry
        days = self.index.trading_days_between(entry_date, end_date)
        if not days:
            raise InvalidInputError("No trading days between entry and expiry.")

        logger.info(
            f"Running {kind.value} on {strategy.symbol or '(no symbol)'}: "
            f"{len(strategy.legs)} legs, {days[0]} -> {days[-1]} ({len(days)} trading days)"
        )

        values: List[Decimal] = [position_value_on(self.index, d, strategy.legs) for d in days]
        v0 = values[0]

        stats = RunningStats()
        points: List[TimeSeriesPoint] = []
        for d, v in zip(days, values):
            pl = v - v0
            points.append(TimeSeriesPoint(date=d, value=v, pl=pl))
            stats.update(pl)
            logger.debug(f"{d}: value={v} pl={pl}")

        summary = stats.summary(v0)
        logger.info(
            f"Backtest complete: net P/L {summary.net_pl}, max drawdown {summary.max_drawdown}, "
            f"win rate {summary.win_rate:.2f}%"
        )
        return BacktestResult(timeseries=tuple(points), summary=summary)

    def run_request(self, request: BacktestRequest) -> BacktestResult:
        return self.run(request.to_strategy(), request.entry_date)
