"""
Running P/L statistics and the end-of-run summary.

The fold must see days in ascending date order: the running peak and drawdown depend
on chronology, and feeding days out of order silently corrupts max_drawdown.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Summary:
    net_pl: Decimal
    max_drawdown: Decimal
    win: bool
    initial_cost: Decimal
    return_on_risk: Decimal
    total_days: int
    winning_days: int
    losing_days: int
    win_rate: Decimal
    max_gain: Decimal
    max_loss: Decimal

    def to_dict(self) -> Dict[str, Any]:
        """Wire form with camelCase keys and float money values"""
        return {
            "netPL": float(self.net_pl),
            "maxDrawdown": float(self.max_drawdown),
            "win": self.win,
            "initialCost": float(self.initial_cost),
            "returnOnRisk": float(self.return_on_risk),
            "totalDays": self.total_days,
            "winningDays": self.winning_days,
            "losingDays": self.losing_days,
            "winRate": float(self.win_rate),
            "maxGain": float(self.max_gain),
            "maxLoss": float(self.max_loss),
        }


@dataclass
class RunningStats:
    """
    Sequential fold over daily P/L values.

    peak starts below any real value (None), so the first observation always sets it.
    """

    peak: Optional[Decimal] = None
    max_drawdown: Decimal = Decimal(0)
    max_gain: Optional[Decimal] = None
    max_loss: Optional[Decimal] = None
    last_pl: Decimal = Decimal(0)
    days: int = 0
    winning_days: int = 0
    losing_days: int = 0

    def update(self, pl: Decimal) -> Decimal:
        """
        Fold one day's P/L in.

        Returns:
            The drawdown from the running peak for this day (<= 0)
        """
        if self.peak is None or pl > self.peak:
            self.peak = pl
        drawdown = pl - self.peak
        self.max_drawdown = min(self.max_drawdown, drawdown)

        if self.max_gain is None or pl > self.max_gain:
            self.max_gain = pl
        if self.max_loss is None or pl < self.max_loss:
            self.max_loss = pl

        if pl > 0:
            self.winning_days += 1
        elif pl < 0:
            self.losing_days += 1

        self.last_pl = pl
        self.days += 1
        return drawdown

    def summary(self, initial_value: Decimal) -> Summary:
        initial_cost = abs(initial_value)
        net_pl = self.last_pl
        return_on_risk = (net_pl / initial_cost) * 100 if initial_cost > 0 else Decimal(0)
        win_rate = Decimal(self.winning_days) / Decimal(self.days) * 100 if self.days > 0 else Decimal(0)
        return Summary(
            net_pl=net_pl,
            max_drawdown=self.max_drawdown,
            win=net_pl > 0,
            initial_cost=initial_cost,
            return_on_risk=return_on_risk,
            total_days=self.days,
            winning_days=self.winning_days,
            losing_days=self.losing_days,
            win_rate=win_rate,
            max_gain=self.max_gain if self.max_gain is not None else Decimal(0),
            max_loss=self.max_loss if self.max_loss is not None else Decimal(0),
        )
