"""
In-memory market data snapshot built from a daily option quotes CSV.

Expected logical columns (header row is ignored, position matters):
    date, underlying, expiry, strike, optionType, mid

One row per (date, expiry, strike, optionType) observation. Every row also carries the
underlying close for its date, which is what defines the trading calendar.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..strategy.models import OptionType
from .calendars import prev_trading_day, trading_days_between
from .models import QuoteKey

logger = logging.getLogger(__name__)

COLUMNS = ["date", "underlying", "expiry", "strike", "optionType", "mid"]


def _parse_date(value: Any) -> date:
    return pd.Timestamp(str(value).strip()).date()


def _parse_decimal(value: Any) -> Decimal:
    d = Decimal(str(value).strip())
    if not d.is_finite():
        raise ValueError(f"non-finite number: {value!r}")
    return d


def _parse_row(row: Tuple[Any, ...]) -> Tuple[QuoteKey, Decimal, Decimal]:
    """
    Parse one raw row into (key, mid, underlying).

    Raises:
        ValueError / ArithmeticError: If any field is missing or malformed
    """
    if len(row) < len(COLUMNS) or any(pd.isna(v) or str(v).strip() == "" for v in row[: len(COLUMNS)]):
        raise ValueError("short row")
    raw_date, raw_underlying, raw_expiry, raw_strike, raw_type, raw_mid = row[: len(COLUMNS)]

    cp = str(raw_type).strip().lower()
    if cp not in ("call", "put"):
        raise ValueError(f"bad option type: {raw_type!r}")

    key = QuoteKey(
        trade_date=_parse_date(raw_date),
        expiry=_parse_date(raw_expiry),
        strike=_parse_decimal(raw_strike),
        option_type=OptionType.CALL if cp == "call" else OptionType.PUT,
    )
    return key, _parse_decimal(raw_mid), _parse_decimal(raw_underlying)


class InMemoryMarketData:
    """
    Immutable quote and underlying snapshot.

    Built once (from_csv / from_frame) and read-only afterwards. Later duplicate rows
    overwrite earlier ones for both quotes and underlying closes.
    """

    def __init__(
        self,
        mids: Dict[QuoteKey, Decimal],
        underlying: Dict[date, Decimal],
        skipped_rows: int = 0,
        source: Optional[str] = None,
    ):
        self._mid: Dict[QuoteKey, Decimal] = dict(mids)
        self._underlying: Dict[date, Decimal] = dict(sorted(underlying.items()))
        self._days: Tuple[date, ...] = tuple(self._underlying.keys())
        self.skipped_rows = int(skipped_rows)
        self.source = source

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows, source: Optional[str] = None) -> "InMemoryMarketData":
        """Build from an iterable of raw row tuples in column order; bad rows are skipped."""
        mids: Dict[QuoteKey, Decimal] = {}
        underlying: Dict[date, Decimal] = {}
        skipped = 0

        for line_no, row in enumerate(rows, start=2):
            try:
                key, mid, spot = _parse_row(tuple(row))
            except (ValueError, ArithmeticError, TypeError) as e:
                skipped += 1
                logger.debug(f"Skipping row {line_no}: {e}")
                continue
            mids[key] = mid
            underlying[key.trade_date] = spot

        if skipped:
            logger.warning(f"Skipped {skipped} malformed row(s) while loading market data")
        return cls(mids, underlying, skipped_rows=skipped, source=source)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, source: Optional[str] = None) -> "InMemoryMarketData":
        """Build from a DataFrame whose first six columns follow COLUMNS order."""
        if df.empty:
            return cls({}, {}, source=source)
        return cls.from_rows(df.itertuples(index=False, name=None), source=source)

    @classmethod
    def from_csv(cls, csv_path: str | Path) -> "InMemoryMarketData":
        """
        Load a quotes CSV.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(f"Market data CSV not found: {path}")

        try:
            df = pd.read_csv(
                path,
                header=None,
                skiprows=1,
                names=COLUMNS,
                usecols=range(len(COLUMNS)),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                on_bad_lines="skip",
                index_col=False,
            )
        except pd.errors.EmptyDataError:
            df = pd.DataFrame(columns=COLUMNS)

        index = cls.from_frame(df, source=str(path))
        logger.info(f"Loaded market data from {path}: {index.describe()}")
        return index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_mid(self, trade_date: date, expiry: date, strike: Decimal, option_type: OptionType) -> Optional[Decimal]:
        return self._mid.get(QuoteKey(trade_date, expiry, strike, option_type))

    def get_underlying(self, trade_date: date) -> Optional[Decimal]:
        return self._underlying.get(trade_date)

    def trading_days_between(self, start: date, end_inclusive: date) -> List[date]:
        return trading_days_between(self._days, start, end_inclusive)

    def prev_trading_day(self, before: date) -> Optional[date]:
        return prev_trading_day(self._days, before)

    @property
    def trading_days(self) -> Tuple[date, ...]:
        return self._days

    def describe(self) -> Dict[str, Any]:
        """Snapshot statistics for logs and health checks"""
        return {
            "quotes": len(self._mid),
            "trading_days": len(self._days),
            "first_date": self._days[0].isoformat() if self._days else None,
            "last_date": self._days[-1].isoformat() if self._days else None,
            "skipped_rows": self.skipped_rows,
        }


def load_market_data(data_cfg) -> InMemoryMarketData:
    """Build the process-wide snapshot from a DataConfig"""
    return InMemoryMarketData.from_csv(data_cfg.csv_path)
