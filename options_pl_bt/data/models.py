"""
Market data interfaces: quote keys and the read-only index protocol.
"""

from datetime import date
from decimal import Decimal
from typing import List, NamedTuple, Optional, Protocol

from ..strategy.models import OptionType


class QuoteKey(NamedTuple):
    """Composite key of one end-of-day option quote"""
    trade_date: date
    expiry: date
    strike: Decimal
    option_type: OptionType


class MarketDataIndex(Protocol):
    """
    Protocol for market data snapshots.

    Implementations are built once and never mutated, so one instance can serve
    concurrent runs without locking.
    """

    def get_mid(self, trade_date: date, expiry: date, strike: Decimal, option_type: OptionType) -> Optional[Decimal]:
        """Mid price for the exact key, or None. No interpolation or nearest-strike fallback."""
        ...

    def get_underlying(self, trade_date: date) -> Optional[Decimal]:
        """Underlying close on a date, or None"""
        ...

    def trading_days_between(self, start: date, end_inclusive: date) -> List[date]:
        """Indexed dates in [start, end_inclusive], ascending; empty if start > end_inclusive"""
        ...

    def prev_trading_day(self, before: date) -> Optional[date]:
        """Latest indexed date strictly before `before`, or None"""
        ...
