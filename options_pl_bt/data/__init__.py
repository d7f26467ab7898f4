"""
Data layer: quote snapshot, CSV ingestion, trading calendar
"""

from .models import MarketDataIndex, QuoteKey
from .csv_store import InMemoryMarketData, load_market_data, COLUMNS
from .calendars import trading_days_between, prev_trading_day

__all__ = [
    "MarketDataIndex",
    "QuoteKey",
    "InMemoryMarketData",
    "load_market_data",
    "COLUMNS",
    "trading_days_between",
    "prev_trading_day",
]
