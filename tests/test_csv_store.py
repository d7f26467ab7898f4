"""
Tests for the in-memory market data snapshot and CSV ingestion.
"""

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from options_pl_bt.data import InMemoryMarketData, load_market_data, prev_trading_day, trading_days_between
from options_pl_bt.config import DataConfig
from options_pl_bt.strategy import OptionType


def test_load_quotes(market_data):
    """Mids and underlying closes are keyed as expected"""
    mid = market_data.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800"), OptionType.CALL)
    assert mid == Decimal("42.50")
    assert market_data.get_underlying(date(2025, 1, 3)) == Decimal("4850.00")
    assert market_data.describe()["quotes"] == 12
    assert market_data.skipped_rows == 0


def test_lookup_ignores_strike_scale(market_data):
    """4800 and 4800.00 name the same strike"""
    mid = market_data.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800.00"), OptionType.CALL)
    assert mid == Decimal("42.50")


def test_missing_quote_returns_none(market_data):
    assert market_data.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4825"), OptionType.CALL) is None
    assert market_data.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800"), OptionType.PUT) is None
    assert market_data.get_underlying(date(2025, 1, 4)) is None


def test_first_line_is_always_header(make_csv):
    """The first line is skipped even when it looks like data"""
    path = make_csv(
        "2025-01-01,4700,2025-01-06,4800,call,1.00\n"
        "2025-01-02,4790,2025-01-06,4800,call,42.50\n"
    )
    index = InMemoryMarketData.from_csv(path)
    assert index.trading_days == (date(2025, 1, 2),)
    assert index.get_underlying(date(2025, 1, 1)) is None


def test_malformed_rows_skipped(make_csv):
    """Short rows, bad numbers, bad dates and unknown option types are dropped"""
    path = make_csv(
        "date,underlying,expiry,strike,optionType,mid\n"
        "2025-01-02,4790,2025-01-06\n"
        "2025-01-02,abc,2025-01-06,4800,call,1.00\n"
        "2025-01-02,4790,2025-01-06,4800,straddle,1.00\n"
        "not-a-date,4790,2025-01-06,4800,call,1.00\n"
        "2025-01-02,4790,2025-01-06,4800,call,\n"
        "2025-01-03,4850,2025-01-06,4800,call,60.00\n"
    )
    index = InMemoryMarketData.from_csv(path)
    assert index.skipped_rows == 5
    assert index.trading_days == (date(2025, 1, 3),)
    assert index.describe()["quotes"] == 1


def test_option_type_case_insensitive(make_csv):
    path = make_csv(
        "date,underlying,expiry,strike,optionType,mid\n"
        "2025-01-02,4790,2025-01-06,4800,CALL,42.50\n"
        "2025-01-02,4790,2025-01-06,4800, Put ,37.70\n"
    )
    index = InMemoryMarketData.from_csv(path)
    assert index.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800"), OptionType.CALL) == Decimal("42.50")
    assert index.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800"), OptionType.PUT) == Decimal("37.70")


def test_later_duplicate_overwrites(make_csv):
    path = make_csv(
        "date,underlying,expiry,strike,optionType,mid\n"
        "2025-01-02,4790,2025-01-06,4800,call,42.50\n"
        "2025-01-02,4795,2025-01-06,4800,call,44.00\n"
    )
    index = InMemoryMarketData.from_csv(path)
    assert index.get_mid(date(2025, 1, 2), date(2025, 1, 6), Decimal("4800"), OptionType.CALL) == Decimal("44.00")
    assert index.get_underlying(date(2025, 1, 2)) == Decimal("4795")


def test_trading_days_sorted(make_csv):
    """Calendar is ascending regardless of row order"""
    path = make_csv(
        "date,underlying,expiry,strike,optionType,mid\n"
        "2025-01-06,5000,2025-01-10,5000,call,50.00\n"
        "2025-01-02,4790,2025-01-06,4800,call,42.50\n"
        "2025-01-03,4850,2025-01-06,4800,call,60.00\n"
    )
    index = InMemoryMarketData.from_csv(path)
    assert index.trading_days == (date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 6))


def test_trading_days_between(market_data):
    days = market_data.trading_days_between(date(2025, 1, 2), date(2025, 1, 6))
    assert days == [date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 6)]

    # weekend bounds snap to the days inside the window
    assert market_data.trading_days_between(date(2025, 1, 4), date(2025, 1, 5)) == []
    assert market_data.trading_days_between(date(2025, 1, 4), date(2025, 1, 7)) == [date(2025, 1, 6), date(2025, 1, 7)]

    # reversed window is empty
    assert market_data.trading_days_between(date(2025, 1, 7), date(2025, 1, 2)) == []


def test_prev_trading_day(market_data):
    assert market_data.prev_trading_day(date(2025, 1, 6)) == date(2025, 1, 3)
    assert market_data.prev_trading_day(date(2025, 1, 5)) == date(2025, 1, 3)
    assert market_data.prev_trading_day(date(2025, 1, 2)) is None


def test_calendar_helpers_on_plain_lists():
    days = [date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 6)]
    assert trading_days_between(days, date(2025, 1, 3), date(2025, 1, 3)) == [date(2025, 1, 3)]
    assert trading_days_between([], date(2025, 1, 1), date(2025, 1, 31)) == []
    assert prev_trading_day(days, date(2025, 1, 7)) == date(2025, 1, 6)
    assert prev_trading_day([], date(2025, 1, 7)) is None


def test_missing_file_raises(temp_dir):
    with pytest.raises(FileNotFoundError, match="Market data CSV not found"):
        InMemoryMarketData.from_csv(temp_dir / "nope.csv")


def test_header_only_file_is_empty(make_csv):
    index = InMemoryMarketData.from_csv(make_csv("date,underlying,expiry,strike,optionType,mid\n"))
    assert index.trading_days == ()
    assert index.describe()["first_date"] is None


def test_from_frame():
    df = pd.DataFrame(
        [
            ["2025-01-02", "4790", "2025-01-06", "4800", "call", "42.50"],
            ["2025-01-03", "4850", "2025-01-06", "4800", "call", "60.00"],
        ],
        columns=["date", "underlying", "expiry", "strike", "optionType", "mid"],
    )
    index = InMemoryMarketData.from_frame(df)
    assert index.trading_days == (date(2025, 1, 2), date(2025, 1, 3))
    assert index.describe()["last_date"] == "2025-01-03"


def test_load_market_data_from_config(quotes_csv):
    index = load_market_data(DataConfig(csv_path=str(quotes_csv)))
    assert index.source == str(quotes_csv)
    assert len(index.trading_days) == 4
