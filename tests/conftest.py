"""
Shared fixtures: a small quotes CSV covering three trading days up to a 2025-01-06 expiry.

2025-01-06 carries quotes only for a later expiry, so every 2025-01-06-expiry leg settles
at intrinsic against the 5000.00 underlying on that day.
"""

import tempfile
from pathlib import Path

import pytest

from options_pl_bt.data import InMemoryMarketData

QUOTES_CSV = """date,underlying,expiry,strike,optionType,mid
2025-01-02,4790.00,2025-01-06,4800,call,42.50
2025-01-02,4790.00,2025-01-06,4850,call,20.00
2025-01-02,4790.00,2025-01-06,4900,call,8.00
2025-01-02,4790.00,2025-01-06,4700,put,10.00
2025-01-02,4790.00,2025-01-06,4750,put,18.00
2025-01-03,4850.00,2025-01-06,4800,call,60.00
2025-01-03,4850.00,2025-01-06,4850,call,30.00
2025-01-03,4850.00,2025-01-06,4900,call,12.00
2025-01-03,4850.00,2025-01-06,4700,put,5.00
2025-01-03,4850.00,2025-01-06,4750,put,9.00
2025-01-06,5000.00,2025-01-10,5000,call,50.00
2025-01-07,5010.00,2025-01-10,5000,call,55.00
"""


def write_csv(directory: Path, text: str, name: str = "quotes.csv") -> Path:
    path = Path(directory) / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary working directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def quotes_csv(temp_dir):
    return write_csv(temp_dir, QUOTES_CSV)


@pytest.fixture
def market_data(quotes_csv):
    return InMemoryMarketData.from_csv(quotes_csv)


@pytest.fixture
def long_call_request():
    return {
        "symbol": "SPX",
        "entryDate": "2025-01-02",
        "strategyType": "SingleLeg",
        "legs": [
            {"type": "Call", "strike": 4800, "side": "Long", "contracts": 1, "expiry": "2025-01-06"},
        ],
    }


@pytest.fixture
def iron_condor_request():
    return {
        "symbol": "SPX",
        "entryDate": "2025-01-02",
        "strategyType": "iron condor",
        "legs": [
            {"type": "Put", "strike": 4700, "side": "Long", "contracts": 1, "expiry": "2025-01-06"},
            {"type": "Put", "strike": 4750, "side": "Short", "contracts": 1, "expiry": "2025-01-06"},
            {"type": "Call", "strike": 4850, "side": "Short", "contracts": 1, "expiry": "2025-01-06"},
            {"type": "Call", "strike": 4900, "side": "Long", "contracts": 1, "expiry": "2025-01-06"},
        ],
    }


@pytest.fixture
def make_csv(temp_dir):
    """Write CSV text into the temp dir and return its path"""
    def _make(text: str, name: str = "quotes.csv") -> Path:
        return write_csv(temp_dir, text, name)
    return _make
