"""
Error taxonomy for backtest runs.

Only two kinds of failure originate from a run:
- InvalidInputError: the request itself is wrong (client-correctable)
- DataUnavailableError: the request is fine but the market data cannot value it
"""


class BacktestError(Exception):
    """Base class for errors raised while running a backtest"""


class InvalidInputError(BacktestError, ValueError):
    """Structural or input problem detectable from the request alone"""


class DataUnavailableError(BacktestError, LookupError):
    """A leg has no quote on a trading day before its expiry"""
