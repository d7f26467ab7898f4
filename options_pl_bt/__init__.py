"""
Options Strategy P/L Backtester

Replays a fixed options position (single leg, credit spread, iron condor or custom legs)
over end-of-day mid quotes and reports a daily P/L series plus summary statistics.
"""

__version__ = "0.1.0"
