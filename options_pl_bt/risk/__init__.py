"""
Risk layer: drawdown and win/loss statistics over a P/L series
"""

from .metrics import RunningStats, Summary

__all__ = ["RunningStats", "Summary"]
