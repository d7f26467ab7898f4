"""
Run module: backtest engine, runner, CLI, and artifacts.
"""

from .engine import BacktestEngine, BacktestResult, TimeSeriesPoint
from .runner import run_backtest, RunResult
from .artifacts import RunArtifacts, generate_run_id
from .excel_export import export_to_excel, export_run_to_excel

__all__ = [
    "BacktestEngine",
    "BacktestResult",
    "TimeSeriesPoint",
    "run_backtest",
    "RunResult",
    "RunArtifacts",
    "generate_run_id",
    "export_to_excel",
    "export_run_to_excel",
]
