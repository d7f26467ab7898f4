"""
Backtest runner: config-driven orchestration around the engine.

Used by the CLI. The HTTP API calls the engine directly with its long-lived index.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from ..config import RunConfig
from ..data import MarketDataIndex, load_market_data
from .artifacts import RunArtifacts, generate_run_id
from .engine import BacktestEngine, BacktestResult

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of a backtest run"""
    run_id: str
    result: BacktestResult
    run_dir: Optional[Path] = None
    timeseries: pd.DataFrame = field(default_factory=pd.DataFrame)
    config: Dict[str, Any] = field(default_factory=dict)
    excel_path: Optional[Path] = None

    @property
    def summary(self):
        return self.result.summary


def run_backtest(
    config: RunConfig,
    run_id_mode: str = "timestamp",
    index: Optional[MarketDataIndex] = None,
) -> RunResult:
    """
    Run the backtest described by config.request.

    Args:
        config: RunConfig instance with a request
        run_id_mode: "deterministic" or "timestamp" for run ID generation
        index: Pre-built market data index (loaded from config.data when omitted)

    Returns:
        RunResult with the engine result, the series as a DataFrame and, when
        reporting.save_artifacts is set, the run directory

    Raises:
        ValueError: If the config carries no request
        InvalidInputError / DataUnavailableError: From the engine
    """
    if config.request is None:
        raise ValueError("No strategy request configured. Provide 'request' in the config or use --request")

    config_dict = config.model_dump(mode="json", by_alias=True)
    run_id = generate_run_id(config_dict, mode=run_id_mode)
    logger.info(f"Run ID: {run_id}")

    artifacts: Optional[RunArtifacts] = None
    if config.reporting.save_artifacts:
        artifacts = RunArtifacts(Path(config.reporting.run_dir_root), run_id, config_dict)
        logger.info(f"Run directory: {artifacts.run_dir}")

    try:
        if artifacts is not None:
            artifacts.write_config_resolved(format=config.reporting.config_format)

        if index is None:
            index = load_market_data(config.data)

        request = config.request
        result = BacktestEngine(index).run_request(request)
        timeseries = result.to_frame()

        run_result = RunResult(
            run_id=run_id,
            result=result,
            timeseries=timeseries,
            config=config_dict,
        )

        if artifacts is not None:
            artifacts.write_result(
                result,
                {
                    "symbol": request.symbol,
                    "strategy_type": request.strategy_type,
                    "entry_date": request.entry_date.isoformat(),
                    "end_date": result.timeseries[-1].date.isoformat(),
                    "legs": len(request.legs),
                },
            )
            run_result.run_dir = artifacts.run_dir

            if config.reporting.save_excel:
                from .excel_export import export_to_excel

                run_result.excel_path = export_to_excel(artifacts.run_dir)

        return run_result

    except Exception as e:
        logger.error(f"Backtest failed: {e}")
        raise
    finally:
        if artifacts is not None:
            artifacts.close()
