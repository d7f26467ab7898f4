"""
Run artifacts: standardized output files for each backtest run.
"""

import json
import hashlib
import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Dict, Any

import pandas as pd
import yaml

from .engine import BacktestResult

logger = logging.getLogger(__name__)

# Attach the per-run file handler here so engine, valuation and data logs all land in run.log
_PACKAGE_LOGGER = logging.getLogger("options_pl_bt")

TIMESERIES_COLUMNS = ["date", "value", "pl", "drawdown"]


class RunArtifacts:
    """
    Manages run artifacts (output files) for a backtest run.

    Each run writes to: runs/<run_id>/
    - config_resolved.yaml|json
    - manifest.json
    - timeseries.csv
    - summary.json
    - run.log
    """

    def __init__(
        self,
        run_dir: Path,
        run_id: str,
        config: Dict[str, Any],
    ):
        """
        Initialize run artifacts writer.

        Args:
            run_dir: Root directory for runs (e.g., Path("runs"))
            run_id: Unique run ID (deterministic hash or timestamp-based)
            config: Resolved RunConfig as a JSON-compatible dictionary
        """
        self.run_dir = Path(run_dir) / run_id
        self.run_id = run_id
        self.config = config

        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.run_dir / "run.log"
        self._setup_logging()

    def _setup_logging(self):
        """Setup file logging for this run"""
        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)
        _PACKAGE_LOGGER.addHandler(file_handler)
        self._file_handler = file_handler

        # run.log records INFO even when the console is quieter
        self._saved_level = _PACKAGE_LOGGER.level
        if _PACKAGE_LOGGER.getEffectiveLevel() > logging.INFO:
            _PACKAGE_LOGGER.setLevel(logging.INFO)

    def close(self):
        """Detach and close the run log handler"""
        if hasattr(self, "_file_handler"):
            _PACKAGE_LOGGER.removeHandler(self._file_handler)
            _PACKAGE_LOGGER.setLevel(self._saved_level)
            self._file_handler.close()
            del self._file_handler

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def write_config_resolved(self, format: Literal["yaml", "json"] = "json"):
        """Write resolved configuration file"""
        if format == "yaml":
            with open(self.run_dir / "config_resolved.yaml", "w", encoding="utf-8") as f:
                yaml.safe_dump(self.config, f, default_flow_style=False, sort_keys=False)
        else:
            with open(self.run_dir / "config_resolved.json", "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2, default=str)

    def write_manifest(self, metadata: Dict[str, Any]):
        """Write manifest.json with run metadata"""
        manifest = {
            "run_id": self.run_id,
            "created_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            **metadata,
        }

        with open(self.run_dir / "manifest.json", "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, default=str)

    def write_timeseries(self, timeseries: pd.DataFrame):
        """
        Write timeseries.csv

        Expected columns: date, value, pl, drawdown
        """
        if timeseries.empty:
            timeseries = pd.DataFrame(columns=TIMESERIES_COLUMNS)

        timeseries.to_csv(self.run_dir / "timeseries.csv", index=False)

    def write_summary(self, summary: Dict[str, Any]):
        """Write summary.json"""
        with open(self.run_dir / "summary.json", "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, default=str)

    def write_result(self, result: BacktestResult, metadata: Dict[str, Any]):
        """Write manifest, timeseries and summary for a finished run"""
        self.write_manifest({**metadata, "total_days": result.summary.total_days})
        self.write_timeseries(result.to_frame())
        self.write_summary(result.summary.to_dict())


def generate_run_id(
    config: Dict[str, Any],
    mode: Literal["deterministic", "timestamp"] = "timestamp",
) -> str:
    """
    Generate run ID.

    Args:
        config: Resolved RunConfig as dictionary
        mode: "deterministic" (hash of config) or "timestamp" (YYYYMMDD-HHMMSS-<suffix>)

    Returns:
        Run ID string
    """
    if mode == "deterministic":
        config_json = json.dumps(config, sort_keys=True, default=str)
        hash_hex = hashlib.sha256(config_json.encode("utf-8")).hexdigest()[:12]
        return f"run-{hash_hex}"

    elif mode == "timestamp":
        timestamp_str = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        # short random suffix avoids collisions within the same second
        suffix = random.randint(100, 999)
        return f"run-{timestamp_str}-{suffix}"

    else:
        raise ValueError(f"Invalid run_id_mode: {mode}")
