"""
CLI entrypoint for running backtests.
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from ..config import RunConfig, apply_cli_overrides, apply_env_overrides, load_config, load_request_file
from ..errors import DataUnavailableError, InvalidInputError
from ..strategy.schemas import BacktestRequest
from .runner import RunResult, run_backtest

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_summary(run: RunResult):
    """Print backtest summary to console"""
    s = run.summary
    request = run.config.get("request") or {}

    print("\n" + "=" * 70)
    print("BACKTEST SUMMARY")
    print("=" * 70)
    print(f"Run ID: {run.run_id}")
    if run.run_dir is not None:
        print(f"Run Directory: {run.run_dir}")
    print(f"Strategy: {request.get('strategyType', '')} on {request.get('symbol', '')}")
    print("-" * 70)
    print(f"Net P/L: ${s.net_pl:,.2f} ({'WIN' if s.win else 'LOSS'})")
    print(f"Initial Cost: ${s.initial_cost:,.2f}")
    print(f"Return on Risk: {s.return_on_risk:.2f}%")
    print(f"Max Drawdown: ${s.max_drawdown:,.2f}")
    print(f"Max Gain / Max Loss: ${s.max_gain:,.2f} / ${s.max_loss:,.2f}")
    print(f"Days: {s.total_days} (winning {s.winning_days}, losing {s.losing_days})")
    print(f"Win Rate: {s.win_rate:.2f}%")
    if run.excel_path is not None:
        print(f"Excel: {run.excel_path}")
    print("=" * 70 + "\n")


def resolve_config(
    config_path: str,
    request_path: Optional[str] = None,
    data_path: Optional[str] = None,
    entry_date: Optional[str] = None,
    sets: Optional[List[str]] = None,
    save: bool = False,
    excel: bool = False,
) -> RunConfig:
    """Load config and apply env, --set and flag overrides (in that order)"""
    config = load_config(config_path)
    config = apply_env_overrides(config)
    if sets:
        config = apply_cli_overrides(config, sets)

    if request_path:
        config.request = BacktestRequest.model_validate(load_request_file(request_path))
    if data_path:
        config.data.csv_path = data_path
    if entry_date:
        if config.request is None:
            raise ValueError("--entry-date needs a request (config 'request' or --request)")
        config.request = config.request.model_copy(update={"entry_date": date.fromisoformat(entry_date)})
    if save or excel:
        config.reporting.save_artifacts = True
    if excel:
        config.reporting.save_excel = True
    return config


def cmd_dry_run(config: RunConfig, run_id_mode: str):
    """Dry run: resolve config and print run ID without executing"""
    from .artifacts import generate_run_id

    config_dict = config.model_dump(mode="json", by_alias=True)
    run_id = generate_run_id(config_dict, mode=run_id_mode)

    print("\n" + "=" * 70)
    print("DRY RUN - Configuration Resolved")
    print("=" * 70)
    print(f"Run ID (mode: {run_id_mode}): {run_id}")
    print(f"Data: {config.data.csv_path}")
    if config.request is not None:
        print(f"Strategy: {config.request.strategy_type} on {config.request.symbol}")
        print(f"Entry Date: {config.request.entry_date}")
        print(f"Legs: {len(config.request.legs)}")
    else:
        print("Strategy: (none)")
    print("=" * 70 + "\n")

    return run_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Options Strategy P/L Backtester - CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the request embedded in a config file
  python -m options_pl_bt.run --config configs/example.yaml

  # Run a separate request file against the configured data
  python -m options_pl_bt.run --config configs/example.yaml --request configs/iron_condor_request.json

  # Override entry date and data file, save artifacts + Excel
  python -m options_pl_bt.run --config configs/example.yaml --entry-date 2025-01-03 --data data/spx.csv --excel

  # Override config values
  python -m options_pl_bt.run --config configs/example.yaml --set reporting.run_dir_root=out

  # Dry run (resolve config without executing)
  python -m options_pl_bt.run --config configs/example.yaml --dry-run
        """,
    )

    parser.add_argument("--config", type=str, help="Path to config file (YAML or JSON)")
    parser.add_argument("--request", type=str, help="Path to strategy request file (JSON or YAML)")
    parser.add_argument("--data", type=str, help="Override market data CSV path")
    parser.add_argument("--entry-date", type=str, help="Override entry date (ISO format, e.g., 2025-01-02)")
    parser.add_argument(
        "--set",
        action="append",
        dest="sets",
        metavar="KEY=VALUE",
        help="Override config value (can be used multiple times). Use nested keys: reporting.run_dir_root=out",
    )
    parser.add_argument(
        "--run-id-mode",
        choices=["deterministic", "timestamp"],
        default="timestamp",
        help="Run ID generation mode (default: timestamp)",
    )
    parser.add_argument("--save", action="store_true", help="Write run artifacts to the run directory")
    parser.add_argument("--excel", action="store_true", help="Write run artifacts and an Excel workbook")
    parser.add_argument("--dry-run", action="store_true", help="Resolve config and print run ID without executing")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.config:
        print("ERROR: --config is required", file=sys.stderr)
        parser.print_help()
        return 1

    try:
        config = resolve_config(
            config_path=args.config,
            request_path=args.request,
            data_path=args.data,
            entry_date=args.entry_date,
            sets=args.sets or [],
            save=args.save,
            excel=args.excel,
        )
    except Exception as e:
        setup_logging(args.log_level or "INFO")
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Failed to resolve configuration")
        return 1

    setup_logging(args.log_level or config.logging.level, config.logging.format)

    if args.dry_run:
        cmd_dry_run(config, args.run_id_mode)
        return 0

    try:
        result = run_backtest(config, run_id_mode=args.run_id_mode)
    except InvalidInputError as e:
        print(f"INVALID INPUT: {e}", file=sys.stderr)
        return 1
    except DataUnavailableError as e:
        print(f"DATA UNAVAILABLE: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Backtest failed")
        return 1

    print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
