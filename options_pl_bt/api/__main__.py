"""
Run the HTTP API dev server.

    python -m options_pl_bt.api --config configs/example.yaml --port 8000
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import RunConfig, apply_cli_overrides, apply_env_overrides, load_config
from ..run.cli import setup_logging
from .app import create_app

logger = logging.getLogger(__name__)


def resolve_config(config_path: str, host: Optional[str] = None, port: Optional[int] = None) -> RunConfig:
    """Load config, then env overrides, then --host/--port (re-validated like any --set)"""
    config = apply_env_overrides(load_config(config_path))
    sets = []
    if host:
        sets.append(f"server.host={host}")
    if port is not None:
        sets.append(f"server.port={port}")
    return apply_cli_overrides(config, sets)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Options Strategy P/L Backtester - HTTP API")
    parser.add_argument("--config", type=str, required=True, help="Path to config file (YAML or JSON)")
    parser.add_argument("--host", type=str, help="Override server.host")
    parser.add_argument("--port", type=int, help="Override server.port")
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args.config, args.host, args.port)
    except Exception as e:
        setup_logging("INFO")
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Failed to resolve configuration")
        return 1

    setup_logging(config.logging.level, config.logging.format)

    try:
        app = create_app(config)
    except Exception:
        logger.exception("Failed to load market data; cannot serve requests")
        return 1

    app.run(host=config.server.host, port=config.server.port, debug=config.server.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
