"""
Configuration system: schemas and loaders
"""

from .schemas import (
    DataConfig,
    ReportingConfig,
    ServerConfig,
    LoggingConfig,
    RunConfig,
)
from .loader import load_config, load_request_file, apply_env_overrides, apply_cli_overrides

__all__ = [
    "DataConfig",
    "ReportingConfig",
    "ServerConfig",
    "LoggingConfig",
    "RunConfig",
    "load_config",
    "load_request_file",
    "apply_env_overrides",
    "apply_cli_overrides",
]
