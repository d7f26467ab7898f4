"""
Configuration schemas using Pydantic for validation and type safety.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..strategy.schemas import BacktestRequest


class DataConfig(BaseModel):
    """Market data source configuration"""
    csv_path: str = Field(description="Path to the daily option quotes CSV")


class ReportingConfig(BaseModel):
    """Reporting configuration"""
    run_dir_root: str = Field(default="runs", description="Root directory for run outputs")
    save_artifacts: bool = Field(default=False, description="Write run directory (timeseries, summary, manifest, log)")
    save_excel: bool = Field(default=False, description="Also export the run to an Excel workbook")
    config_format: Literal["json", "yaml"] = Field(default="json", description="Format of config_resolved file")


class ServerConfig(BaseModel):
    """HTTP API configuration"""
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_origins: str = Field(default="*", description="Allowed CORS origins (comma-separated or '*')")
    debug: bool = Field(default=False, description="Flask debug mode")


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = Field(default="INFO", description="Root log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.Formatter format string",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v):
        """Accept any case, store upper-case"""
        level = str(v).upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}. Use DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level


class RunConfig(BaseModel):
    """Complete run configuration"""
    data: DataConfig
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    request: Optional[BacktestRequest] = Field(default=None, description="Strategy to backtest (CLI runs)")
