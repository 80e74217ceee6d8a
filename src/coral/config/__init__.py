"""Config module exports."""

from coral.config.loader import CoralSettings, load_config
from coral.config.models import (
    AnalyzerConfig,
    CoralConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)

__all__ = [
    "load_config",
    "AnalyzerConfig",
    "CoralConfig",
    "CoralSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
]
