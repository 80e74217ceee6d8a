"""Core module exports."""

from coral.core.console import get_console, pluralize, status
from coral.core.errors import (
    ConfigError,
    CoralError,
    ErrorCode,
    GraphLoadError,
    InputError,
    InternalError,
)
from coral.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "CoralError",
    "ConfigError",
    "ErrorCode",
    "GraphLoadError",
    "InputError",
    "InternalError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
    # Console
    "get_console",
    "pluralize",
    "status",
]
