"""Structured logging for the CLI and the snapshot service.

structlog events are rendered by stdlib handlers, one per configured output,
so each output can pick its own level and format. Console outputs default to
stderr; stdout carries command output (JSON, Markdown) only.

Request correlation uses structlog's context variables: the snapshot
service binds ``request_id`` per request and every event logged while
handling it carries the id.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from coral.core.console import is_tty

if TYPE_CHECKING:
    from coral.config.models import LoggingConfig, LogOutputConfig

REQUEST_ID_KEY = "request_id"

_log_file_path: Path | None = None


def get_request_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(REQUEST_ID_KEY)


def set_request_id(request_id: str | None = None) -> str:
    """Bind a correlation ID for the current context, generating one if needed."""
    rid = request_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{REQUEST_ID_KEY: rid})
    return rid


def clear_request_id() -> None:
    structlog.contextvars.unbind_contextvars(REQUEST_ID_KEY)


def get_log_file_path() -> Path | None:
    """First file output of the active configuration, if any."""
    return _log_file_path


def _level(name: str) -> int:
    return logging.getLevelName(name.upper())


_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def configure_logging(config: LoggingConfig | None = None, *, verbose: bool = False) -> None:
    """Route structlog through stdlib handlers built from ``config``.

    Args:
        config: Outputs and levels. Defaults to console logging on stderr at INFO.
        verbose: Force DEBUG on every output (``coral -v``).
    """
    global _log_file_path
    from coral.config.models import LoggingConfig

    config = config or LoggingConfig()
    root_level = logging.DEBUG if verbose else _level(config.level)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached so that a later configure_logging() call takes effect
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    root_logger.setLevel(root_level)

    # uvicorn's per-request lines duplicate RequestIdMiddleware's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _log_file_path = None
    for output in config.outputs:
        handler = _create_handler(output)
        if verbose or output.level is None:
            handler.setLevel(root_level)
        else:
            handler.setLevel(_level(output.level))
        root_logger.addHandler(handler)

        if _log_file_path is None and not _is_stream(output.destination):
            _log_file_path = Path(output.destination)


def _is_stream(destination: str) -> bool:
    return destination in ("stderr", "stdout")


def _create_handler(output: LogOutputConfig) -> logging.Handler:
    """Handler for stderr, stdout, or a file path, with its formatter attached."""
    handler: logging.Handler
    if output.destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif output.destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=_is_stream(output.destination) and is_tty(),
            pad_event_to=0,
            pad_level=False,
        )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )
    return handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy logger, safe to create at import time.

    Binding is deferred to each call, so loggers created before
    configure_logging() still follow the configuration in effect. ``name``
    becomes the stdlib logger name, reported under the ``logger`` key.
    """
    if name:
        return structlog.get_logger(name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
