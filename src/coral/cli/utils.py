"""CLI utilities shared by the coral subcommands."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar

import click
from google.protobuf import descriptor_pb2

from coral.analyzer import Analyzer
from coral.config.models import CoralConfig
from coral.core.errors import CoralError
from coral.core.logging import get_logger
from coral.decoder import load_descriptor_set
from coral.domain import GraphModel

F = TypeVar("F", bound=Callable[..., Any])

log = get_logger("cli")


def input_option(func: F) -> F:
    """Add ``--input/-i``; the descriptor set is read from stdin when omitted."""
    return click.option(
        "--input",
        "-i",
        "input_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="FileDescriptorSet file (default: read from stdin, e.g. `buf build -o -`)",
    )(func)


def get_config(ctx: click.Context) -> CoralConfig:
    """Config loaded by the root group, or defaults when invoked standalone."""
    obj = ctx.find_object(dict) or {}
    config = obj.get("config")
    return config if isinstance(config, CoralConfig) else CoralConfig()


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn CoralError into a ClickException (``Error: ...``, exit code 1)."""
    try:
        yield
    except CoralError as e:
        log.debug("command_failed", error=e.error_name, details=e.details)
        raise click.ClickException(e.message) from e


def read_descriptor_set(input_path: Path | None) -> descriptor_pb2.FileDescriptorSet:
    with reported_errors():
        return load_descriptor_set(input_path)


def build_graph(ctx: click.Context, input_path: Path | None) -> GraphModel:
    """Decode the input descriptor set and build its graph."""
    fds = read_descriptor_set(input_path)
    analyzer = Analyzer(get_config(ctx).analyzer.external_prefixes)
    return analyzer.analyze(fds)
