"""Coral CLI - coral command."""

from pathlib import Path

import click

from coral.cli.diff import diff_command
from coral.cli.export import json_command
from coral.cli.render import debug_command, report_command, summary_command
from coral.cli.serve import serve_command
from coral.config.loader import load_config
from coral.core.errors import ConfigError
from coral.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="coral")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./coral.yaml if present)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Coral - Proto dependency visualizer for gRPC/Connect projects."""
    try:
        config = load_config(config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    configure_logging(config.logging, verbose=verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(json_command, name="json")
cli.add_command(debug_command, name="debug")
cli.add_command(summary_command, name="summary")
cli.add_command(report_command, name="report")
cli.add_command(serve_command, name="serve")
cli.add_command(diff_command, name="diff")


if __name__ == "__main__":
    cli()
