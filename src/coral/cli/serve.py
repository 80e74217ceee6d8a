"""coral serve command - start the snapshot service."""

import asyncio
from pathlib import Path

import click

from coral.cli.utils import build_graph, get_config, input_option
from coral.config.constants import PORT_MAX, PORT_MIN


@click.command()
@input_option
@click.option("--port", "-p", type=click.IntRange(PORT_MIN, PORT_MAX), help="Override server port")
@click.option("--host", type=str, help="Override bind address")
@click.option(
    "--static-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Serve a built frontend from this directory at /",
)
@click.pass_context
def serve_command(
    ctx: click.Context,
    input_path: Path | None,
    port: int | None,
    host: str | None,
    static_dir: Path | None,
) -> None:
    """Build the graph once and serve it read-only over HTTP.

    Endpoints: GET /health, GET /api/graph.
    """
    from coral.server.lifecycle import run_server

    graph = build_graph(ctx, input_path)

    overrides: dict[str, object] = {}
    if port is not None:
        overrides["port"] = port
    if host is not None:
        overrides["host"] = host
    if static_dir is not None:
        overrides["static_dir"] = str(static_dir)

    server_config = get_config(ctx).server
    server_config = server_config.model_validate(server_config.model_dump() | overrides)

    try:
        asyncio.run(run_server(graph, server_config))
    except KeyboardInterrupt:
        click.echo("\nStopped", err=True)
