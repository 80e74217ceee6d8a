"""coral json command - emit the graph as JSON."""

from pathlib import Path

import click

from coral.cli.utils import build_graph, input_option
from coral.core.console import status
from coral.graph_io import save_graph


@click.command()
@input_option
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout (input for `coral diff`)",
)
@click.pass_context
def json_command(
    ctx: click.Context,
    input_path: Path | None,
    pretty: bool,
    output_path: Path | None,
) -> None:
    """Emit the dependency graph as JSON."""
    graph = build_graph(ctx, input_path)
    indent = 2 if pretty else None

    if output_path is not None:
        save_graph(graph, output_path, indent=indent)
        status(f"Wrote {output_path}", style="success")
        return
    click.echo(graph.to_json(indent=indent))
