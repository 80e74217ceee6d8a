"""coral diff command - compare two saved graphs."""

from pathlib import Path

import click

from coral.cli.utils import reported_errors
from coral.diff import DiffReport
from coral.graph_io import load_graph


@click.command()
@click.argument("base", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("head", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output the diff report as JSON")
def diff_command(base: Path, head: Path, as_json: bool) -> None:
    """Show what changed between two graphs saved with `coral json`.

    BASE is the graph before the change, HEAD the graph after it.
    """
    with reported_errors():
        base_graph = load_graph(base)
        head_graph = load_graph(head)

    report = DiffReport.compute(base_graph, head_graph)

    if as_json:
        click.echo(report.to_json(indent=2))
    else:
        click.echo(report.to_markdown(), nl=False)
