"""coral debug / summary / report commands - human-readable graph output."""

from pathlib import Path

import click

from coral.cli.utils import build_graph, input_option, read_descriptor_set
from coral.reporter import MarkdownReporter, debug_dump, summarize


@click.command()
@input_option
def debug_command(input_path: Path | None) -> None:
    """Dump the files of the descriptor set."""
    fds = read_descriptor_set(input_path)
    click.echo(debug_dump(fds))


@click.command()
@input_option
@click.pass_context
def summary_command(ctx: click.Context, input_path: Path | None) -> None:
    """Print a one-line summary of the graph."""
    click.echo(summarize(build_graph(ctx, input_path)))


@click.command()
@input_option
@click.pass_context
def report_command(ctx: click.Context, input_path: Path | None) -> None:
    """Print a Markdown report of the graph (for PR comments)."""
    click.echo(MarkdownReporter.generate(build_graph(ctx, input_path)), nl=False)
