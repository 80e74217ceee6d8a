"""Snapshot service lifecycle."""

from __future__ import annotations

from pathlib import Path

import uvicorn

from coral.config.models import ServerConfig
from coral.core.console import get_console
from coral.core.logging import get_log_file_path, get_logger
from coral.domain import GraphModel
from coral.reporter import summarize
from coral.server.app import create_app

logger = get_logger("server")


def print_banner(graph: GraphModel, config: ServerConfig) -> None:
    """Print the endpoint overview to stderr."""
    console = get_console()
    base_url = f"http://{config.host}:{config.port}"
    width = 64

    console.print()
    console.print("─" * width, style="dim cyan", highlight=False)
    console.print("🪸 Coral · Ready".center(width), style="bold cyan", highlight=False)
    console.print("─" * width, style="dim cyan", highlight=False)
    console.print()
    console.print(f"  Graph API:       {base_url}/api/graph", style="green", highlight=False)
    console.print(f"  Health Check:    {base_url}/health", highlight=False)
    if config.static_dir:
        console.print(f"  Frontend:        {base_url}/", highlight=False)
    console.print(f"  Graph:           {summarize(graph)}", style="dim", highlight=False)
    if (log_file := get_log_file_path()) is not None:
        console.print(f"  Log file:        {log_file}", style="dim", highlight=False)
    console.print()
    console.print("  Press Ctrl+C to stop", style="dim", highlight=False)


def create_server(graph: GraphModel, config: ServerConfig) -> uvicorn.Server:
    static_dir = Path(config.static_dir) if config.static_dir else None
    app = create_app(graph, static_dir=static_dir, cors_origins=config.cors_origins)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level="warning",  # Use structlog instead
        ws="none",
    )
    return uvicorn.Server(uvicorn_config)


async def run_server(graph: GraphModel, config: ServerConfig) -> None:
    """Serve ``graph`` until a shutdown signal.

    The graph is never modified after startup; handlers only read it.
    """
    server = create_server(graph, config)
    print_banner(graph, config)

    logger.info(
        "server starting",
        host=config.host,
        port=config.port,
        nodes=graph.node_count,
        edges=graph.edge_count,
    )
    try:
        await server.serve()
    finally:
        logger.info("server stopped")
