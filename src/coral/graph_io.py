"""Reading and writing GraphModel JSON snapshots."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from coral.core.errors import GraphLoadError
from coral.core.logging import get_logger
from coral.domain import GraphModel

log = get_logger("graph_io")


def load_graph(path: Path) -> GraphModel:
    """Load a graph saved with ``coral json``.

    Raises:
        GraphLoadError: If the file is missing, unreadable, or not a valid graph.
    """
    if not path.is_file():
        raise GraphLoadError.file_not_found(str(path))
    try:
        data = path.read_bytes()
    except OSError as e:
        raise GraphLoadError.read_error(str(path), str(e)) from e

    try:
        model = GraphModel.from_json(data)
    except ValidationError as e:
        err = e.errors()[0]
        location = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        raise GraphLoadError.parse_error(str(path), f"{location}: {err['msg']}") from e

    log.debug("graph_loaded", path=str(path), nodes=model.node_count, edges=model.edge_count)
    return model


def save_graph(model: GraphModel, path: Path, *, indent: int | None = 2) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.to_json(indent=indent) + "\n", encoding="utf-8")
