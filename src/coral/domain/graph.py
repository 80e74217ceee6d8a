"""Graph model types for the proto dependency graph."""

from __future__ import annotations

from typing import Any

from coral.domain.node import GraphBaseModel, Node


class Edge(GraphBaseModel):
    """Directed reference: ``source`` uses the type defined by ``target``."""

    source: str
    target: str


class Package(GraphBaseModel):
    id: str
    node_ids: tuple[str, ...] = ()


class GraphModel(GraphBaseModel):
    """Primary output of the analyzer, used as data source for the frontend.

    Every edge endpoint is the id of a node in ``nodes``.
    """

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    packages: tuple[Package, ...] = ()

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def find_node(self, node_id: str) -> Node | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, ready for JSON encoding."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> GraphModel:
        """Parse a graph previously written by to_json().

        Raises:
            pydantic.ValidationError: If the document is not a valid graph.
        """
        return cls.model_validate_json(data)
