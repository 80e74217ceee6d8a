"""Coral - proto dependency visualizer for gRPC/Connect projects."""

from coral.analyzer import Analyzer, build_graph
from coral.decoder import decode
from coral.diff import DiffReport
from coral.domain import Edge, GraphModel, Node, NodeDetails, NodeType, Package

__all__ = [
    "Analyzer",
    "DiffReport",
    "Edge",
    "GraphModel",
    "Node",
    "NodeDetails",
    "NodeType",
    "Package",
    "build_graph",
    "decode",
]
