"""Domain types for the Coral graph model.

- Node: a service, message, enum, or external type
- Edge: a type reference between two nodes
- Package: groups node ids by protobuf package
- GraphModel: the complete graph structure
"""

from coral.domain.graph import Edge, GraphModel, Package
from coral.domain.node import (
    EnumDetails,
    EnumValue,
    ExternalDetails,
    FieldInfo,
    MessageDef,
    MessageDetails,
    MethodSignature,
    Node,
    NodeDetails,
    NodeType,
    ServiceDetails,
)

__all__ = [
    "Edge",
    "EnumDetails",
    "EnumValue",
    "ExternalDetails",
    "FieldInfo",
    "GraphModel",
    "MessageDef",
    "MessageDetails",
    "MethodSignature",
    "Node",
    "NodeDetails",
    "NodeType",
    "Package",
    "ServiceDetails",
]
