"""Build a GraphModel from a FileDescriptorSet.

Resolution runs in three passes over the descriptor files:

1. Definitions: register every message and enum under its fully-qualified
   name and emit nodes for project files. Types from external files
   (``google/``, ``buf/``) are registered but get no node yet.
2. Services: emit service nodes, embedding the message definitions of their
   request/response types. Needs the definitions from pass 1.
3. Edges: link services to their method types and messages to their field
   types. External nodes are created here, the first time one is referenced.

Missing names or types are never errors; the offending definition is
skipped or its value defaulted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from google.protobuf import descriptor_pb2

from coral.config.constants import (
    DEFAULT_EXTERNAL_PREFIXES,
    PACKAGE_SEPARATOR,
    PATH_SEPARATOR,
    PROTO_EXTENSION,
)
from coral.core.logging import get_logger
from coral.domain import (
    Edge,
    EnumDetails,
    EnumValue,
    ExternalDetails,
    FieldInfo,
    GraphModel,
    MessageDef,
    MessageDetails,
    MethodSignature,
    Node,
    NodeType,
    Package,
    ServiceDetails,
)

log = get_logger("analyzer")

_FieldProto = descriptor_pb2.FieldDescriptorProto

_TYPE_NAMES: dict[int, str] = {
    _FieldProto.TYPE_DOUBLE: "double",
    _FieldProto.TYPE_FLOAT: "float",
    _FieldProto.TYPE_INT64: "int64",
    _FieldProto.TYPE_UINT64: "uint64",
    _FieldProto.TYPE_INT32: "int32",
    _FieldProto.TYPE_FIXED64: "fixed64",
    _FieldProto.TYPE_FIXED32: "fixed32",
    _FieldProto.TYPE_BOOL: "bool",
    _FieldProto.TYPE_STRING: "string",
    _FieldProto.TYPE_GROUP: "group",
    _FieldProto.TYPE_MESSAGE: "message",
    _FieldProto.TYPE_BYTES: "bytes",
    _FieldProto.TYPE_UINT32: "uint32",
    _FieldProto.TYPE_ENUM: "enum",
    _FieldProto.TYPE_SFIXED32: "sfixed32",
    _FieldProto.TYPE_SFIXED64: "sfixed64",
    _FieldProto.TYPE_SINT32: "sint32",
    _FieldProto.TYPE_SINT64: "sint64",
}

_LABEL_NAMES: dict[int, str] = {
    _FieldProto.LABEL_OPTIONAL: "optional",
    _FieldProto.LABEL_REQUIRED: "required",
    _FieldProto.LABEL_REPEATED: "repeated",
}

UNKNOWN_TYPE = "unknown"
DEFAULT_LABEL = "optional"


@dataclass
class _Resolution:
    """Lookup tables for a single analyze() call."""

    type_ids: dict[str, str] = field(default_factory=dict)
    message_defs: dict[str, MessageDef] = field(default_factory=dict)
    external_packages: set[str] = field(default_factory=set)
    # (node id, descriptor) pairs revisited in pass 3
    messages: list[tuple[str, descriptor_pb2.DescriptorProto]] = field(default_factory=list)
    services: list[tuple[str, descriptor_pb2.ServiceDescriptorProto]] = field(
        default_factory=list
    )


def short_type_name(full_type: str) -> str:
    """``".user.v1.GetUserRequest"`` -> ``"GetUserRequest"``"""
    return full_type.rsplit(PACKAGE_SEPARATOR, 1)[-1]


def field_type_name(fld: descriptor_pb2.FieldDescriptorProto) -> str:
    """Display type of a field: the referenced type's short name, else the scalar type."""
    if fld.type_name:
        return short_type_name(fld.type_name)
    if not fld.HasField("type"):
        return UNKNOWN_TYPE
    return _TYPE_NAMES.get(fld.type, UNKNOWN_TYPE)


def field_label(fld: descriptor_pb2.FieldDescriptorProto) -> str:
    if not fld.HasField("label"):
        return DEFAULT_LABEL
    return _LABEL_NAMES.get(fld.label, DEFAULT_LABEL)


def _field_infos(message: descriptor_pb2.DescriptorProto) -> tuple[FieldInfo, ...]:
    return tuple(
        FieldInfo(
            name=fld.name,
            number=fld.number,
            type_name=field_type_name(fld),
            label=field_label(fld),
        )
        for fld in message.field
        if fld.name
    )


def _qualify(scope: str, name: str) -> str:
    return f"{scope}{PACKAGE_SEPARATOR}{name}"


def _package_scope(package: str) -> str:
    """Fully-qualified prefix for a package: ``"user.v1"`` -> ``".user.v1"``."""
    return _qualify("", package) if package else ""


def _node_id(full_name: str) -> str:
    """``".user.v1.User"`` -> ``"user.v1.User"``"""
    return full_name.lstrip(PACKAGE_SEPARATOR)


def _relative_label(node_id: str, package: str) -> str:
    """Name of a definition within its package, e.g. ``"User.Address"``."""
    if package and node_id.startswith(package + PACKAGE_SEPARATOR):
        return node_id[len(package) + 1 :]
    return node_id


def external_file_path(package: str, label: str) -> str:
    """``("google.protobuf", "Timestamp")`` -> ``"google/protobuf/timestamp.proto"``"""
    filename = label.lower() + PROTO_EXTENSION
    if not package:
        return filename
    return package.replace(PACKAGE_SEPARATOR, PATH_SEPARATOR) + PATH_SEPARATOR + filename


class Analyzer:
    """Converts descriptor files into a GraphModel.

    An Analyzer holds configuration only. Every analyze() call works on fresh
    lookup tables, so one instance may be shared between threads.
    """

    def __init__(self, external_prefixes: Sequence[str] = DEFAULT_EXTERNAL_PREFIXES) -> None:
        self.external_prefixes = tuple(external_prefixes)

    def is_external(self, file_name: str) -> bool:
        """Files under shared schema directories (``google/``, ``buf/``) are external."""
        return file_name.startswith(self.external_prefixes)

    def analyze(
        self,
        files: descriptor_pb2.FileDescriptorSet | Iterable[descriptor_pb2.FileDescriptorProto],
    ) -> GraphModel:
        if isinstance(files, descriptor_pb2.FileDescriptorSet):
            files = files.file
        files = [f for f in files if f.name]

        state = _Resolution()
        nodes: list[Node] = []

        # Pass 1
        for file in files:
            self._register_file(file, state, nodes)

        # Pass 2
        for file in files:
            if not self.is_external(file.name):
                nodes.extend(self._service_nodes(file, state))

        # Pass 3
        edges = self._build_edges(state, nodes)

        model = GraphModel(
            nodes=tuple(nodes),
            edges=tuple(_dedup_edges(edges)),
            packages=tuple(_group_packages(nodes)),
        )
        log.debug(
            "graph_built",
            files=len(files),
            nodes=model.node_count,
            edges=model.edge_count,
            packages=len(model.packages),
        )
        return model

    # ------------------------------------------------------------------
    # Pass 1: definitions
    # ------------------------------------------------------------------

    def _register_file(
        self,
        file: descriptor_pb2.FileDescriptorProto,
        state: _Resolution,
        nodes: list[Node],
    ) -> None:
        external = self.is_external(file.name)
        if external:
            state.external_packages.add(file.package)

        # External definitions are registered but only materialized on reference
        emit = None if external else nodes
        scope = _package_scope(file.package)
        for message in file.message_type:
            self._register_message(message, scope, file, state, emit)
        for enum in file.enum_type:
            self._register_enum(enum, scope, file, state, emit)

    def _register_message(
        self,
        message: descriptor_pb2.DescriptorProto,
        scope: str,
        file: descriptor_pb2.FileDescriptorProto,
        state: _Resolution,
        emit: list[Node] | None,
    ) -> None:
        if not message.name:
            return

        full_name = _qualify(scope, message.name)
        node_id = _node_id(full_name)
        fields = _field_infos(message)

        state.type_ids[full_name] = node_id
        state.message_defs[full_name] = MessageDef(name=message.name, fields=fields)

        if emit is not None:
            emit.append(
                Node(
                    id=node_id,
                    node_type=NodeType.MESSAGE,
                    package=file.package,
                    label=_relative_label(node_id, file.package),
                    file=file.name,
                    details=MessageDetails(fields=fields),
                )
            )
            state.messages.append((node_id, message))

        for nested in message.nested_type:
            self._register_message(nested, full_name, file, state, emit)
        for enum in message.enum_type:
            self._register_enum(enum, full_name, file, state, emit)

    def _register_enum(
        self,
        enum: descriptor_pb2.EnumDescriptorProto,
        scope: str,
        file: descriptor_pb2.FileDescriptorProto,
        state: _Resolution,
        emit: list[Node] | None,
    ) -> None:
        if not enum.name:
            return

        full_name = _qualify(scope, enum.name)
        node_id = _node_id(full_name)
        state.type_ids[full_name] = node_id

        if emit is not None:
            values = tuple(EnumValue(name=v.name, number=v.number) for v in enum.value if v.name)
            emit.append(
                Node(
                    id=node_id,
                    node_type=NodeType.ENUM,
                    package=file.package,
                    label=_relative_label(node_id, file.package),
                    file=file.name,
                    details=EnumDetails(values=values),
                )
            )

    # ------------------------------------------------------------------
    # Pass 2: services
    # ------------------------------------------------------------------

    def _service_nodes(
        self,
        file: descriptor_pb2.FileDescriptorProto,
        state: _Resolution,
    ) -> list[Node]:
        scope = _package_scope(file.package)
        nodes = []
        for service in file.service:
            if not service.name:
                continue
            node_id = _node_id(_qualify(scope, service.name))

            methods = tuple(
                MethodSignature(
                    name=m.name,
                    input_type=short_type_name(m.input_type),
                    output_type=short_type_name(m.output_type),
                )
                for m in service.method
                if m.name
            )

            messages: list[MessageDef] = []
            seen: set[str] = set()
            for method in service.method:
                if not method.name:
                    continue
                for type_name in (method.input_type, method.output_type):
                    if type_name in seen or type_name not in state.message_defs:
                        continue
                    seen.add(type_name)
                    messages.append(state.message_defs[type_name])

            nodes.append(
                Node(
                    id=node_id,
                    node_type=NodeType.SERVICE,
                    package=file.package,
                    label=service.name,
                    file=file.name,
                    details=ServiceDetails(methods=methods, messages=tuple(messages)),
                )
            )
            state.services.append((node_id, service))
        return nodes

    # ------------------------------------------------------------------
    # Pass 3: edges
    # ------------------------------------------------------------------

    def _build_edges(self, state: _Resolution, nodes: list[Node]) -> list[Edge]:
        node_ids = {n.id for n in nodes}
        edges: list[Edge] = []

        for service_id, service in state.services:
            for method in service.method:
                if not method.name:
                    continue
                for type_name in (method.input_type, method.output_type):
                    target = self._resolve(type_name, state, nodes, node_ids)
                    if target is not None:
                        edges.append(Edge(source=service_id, target=target))

        for message_id, message in state.messages:
            for fld in message.field:
                if not fld.name or not fld.type_name:
                    continue
                target = self._resolve(fld.type_name, state, nodes, node_ids)
                # Recursive messages reference themselves; edges are never self-loops
                if target is not None and target != message_id:
                    edges.append(Edge(source=message_id, target=target))

        return edges

    def _resolve(
        self,
        type_name: str,
        state: _Resolution,
        nodes: list[Node],
        node_ids: set[str],
    ) -> str | None:
        """Node id for a referenced type, creating its External node on first use.

        Returns None for types defined outside the descriptor set.
        """
        target = state.type_ids.get(type_name)
        if target is None:
            return None
        if target in node_ids:
            return target
        if not _in_packages(target, state.external_packages):
            return None

        nodes.append(_external_node(target))
        node_ids.add(target)
        log.debug("external_node_created", node_id=target)
        return target


def _in_packages(node_id: str, packages: set[str]) -> bool:
    return any(not pkg or node_id.startswith(pkg + PACKAGE_SEPARATOR) for pkg in packages)


def _external_node(node_id: str) -> Node:
    package, _, label = node_id.rpartition(PACKAGE_SEPARATOR)
    return Node(
        id=node_id,
        node_type=NodeType.EXTERNAL,
        package=package,
        label=label,
        file=external_file_path(package, label),
        details=ExternalDetails(),
    )


def _dedup_edges(edges: Iterable[Edge]) -> list[Edge]:
    seen: set[tuple[str, str]] = set()
    unique = []
    for edge in edges:
        key = (edge.source, edge.target)
        if key not in seen:
            seen.add(key)
            unique.append(edge)
    return unique


def _group_packages(nodes: Iterable[Node]) -> list[Package]:
    groups: dict[str, list[str]] = {}
    for node in nodes:
        groups.setdefault(node.package, []).append(node.id)
    return [Package(id=pkg, node_ids=tuple(ids)) for pkg, ids in sorted(groups.items())]


def build_graph(
    files: descriptor_pb2.FileDescriptorSet | Iterable[descriptor_pb2.FileDescriptorProto],
    external_prefixes: Sequence[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> GraphModel:
    """Convenience wrapper around Analyzer(...).analyze(files)."""
    return Analyzer(external_prefixes).analyze(files)
