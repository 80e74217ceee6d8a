"""Diff computation for comparing proto dependency graphs.

Compares two GraphModels (base and head) and reports added, removed, and
modified definitions. Modifications are detected by name only: a method,
field, or enum value present on both sides is never compared further, and a
node whose kind changed between snapshots is not compared at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Annotated, Any, Literal, Protocol, TypeVar

from pydantic import Field

from coral.core.logging import get_logger
from coral.domain import (
    EnumDetails,
    EnumValue,
    FieldInfo,
    GraphModel,
    MessageDetails,
    MethodSignature,
    Node,
    NodeType,
    ServiceDetails,
)
from coral.domain.node import GraphBaseModel

log = get_logger("diff")


class DiffNode(GraphBaseModel):
    """Lightweight projection of a node for added/removed listings."""

    id: str
    label: str
    package: str

    @classmethod
    def from_node(cls, node: Node) -> DiffNode:
        return cls(id=node.id, label=node.label, package=node.package)


class DiffItems(GraphBaseModel):
    """Added or removed nodes by kind, each sorted by id."""

    services: tuple[DiffNode, ...] = ()
    messages: tuple[DiffNode, ...] = ()
    enums: tuple[DiffNode, ...] = ()

    def is_empty(self) -> bool:
        return not (self.services or self.messages or self.enums)

    def total_count(self) -> int:
        return len(self.services) + len(self.messages) + len(self.enums)

    def ids(self) -> set[str]:
        return {item.id for item in (*self.services, *self.messages, *self.enums)}


class FieldAdded(GraphBaseModel):
    type: Literal["FieldAdded"] = "FieldAdded"
    field: FieldInfo


class FieldRemoved(GraphBaseModel):
    type: Literal["FieldRemoved"] = "FieldRemoved"
    field: FieldInfo


class MethodAdded(GraphBaseModel):
    type: Literal["MethodAdded"] = "MethodAdded"
    method: MethodSignature


class MethodRemoved(GraphBaseModel):
    type: Literal["MethodRemoved"] = "MethodRemoved"
    method: MethodSignature


class EnumValueAdded(GraphBaseModel):
    type: Literal["EnumValueAdded"] = "EnumValueAdded"
    value: EnumValue


class EnumValueRemoved(GraphBaseModel):
    type: Literal["EnumValueRemoved"] = "EnumValueRemoved"
    value: EnumValue


Change = Annotated[
    FieldAdded | FieldRemoved | MethodAdded | MethodRemoved | EnumValueAdded | EnumValueRemoved,
    Field(discriminator="type"),
]


class ModifiedItem(GraphBaseModel):
    node_id: str
    label: str
    node_type: NodeType
    package: str
    changes: tuple[Change, ...]


class _Named(Protocol):
    @property
    def name(self) -> str: ...


_T = TypeVar("_T", bound=_Named)


def _name_diff(base: Sequence[_T], head: Sequence[_T]) -> tuple[list[_T], list[_T]]:
    """Items only in head and items only in base, compared by name.

    Each list keeps the declaration order of its side.
    """
    base_names = {item.name for item in base}
    head_names = {item.name for item in head}
    added = [item for item in head if item.name not in base_names]
    removed = [item for item in base if item.name not in head_names]
    return added, removed


def _method_changes(base: ServiceDetails, head: ServiceDetails) -> list[Change]:
    added, removed = _name_diff(base.methods, head.methods)
    return [
        *(MethodAdded(method=m) for m in added),
        *(MethodRemoved(method=m) for m in removed),
    ]


def _field_changes(base: MessageDetails, head: MessageDetails) -> list[Change]:
    added, removed = _name_diff(base.fields, head.fields)
    return [
        *(FieldAdded(field=f) for f in added),
        *(FieldRemoved(field=f) for f in removed),
    ]


def _enum_changes(base: EnumDetails, head: EnumDetails) -> list[Change]:
    added, removed = _name_diff(base.values, head.values)
    return [
        *(EnumValueAdded(value=v) for v in added),
        *(EnumValueRemoved(value=v) for v in removed),
    ]


def _node_changes(base: Node, head: Node) -> list[Change]:
    match base.details, head.details:
        case ServiceDetails(), ServiceDetails():
            return _method_changes(base.details, head.details)
        case MessageDetails(), MessageDetails():
            return _field_changes(base.details, head.details)
        case EnumDetails(), EnumDetails():
            return _enum_changes(base.details, head.details)
        case _:
            # Kind changed, or both External
            return []


def _collect_items(nodes: Iterable[Node]) -> DiffItems:
    by_type: dict[NodeType, list[DiffNode]] = {
        NodeType.SERVICE: [],
        NodeType.MESSAGE: [],
        NodeType.ENUM: [],
    }
    for node in nodes:
        bucket = by_type.get(node.node_type)
        if bucket is not None:
            bucket.append(DiffNode.from_node(node))

    def ordered(items: list[DiffNode]) -> tuple[DiffNode, ...]:
        return tuple(sorted(items, key=lambda d: d.id))

    return DiffItems(
        services=ordered(by_type[NodeType.SERVICE]),
        messages=ordered(by_type[NodeType.MESSAGE]),
        enums=ordered(by_type[NodeType.ENUM]),
    )


def summarize_changes(changes: Iterable[Change]) -> str:
    """Count changes by category, e.g. ``"+1 field(s), -2 method(s)"``."""
    counts = {
        "FieldAdded": 0,
        "FieldRemoved": 0,
        "MethodAdded": 0,
        "MethodRemoved": 0,
        "EnumValueAdded": 0,
        "EnumValueRemoved": 0,
    }
    for change in changes:
        counts[change.type] += 1

    labels = [
        ("FieldAdded", "+{} field(s)"),
        ("FieldRemoved", "-{} field(s)"),
        ("MethodAdded", "+{} method(s)"),
        ("MethodRemoved", "-{} method(s)"),
        ("EnumValueAdded", "+{} value(s)"),
        ("EnumValueRemoved", "-{} value(s)"),
    ]
    return ", ".join(fmt.format(counts[key]) for key, fmt in labels if counts[key])


class DiffReport(GraphBaseModel):
    """Changes between two GraphModel snapshots."""

    added: DiffItems = Field(default_factory=DiffItems)
    removed: DiffItems = Field(default_factory=DiffItems)
    modified: tuple[ModifiedItem, ...] = ()

    @classmethod
    def compute(cls, base: GraphModel, head: GraphModel) -> DiffReport:
        base_nodes = {n.id: n for n in base.nodes}
        head_nodes = {n.id: n for n in head.nodes}

        added = _collect_items(n for nid, n in head_nodes.items() if nid not in base_nodes)
        removed = _collect_items(n for nid, n in base_nodes.items() if nid not in head_nodes)

        modified = []
        for node_id in sorted(base_nodes.keys() & head_nodes.keys()):
            head_node = head_nodes[node_id]
            changes = _node_changes(base_nodes[node_id], head_node)
            if changes:
                modified.append(
                    ModifiedItem(
                        node_id=head_node.id,
                        label=head_node.label,
                        node_type=head_node.node_type,
                        package=head_node.package,
                        changes=tuple(changes),
                    )
                )

        report = cls(added=added, removed=removed, modified=tuple(modified))
        log.debug(
            "diff_computed",
            added=added.total_count(),
            removed=removed.total_count(),
            modified=len(modified),
        )
        return report

    def has_changes(self) -> bool:
        return not self.added.is_empty() or not self.removed.is_empty() or bool(self.modified)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_markdown(self) -> str:
        if not self.has_changes():
            return "### No Changes Detected\n\n"

        lines = ["### Changes from Base", ""]

        if not self.added.is_empty():
            lines.append(f"#### ✅ Added (+{self.added.total_count()})")
            lines.extend(_items_table(self.added))
            lines.append("")

        if self.modified:
            lines.append(f"#### ⚠️ Modified ({len(self.modified)})")
            lines.append("| Type | Name | Changes |")
            lines.append("|------|------|---------|")
            for item in self.modified:
                lines.append(
                    f"| {item.node_type.display_name} | {item.label} "
                    f"| {summarize_changes(item.changes)} |"
                )
            lines.append("")

        if not self.removed.is_empty():
            lines.append(f"#### ❌ Removed (-{self.removed.total_count()})")
            lines.extend(_items_table(self.removed))
            lines.append("")

        return "\n".join(lines) + "\n"


def _items_table(items: DiffItems) -> list[str]:
    rows = ["| Type | Name | Package |", "|------|------|---------|"]
    for kind, group in (
        ("Service", items.services),
        ("Message", items.messages),
        ("Enum", items.enums),
    ):
        rows.extend(f"| {kind} | {node.label} | {node.package} |" for node in group)
    return rows
