"""Text renderings of a GraphModel.

- MarkdownReporter: detailed report for pull request comments
- summarize(): one-line counts for terminals and CI logs
- debug_dump(): per-file overview of a raw FileDescriptorSet
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from google.protobuf import descriptor_pb2

from coral.core.console import pluralize
from coral.domain import (
    EnumDetails,
    ExternalDetails,
    GraphModel,
    MessageDetails,
    Node,
    NodeType,
    ServiceDetails,
)

FOOTER = "---\n*Generated by [Coral](https://github.com/daisuke8000/coral)*\n"


@dataclass(frozen=True)
class GraphStats:
    files: int
    services: int
    messages: int
    enums: int
    externals: int
    dependencies: int

    @classmethod
    def of(cls, model: GraphModel) -> GraphStats:
        kinds = Counter(node.node_type for node in model.nodes)
        return cls(
            files=len({node.file for node in model.nodes}),
            services=kinds[NodeType.SERVICE],
            messages=kinds[NodeType.MESSAGE],
            enums=kinds[NodeType.ENUM],
            externals=kinds[NodeType.EXTERNAL],
            dependencies=model.edge_count,
        )


def summarize(model: GraphModel) -> str:
    """One-line summary, e.g. ``"3 files, 1 service, 4 messages, ..."``."""
    stats = GraphStats.of(model)
    return ", ".join(
        [
            pluralize(stats.files, "file"),
            pluralize(stats.services, "service"),
            pluralize(stats.messages, "message"),
            pluralize(stats.enums, "enum"),
            f"{stats.externals} external",
            pluralize(stats.dependencies, "dependency", "dependencies"),
        ]
    )


def debug_dump(fds: descriptor_pb2.FileDescriptorSet) -> str:
    lines = [
        "=== FileDescriptorSet Debug ===",
        f"Total files: {len(fds.file)}",
        "",
    ]
    for file in fds.file:
        lines.append(f"📄 File: {file.name or '<unknown>'}")
        lines.append(f"   Package: {file.package or '<unknown>'}")
        lines.append(f"   Messages: {len(file.message_type)}")
        lines.append(f"   Enums: {len(file.enum_type)}")
        lines.append(f"   Services: {len(file.service)}")
        lines.append("")
    return "\n".join(lines)


class MarkdownReporter:
    """Generates Markdown reports from proto dependency graphs."""

    @classmethod
    def generate(cls, model: GraphModel) -> str:
        return "".join(
            [
                "## 🪸 Coral Proto Dependency Analysis\n\n",
                cls._overview(model),
                cls._section(model, NodeType.SERVICE, "📡 Services"),
                cls._section(model, NodeType.MESSAGE, "📦 Messages"),
                cls._section(model, NodeType.ENUM, "🏷️ Enums"),
                FOOTER,
            ]
        )

    @staticmethod
    def _overview(model: GraphModel) -> str:
        stats = GraphStats.of(model)
        return (
            "### Overview\n"
            "| Metric | Count |\n"
            "|--------|-------|\n"
            f"| Files | {stats.files} |\n"
            f"| Services | {stats.services} |\n"
            f"| Messages | {stats.messages} |\n"
            f"| Enums | {stats.enums} |\n"
            f"| External | {stats.externals} |\n"
            f"| Dependencies | {stats.dependencies} |\n\n"
        )

    @classmethod
    def _section(cls, model: GraphModel, node_type: NodeType, title: str) -> str:
        nodes = [n for n in model.nodes if n.node_type == node_type]
        if not nodes:
            return ""
        body = "".join(cls._render_node(n) for n in nodes)
        return f"<details>\n<summary>{title} ({len(nodes)})</summary>\n\n{body}</details>\n\n"

    @staticmethod
    def _render_node(node: Node) -> str:
        output = f"#### {node.label}\n**Package**: `{node.package}` | **File**: `{node.file}`\n\n"

        rows: list[str] = []
        match node.details:
            case ServiceDetails(methods=methods) if methods:
                rows = ["| Method | Input | Output |", "|--------|-------|--------|"]
                rows += [f"| {m.name} | {m.input_type} | {m.output_type} |" for m in methods]
            case MessageDetails(fields=fields) if fields:
                rows = ["| # | Field | Type | Label |", "|---|-------|------|-------|"]
                rows += [f"| {f.number} | {f.name} | {f.type_name} | {f.label} |" for f in fields]
            case EnumDetails(values=values) if values:
                rows = ["| Value | Number |", "|-------|--------|"]
                rows += [f"| {v.name} | {v.number} |" for v in values]
            case ServiceDetails() | MessageDetails() | EnumDetails() | ExternalDetails():
                pass

        if rows:
            output += "\n".join(rows) + "\n\n"
        return output
