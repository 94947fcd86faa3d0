"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from dtree.core.operators import get_operator_symbol
from dtree.core.tree import DecisionTree, Node, NodeRef


def format_value(value: Any) -> str:
    """Render a data or decision value the way it would appear in YAML."""
    if value is None:
        return "~"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_node_label(node: Node) -> str:
    label = f"[bold cyan]{escape(node.id)}[/bold cyan]"
    if node.data is not None:
        label += f" {escape(format_value(node.data))}"
    if node.operator is not None:
        condition = f"{get_operator_symbol(node.operator)} {format_value(node.decision)}"
        label += f" [dim]({escape(condition)})[/dim]"
    return label


def build_tree_view(tree: DecisionTree, start_id: Optional[str] = None) -> Tree:
    """Rich tree of the whole decision tree, or of the subtree at ``start_id``."""
    start = tree.nodes[start_id or tree.root_id]
    view = Tree(format_node_label(start))
    pending: List[Tuple[Tree, Node]] = [(view, start)]
    while pending:
        branch, node = pending.pop()
        for child in tree.get_children(node.id):
            pending.append((branch.add(format_node_label(child)), child))
    return view


def build_statistics_table(tree: DecisionTree) -> Table:
    table = Table(title="Statistics", show_header=True, header_style="bold blue")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    for key, value in tree.get_statistics().items():
        table.add_row(key.replace("_", " "), str(value))
    return table


def build_node_table(ref: NodeRef) -> Table:
    node = ref.node
    table = Table(title=f"Node {escape(node.id)}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    parent = ref.parent()
    path = " -> ".join(n.id for n in ref.tree.get_path_to_node(node.id))
    table.add_row("data", escape(format_value(node.data)))
    table.add_row("decision", escape(format_value(node.decision)))
    table.add_row("operator", get_operator_symbol(node.operator) or "~")
    table.add_row("parent", escape(parent.id) if parent else "~")
    table.add_row("children", escape(", ".join(node.children_ids)) or "~")
    table.add_row("path", escape(path))
    return table


def build_path_table(start: NodeRef, visited: Sequence[NodeRef], inputs: Sequence[Any]) -> Table:
    table = Table(title="Traversal")
    table.add_column("Step")
    table.add_column("Input")
    table.add_column("Node")
    table.add_column("Data")
    table.add_column("Condition")
    table.add_row("0", "", escape(start.id), escape(format_value(start.data)), "")
    for step, (ref, value) in enumerate(zip(visited, inputs), start=1):
        node = ref.node
        condition = f"{get_operator_symbol(node.operator)} {format_value(node.decision)}"
        table.add_row(
            str(step),
            escape(format_value(value)),
            escape(node.id),
            escape(format_value(node.data)),
            escape(condition),
        )
    return table


__all__ = [
    "build_node_table",
    "build_path_table",
    "build_statistics_table",
    "build_tree_view",
    "format_node_label",
    "format_value",
]
