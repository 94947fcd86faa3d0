"""Node handles.

A NodeRef names one node of one tree. It holds the tree and the node id only,
so it stays valid while the tree grows. ``append`` always targets the node the
handle names and returns a handle to the new child; ``parent()`` and
``extend()`` cover the "go back up" and "add siblings" halves of fluent
building without changing that rule.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Union

from dtree.core.operators import Op

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from dtree.core.tree.models import ChildEntry, DecisionTree, Node


class NodeRef:
    """Handle to a node inside a DecisionTree."""

    __slots__ = ("_tree", "_id")

    def __init__(self, tree: "DecisionTree", node_id: str):
        self._tree = tree
        self._id = node_id

    @property
    def tree(self) -> "DecisionTree":
        return self._tree

    @property
    def id(self) -> str:
        return self._id

    @property
    def node(self) -> "Node":
        """The arena record behind this handle."""
        return self._tree.nodes[self._id]

    @property
    def data(self) -> Any:
        return self.node.data

    @property
    def operator(self) -> Optional[Op]:
        return self.node.operator

    @property
    def is_root(self) -> bool:
        return self.node.is_root

    @property
    def is_leaf(self) -> bool:
        return self.node.is_leaf

    def decision(self) -> Any:
        """Stored decision value, None for the root."""
        return self.node.decision

    def append(
        self,
        node_id: str,
        data: Any = None,
        decision: Any = None,
        operator: Union[Op, str] = Op.EQUAL,
    ) -> "NodeRef":
        """Append a child to this node and return the child's handle."""
        return self._tree.append(self._id, node_id, data, decision, operator)

    def extend(self, entries: Iterable["ChildEntry"]) -> "NodeRef":
        """Append several children in order and return this node's handle."""
        self._tree.extend(self._id, entries)
        return self

    def find(self, node_id: str) -> Optional["NodeRef"]:
        """Global lookup, not limited to this node's subtree."""
        return self._tree.find(node_id)

    def parent(self) -> Optional["NodeRef"]:
        parent_id = self.node.parent_id
        if parent_id is None:
            return None
        return NodeRef(self._tree, parent_id)

    def children(self) -> List["NodeRef"]:
        return [NodeRef(self._tree, cid) for cid in self.node.children_ids]

    def child_len(self) -> int:
        return len(self.node.children_ids)

    def last_child(self) -> Optional["NodeRef"]:
        children_ids = self.node.children_ids
        if not children_ids:
            return None
        return NodeRef(self._tree, children_ids[-1])

    def siblings(self) -> List["NodeRef"]:
        return [NodeRef(self._tree, n.id) for n in self._tree.get_siblings(self._id)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        return self._tree is other._tree and self._id == other._id

    def __hash__(self) -> int:
        return hash((id(self._tree), self._id))

    def __repr__(self) -> str:
        return f"NodeRef({self._id!r})"


__all__ = ["NodeRef"]
