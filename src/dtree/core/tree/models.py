"""
Decision tree data models.

The tree is stored as an arena:
- Node: one arena entry (identity, payload, decision, operator, relations)
- DecisionTree: the arena itself, keyed by node id

The ``nodes`` mapping is both the sole owner of every node and the global
index used for O(1) lookup. Parent and child relations are stored as ids,
never as object references, so there are no ownership cycles and a handle
(see ``handles.NodeRef``) can never outlive the node it names.

Tree Structure:
    root
    ├── first   (banana, true, ==)
    ├── second  (apple, false, ==)
    │   ├── fourth  (red apple, true, ==)
    │   └── fifth   (green apple, false, ==)
    └── third   (orange, false, ==)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from dtree.core.errors import DuplicateIdentityError
from dtree.core.operators import Op
from dtree.core.tree.handles import NodeRef

logger = logging.getLogger(__name__)

DEFAULT_ROOT_ID = "root"

# (id, data, decision) or (id, data, decision, operator)
ChildEntry = Union[Tuple[str, Any, Any], Tuple[str, Any, Any, Union[Op, str]]]


class Node(BaseModel):
    """
    A single element of the decision tree.

    The root node has no parent, no decision and no operator: it is never
    matched against traversal input.
    """

    id: str = Field(frozen=True, min_length=1)
    data: Any = None
    decision: Any = None
    operator: Optional[Op] = Field(default=None, frozen=True)
    parent_id: Optional[str] = Field(default=None, frozen=True)
    children_ids: List[str] = Field(default_factory=list)

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, v: Any) -> Optional[Op]:
        if v is None:
            return None
        return Op.parse(v)

    @property
    def is_root(self) -> bool:
        """Check if this is the root node."""
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children_ids) == 0

    def describe(self) -> str:
        """Human-readable description of this node."""
        if self.operator is None:
            return f"[{self.id}] {self.data!r}"
        return f"[{self.id}] {self.data!r} | {self.operator.symbol} {self.decision!r}"


class DecisionTree(BaseModel):
    """
    Arena of decision nodes with a global id index.

    Nodes are only ever created by ``append`` (or by ``init`` for the root)
    and are never removed or reparented.
    """

    root_id: str = DEFAULT_ROOT_ID
    nodes: Dict[str, Node] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_structure(self) -> "DecisionTree":
        root = self.nodes.get(self.root_id)
        if root is None:
            raise ValueError(f"Root node '{self.root_id}' is missing from nodes")
        if not root.is_root:
            raise ValueError(f"Root node '{self.root_id}' must not have a parent")
        for node_id, node in self.nodes.items():
            if node.id != node_id:
                raise ValueError(f"Node keyed as '{node_id}' has id '{node.id}'")
            if node_id != self.root_id:
                parent = self.nodes.get(node.parent_id) if node.parent_id else None
                if parent is None:
                    raise ValueError(f"Node '{node_id}' has unknown parent '{node.parent_id}'")
                if parent.children_ids.count(node_id) != 1:
                    raise ValueError(f"Node '{node_id}' must appear once among its parent's children")
                if node.operator is None:
                    raise ValueError(f"Node '{node_id}' has no operator")
            for child_id in node.children_ids:
                child = self.nodes.get(child_id)
                if child is None or child.parent_id != node_id:
                    raise ValueError(f"Child '{child_id}' of '{node_id}' does not point back to it")
        reachable = sum(1 for _entry in self.iter_depth_first())
        if reachable != len(self.nodes):
            raise ValueError(f"{len(self.nodes) - reachable} node(s) are not reachable from the root")
        return self

    @classmethod
    def init(cls, root_id: str = DEFAULT_ROOT_ID, data: Any = None) -> "DecisionTree":
        """Create a tree holding only its root node."""
        root = Node(id=root_id, data=data)
        return cls(root_id=root_id, nodes={root_id: root})

    # =========================================================================
    # Node Access
    # =========================================================================

    @property
    def root(self) -> NodeRef:
        """Handle to the root node."""
        return NodeRef(self, self.root_id)

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node record by ID."""
        return self.nodes.get(node_id)

    def find(self, node_id: str) -> Optional[NodeRef]:
        """Find a node anywhere in the tree; None when the id is unknown."""
        if node_id not in self.nodes:
            return None
        return NodeRef(self, node_id)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    # =========================================================================
    # Node Management
    # =========================================================================

    def append(
        self,
        parent_id: str,
        node_id: str,
        data: Any = None,
        decision: Any = None,
        operator: Union[Op, str] = Op.EQUAL,
    ) -> NodeRef:
        """
        Append a new child at the end of ``parent_id``'s children.

        Everything that can fail is checked before the tree is touched, so a
        rejected append leaves both the children list and the index as they
        were.

        Returns:
            Handle to the newly created child

        Raises:
            DuplicateIdentityError: If node_id is already in the tree
            KeyError: If parent_id is not in the tree
            ValueError: If the operator is unknown
        """
        parent = self._require(parent_id)
        if node_id in self.nodes:
            raise DuplicateIdentityError(node_id)
        node = self._build_child(parent_id, node_id, data, decision, operator)
        self._commit(parent, [node])
        return NodeRef(self, node_id)

    def extend(self, parent_id: str, entries: Iterable[ChildEntry]) -> List[NodeRef]:
        """
        Append several children to ``parent_id`` in order.

        Each entry is ``(id, data, decision)`` or ``(id, data, decision, operator)``.
        The batch is all-or-nothing: an id that is already used, or repeated
        within the batch, rejects every entry.
        """
        parent = self._require(parent_id)
        built: List[Node] = []
        seen = set()
        for entry in entries:
            node_id, data, decision, operator = _unpack_entry(entry)
            if node_id in self.nodes or node_id in seen:
                raise DuplicateIdentityError(node_id)
            seen.add(node_id)
            built.append(self._build_child(parent_id, node_id, data, decision, operator))
        self._commit(parent, built)
        return [NodeRef(self, node.id) for node in built]

    def _require(self, node_id: str) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise KeyError(f"Unknown node: {node_id}")
        return node

    @staticmethod
    def _build_child(parent_id: str, node_id: str, data: Any, decision: Any, operator: Union[Op, str]) -> Node:
        return Node(
            id=node_id,
            data=data,
            decision=decision,
            operator=Op.parse(operator),
            parent_id=parent_id,
        )

    def _commit(self, parent: Node, children: Sequence[Node]) -> None:
        for child in children:
            self.nodes[child.id] = child
            parent.children_ids.append(child.id)
            logger.debug("Appended %s under %s", child.describe(), parent.id)

    # =========================================================================
    # Tree Traversal
    # =========================================================================

    def get_children(self, node_id: str) -> List[Node]:
        """Get all direct children of a node, in traversal order."""
        node = self.nodes.get(node_id)
        if not node:
            return []
        return [self.nodes[cid] for cid in node.children_ids]

    def get_siblings(self, node_id: str) -> List[Node]:
        """Get all siblings of a node (same parent, excluding self)."""
        node = self.nodes.get(node_id)
        if not node or not node.parent_id:
            return []
        parent = self.nodes[node.parent_id]
        return [self.nodes[cid] for cid in parent.children_ids if cid != node_id]

    def get_path_to_node(self, node_id: str) -> List[Node]:
        """Get the path from root to a specific node."""
        path: List[Node] = []
        current_id: Optional[str] = node_id

        while current_id is not None:
            node = self.nodes.get(current_id)
            if node is None:
                break
            path.append(node)
            current_id = node.parent_id

        path.reverse()
        return path

    def iter_depth_first(self, start_id: Optional[str] = None) -> Iterator[Tuple[Node, int]]:
        """Yield ``(node, depth)`` in pre-order, children in traversal order."""
        start = self.nodes.get(start_id or self.root_id)
        if start is None:
            return
        stack: List[Tuple[Node, int]] = [(start, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for cid in reversed(node.children_ids):
                stack.append((self.nodes[cid], depth + 1))

    def get_leaf_nodes(self) -> List[Node]:
        """Get all leaf nodes (nodes with no children)."""
        return [node for node, _depth in self.iter_depth_first() if node.is_leaf]

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_depth(self) -> int:
        """Number of levels in the tree (a lone root has depth 1)."""
        return max(depth for _node, depth in self.iter_depth_first()) + 1

    def count_branches(self) -> int:
        """Count branch points (nodes with more than one child)."""
        return sum(1 for n in self.nodes.values() if len(n.children_ids) > 1)

    def get_statistics(self) -> Dict[str, Any]:
        """Get summary statistics about the tree."""
        return {
            "total_nodes": len(self.nodes),
            "depth": self.get_depth(),
            "leaf_nodes": len(self.get_leaf_nodes()),
            "branch_points": self.count_branches(),
        }

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert the tree to its nested YAML definition form."""
        root = self.nodes[self.root_id]
        return {
            "root": {"id": root.id, "data": root.data},
            "children": [self._child_to_dict(cid) for cid in root.children_ids],
        }

    def _child_to_dict(self, node_id: str) -> Dict[str, Any]:
        node = self.nodes[node_id]
        entry: Dict[str, Any] = {
            "id": node.id,
            "data": node.data,
            "decision": node.decision,
            "operator": node.operator.value if node.operator else None,
        }
        if node.children_ids:
            entry["children"] = [self._child_to_dict(cid) for cid in node.children_ids]
        return entry


def _unpack_entry(entry: ChildEntry) -> Tuple[str, Any, Any, Union[Op, str]]:
    if len(entry) == 3:
        node_id, data, decision = entry  # type: ignore[misc]
        return node_id, data, decision, Op.EQUAL
    if len(entry) == 4:
        node_id, data, decision, operator = entry  # type: ignore[misc]
        return node_id, data, decision, operator
    raise ValueError(f"Expected (id, data, decision[, operator]), got {entry!r}")


__all__ = [
    "DEFAULT_ROOT_ID",
    "ChildEntry",
    "DecisionTree",
    "Node",
]
