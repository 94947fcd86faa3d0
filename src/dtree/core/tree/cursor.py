"""
Traversal cursor.

A Traverse holds the tree it was started from plus the id of its current
node. Each ``traverse(value)`` call looks only at the current node's direct
children, in the order they were appended, and moves to the first one whose
``decision <operator> value`` holds. There is no terminal state: when nothing
matches the cursor stays where it is and can be asked again.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

from dtree.core.errors import NoMatchingChildError
from dtree.core.operators import matches
from dtree.core.tree.handles import NodeRef
from dtree.core.tree.models import DecisionTree

logger = logging.getLogger(__name__)


class Traverse:
    """Movable position inside a DecisionTree."""

    def __init__(self, tree: DecisionTree, start_id: str):
        self._tree = tree
        self._start_id = start_id
        self._position = start_id

    @classmethod
    def start(cls, source: Union[DecisionTree, NodeRef]) -> "Traverse":
        """Cursor at the tree's root, or at the given node for a subtree walk."""
        if isinstance(source, NodeRef):
            return cls(source.tree, source.id)
        return cls(source, source.root_id)

    @property
    def tree(self) -> DecisionTree:
        return self._tree

    @property
    def position(self) -> str:
        """Id of the current node."""
        return self._position

    @property
    def current(self) -> NodeRef:
        return NodeRef(self._tree, self._position)

    def decision(self) -> Any:
        return self._tree.nodes[self._position].decision

    def find(self, node_id: str) -> Optional[NodeRef]:
        return self._tree.find(node_id)

    def traverse(self, value: Any) -> NodeRef:
        """
        Move to the first child whose decision matches ``value``.

        Returns:
            Handle to the child the cursor moved to

        Raises:
            NoMatchingChildError: If no child matches; the cursor does not move
        """
        current = self._tree.nodes[self._position]
        for child_id in current.children_ids:
            child = self._tree.nodes[child_id]
            if matches(child.operator, child.decision, value):
                logger.debug("Traverse %s -> %s on %r", self._position, child_id, value)
                self._position = child_id
                return NodeRef(self._tree, child_id)
        logger.debug("Traverse %s: no child matches %r", self._position, value)
        raise NoMatchingChildError(self._position, value)

    def walk(self, values: Iterable[Any]) -> List[NodeRef]:
        """
        Traverse with each value in turn, stopping at the first one without a match.

        Returns the handles visited, in order. The cursor is left at the last
        node reached.
        """
        visited: List[NodeRef] = []
        for value in values:
            try:
                visited.append(self.traverse(value))
            except NoMatchingChildError:
                break
        return visited

    def reset(self) -> None:
        """Return to the node the cursor was started at."""
        self._position = self._start_id

    def __repr__(self) -> str:
        return f"Traverse(at={self._position!r})"


__all__ = ["Traverse"]
