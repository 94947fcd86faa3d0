"""
Decision tree structure and traversal.

Components:
- Node: arena entry holding id, payload, decision and operator
- DecisionTree: the arena and global id index
- NodeRef: handle used to append, find and navigate
- Traverse: cursor that descends by matching input against decisions

Example:
    from dtree.core.tree import DecisionTree, Traverse

    tree = DecisionTree.init()
    tree.root.append("first", "banana", True)
    second = tree.root.append("second", "apple", False)
    second.append("fourth", "red apple", True)

    cursor = Traverse.start(tree)
    cursor.traverse(False)   # -> NodeRef('second')
    cursor.traverse(True)    # -> NodeRef('fourth')
"""

from dtree.core.tree.handles import NodeRef
from dtree.core.tree.models import DEFAULT_ROOT_ID, DecisionTree, Node
from dtree.core.tree.cursor import Traverse

__all__ = [
    "DEFAULT_ROOT_ID",
    "DecisionTree",
    "Node",
    "NodeRef",
    "Traverse",
]
