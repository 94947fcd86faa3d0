from dtree.core.errors import DecisionTreeError, DuplicateIdentityError, NoMatchingChildError
from dtree.core.operators import Op, matches
from dtree.core.tree import DecisionTree, Node, NodeRef, Traverse

__all__ = [
    "DecisionTree",
    "DecisionTreeError",
    "DuplicateIdentityError",
    "NoMatchingChildError",
    "Node",
    "NodeRef",
    "Op",
    "Traverse",
    "matches",
]
