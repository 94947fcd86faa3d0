"""In-memory decision tree container with a global id index and a matching cursor."""

from dtree.core import (
    DecisionTree,
    DecisionTreeError,
    DuplicateIdentityError,
    NoMatchingChildError,
    Node,
    NodeRef,
    Op,
    Traverse,
)

__version__ = "0.1.0"

__all__ = [
    "DecisionTree",
    "DecisionTreeError",
    "DuplicateIdentityError",
    "NoMatchingChildError",
    "Node",
    "NodeRef",
    "Op",
    "Traverse",
]
