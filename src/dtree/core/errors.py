"""Errors raised by the decision tree container."""

from __future__ import annotations

from typing import Any


class DecisionTreeError(Exception):
    """Base class for decision tree errors."""


class DuplicateIdentityError(DecisionTreeError, KeyError):
    """An append used an id that is already registered in the tree."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Duplicate node id: {self.node_id}"


class NoMatchingChildError(DecisionTreeError, LookupError):
    """No child of the cursor's current node matched the traversal input."""

    def __init__(self, node_id: str, value: Any):
        self.node_id = node_id
        self.value = value
        super().__init__(f"No child of '{node_id}' matches input {value!r}")


__all__ = ["DecisionTreeError", "DuplicateIdentityError", "NoMatchingChildError"]
