"""Comparison operators used by decision nodes.

A node's operator is applied as ``decision <op> input``: the node's stored
decision value is always the left operand and the traversal input the right.
"""

from __future__ import annotations

import operator as _operator
from enum import Enum
from typing import Any, Callable, Dict, Union


class Op(str, Enum):
    """Closed set of comparison kinds."""

    EQUAL = "equals"
    NOT_EQUAL = "not_equals"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    GREATER_OR_EQUAL = "gte"
    LESS_OR_EQUAL = "lte"

    @property
    def symbol(self) -> str:
        return OPERATOR_SYMBOLS[self]

    @classmethod
    def parse(cls, value: Union["Op", str]) -> "Op":
        """Accept an Op, its serialized name ('gte') or its symbol ('>=')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            if key in _BY_SYMBOL:
                return _BY_SYMBOL[key]
            try:
                return cls(key)
            except ValueError:
                pass
        valid = ", ".join(op.value for op in cls)
        raise ValueError(f"Unknown operator: {value!r}. Valid operators: {valid}")


# Canonical operator symbol mapping
OPERATOR_SYMBOLS: Dict[Op, str] = {
    Op.EQUAL: "==",
    Op.NOT_EQUAL: "!=",
    Op.GREATER_THAN: ">",
    Op.LESS_THAN: "<",
    Op.GREATER_OR_EQUAL: ">=",
    Op.LESS_OR_EQUAL: "<=",
}

_BY_SYMBOL: Dict[str, Op] = {symbol: op for op, symbol in OPERATOR_SYMBOLS.items()}

_COMPARATORS: Dict[Op, Callable[[Any, Any], Any]] = {
    Op.EQUAL: _operator.eq,
    Op.NOT_EQUAL: _operator.ne,
    Op.GREATER_THAN: _operator.gt,
    Op.LESS_THAN: _operator.lt,
    Op.GREATER_OR_EQUAL: _operator.ge,
    Op.LESS_OR_EQUAL: _operator.le,
}


def matches(op: Op, decision: Any, value: Any) -> bool:
    """
    Evaluate ``decision <op> value``.

    Ordering operators on incomparable values raise the interpreter's
    TypeError unchanged.
    """
    return bool(_COMPARATORS[op](decision, value))


def get_operator_symbol(op: Union[Op, str, None]) -> str:
    """Get display symbol for an operator (empty for the root's missing operator)."""
    if op is None:
        return ""
    try:
        return Op.parse(op).symbol
    except ValueError:
        return str(op)


__all__ = ["OPERATOR_SYMBOLS", "Op", "get_operator_symbol", "matches"]
