"""
Expression tree types for intexpr.

A parsed expression is an immutable tree of two node kinds:

- ``Literal``: a non-negative integer taken straight from the source
- ``BinaryExpr``: ``left op right`` for one of ``+ - * /``

Nodes are frozen pydantic models, so a tree can be shared, hashed and
compared by value. Evaluation lives in
``intexpr.core.expression_lang.evaluator``.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (``-7 / 2 == -3``)."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


class Operator(StrEnum):
    """Binary arithmetic operators, valued by their source symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def function(self) -> Callable[[int, int], int]:
        """The integer function this operator applies."""
        return _OPERATOR_FUNCTIONS[self]

    @property
    def is_high_priority(self) -> bool:
        return self in (Operator.MULTIPLY, Operator.DIVIDE)


_OPERATOR_FUNCTIONS: dict[Operator, Callable[[int, int], int]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: _truncating_div,
}


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """An integer literal."""

    value: int = Field(ge=0, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: Operator
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Iterative: left-deep chains can be far deeper than the recursion limit.
        parts: list[str] = []
        pending: list[Expr | str] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, BinaryExpr):
                pending.extend([")", item.right, f" {item.op.value} ", item.left, "("])
            else:
                parts.append(str(item))
        return "".join(parts)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
