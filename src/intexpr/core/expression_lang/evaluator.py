"""
Expression evaluator for intexpr.

Walks an expression tree depth-first, left operand before right. Pure: no
I/O, no state, so a tree can be evaluated any number of times from any
number of threads.

Arithmetic follows fixed-width signed integers of ``int_bits`` bits: every
intermediate result wraps around in two's complement, the way a native
``int`` does. ``int_bits=None`` keeps Python's unbounded integers. Division
truncates toward zero in both modes.
"""

from __future__ import annotations

from intexpr.core.environment import DEFAULT_INT_BITS, MAX_INT_BITS, MIN_INT_BITS
from intexpr.core.errors import DivisionByZeroError, ExpressionEvalError
from intexpr.core.ir.expressions import BinaryExpr, Expr, Literal, Operator


def wrap(value: int, int_bits: int | None) -> int:
    """Reduce ``value`` to a signed ``int_bits``-bit integer (two's complement)."""
    if int_bits is None:
        return value
    modulus = 1 << int_bits
    value &= modulus - 1
    if value >= modulus >> 1:
        value -= modulus
    return value


def evaluate(expr: Expr, int_bits: int | None = DEFAULT_INT_BITS) -> int:
    """Evaluate an expression tree.

    Args:
        expr: Parsed expression tree.
        int_bits: Signed integer width, or None for unbounded.

    Returns:
        The integer value.

    Raises:
        DivisionByZeroError: If a divisor evaluates to zero.
        ExpressionEvalError: If the tree contains an unknown node.
        ValueError: If int_bits is outside the supported widths.
    """
    if int_bits is not None and not MIN_INT_BITS <= int_bits <= MAX_INT_BITS:
        raise ValueError(
            f"int_bits must be between {MIN_INT_BITS} and {MAX_INT_BITS}, got {int_bits}"
        )
    return _interpret(expr, int_bits)


def _interpret(expr: Expr, int_bits: int | None) -> int:
    """Post-order walk with an explicit stack.

    Long operator chains fold into left-deep trees, so recursion depth would
    grow with the number of operators rather than with parenthesis nesting.
    """
    values: list[int] = []
    # (node, children_done)
    stack: list[tuple[Expr, bool]] = [(expr, False)]

    while stack:
        node, children_done = stack.pop()

        if isinstance(node, Literal):
            values.append(wrap(node.value, int_bits))
        elif isinstance(node, BinaryExpr):
            if not children_done:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            right = values.pop()
            left = values.pop()
            if node.op == Operator.DIVIDE and right == 0:
                raise DivisionByZeroError(f"Division by zero: {left} / {right}")
            values.append(wrap(node.op.function(left, right), int_bits))
        else:
            raise ExpressionEvalError(f"Unknown expression type: {type(node).__name__}")

    return values.pop()
