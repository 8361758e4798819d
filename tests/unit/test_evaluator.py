"""Tests for expression tree evaluation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from intexpr.core.errors import DivisionByZeroError, ExpressionEvalError
from intexpr.core.expression_lang.evaluator import evaluate, wrap
from intexpr.core.ir.expressions import BinaryExpr, Literal, Operator


def _bin(op: Operator, left: int, right: int) -> BinaryExpr:
    return BinaryExpr(op=op, left=Literal(value=left), right=Literal(value=right))


class TestOperator:
    """Operator symbols and integer functions."""

    def test_symbols(self) -> None:
        assert [op.value for op in Operator] == ["+", "-", "*", "/"]
        assert Operator("*") is Operator.MULTIPLY

    def test_priority(self) -> None:
        assert Operator.MULTIPLY.is_high_priority
        assert Operator.DIVIDE.is_high_priority
        assert not Operator.ADD.is_high_priority
        assert not Operator.SUBTRACT.is_high_priority

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (6, 3, 2), (0, 5, 0)],
    )
    def test_division_truncates(self, a: int, b: int, expected: int) -> None:
        assert Operator.DIVIDE.function(a, b) == expected


class TestWrap:
    @pytest.mark.parametrize(
        ("value", "bits", "expected"),
        [
            (2**31, 32, -(2**31)),
            (2**31 - 1, 32, 2**31 - 1),
            (-(2**31) - 1, 32, 2**31 - 1),
            (255, 8, -1),
            (-1, 8, -1),
            (2**40, None, 2**40),
        ],
    )
    def test_wrap(self, value: int, bits: int | None, expected: int) -> None:
        assert wrap(value, bits) == expected


class TestEvaluate:
    def test_literal(self) -> None:
        assert evaluate(Literal(value=5)) == 5

    def test_nested(self) -> None:
        # (2 + 3) * (10 - 4)
        expr = BinaryExpr(
            op=Operator.MULTIPLY,
            left=_bin(Operator.ADD, 2, 3),
            right=_bin(Operator.SUBTRACT, 10, 4),
        )
        assert evaluate(expr) == 30

    def test_negative_intermediate(self) -> None:
        expr = BinaryExpr(
            op=Operator.DIVIDE,
            left=_bin(Operator.SUBTRACT, 3, 10),
            right=Literal(value=2),
        )
        assert evaluate(expr) == -3

    def test_wraps_each_step(self) -> None:
        expr = _bin(Operator.MULTIPLY, 2**16, 2**16)
        assert evaluate(expr) == 0
        assert evaluate(expr, int_bits=None) == 2**32
        assert evaluate(expr, int_bits=64) == 2**32

    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError, match="Division by zero") as exc_info:
            evaluate(_bin(Operator.DIVIDE, 1, 0))
        assert isinstance(exc_info.value, ExpressionEvalError)
        assert isinstance(exc_info.value, ZeroDivisionError)

    def test_right_operand_checked_after_left(self) -> None:
        # Left-to-right: the failing left division is reported first.
        expr = BinaryExpr(
            op=Operator.ADD,
            left=_bin(Operator.DIVIDE, 1, 0),
            right=_bin(Operator.DIVIDE, 2, 0),
        )
        with pytest.raises(DivisionByZeroError, match="1 / 0"):
            evaluate(expr)

    def test_unknown_node(self) -> None:
        with pytest.raises(ExpressionEvalError, match="Unknown expression type"):
            evaluate("1 + 1")  # type: ignore[arg-type]

    def test_deep_tree(self) -> None:
        expr: Literal | BinaryExpr = Literal(value=1)
        for _ in range(10000):
            expr = BinaryExpr(op=Operator.ADD, left=expr, right=Literal(value=1))
        assert evaluate(expr) == 10001

    def test_nodes_are_frozen(self) -> None:
        node = Literal(value=1)
        with pytest.raises(ValidationError):
            node.value = 2  # type: ignore[misc]
        assert hash(_bin(Operator.ADD, 1, 2)) == hash(_bin(Operator.ADD, 1, 2))

    @pytest.mark.parametrize("bits", [-3, 0, 1, 129])
    def test_unsupported_width_rejected(self, bits: int) -> None:
        with pytest.raises(ValueError, match="int_bits must be between 2 and 128"):
            evaluate(Literal(value=5), bits)

    @pytest.mark.parametrize(("bits", "expected"), [(2, 1), (128, 5), (None, 5)])
    def test_supported_width_edges(self, bits: int | None, expected: int) -> None:
        assert evaluate(Literal(value=5), bits) == expected
