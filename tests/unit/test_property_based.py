"""
Property-based tests using Hypothesis.

These tests verify parser invariants across generated expression trees
and arbitrary input text.
"""

from __future__ import annotations

from fractions import Fraction
from math import trunc

from hypothesis import given, settings
from hypothesis import strategies as st

from intexpr.core.environment import ParserSettings
from intexpr.core.errors import DivisionByZeroError, ParseError
from intexpr.core.expression_lang import parse
from intexpr.core.ir.expressions import BinaryExpr, Expr, Literal, Operator

UNBOUNDED = ParserSettings(int_bits=None)

literals = st.integers(min_value=0, max_value=10_000).map(lambda v: Literal(value=v))

trees = st.recursive(
    literals,
    lambda children: st.builds(
        lambda op, left, right: BinaryExpr(op=op, left=left, right=right),
        st.sampled_from(Operator),
        children,
        children,
    ),
    max_leaves=25,
)


def _reference_value(expr: Expr) -> int:
    """Evaluate independently of the evaluator, dividing via exact fractions."""
    if isinstance(expr, Literal):
        return expr.value
    left = _reference_value(expr.left)
    right = _reference_value(expr.right)
    if expr.op == Operator.ADD:
        return left + right
    if expr.op == Operator.SUBTRACT:
        return left - right
    if expr.op == Operator.MULTIPLY:
        return left * right
    return trunc(Fraction(left, right))


class TestRoundTripProperties:
    """Fully parenthesized renderings of known trees."""

    @given(trees)
    @settings(max_examples=300)
    def test_parse_and_evaluate_matches_reference(self, tree: Expr) -> None:
        """Invariant: parse(render(tree)).evaluate() == value(tree)."""
        result = parse(str(tree), UNBOUNDED)
        try:
            expected = _reference_value(tree)
        except ZeroDivisionError:
            try:
                result.evaluate()
            except DivisionByZeroError:
                return
            raise AssertionError("expected DivisionByZeroError")
        assert result.evaluate() == expected
        assert result.evaluate() == expected

    @given(trees)
    @settings(max_examples=200)
    def test_rendering_reparses_to_same_tree(self, tree: Expr) -> None:
        """Invariant: the canonical rendering is unambiguous."""
        assert parse(str(tree), UNBOUNDED).expr == tree

    @given(trees, st.integers(min_value=0, max_value=5), st.integers(min_value=0, max_value=5))
    @settings(max_examples=100)
    def test_extra_parentheses_at_the_ends(self, tree: Expr, opening: int, closing: int) -> None:
        """Invariant: extra '(' before or ')' after the whole expression changes nothing."""
        source = "(" * opening + str(tree) + ")" * closing
        assert parse(source, UNBOUNDED).expr == tree


class TestArbitraryInputProperties:
    @given(st.text(alphabet="0123456789 ()+-*/\tx", max_size=60))
    @settings(max_examples=300)
    def test_only_parse_errors_from_near_miss_input(self, text: str) -> None:
        """Invariant: parse raises ParseError or returns something evaluable."""
        try:
            result = parse(text)
        except ParseError:
            return
        try:
            value = result.evaluate()
        except DivisionByZeroError:
            return
        assert isinstance(value, int)
        assert -(2**31) <= value < 2**31

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_crashes_on_arbitrary_text(self, text: str) -> None:
        """Invariant: parse never raises anything but ParseError."""
        try:
            parse(text)
        except ParseError:
            pass
