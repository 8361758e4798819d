"""
Recursive descent parser for integer arithmetic expressions.

Grammar (precedence low to high):
    expr           → high_priority (("+" | "-") high_priority)*
    high_priority  → atomic (("*" | "/") atomic)*
    atomic         → WS? (number | parenthesized) WS?
    number         → [0-9]+
    parenthesized  → "(" expr ")"?

Every rule returns None without consuming input when it does not apply, and
raises ParseError once it has committed (an operator with no operand, a "("
with no expression). Both precedence levels are the same binary-chain rule
with different operand and operator rules plugged in.

Mismatched parentheses are tolerated at the ends of the input only: a
missing ")" is never an error, and after the top-level expression any run
of whitespace and ")" is skipped. Anything else left over is an error.

Each parenthesis level costs a fixed number of Python frames, so the
recursion limit is raised in proportion to the input's nesting depth for the
duration of a parse. Inputs nested deeper than MAX_NESTING_DEPTH are rejected
before parsing starts.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict, Field

from intexpr.core.environment import (
    DEFAULT_INT_BITS,
    MAX_INT_BITS,
    MIN_INT_BITS,
    ParserSettings,
)
from intexpr.core.errors import ParseError
from intexpr.core.expression_lang.cursor import (
    DIGITS,
    LEFT_PAREN,
    RIGHT_PAREN,
    TRAILING,
    Cursor,
    one_of,
)
from intexpr.core.expression_lang.evaluator import evaluate
from intexpr.core.expression_lang.validator import validate_input
from intexpr.core.ir.expressions import BinaryExpr, Expr, Literal, Operator

logger = logging.getLogger(__name__)

_LOW_PRIORITY_OPS = one_of("".join(op.value for op in Operator if not op.is_high_priority))
_HIGH_PRIORITY_OPS = one_of("".join(op.value for op in Operator if op.is_high_priority))

OperandRule = Callable[[], Expr | None]

MAX_NESTING_DEPTH = 5000
# parse_parenthesized -> parse_expr -> parse_low_priority -> parse_binary_chain
# -> parse_high_priority -> parse_binary_chain -> parse_atomic, plus one spare
_FRAMES_PER_LEVEL = 8
_FRAME_MARGIN = 200


class Evaluable(BaseModel):
    """A parsed expression, ready to evaluate any number of times."""

    source: str
    expr: Expr
    int_bits: int | None = Field(default=DEFAULT_INT_BITS, ge=MIN_INT_BITS, le=MAX_INT_BITS)

    model_config = ConfigDict(frozen=True)

    def evaluate(self) -> int:
        """Compute the expression's value.

        Raises:
            DivisionByZeroError: If a divisor evaluates to zero.
        """
        return evaluate(self.expr, self.int_bits)

    def __call__(self) -> int:
        return self.evaluate()

    def __str__(self) -> str:
        return str(self.expr)


class _Parser:
    """Recursive descent parser over a validated expression string."""

    def __init__(self, source: str, int_max: int | None = None) -> None:
        self.source = source
        self.cursor = Cursor(source)
        self.int_max = int_max

    def error(self, message: str, pos: int | None = None, **kwargs: str) -> ParseError:
        if pos is None:
            pos = self.cursor.pos
        return ParseError(message, pos, self.source, **kwargs)

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Top level: an expression, then only whitespace or stray ')'."""
        expr = self.parse_expr()
        if expr is None:
            raise self.error("No expression specified")

        self.cursor.match_next(TRAILING)
        if not self.cursor.at_end:
            raise self.error(
                "Expression contains extraneous characters",
                remainder=self.cursor.remaining,
            )
        return expr

    def parse_expr(self) -> Expr | None:
        return self.parse_low_priority()

    def parse_low_priority(self) -> Expr | None:
        """high_priority (('+' | '-') high_priority)*"""
        return self.parse_binary_chain(self.parse_high_priority, _LOW_PRIORITY_OPS)

    def parse_high_priority(self) -> Expr | None:
        """atomic (('*' | '/') atomic)*"""
        return self.parse_binary_chain(self.parse_atomic, _HIGH_PRIORITY_OPS)

    def parse_binary_chain(
        self, operand_rule: OperandRule, operator_pattern: re.Pattern[str]
    ) -> Expr | None:
        """operand (operator operand)*, folded left-associatively."""
        left = operand_rule()
        if left is None:
            return None

        while (symbol := self.cursor.match_next(operator_pattern)) is not None:
            right = operand_rule()
            if right is None:
                raise self.error("Operator must be followed by an expression")
            left = BinaryExpr(op=Operator(symbol), left=left, right=right)
        return left

    def parse_atomic(self) -> Expr | None:
        """number | parenthesized, with surrounding whitespace."""
        self.cursor.skip_whitespace()
        expr = self.parse_number()
        if expr is None:
            expr = self.parse_parenthesized()
        if expr is not None:
            self.cursor.skip_whitespace()
        return expr

    def parse_number(self) -> Literal | None:
        start = self.cursor.pos
        digits = self.cursor.match_next(DIGITS)
        if digits is None:
            return None
        try:
            value = int(digits)
        except ValueError:
            # Longer than int()'s digit limit.
            raise self.error("Number is out of range", start) from None
        if self.int_max is not None and value > self.int_max:
            raise self.error("Number is out of range", start)
        return Literal(value=value)

    def parse_parenthesized(self) -> Expr | None:
        """'(' expr ')'? -- the closing parenthesis may be missing."""
        if self.cursor.match_next(LEFT_PAREN) is None:
            return None
        expr = self.parse_expr()
        if expr is None:
            raise self.error("Left parenthesis must be followed by an expression")
        self.cursor.match_next(RIGHT_PAREN)
        return expr


def _nesting_depth(text: str) -> tuple[int, int]:
    """Deepest parenthesis level in ``text`` and the offset of the '(' that opens it.

    A ')' with nothing open is ignored, so the result bounds how deeply
    ``parse_parenthesized`` can recurse.
    """
    depth = deepest = 0
    offset = 0
    for i, char in enumerate(text):
        if char == "(":
            depth += 1
            if depth > deepest:
                deepest, offset = depth, i
        elif char == ")" and depth:
            depth -= 1
    return deepest, offset


@contextmanager
def _recursion_headroom(frames: int) -> Iterator[None]:
    """Raise the interpreter recursion limit by ``frames`` for the duration."""
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(limit + frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(limit)


def _parse(source: str | None, settings: ParserSettings) -> Evaluable:
    text = validate_input(source)
    depth, offset = _nesting_depth(text)
    if depth > MAX_NESTING_DEPTH:
        raise ParseError("Expression is nested too deeply", offset, text)

    int_range = settings.int_range
    parser = _Parser(text, int_max=int_range[1] if int_range else None)
    try:
        with _recursion_headroom(depth * _FRAMES_PER_LEVEL + _FRAME_MARGIN):
            expr = parser.parse()
    except RecursionError:
        raise parser.error("Expression is nested too deeply") from None
    return Evaluable(source=text, expr=expr, int_bits=settings.int_bits)


def parse(source: str | None, settings: ParserSettings | None = None) -> Evaluable:
    """Parse an expression string into an Evaluable.

    Args:
        source: Expression string (e.g., "(50 - 11) * 2")
        settings: Integer width and related options; defaults to
            ``ParserSettings()``.

    Returns:
        The parsed expression. Nothing is evaluated until
        ``Evaluable.evaluate()`` is called.

    Raises:
        ParseError: If the expression is invalid.
    """
    if settings is None:
        settings = ParserSettings()
    logger.debug(">" * 30)
    logger.debug("Parsing expression: '%s'", source)
    try:
        evaluable = _parse(source, settings)
    except ParseError as e:
        logger.debug("Parsed expression '%s' is invalid: %s", source, e.message)
        raise
    else:
        logger.debug("Parsed expression '%s' is valid: %s", source, evaluable)
        return evaluable
    finally:
        logger.debug("<" * 30)
