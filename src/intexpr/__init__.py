"""
intexpr - a tolerant parser for integer arithmetic expressions.

Parses ``+ - * /`` expressions over non-negative integer literals with the
usual precedence, left associativity, parentheses and truncating division.
Unmatched parentheses at the very start or very end of the input are
accepted; any other malformed input raises ``ParseError``.

Usage:
    import intexpr

    intexpr.parse("((50 - 11) * 2) + 41) ) )").evaluate()
    # 119
"""

from __future__ import annotations

from intexpr._version import __version__
from intexpr.core.environment import ParserSettings
from intexpr.core.errors import (
    DivisionByZeroError,
    ExpressionEvalError,
    IntexprError,
    ParseError,
)
from intexpr.core.expression_lang import Evaluable, evaluate, parse

__all__ = [
    "__version__",
    "parse",
    "evaluate",
    "Evaluable",
    "ParserSettings",
    "IntexprError",
    "ParseError",
    "ExpressionEvalError",
    "DivisionByZeroError",
]
