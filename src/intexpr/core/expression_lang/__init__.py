"""
intexpr expression language.

Validator, cursor, parser and evaluator for integer arithmetic expressions
over ``+ - * /`` and parentheses.

Usage:
    from intexpr.core.expression_lang import parse

    result = parse("(50 - 11) * 2")
    result.evaluate()
    # 78
"""

from intexpr.core.expression_lang.evaluator import evaluate
from intexpr.core.expression_lang.parser import Evaluable, parse

__all__ = ["Evaluable", "evaluate", "parse"]
