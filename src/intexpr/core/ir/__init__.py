"""Expression tree (IR) for intexpr."""

from intexpr.core.ir.expressions import BinaryExpr, Expr, Literal, Operator

__all__ = ["BinaryExpr", "Expr", "Literal", "Operator"]
