"""
Error types for intexpr parsing and evaluation.
"""

from dataclasses import dataclass
from typing import Optional


class IntexprError(Exception):
    """Base exception for all intexpr errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(IntexprError):
    """
    Raised when an expression string cannot be parsed.

    Examples:
    - Blank input
    - Characters outside the accepted set
    - An operator with no operand after it
    - Characters left over after the expression
    """

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        source: str | None = None,
        remainder: str | None = None,
    ):
        self.pos = pos
        self.remainder = remainder
        context = None
        if source is not None and pos is not None:
            context = ErrorContext(source=source, offset=pos)
        super().__init__(message, context)


class ExpressionEvalError(IntexprError):
    """Raised when a parsed expression cannot be evaluated."""


class DivisionByZeroError(ExpressionEvalError, ZeroDivisionError):
    """Raised by evaluation when a divisor evaluates to zero."""

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


@dataclass(frozen=True)
class ErrorContext:
    """
    Location of an error within the expression source.

    Attributes:
        source: The full expression text
        offset: 0-indexed character offset of the failure
    """

    source: str
    offset: int

    def format(self) -> str:
        """
        Format the context as a location line plus the source with a caret.

        Returns:
            Formatted string like:

                offset 4
                  3 + +
                      ^
        """
        # Keep the caret aligned: tabs and newlines become single spaces.
        line = "".join(" " if c.isspace() else c for c in self.source)
        caret = " " * min(self.offset, len(line)) + "^"
        return f"offset {self.offset}\n  {line}\n  {caret}"
