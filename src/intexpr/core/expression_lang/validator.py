"""
Up-front checks on raw expression text, run before any parsing.
"""

from __future__ import annotations

import re

from intexpr.core.errors import ParseError

_BLANK_RE = re.compile(r"\s*", re.ASCII)
_INVALID_CHAR_RE = re.compile(r"[^0-9\s()+\-*/]", re.ASCII)
# Leading whitespace and left parentheses may be skipped; a digit must follow.
_LEAD_RE = re.compile(r"[\s(]*", re.ASCII)


def validate_input(text: str | None) -> str:
    """Check that ``text`` could be an expression.

    Args:
        text: Raw input, possibly None.

    Returns:
        The text, unchanged.

    Raises:
        ParseError: If the text is blank, contains a character outside
            ``0-9``, whitespace and ``()+-*/``, or does not reach a digit
            after its leading whitespace and left parentheses.
    """
    if text is None or _BLANK_RE.fullmatch(text):
        raise ParseError("No expression specified")

    if bad := _INVALID_CHAR_RE.search(text):
        raise ParseError("Input expression contains invalid characters", bad.start(), text)

    lead = _LEAD_RE.match(text)
    assert lead is not None
    first = lead.end()
    if first >= len(text) or not "0" <= text[first] <= "9":
        raise ParseError("first non-whitespace/non-'(' character must be numeric", first, text)

    return text
