"""
Position-tracking matcher over an expression string.

``Cursor.match_next`` is the only operation that moves the scan position.
It either consumes a non-empty match anchored at the current offset, or
consumes nothing and returns None. Grammar rules rely on the second half
of that contract to backtrack without saving and restoring state.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# \s and \d are ASCII-only to agree with the validator's character set.
WHITESPACE = re.compile(r"\s+", re.ASCII)
DIGITS = re.compile(r"[0-9]+")
LEFT_PAREN = re.compile(r"\(")
RIGHT_PAREN = re.compile(r"\)")
TRAILING = re.compile(r"(?:\s|\))+", re.ASCII)


def one_of(symbols: str) -> re.Pattern[str]:
    """Build a pattern matching any single character from ``symbols``."""
    return re.compile(f"[{re.escape(symbols)}]")


class Cursor:
    """Scan state over one expression string."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, remaining={self.remaining!r})"

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def match_next(self, pattern: re.Pattern[str]) -> str | None:
        """Match ``pattern`` at the current position, consuming it on success.

        Args:
            pattern: Compiled pattern; it is anchored at the current offset.

        Returns:
            The matched text, or None if nothing (or only the empty string)
            matched. On None the position is unchanged.
        """
        m = pattern.match(self.text, self.pos)
        if m is None or m.end() == self.pos:
            logger.debug("No match found for '%s'", pattern.pattern)
            return None
        self.pos = m.end()
        logger.debug("Found character(s) matching '%s': '%s'", pattern.pattern, m.group(0))
        return m.group(0)

    def skip_whitespace(self) -> None:
        self.match_next(WHITESPACE)
