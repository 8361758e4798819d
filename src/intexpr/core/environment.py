"""
Configuration for intexpr.

Library calls take an explicit ``ParserSettings`` (or use its defaults), so
parsing never depends on the process environment. The command line builds
its settings from environment variables:

    INTEXPR_INT_BITS   - signed integer width for literals and arithmetic.
                         A bit count (default 32), or "none"/"unbounded"/"0"
                         for Python's unbounded integers.
    INTEXPR_LOG_LEVEL  - stdlib logging level name (default WARNING).

Usage:
    from intexpr.core.environment import ParserSettings, get_settings

    settings = get_settings()            # from the environment
    settings = ParserSettings(int_bits=64)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

INT_BITS_ENV_VAR = "INTEXPR_INT_BITS"
LOG_LEVEL_ENV_VAR = "INTEXPR_LOG_LEVEL"

DEFAULT_INT_BITS = 32
MIN_INT_BITS = 2
MAX_INT_BITS = 128
DEFAULT_LOG_LEVEL = "WARNING"

_UNBOUNDED_VALUES = {"none", "unbounded", "0"}
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ParserSettings(BaseModel):
    """Settings shared by the parser, the evaluator and the CLI."""

    int_bits: int | None = Field(
        default=DEFAULT_INT_BITS,
        ge=MIN_INT_BITS,
        le=MAX_INT_BITS,
        description="Signed integer width; None for unbounded integers",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level name")

    model_config = ConfigDict(frozen=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the logging level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def int_range(self) -> tuple[int, int] | None:
        """Inclusive (min, max) of representable values, or None when unbounded."""
        if self.int_bits is None:
            return None
        return -(1 << (self.int_bits - 1)), (1 << (self.int_bits - 1)) - 1


def get_int_bits() -> int | None:
    """Read the integer width from INTEXPR_INT_BITS.

    Returns:
        The bit count, None for unbounded, or the default when the variable
        is unset or invalid.
    """
    raw = os.environ.get(INT_BITS_ENV_VAR, "").strip().lower()
    if raw == "":
        return DEFAULT_INT_BITS
    if raw in _UNBOUNDED_VALUES:
        return None
    try:
        bits = int(raw)
    except ValueError:
        bits = -1
    if not 2 <= bits <= 128:
        logger.warning(
            "Unknown %s value '%s'. Expected a bit count between 2 and 128 or 'none'. "
            "Defaulting to %d.",
            INT_BITS_ENV_VAR,
            raw,
            DEFAULT_INT_BITS,
        )
        return DEFAULT_INT_BITS
    return bits


def get_log_level() -> str:
    """Read the logging level name from INTEXPR_LOG_LEVEL."""
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if raw == "":
        return DEFAULT_LOG_LEVEL
    if raw not in _LOG_LEVELS:
        logger.warning(
            "Unknown %s value '%s'. Valid values: %s. Defaulting to %s.",
            LOG_LEVEL_ENV_VAR,
            raw,
            ", ".join(_LOG_LEVELS),
            DEFAULT_LOG_LEVEL,
        )
        return DEFAULT_LOG_LEVEL
    return raw


def get_settings() -> ParserSettings:
    """Build settings from the environment."""
    return ParserSettings(int_bits=get_int_bits(), log_level=get_log_level())
