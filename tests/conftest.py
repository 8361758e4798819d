"""Shared pytest fixtures for intexpr tests."""

import pytest

from intexpr.core.environment import INT_BITS_ENV_VAR, LOG_LEVEL_ENV_VAR, ParserSettings


@pytest.fixture
def unbounded_settings() -> ParserSettings:
    """Settings with Python's unbounded integers."""
    return ParserSettings(int_bits=None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove intexpr environment variables for the duration of a test."""
    monkeypatch.delenv(INT_BITS_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    return monkeypatch
