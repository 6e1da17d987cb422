"""Fixtures for infrastructure.logging tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def clean_contextvars():
    """Keep bound context from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
