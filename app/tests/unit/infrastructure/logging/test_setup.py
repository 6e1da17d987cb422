"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_logger / get_module_logger context binding
- get_null_logger no-op behavior
- Test logging suppression in test environment
"""

import logging
from unittest.mock import patch

import pytest

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
    get_null_logger,
    _is_test_environment,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self):
        result = configure_logging()

        assert hasattr(result, "info")
        assert hasattr(result, "bind")

    def test_configure_logging_suppresses_in_test_env(self):
        configure_logging(log_level="DEBUG")

        assert logging.root.level == logging.CRITICAL + 1

    def test_configure_logging_outside_tests(self):
        """Production and development pipelines configure without error."""
        with patch(
            "infrastructure.logging.setup._is_test_environment", return_value=False
        ), patch("infrastructure.logging.setup.logging.basicConfig") as basic_config:
            assert configure_logging(log_level="DEBUG", is_production=True) is not None
            assert configure_logging(is_production=False) is not None

        assert basic_config.call_args_list[0][1]["level"] == logging.DEBUG

        # Restore the suppressed test configuration
        configure_logging()


@pytest.mark.unit
class TestGetLoggers:
    """Test suite for logger accessors."""

    def test_get_logger_with_name(self):
        logger = get_logger("custom")

        assert hasattr(logger, "info")

    def test_get_logger_autodetects_module(self):
        assert get_logger() is not None

    def test_get_module_logger_methods_dont_raise(self):
        logger = get_module_logger()

        logger.debug("debug_event", key="value")
        logger.info("info_event")
        logger.warning("warning_event")
        logger.error("error_event", error="boom")

    def test_bind_for_context(self):
        logger = get_module_logger().bind(file="a.sentry-event")

        logger.info("bound_event")


@pytest.mark.unit
class TestNullLogger:
    """Test suite for the no-op logger."""

    def test_calls_return_nothing(self):
        logger = get_null_logger()

        assert logger.info("ignored", key="value") is None
        assert logger.error("ignored", exc_info=True) is None

    def test_bind_keeps_it_silent(self):
        logger = get_null_logger().bind(component="cache_replayer")

        assert logger.warning("ignored") is None
