"""Structured logging infrastructure.

Centralized logging configuration and utilities built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - get_null_logger(): Get a logger that discards everything
    - bind_replay_context(): Context manager for replay-scoped logging
    - get_replay_id(): Get the current replay ID from context
    - clear_replay_context(): Clear all bound context

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
    get_null_logger,
)
from infrastructure.logging.context import (
    bind_replay_context,
    get_replay_id,
    clear_replay_context,
)
from infrastructure.logging.formatters import (
    add_app_info,
    truncate_large_values,
    drop_all_events,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "get_null_logger",
    # Context
    "bind_replay_context",
    "get_replay_id",
    "clear_replay_context",
    # Formatters
    "add_app_info",
    "truncate_large_values",
    "drop_all_events",
]
