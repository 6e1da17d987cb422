"""Replay context binding for structured logging.

Binds a replay identifier and the cache directory to every log entry emitted
while one replay pass runs, so the lines of a single pass can be correlated.

Usage:
    from infrastructure.logging import bind_replay_context

    with bind_replay_context(directory="/var/cache/events"):
        logger.info("cache_replay_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_replay_context(
    directory: Optional[str] = None,
    replay_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind replay-scoped context to all logs within the context manager.

    Args:
        directory: Cache directory being replayed.
        replay_id: Identifier of the pass. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The replay identifier bound for the block.

    Example:
        with bind_replay_context(directory=str(cache_dir)) as replay_id:
            replayer.process_cache(cache_dir)
    """
    context: dict[str, Any] = {"replay_id": replay_id or uuid.uuid4().hex}

    if directory is not None:
        context["cache_directory"] = directory

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["replay_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_replay_id() -> Optional[str]:
    """Get the current replay ID from the logging context.

    Returns:
        The replay ID if a pass is running in this context, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("replay_id")


def clear_replay_context() -> None:
    """Clear all context-bound logging values."""
    structlog.contextvars.clear_contextvars()
