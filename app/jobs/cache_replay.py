"""Serialized replay passes over a cache directory.

Two passes over the same directory must never overlap, otherwise both
could read and deliver the same cached event. Every pass started through
``run_cache_replay`` holds a process-wide lock for its directory.
"""

import os
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from modules.cache import CacheReplayer

logger = get_module_logger()

_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def replay_lock(directory: Union[str, os.PathLike]) -> threading.Lock:
    """Return the lock guarding replay passes over ``directory``.

    Paths are resolved first, so different spellings of one directory
    share a lock.
    """
    key = str(Path(directory).resolve())
    with _locks_guard:
        return _locks.setdefault(key, threading.Lock())


def run_cache_replay(
    replayer: CacheReplayer,
    directory: Optional[Union[str, os.PathLike]] = None,
    blocking: bool = False,
) -> bool:
    """Run one replay pass unless another one holds the directory.

    Args:
        replayer: CacheReplayer performing the pass
        directory: Cache directory. Defaults to settings.cache.CACHE_DIR.
        blocking: Wait for a running pass instead of skipping this one

    Returns:
        True if a pass ran, False if it was skipped

    Exceptions from the pass propagate after the lock is released; the
    scheduled job wraps this function in safe_run.
    """
    directory = directory or settings.cache.CACHE_DIR
    lock = replay_lock(directory)

    if not lock.acquire(blocking=blocking):
        logger.info("cache_replay_already_running", directory=str(directory))
        return False

    try:
        replayer.process_cache(directory)
    finally:
        lock.release()
    return True
