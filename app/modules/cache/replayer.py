"""Replay of events persisted in the on-disk cache.

When an event cannot be delivered right away it is written to the cache
directory, one file per event. A replay pass scans that directory, hands
each stored event back to a delivery sink and removes the file unless the
sink asks for it to be kept for a later pass.

Usage:
    from modules.cache import CacheReplayer, JsonEventSerializer

    replayer = CacheReplayer(JsonEventSerializer(), sink)
    replayer.process_cache(settings.cache.CACHE_DIR)
"""

import os
from pathlib import Path
from typing import Optional, Union

from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings
from infrastructure.logging import bind_replay_context, get_module_logger
from infrastructure.operations import OperationStatus
from modules.cache.filesystem import CacheFileSystem, LocalFileSystem
from modules.cache.models import DeliveryOutcome, Event
from modules.cache.serializer import EventSerializer
from modules.cache.sink import DeliverySink

logger = get_module_logger()


def _new_stats() -> dict:
    return {
        "processed": 0,
        "delivered": 0,
        "kept": 0,
        "deleted": 0,
        "failed": 0,
        "skipped": 0,
    }


class CacheReplayer:
    """Re-delivers cached events and prunes the cache directory.

    Every file seen in a pass ends up either deleted or untouched. Files are
    handled one at a time in directory listing order, with at most one open
    file handle. Nothing raised by the filesystem, the serializer or the
    sink escapes ``process_cache``.

    The replayer does not lock the directory. Callers must not run two
    passes over the same directory concurrently (see jobs.cache_replay).

    Attributes:
        serializer: EventSerializer reading cache files
        sink: DeliverySink receiving the events
        filesystem: CacheFileSystem used for every disk access
        file_suffix: Suffix identifying cache files
    """

    def __init__(
        self,
        serializer: EventSerializer,
        sink: DeliverySink,
        filesystem: Optional[CacheFileSystem] = None,
        log: Optional[BoundLogger] = None,
        file_suffix: Optional[str] = None,
    ) -> None:
        """Initialize the replayer.

        Args:
            serializer: Serializer turning file content into events
            sink: Delivery sink for replayed events
            filesystem: Optional filesystem. Defaults to the local disk.
            log: Optional logger. Defaults to the module logger; pass
                ``get_null_logger()`` to silence the replayer.
            file_suffix: Optional cache file suffix. Defaults to
                settings.cache.CACHE_FILE_SUFFIX.
        """
        self.serializer = serializer
        self.sink = sink
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self.file_suffix = file_suffix or settings.cache.CACHE_FILE_SUFFIX
        if log is None:
            log = logger
        self.log = log.bind(component="cache_replayer")

    def process_cache(self, directory: Union[str, os.PathLike]) -> None:
        """Run one replay pass over ``directory``.

        Outcomes are observable only through logs, the sink and the files
        left on disk.

        Args:
            directory: Absolute or relative path of the cache directory
        """
        path = Path(directory)
        with bind_replay_context(directory=str(path)):
            try:
                self._process_directory(path)
            except Exception as e:
                self.log.error(
                    "cache_replay_failed",
                    directory=str(path),
                    error=str(e),
                    exc_info=True,
                )

    def _process_directory(self, path: Path) -> None:
        if not self.filesystem.exists(path):
            self.log.warning(
                "cache_directory_missing",
                directory=str(path.absolute()),
            )
            return

        if not self.filesystem.is_dir(path):
            self.log.error(
                "cache_directory_not_a_directory",
                directory=str(path.absolute()),
            )
            return

        try:
            entries = self.filesystem.list_dir(path)
        except OSError as e:
            self.log.error(
                "cache_directory_list_failed",
                directory=str(path.absolute()),
                error=str(e),
                exc_info=True,
            )
            return

        self.log.debug(
            "cache_replay_started",
            directory=str(path.absolute()),
            item_count=len(entries),
        )

        stats = _new_stats()
        for entry in entries:
            try:
                self._process_entry(entry, stats)
            except Exception as e:
                self.log.error(
                    "cache_file_processing_failed",
                    file=entry.name,
                    error=str(e),
                    exc_info=True,
                )
                stats["failed"] += 1

        self.log.info("cache_replay_complete", **stats)

    def _process_entry(self, entry: Path, stats: dict) -> None:
        if not entry.name.endswith(self.file_suffix):
            self.log.debug(
                "cache_file_skipped_extension",
                file=entry.name,
                expected_suffix=self.file_suffix,
            )
            stats["skipped"] += 1
            return

        if not self.filesystem.is_file(entry):
            self.log.debug("cache_file_skipped_not_a_file", path=str(entry))
            stats["skipped"] += 1
            return

        # An undeletable file would be delivered again on every pass
        if not self.filesystem.can_write(entry.parent):
            self.log.warning("cache_file_skipped_not_deletable", file=entry.name)
            stats["skipped"] += 1
            return

        stats["processed"] += 1
        outcome = self._replay_file(entry, stats)

        if outcome is DeliveryOutcome.DELIVERED:
            stats["delivered"] += 1

        if outcome.keeps_file:
            self.log.debug("cache_file_kept_for_retry", file=entry.name)
            stats["kept"] += 1
            return

        self._safe_delete(entry, stats)

    def _replay_file(self, entry: Path, stats: dict) -> DeliveryOutcome:
        """Read one cache file and deliver its event.

        Returns REJECTED for anything that prevented delivery; such files
        can never become deliverable and are removed.
        """
        try:
            with self.filesystem.open_text(entry) as stream:
                event = self.serializer.deserialize(stream)
                return self._deliver(entry, event, stats)
        except FileNotFoundError as e:
            self.log.error("cache_file_not_found", file=entry.name, error=str(e))
        except OSError as e:
            self.log.error(
                "cache_file_io_failed",
                file=entry.name,
                error=str(e),
                exc_info=True,
            )
        except Exception as e:
            self.log.error(
                "cache_file_deserialize_failed",
                file=entry.name,
                error=str(e),
                exc_info=True,
            )
        stats["failed"] += 1
        return DeliveryOutcome.REJECTED

    def _deliver(self, entry: Path, event: Event, stats: dict) -> DeliveryOutcome:
        try:
            outcome = self.sink.deliver(event)
        except Exception as e:
            self.log.error(
                "cached_event_capture_failed",
                file=entry.name,
                event_id=event.event_id,
                error=str(e),
                exc_info=True,
            )
            stats["failed"] += 1
            return DeliveryOutcome.REJECTED

        if not isinstance(outcome, DeliveryOutcome):
            # Fire-and-forget sinks return nothing
            return DeliveryOutcome.DELIVERED

        if outcome is DeliveryOutcome.REJECTED:
            self.log.warning(
                "cached_event_rejected",
                file=entry.name,
                event_id=event.event_id,
            )
        return outcome

    def _safe_delete(self, entry: Path, stats: dict) -> None:
        result = self.filesystem.delete(entry)
        if result.is_success:
            self.log.debug("cache_file_deleted", file=entry.name)
            stats["deleted"] += 1
        elif result.status == OperationStatus.NOT_FOUND:
            self.log.debug("cache_file_already_removed", file=entry.name)
        else:
            self.log.error(
                "cache_file_delete_failed",
                file=entry.name,
                error=result.message,
                error_code=result.error_code,
            )
