"""Event cache replay module.

Events that could not be delivered are persisted to the cache directory,
one file per event. This module replays them: each cached event is handed
to a delivery sink and its file is removed unless the sink asks to keep it
for a later pass.

Features:
- Never raises to the caller; every failure is logged and isolated to its file
- Malformed or undeliverable entries are removed instead of retried forever
- Pluggable serializer, delivery sink and filesystem
"""

from modules.cache.filesystem import CacheFileSystem, LocalFileSystem
from modules.cache.models import DeliveryOutcome, Event, EventLevel, RetryIntent
from modules.cache.replayer import CacheReplayer
from modules.cache.serializer import (
    EventSerializer,
    JsonEventSerializer,
    SerializationError,
)
from modules.cache.sink import DeliverySink, IntentDeliverySink, RecordingDeliverySink

__all__ = [
    # Models
    "Event",
    "EventLevel",
    "DeliveryOutcome",
    "RetryIntent",
    # Serialization
    "EventSerializer",
    "JsonEventSerializer",
    "SerializationError",
    # Delivery
    "DeliverySink",
    "IntentDeliverySink",
    "RecordingDeliverySink",
    # Filesystem
    "CacheFileSystem",
    "LocalFileSystem",
    # Replay
    "CacheReplayer",
]
