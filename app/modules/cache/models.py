"""Data models for the event cache.

Key distinctions:
  - Event: Pydantic model, the deserialized content of one cache file
  - DeliveryOutcome: answer of a delivery sink, decides file retention
  - RetryIntent: mutable token for sinks following the hint protocol
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventLevel(str, Enum):
    """Severity of a captured event."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class Event(BaseModel):
    """A captured diagnostic event (crash report, error envelope)."""

    model_config = ConfigDict(extra="ignore")

    event_id: Annotated[
        str,
        Field(
            default_factory=lambda: uuid.uuid4().hex,
            pattern=r"^[0-9a-f]{32}$",
            description="Hex identifier of the event",
        ),
    ]
    timestamp: Annotated[
        datetime,
        Field(
            default_factory=lambda: datetime.now(timezone.utc),
            description="When the event was captured",
        ),
    ]
    level: EventLevel = EventLevel.ERROR
    message: Optional[str] = None
    logger: Optional[str] = None
    platform: str = "python"
    release: Optional[str] = None
    environment: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)
    exception: Optional[List[Dict[str, Any]]] = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC; aware ones are converted."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class DeliveryOutcome(Enum):
    """Outcome of handing a cached event to a delivery sink.

    Values:
        DELIVERED: Sent or accepted for sending, remove the cache file
        RETRY_LATER: Not delivered yet (rate limited, offline), keep the file
        REJECTED: Will never be delivered, remove the cache file
    """

    DELIVERED = "delivered"
    RETRY_LATER = "retry_later"
    REJECTED = "rejected"

    @property
    def keeps_file(self) -> bool:
        """Only RETRY_LATER keeps the cache file for a future pass."""
        return self is DeliveryOutcome.RETRY_LATER


@dataclass
class RetryIntent:
    """Mutable retry token handed to hint-style delivery callables.

    Created fresh for every cache file; the callee sets ``retry`` to True
    when the event must survive the current pass.
    """

    retry: bool = False

    @property
    def outcome(self) -> DeliveryOutcome:
        if self.retry:
            return DeliveryOutcome.RETRY_LATER
        return DeliveryOutcome.DELIVERED
