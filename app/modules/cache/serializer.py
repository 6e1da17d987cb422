"""Event serialization for cache files.

Cache files hold one JSON document each, encoded as UTF-8.
"""

from typing import Protocol, TextIO

from pydantic import ValidationError

from modules.cache.models import Event


class SerializationError(Exception):
    """Raised when a cache file cannot be parsed into an Event."""


class EventSerializer(Protocol):
    """Reads and writes events from text streams."""

    def deserialize(self, stream: TextIO) -> Event:
        """Parse one event from ``stream``.

        Raises:
            SerializationError: Content is malformed.
            OSError: The stream cannot be read.
        """
        ...

    def serialize(self, event: Event, stream: TextIO) -> None:
        """Write ``event`` to ``stream``."""
        ...


class JsonEventSerializer:
    """JSON serializer backed by the Event pydantic model."""

    def deserialize(self, stream: TextIO) -> Event:
        try:
            content = stream.read()
        except UnicodeDecodeError as e:
            raise SerializationError(f"Cache file is not valid UTF-8: {e}") from e
        if not content.strip():
            raise SerializationError("Cache file is empty")
        try:
            return Event.model_validate_json(content)
        except ValidationError as e:
            raise SerializationError(
                f"Invalid event payload: {e.error_count()} validation error(s)"
            ) from e
        except ValueError as e:
            raise SerializationError(f"Invalid JSON: {e}") from e

    def serialize(self, event: Event, stream: TextIO) -> None:
        stream.write(event.model_dump_json())
