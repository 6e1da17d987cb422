"""Shared fixtures for event cache tests."""

import io
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.operations import OperationResult
from modules.cache import (
    DeliveryOutcome,
    Event,
    JsonEventSerializer,
    RecordingDeliverySink,
)

class TrackedStream(io.StringIO):
    """StringIO that reports its closure to the owning fake filesystem."""

    def __init__(self, content: str, registry: List["TrackedStream"]):
        super().__init__(content)
        self._registry = registry
        registry.append(self)

    def close(self) -> None:
        if self in self._registry:
            self._registry.remove(self)
        super().close()


class FakeFileSystem:
    """In-memory CacheFileSystem with a fixed listing order.

    Attributes:
        files: File name -> content, listed in insertion order
        subdirs: Names listed as directories
        writable: Whether the cache directory accepts deletions
        open_errors: File name -> exception raised by open_text
        delete_results: File name -> OperationResult returned by delete
        open_streams: Streams not closed yet
        deleted: Names deleted, in order
    """

    def __init__(self, root: str = "/cache"):
        self.root = Path(root)
        self.root_exists = True
        self.root_is_dir = True
        self.files: Dict[str, str] = {}
        self.subdirs: List[str] = []
        self.writable = True
        self.open_errors: Dict[str, Exception] = {}
        self.delete_results: Dict[str, OperationResult] = {}
        self.list_error: Optional[Exception] = None
        self.open_streams: List[TrackedStream] = []
        self.opened: List[str] = []
        self.deleted: List[str] = []

    def add_file(self, name: str, content: str) -> Path:
        self.files[name] = content
        return self.root / name

    def exists(self, path: Path) -> bool:
        if path == self.root:
            return self.root_exists
        return path.name in self.files or path.name in self.subdirs

    def is_dir(self, path: Path) -> bool:
        if path == self.root:
            return self.root_is_dir
        return path.name in self.subdirs

    def is_file(self, path: Path) -> bool:
        return path.name in self.files

    def list_dir(self, path: Path) -> List[Path]:
        if self.list_error is not None:
            raise self.list_error
        return [self.root / name for name in [*self.files, *self.subdirs]]

    def can_write(self, path: Path) -> bool:
        return self.writable

    def open_text(self, path: Path):
        self.opened.append(path.name)
        if path.name in self.open_errors:
            raise self.open_errors[path.name]
        if path.name not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return TrackedStream(self.files[path.name], self.open_streams)

    def delete(self, path: Path) -> OperationResult:
        if path.name in self.delete_results:
            return self.delete_results[path.name]
        if path.name not in self.files:
            return OperationResult.not_found(f"'{path.name}' was already removed")
        del self.files[path.name]
        self.deleted.append(path.name)
        return OperationResult.success()


@pytest.fixture
def fake_fs():
    """Fresh in-memory filesystem rooted at /cache."""
    return FakeFileSystem()


@pytest.fixture
def mock_log():
    """Mock logger whose bind() returns itself."""
    log = MagicMock()
    log.bind.return_value = log
    return log


@pytest.fixture
def serializer():
    return JsonEventSerializer()


@pytest.fixture
def recording_sink():
    return RecordingDeliverySink()


@pytest.fixture
def event_factory():
    """Factory for creating Event instances."""

    def _factory(message: str = "boom", **kwargs) -> Event:
        return Event(message=message, **kwargs)

    return _factory


@pytest.fixture
def event_json(event_factory):
    """Factory returning the cache file content of an event."""

    def _factory(message: str = "boom", **kwargs) -> str:
        return event_factory(message, **kwargs).model_dump_json()

    return _factory


@pytest.fixture
def by_message():
    """Outcome policy mapping event messages to outcomes (default DELIVERED)."""

    def _factory(outcomes: Dict[str, DeliveryOutcome]):
        def _policy(event: Event) -> DeliveryOutcome:
            return outcomes.get(event.message, DeliveryOutcome.DELIVERED)

        return _policy

    return _factory


@pytest.fixture
def cache_dir(tmp_path):
    """Real cache directory on disk."""
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def write_cache_file(cache_dir, event_json):
    """Write an event (or raw content) into the on-disk cache directory."""

    def _write(name: str, content: Optional[str] = None, message: str = "boom") -> Path:
        path = cache_dir / name
        path.write_text(
            content if content is not None else event_json(message), encoding="utf-8"
        )
        return path

    return _write
