"""Unit tests for JsonEventSerializer."""

import io

import pytest

from modules.cache import EventLevel, JsonEventSerializer, SerializationError


@pytest.mark.unit
class TestJsonEventSerializer:
    def test_deserialize_valid_event(self):
        stream = io.StringIO(
            '{"event_id": "0123456789abcdef0123456789abcdef",'
            ' "level": "fatal", "message": "crash", "tags": {"os": "linux"}}'
        )

        event = JsonEventSerializer().deserialize(stream)

        assert event.event_id == "0123456789abcdef0123456789abcdef"
        assert event.level == EventLevel.FATAL
        assert event.message == "crash"
        assert event.tags == {"os": "linux"}

    def test_serialize_writes_json(self, event_factory):
        event = event_factory("written", release="1.0.0")
        stream = io.StringIO()

        JsonEventSerializer().serialize(event, stream)

        assert '"message":"written"' in stream.getvalue()
        assert '"release":"1.0.0"' in stream.getvalue()

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "   \n",
            "{",
            '{"event_id": "0123',
            "[1, 2, 3]",
            '{"level": "catastrophic"}',
        ],
    )
    def test_malformed_content_raises_serialization_error(self, content):
        with pytest.raises(SerializationError):
            JsonEventSerializer().deserialize(io.StringIO(content))

    def test_serialization_error_keeps_cause(self):
        with pytest.raises(SerializationError) as exc_info:
            JsonEventSerializer().deserialize(io.StringIO("{"))

        assert exc_info.value.__cause__ is not None

    def test_read_errors_propagate_as_oserror(self):
        class BrokenStream(io.StringIO):
            def read(self, *args):
                raise OSError("device not ready")

        with pytest.raises(OSError):
            JsonEventSerializer().deserialize(BrokenStream())

    def test_invalid_utf8_raises_serialization_error(self):
        stream = io.TextIOWrapper(
            io.BytesIO(b'{"message": "\xff\xfe"}'), encoding="utf-8"
        )

        with pytest.raises(SerializationError) as exc_info:
            JsonEventSerializer().deserialize(stream)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
