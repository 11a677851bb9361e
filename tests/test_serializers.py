"""
Tests for record serializers.
"""

from datetime import datetime, timezone

import pytest

from tokenindex import Record, SerializationError, ConfigurationError
from tokenindex.serializers import (
    Serializer,
    NativeSerializer,
    JsonSerializer,
    get_serializer,
    register_serializer,
    available_serializers,
)


@pytest.fixture
def record():
    return Record(
        owner="u1",
        payload={"type": "native", "scopes": ["read", "write"], "meta": {"n": 1}},
        created_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


class TestNativeSerializer:
    """Test the pickle-based serializer."""

    def test_round_trip(self, record):
        serializer = NativeSerializer()
        data = serializer.pack(record)
        assert isinstance(data, bytes)
        assert serializer.unpack(data) == record

    def test_round_trip_python_values(self):
        serializer = NativeSerializer()
        record = Record(owner=None, payload={"when": datetime(2024, 5, 1), "ids": {1, 2}})
        assert serializer.unpack(serializer.pack(record)) == record

    def test_corrupt_data(self):
        with pytest.raises(SerializationError) as exc_info:
            NativeSerializer().unpack(b"not a pickle")
        assert exc_info.value.details["serializer"] == "native"
        assert exc_info.value.cause is not None

    def test_unpicklable_payload(self):
        with pytest.raises(SerializationError):
            NativeSerializer().pack(Record(payload=lambda: None))


class TestJsonSerializer:
    """Test the JSON serializer."""

    def test_round_trip(self, record):
        serializer = JsonSerializer()
        assert serializer.unpack(serializer.pack(record)) == record

    def test_wire_format(self, record):
        data = JsonSerializer(sort_keys=True).pack(record)
        assert data.startswith(b'{"created_at":"2025-01-02T03:04:05+00:00"')

    def test_payload_must_be_json(self):
        with pytest.raises(SerializationError):
            JsonSerializer().pack(Record(payload={"when": datetime(2024, 5, 1)}))

    @pytest.mark.parametrize("payload", [
        {"scores": {1: "a"}},
        {"pair": (1, 2)},
        {"ids": {1, 2}},
        {"raw": b"\x00"},
        [{"nested": [(0, 1)]}],
    ])
    def test_refuses_values_json_would_alter(self, payload):
        with pytest.raises(SerializationError) as exc_info:
            JsonSerializer().pack(Record(owner="u1", payload=payload))
        assert exc_info.value.details["serializer"] == "json"

    def test_refuses_owner_json_would_alter(self):
        with pytest.raises(SerializationError):
            JsonSerializer().pack(Record(owner=("u", 1)))

    def test_round_trip_nested_json_values(self):
        serializer = JsonSerializer()
        record = Record(owner=7, payload={"a": [1, 2.5, None, True, {"b": "c"}]})
        assert serializer.unpack(serializer.pack(record)) == record

    def test_corrupt_data(self):
        with pytest.raises(SerializationError):
            JsonSerializer().unpack(b"{")

    def test_missing_created_at(self):
        with pytest.raises(SerializationError):
            JsonSerializer().unpack(b'{"owner": "u1"}')


class TestSerializerRegistry:
    """Test resolving serializers by name."""

    def test_default_is_native(self):
        assert isinstance(get_serializer(), NativeSerializer)

    def test_by_name(self):
        assert isinstance(get_serializer("json"), JsonSerializer)
        assert isinstance(get_serializer("NATIVE"), NativeSerializer)

    def test_instance_passes_through(self):
        serializer = JsonSerializer()
        assert get_serializer(serializer) is serializer

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            get_serializer("xml")

    def test_register_custom(self):
        class ReprSerializer(NativeSerializer):
            name = "custom"

        register_serializer("custom", ReprSerializer)
        assert "custom" in available_serializers()
        assert isinstance(get_serializer("custom"), ReprSerializer)

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            Serializer()
