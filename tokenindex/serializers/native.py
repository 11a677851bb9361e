"""
Python-native record serializer.
"""

import pickle

from ..core.types import Record
from ..errors import SerializationError
from .base import Serializer


class NativeSerializer(Serializer):
    """
    Serializer based on ``pickle``.

    Handles any picklable payload. Only use it with a Redis instance that
    untrusted parties cannot write to.
    """

    name = "native"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def pack(self, record: Record) -> bytes:
        try:
            return pickle.dumps(record.to_dict(), protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SerializationError(
                f"Failed to pack record: {e}", serializer=self.name, cause=e
            ) from e

    def unpack(self, data: bytes) -> Record:
        try:
            return Record.from_dict(pickle.loads(data))
        except Exception as e:
            raise SerializationError(
                f"Failed to unpack record: {e}", serializer=self.name, cause=e
            ) from e
