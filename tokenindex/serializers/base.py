"""
Serializer interface for tokenindex records.
"""

from abc import ABC, abstractmethod

from ..core.types import Record


class Serializer(ABC):
    """
    Packs a Record into bytes for Redis and back.

    Implementations must round-trip every Record field, nested payloads
    included. Failures are reported as ``SerializationError``.
    """

    name: str = "abstract"

    @abstractmethod
    def pack(self, record: Record) -> bytes:
        """Serialize a record to bytes."""
        pass

    @abstractmethod
    def unpack(self, data: bytes) -> Record:
        """Deserialize bytes previously produced by ``pack``."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
