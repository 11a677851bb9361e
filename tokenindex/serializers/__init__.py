"""
Record serializers for tokenindex.

Any object implementing ``pack(record) -> bytes`` and
``unpack(bytes) -> Record`` through the ``Serializer`` base class can be
passed to a TokenIndex or registered by name.
"""

from .base import Serializer
from .native import NativeSerializer
from .json_codec import JsonSerializer
from .factory import (
    DEFAULT_SERIALIZER,
    register_serializer,
    available_serializers,
    get_serializer,
)

__all__ = [
    "Serializer",
    "NativeSerializer",
    "JsonSerializer",
    "DEFAULT_SERIALIZER",
    "register_serializer",
    "available_serializers",
    "get_serializer",
]
