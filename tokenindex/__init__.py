"""
tokenindex Python Package

Redis-backed token issuing with sliding expiration and per-owner indexing.
"""

__version__ = "0.1.0"

from .core.config import TokenIndexConfig, DEFAULT_TTL
from .core.index import TokenIndex
from .core.types import Record, TTL_MISSING, TTL_PERSISTENT
from .errors import (
    TokenIndexError,
    InvalidArgumentError,
    ConfigurationError,
    SerializationError,
)
from .keys import KeyCodec
from .scan import OwnerScanner, TokenScan
from .serializers import (
    Serializer,
    NativeSerializer,
    JsonSerializer,
    register_serializer,
    get_serializer,
)

__all__ = [
    "TokenIndex",
    "TokenIndexConfig",
    "DEFAULT_TTL",
    "Record",
    "TTL_MISSING",
    "TTL_PERSISTENT",
    "TokenIndexError",
    "InvalidArgumentError",
    "ConfigurationError",
    "SerializationError",
    "KeyCodec",
    "OwnerScanner",
    "TokenScan",
    "Serializer",
    "NativeSerializer",
    "JsonSerializer",
    "register_serializer",
    "get_serializer",
]
