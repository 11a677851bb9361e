"""
Key codec package for tokenindex.
"""

from .codec import (
    KeyCodec,
    PRIMARY_SEGMENT,
    INDIRECTION_SEGMENT,
    NO_OWNER_SEGMENT,
    encode_owner,
    escape_glob,
)

__all__ = [
    "KeyCodec",
    "PRIMARY_SEGMENT",
    "INDIRECTION_SEGMENT",
    "NO_OWNER_SEGMENT",
    "encode_owner",
    "escape_glob",
]
