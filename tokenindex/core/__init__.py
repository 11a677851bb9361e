"""
Core configuration and types for tokenindex.
"""

from .config import TokenIndexConfig, DEFAULT_TTL, DEFAULT_REDIS_URL, DEFAULT_SCAN_COUNT
from .types import Record, TTL_MISSING, TTL_PERSISTENT

__all__ = [
    "TokenIndexConfig",
    "DEFAULT_TTL",
    "DEFAULT_REDIS_URL",
    "DEFAULT_SCAN_COUNT",
    "Record",
    "TTL_MISSING",
    "TTL_PERSISTENT",
]
