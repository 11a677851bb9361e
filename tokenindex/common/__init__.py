"""
Common package providing shared helpers for tokenindex.

This package includes:
- Token generation
- Time helpers
- Log-safe token masking
"""

from .utils import (
    TOKEN_BYTES,
    generate_token,
    get_current_time,
    parse_iso_timestamp,
    to_text,
    mask_token,
    format_duration,
)

__all__ = [
    "TOKEN_BYTES",
    "generate_token",
    "get_current_time",
    "parse_iso_timestamp",
    "to_text",
    "mask_token",
    "format_duration",
]
