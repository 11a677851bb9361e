"""
Common utilities and helper functions for tokenindex.
"""

import secrets
from datetime import datetime, timezone
from typing import Union

# 16 random bytes -> 32 hex characters, 128 bits of entropy
TOKEN_BYTES = 16


def generate_token(nbytes: int = TOKEN_BYTES) -> str:
    """Generate a cryptographically secure random hex token."""
    return secrets.token_hex(nbytes)


def get_current_time() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_timestamp(timestamp_str: str) -> datetime:
    """
    Parse ISO 8601 timestamp string to datetime.

    Args:
        timestamp_str: ISO 8601 timestamp string

    Returns:
        Parsed datetime object
    """
    return datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))


def to_text(value: Union[str, bytes]) -> str:
    """Decode a Redis reply (bytes or str) to text."""
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return value


def mask_token(token: str, visible_chars: int = 6, suffix: str = "…") -> str:
    """
    Shorten a token for log output, showing only its first few characters.

    Args:
        token: Token to mask
        visible_chars: Number of leading characters to keep
        suffix: Marker appended to the visible part

    Returns:
        Masked token
    """
    if len(token) <= visible_chars:
        return token
    return token[:visible_chars] + suffix


def format_duration(seconds: Union[int, float]) -> str:
    """
    Format duration in seconds to human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0:
        return str(int(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        remaining_seconds = int(seconds % 60)
        return f"{minutes}m{remaining_seconds}s"
    elif seconds < 86400:
        hours = int(seconds // 3600)
        remaining_minutes = int((seconds % 3600) // 60)
        return f"{hours}h{remaining_minutes}m"
    else:
        days = int(seconds // 86400)
        remaining_hours = int((seconds % 86400) // 3600)
        return f"{days}d{remaining_hours}h"
