"""
Configuration utilities for tokenindex.
Provides environment lookup and duration parsing helpers.
"""

import os
import re
from datetime import timedelta
from typing import Any, Optional, Union

ENV_PREFIX = "TOKENINDEX_"


def get_config_value(key: str, default: Any = None,
                     cast_type: Optional[type] = None,
                     env_prefix: str = ENV_PREFIX) -> Any:
    """
    Get configuration value from environment or return default.
    Optionally cast to specified type.
    """
    env_key = f"{env_prefix}{key.upper()}"
    value = os.environ.get(env_key, default)

    if value is None or cast_type is None:
        return value

    try:
        if cast_type == bool:
            # Handle boolean conversion specially
            if isinstance(value, str):
                return value.lower() in ('true', '1', 'yes', 'on')
            return bool(value)
        else:
            return cast_type(value)
    except (ValueError, TypeError):
        return default


def parse_duration_string(duration_str: str) -> timedelta:
    """
    Parse duration string like '30s', '5m', '2h', '1d' into timedelta.
    """
    if not isinstance(duration_str, str):
        raise ValueError("Duration must be a string")

    duration_str = duration_str.strip().lower()

    # Pattern to match number followed by unit
    pattern = r'^(\d+(?:\.\d+)?)\s*([smhd])$'
    match = re.match(pattern, duration_str)

    if not match:
        raise ValueError(f"Invalid duration format: {duration_str}")

    value, unit = match.groups()
    value = float(value)

    if unit == 's':
        return timedelta(seconds=value)
    elif unit == 'm':
        return timedelta(minutes=value)
    elif unit == 'h':
        return timedelta(hours=value)
    else:
        return timedelta(days=value)


def parse_ttl(value: Union[int, float, str, timedelta]) -> int:
    """
    Normalise a TTL given as seconds, a timedelta, or a duration string
    ('3600', '90s', '14d') to whole seconds.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid TTL value: {value!r}")
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
        return int(parse_duration_string(text).total_seconds())
    raise ValueError(f"Invalid TTL value: {value!r}")
