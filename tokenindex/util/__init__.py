"""
Utility package for tokenindex configuration handling.
"""

from .config import (
    ENV_PREFIX,
    get_config_value,
    parse_duration_string,
    parse_ttl,
)

__all__ = [
    "ENV_PREFIX",
    "get_config_value",
    "parse_duration_string",
    "parse_ttl",
]
