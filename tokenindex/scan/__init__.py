"""
Owner index enumeration for tokenindex.
"""

from .enumerator import OwnerScanner, TokenScan, INITIAL_CURSOR

__all__ = [
    "OwnerScanner",
    "TokenScan",
    "INITIAL_CURSOR",
]
