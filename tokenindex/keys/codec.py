"""
Key layout for tokenindex.

Two key families live under one namespace prefix:

    <prefix>t.<token>                 primary key, holds the packed record
    <prefix>o.<owner>.<token>         indirection key, empty value

``<owner>`` is the owner percent-encoded so that it contains no ``.``, no
glob metacharacter and no bare ``%``. Tokens without an owner use the bare
``%`` as their owner segment, which no encoded owner can equal.
"""

import re
from typing import Optional, Union
from urllib.parse import quote

from ..common.utils import to_text

PRIMARY_SEGMENT = "t."
INDIRECTION_SEGMENT = "o."
DELIMITER = "."
NO_OWNER_SEGMENT = "%"

_GLOB_SPECIAL = re.compile(r'([\\*?\[\]])')


def escape_glob(text: str) -> str:
    """Escape Redis MATCH metacharacters so ``text`` matches literally."""
    return _GLOB_SPECIAL.sub(r'\\\1', text)


def encode_owner(owner: Optional[str]) -> str:
    """Return the owner segment used in indirection keys."""
    if owner is None:
        return NO_OWNER_SEGMENT
    return quote(str(owner), safe="").replace(".", "%2E")


class KeyCodec:
    """
    Builds and parses the keys of one namespace.

    The codec is pure: it never talks to Redis.
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix or ""

    def __repr__(self) -> str:
        return f"KeyCodec(prefix={self.prefix!r})"

    # Primary keys

    def primary_key(self, token: str) -> str:
        return f"{self.prefix}{PRIMARY_SEGMENT}{token}"

    def token_from_primary_key(self, key: Union[str, bytes]) -> str:
        """
        Recover the token from a primary key.

        Raises:
            ValueError: If the key is outside this namespace's primary family
        """
        return self._strip(to_text(key), f"{self.prefix}{PRIMARY_SEGMENT}")

    # Indirection keys

    def owner_key_prefix(self, owner: Optional[str]) -> str:
        return f"{self.prefix}{INDIRECTION_SEGMENT}{encode_owner(owner)}{DELIMITER}"

    def indirection_key(self, owner: Optional[str], token: str) -> str:
        return f"{self.owner_key_prefix(owner)}{token}"

    def token_from_indirection_key(self, owner: Optional[str], key: Union[str, bytes]) -> str:
        """
        Recover the token from an indirection key of ``owner``'s bucket.

        Raises:
            ValueError: If the key does not belong to that bucket
        """
        return self._strip(to_text(key), self.owner_key_prefix(owner))

    # Scan patterns

    def owner_pattern(self, owner: Optional[str]) -> str:
        """MATCH pattern for every indirection key of one owner bucket."""
        return f"{escape_glob(self.owner_key_prefix(owner))}*"

    def global_pattern(self) -> str:
        """MATCH pattern for every primary key of the namespace."""
        return f"{escape_glob(self.prefix)}{PRIMARY_SEGMENT}*"

    @staticmethod
    def _strip(key: str, head: str) -> str:
        if not key.startswith(head):
            raise ValueError(f"Key {key!r} does not start with {head!r}")
        return key[len(head):]
