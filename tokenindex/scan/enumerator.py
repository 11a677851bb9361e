"""
Owner index enumeration over Redis SCAN.

Redis SCAN gives no snapshot: keys added or removed while a scan runs may or
may not be reported, and a key can be reported more than once. Enumeration
here is therefore a best-effort view of the bucket at the time of the call.
"""

import logging
from itertools import islice
from typing import Callable, Iterator, List, Optional, Union

from ..keys.codec import KeyCodec

logger = logging.getLogger(__name__)

# SCAN starts and ends on cursor 0
INITIAL_CURSOR = 0


class OwnerScanner:
    """
    Drives the SCAN cursor protocol for one namespace.

    The scanner holds no cursor state between calls, so an iteration can be
    abandoned at any point without cleanup.
    """

    def __init__(self, redis_client, codec: KeyCodec, scan_count: int = 100):
        """
        Initialize owner scanner.

        Args:
            redis_client: redis-py client shared with the record store
            codec: Key codec of the namespace
            scan_count: COUNT hint passed to each SCAN call
        """
        self.redis = redis_client
        self.codec = codec
        self.scan_count = scan_count

    def iter_keys(self, pattern: str) -> Iterator[Union[str, bytes]]:
        """
        Yield every key matching ``pattern``, page by page.

        Stops once Redis hands back the initial cursor. Keys are yielded as
        Redis returned them, duplicates included.
        """
        cursor = INITIAL_CURSOR
        pages = 0
        while True:
            cursor, keys = self.redis.scan(
                cursor=cursor,
                match=pattern,
                count=self.scan_count
            )
            pages += 1
            yield from keys

            if int(cursor) == INITIAL_CURSOR:
                break

        logger.debug(f"Scan of {pattern!r} finished after {pages} page(s)")

    def tokens(self, owner: Optional[str] = None, include_all: bool = False,
               unique: bool = True) -> Iterator[str]:
        """
        Yield tokens of one owner bucket.

        Args:
            owner: Owner whose tokens to list; ``None`` lists ownerless tokens
            include_all: List every token of the namespace, ignoring ``owner``
            unique: Drop tokens SCAN reports more than once within this call

        Returns:
            Generator of tokens
        """
        if include_all:
            pattern = self.codec.global_pattern()
            to_token = self.codec.token_from_primary_key
        else:
            pattern = self.codec.owner_pattern(owner)

            def to_token(key):
                return self.codec.token_from_indirection_key(owner, key)

        seen = set() if unique else None
        for key in self.iter_keys(pattern):
            token = to_token(key)
            if seen is not None:
                if token in seen:
                    continue
                seen.add(token)
            yield token


class TokenScan:
    """
    Re-iterable view over a bucket of tokens.

    Nothing is read until the view is iterated, and every iteration runs a
    new scan, so two passes may see different tokens. When a ``loader`` is
    given, iteration yields ``(token, loader(token))`` pairs instead of
    bare tokens.
    """

    def __init__(self, scanner: OwnerScanner, owner: Optional[str] = None,
                 include_all: bool = False, unique: bool = True,
                 loader: Optional[Callable[[str], object]] = None):
        self.scanner = scanner
        self.owner = owner
        self.include_all = include_all
        self.unique = unique
        self.loader = loader

    def __iter__(self):
        tokens = self.scanner.tokens(
            owner=self.owner,
            include_all=self.include_all,
            unique=self.unique,
        )
        if self.loader is None:
            return tokens
        return ((token, self.loader(token)) for token in tokens)

    def __repr__(self) -> str:
        scope = "all" if self.include_all else f"owner={self.owner!r}"
        return f"TokenScan({scope}, with_records={self.loader is not None})"

    def take(self, n: int) -> List:
        """Return at most ``n`` items, abandoning the scan afterwards"""
        return list(islice(self, n))

    def count(self) -> int:
        """Run a full scan and count the items it yields"""
        return sum(1 for _ in self)
