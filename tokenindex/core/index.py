"""
Redis-backed token index.

Every token owns two keys: a primary key holding the packed Record and an
empty indirection key filed under the token's owner, used to list an
owner's tokens with SCAN. Both keys are written, renewed and removed
together in one pipeline. Redis offers no atomicity across the two keys
for arbitrary clients, so a crash or a concurrent writer can briefly leave
one key without the other; readers treat an indirection key without a
primary record as a vanished token.
"""

import logging
from typing import Any, Optional

import redis

from ..common.utils import generate_token, mask_token
from ..errors import InvalidArgumentError, SerializationError
from ..keys.codec import KeyCodec
from ..scan.enumerator import OwnerScanner, TokenScan
from ..serializers.factory import get_serializer
from .config import TokenIndexConfig, ttl_or_default
from .types import Record, TTL_MISSING, TTL_PERSISTENT

logger = logging.getLogger(__name__)


class TokenIndex:
    """
    Issues tokens and keeps their records and owner index in Redis.

    Implicit client creation (connection options go to ``redis.Redis.from_url``):

        TokenIndex(prefix="project.tokens.", default_ttl="5d",
                   redis_url="redis://127.0.0.1:6379/0")

    Explicit client injection:

        client = redis.Redis(host="192.168.0.1", port=33221)
        TokenIndex(client, prefix="project.tokens.", default_ttl=432000)

    An injected client must return raw bytes (``decode_responses=False``).
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, *,
                 config: Optional[TokenIndexConfig] = None, **overrides):
        """
        Initialize token index.

        Args:
            redis_client: Client to use; built from ``config.redis_url`` when omitted
            config: Base configuration, defaults to ``TokenIndexConfig()``
            **overrides: Individual configuration fields to override

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        config = config or TokenIndexConfig()
        if overrides:
            config = config.replace(**overrides)
        config.validate()
        self.config = config

        self._owns_client = redis_client is None
        if redis_client is None:
            redis_client = redis.Redis.from_url(config.redis_url, **config.redis_kwargs())
            logger.info(f"Created Redis client for {config.redis_url}")
        self.redis = redis_client

        self.serializer = get_serializer(config.serializer)
        self.codec = KeyCodec(config.prefix)
        self.scanner = OwnerScanner(self.redis, self.codec, config.scan_count)

        # last record written by create()
        self.created_value: Optional[Record] = None

    @classmethod
    def from_env(cls, redis_client: Optional[redis.Redis] = None, **overrides) -> "TokenIndex":
        """Create a token index configured from TOKENINDEX_* environment variables"""
        return cls(redis_client, config=TokenIndexConfig.from_env(**overrides))

    @property
    def prefix(self) -> str:
        return self.config.prefix

    @property
    def default_ttl(self) -> int:
        return self.config.default_ttl

    def __repr__(self) -> str:
        return (f"TokenIndex(prefix={self.prefix!r}, default_ttl={self.default_ttl}, "
                f"serializer={self.serializer.name!r})")

    def __enter__(self) -> "TokenIndex":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the Redis client if this index created it"""
        if self._owns_client:
            self.redis.close()
            logger.info("Closed Redis client")

    # Record store

    def create(self, owner: Optional[str] = None, *, token: Optional[str] = None,
               payload: Any = None, ttl: Optional[Any] = None) -> str:
        """
        Create a new token.

        A caller-supplied token that already exists is overwritten.

        Args:
            owner: Owner of the token, e.g. 'client.1' or 'user-123'
            token: User defined token, random 32 hex characters by default
            payload: Arbitrary value stored with the token
            ttl: Time to live overriding the default one

        Returns:
            The token
        """
        if token is not None and not token:
            raise InvalidArgumentError("token must not be empty", argument="token")

        key_ttl = ttl_or_default(ttl, self.default_ttl)
        token = token or generate_token()
        record = Record(owner=owner, payload=payload)
        data = self.serializer.pack(record)

        with self._batch() as pipe:
            pipe.set(self.codec.primary_key(token), data, ex=key_ttl)
            pipe.set(self.codec.indirection_key(owner, token), b"", ex=key_ttl)
            pipe.execute()

        self.created_value = record
        logger.debug(f"Created token {mask_token(token)} for owner {owner!r} (ttl={key_ttl})")
        return token

    def create_owned(self, owner: str, **kwargs) -> str:
        """
        Create a new token that must belong to an owner.

        Raises:
            InvalidArgumentError: If ``owner`` is missing or empty
        """
        if owner is None or owner == "":
            raise InvalidArgumentError("owner should be specified", argument="owner")
        return self.create(owner, **kwargs)

    def get(self, token: str, *, ttl: Optional[Any] = None,
            slide_expire: bool = True) -> Optional[Record]:
        """
        Get the record of a token and slide its expiration.

        Args:
            token: Token to look up
            ttl: New time to live, the default one when omitted
            slide_expire: Renew the time to live of the token

        Returns:
            The record, or None if the token does not exist
        """
        key_ttl = ttl_or_default(ttl, self.default_ttl)
        key = self.codec.primary_key(token)
        record = self._load(key)
        if record is None:
            return None
        if not slide_expire:
            return record

        with self._batch() as pipe:
            pipe.expire(key, key_ttl)
            pipe.expire(self.codec.indirection_key(record.owner, token), key_ttl)
            pipe.execute()

        return record

    def set(self, token: str, *, payload: Any = None, ttl: Optional[Any] = None) -> bool:
        """
        Replace the payload of a token.

        The owner and creation time are kept. The remaining time to live is
        kept too unless ``ttl`` is given.

        Returns:
            True if the token was updated, False if it does not exist
        """
        explicit_ttl = None if ttl is None else ttl_or_default(ttl, self.default_ttl)
        key = self.codec.primary_key(token)
        record = self._load(key)
        if record is None:
            return False

        record.payload = payload
        data = self.serializer.pack(record)
        owner_key = self.codec.indirection_key(record.owner, token)

        key_ttl = explicit_ttl
        if key_ttl is None:
            key_ttl = self.redis.ttl(key)
            if key_ttl == TTL_MISSING:
                logger.warning(f"Token {mask_token(token)} expired during update")
                return False
            if key_ttl != TTL_PERSISTENT:
                # TTL rounds to 0 in the last half second; SET EX needs at least 1
                key_ttl = max(key_ttl, 1)

        with self._batch() as pipe:
            if key_ttl == TTL_PERSISTENT:
                pipe.set(key, data)
                pipe.persist(owner_key)
            else:
                pipe.set(key, data, ex=key_ttl)
                pipe.expire(owner_key, key_ttl)
            pipe.execute()

        logger.debug(f"Updated token {mask_token(token)} (ttl={key_ttl})")
        return True

    def delete(self, token: str) -> bool:
        """
        Delete a token.

        Returns:
            True if this call removed the token, False if it did not exist
        """
        key = self.codec.primary_key(token)
        record = self._load(key)
        if record is None:
            return False

        with self._batch() as pipe:
            pipe.delete(key)
            pipe.delete(self.codec.indirection_key(record.owner, token))
            removed, _ = pipe.execute()

        if not removed:
            # raced by expiry or another deleter between read and delete
            logger.debug(f"Token {mask_token(token)} vanished before delete")
            return False

        logger.debug(f"Deleted token {mask_token(token)} of owner {record.owner!r}")
        return True

    def ttl(self, token: str) -> int:
        """
        Retrieve the remaining time to live of a token in seconds.

        Returns:
            Seconds left, TTL_MISSING (-2) for an unknown token or
            TTL_PERSISTENT (-1) for a token without expiration
        """
        return self.redis.ttl(self.codec.primary_key(token))

    def exists(self, token: str) -> bool:
        """Check whether a token exists without renewing it"""
        return bool(self.redis.exists(self.codec.primary_key(token)))

    # Owner index

    def enumerate(self, owner: Optional[str] = None, *, include_all: bool = False,
                  with_records: bool = False, unique: bool = True) -> TokenScan:
        """
        List tokens of an owner, of no owner, or of everybody.

        Nothing is read until the result is iterated; each iteration runs a
        fresh scan. Records are read without renewing their time to live and
        are None for tokens that vanished after being listed.

        Args:
            owner: Owner whose tokens to list; None lists ownerless tokens
            include_all: List every token regardless of owner
            with_records: Yield ``(token, record)`` pairs instead of tokens
            unique: Suppress tokens reported twice by one scan

        Returns:
            Re-iterable TokenScan
        """
        loader = self._peek if with_records else None
        return TokenScan(self.scanner, owner=owner, include_all=include_all,
                         unique=unique, loader=loader)

    def owned_by(self, owner: Optional[str]) -> TokenScan:
        """Iterate ``(token, record)`` pairs of all existing tokens of an owner"""
        return self.enumerate(owner, with_records=True)

    def delete_matching(self, owner: Optional[str] = None, *,
                        include_all: bool = False) -> int:
        """
        Delete all tokens of an owner (or of no owner, or every token).

        Tokens that disappear between listing and deletion are not counted.

        Returns:
            Number of deleted tokens
        """
        deleted = 0
        # a repeated token is harmless: its second delete() returns False
        tokens = self.scanner.tokens(owner=owner, include_all=include_all, unique=False)
        for token in tokens:
            if self.delete(token):
                deleted += 1

        scope = "all owners" if include_all else f"owner {owner!r}"
        logger.info(f"Deleted {deleted} token(s) of {scope}")
        return deleted

    delete_all = delete_matching

    # Internals

    def _batch(self):
        return self.redis.pipeline(transaction=self.config.transactional_batches)

    def _peek(self, token: str) -> Optional[Record]:
        return self._load(self.codec.primary_key(token))

    def _load(self, key: str) -> Optional[Record]:
        data = self.redis.get(key)
        if data is None:
            return None
        try:
            return self.serializer.unpack(data)
        except SerializationError as e:
            e.key = key
            e.details['key'] = key
            logger.error(f"Unreadable record in namespace {self.prefix!r}: {e.message}")
            raise
