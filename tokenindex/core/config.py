"""
Configuration module for tokenindex.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional

from ..errors import ConfigurationError, InvalidArgumentError
from ..util.config import get_config_value, parse_ttl

# Token lives 14 days by default
DEFAULT_TTL = int(timedelta(days=14).total_seconds())
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_SCAN_COUNT = 100


@dataclass
class TokenIndexConfig:
    """Configuration for a TokenIndex"""
    prefix: str = ""
    default_ttl: int = DEFAULT_TTL
    # registered serializer name or a Serializer instance
    serializer: Any = "native"
    redis_url: str = DEFAULT_REDIS_URL
    redis_options: Dict[str, Any] = field(default_factory=dict)
    scan_count: int = DEFAULT_SCAN_COUNT
    transactional_batches: bool = True

    def __post_init__(self):
        try:
            self.default_ttl = parse_ttl(self.default_ttl)
        except ValueError as e:
            raise ConfigurationError(
                str(e), config_key="default_ttl", config_value=self.default_ttl
            ) from e

    @classmethod
    def from_env(cls, **overrides) -> "TokenIndexConfig":
        """Create configuration from TOKENINDEX_* environment variables"""
        values = dict(
            prefix=get_config_value("prefix", ""),
            default_ttl=get_config_value("default_ttl", DEFAULT_TTL),
            serializer=get_config_value("serializer", "native"),
            redis_url=get_config_value("redis_url", DEFAULT_REDIS_URL),
            scan_count=get_config_value("scan_count", DEFAULT_SCAN_COUNT, int),
            transactional_batches=get_config_value("transactional_batches", True, bool),
        )
        values.update(overrides)
        return cls(**values)

    def replace(self, **changes) -> "TokenIndexConfig":
        """Return a copy of this configuration with some fields changed"""
        values = {
            "prefix": self.prefix,
            "default_ttl": self.default_ttl,
            "serializer": self.serializer,
            "redis_url": self.redis_url,
            "redis_options": dict(self.redis_options),
            "scan_count": self.scan_count,
            "transactional_batches": self.transactional_batches,
        }
        unknown = set(changes) - set(values)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(sorted(unknown))}"
            )
        values.update(changes)
        return TokenIndexConfig(**values)

    def validate(self) -> bool:
        """Validate the configuration"""
        if not isinstance(self.prefix, str):
            raise ConfigurationError(
                "prefix must be a string", config_key="prefix", config_value=self.prefix
            )
        if self.default_ttl <= 0:
            raise ConfigurationError(
                "default_ttl must be positive",
                config_key="default_ttl",
                config_value=self.default_ttl,
            )
        if self.scan_count <= 0:
            raise ConfigurationError(
                "scan_count must be positive",
                config_key="scan_count",
                config_value=self.scan_count,
            )
        if not self.redis_url:
            raise ConfigurationError("redis_url is required", config_key="redis_url")
        return True

    def redis_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``redis.Redis.from_url``"""
        options = dict(self.redis_options)
        # packed records are bytes
        options["decode_responses"] = False
        return options


def ttl_or_default(ttl: Optional[Any], default: int) -> int:
    """Resolve a per-call TTL override against the configured default"""
    if ttl is None:
        return default
    try:
        seconds = parse_ttl(ttl)
    except ValueError as e:
        raise InvalidArgumentError(str(e), argument="ttl", value=ttl) from e
    if seconds <= 0:
        raise InvalidArgumentError("TTL must be positive", argument="ttl", value=ttl)
    return seconds
