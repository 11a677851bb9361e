"""
Tests for configuration handling.
"""

from datetime import timedelta

import pytest

from tokenindex import TokenIndex, TokenIndexConfig, DEFAULT_TTL, ConfigurationError, InvalidArgumentError
from tokenindex.core.config import ttl_or_default
from tokenindex.serializers import JsonSerializer
from tokenindex.util.config import parse_duration_string, parse_ttl, get_config_value


class TestTokenIndexConfig:
    """Test TokenIndexConfig."""

    def test_defaults(self):
        config = TokenIndexConfig()
        assert config.prefix == ""
        assert config.default_ttl == DEFAULT_TTL == 14 * 24 * 60 * 60
        assert config.serializer == "native"
        assert config.transactional_batches is True
        assert config.validate() is True

    def test_ttl_as_duration(self):
        assert TokenIndexConfig(default_ttl="2h").default_ttl == 7200
        assert TokenIndexConfig(default_ttl=timedelta(days=1)).default_ttl == 86400
        assert TokenIndexConfig(default_ttl="9999").default_ttl == 9999

    def test_invalid_ttl(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TokenIndexConfig(default_ttl="forever")
        assert exc_info.value.config_key == "default_ttl"

    def test_validate_rejects_bad_values(self):
        with pytest.raises(ConfigurationError):
            TokenIndexConfig(default_ttl=0).validate()
        with pytest.raises(ConfigurationError):
            TokenIndexConfig(scan_count=0).validate()
        with pytest.raises(ConfigurationError):
            TokenIndexConfig(redis_url="").validate()

    def test_replace(self):
        config = TokenIndexConfig(prefix="a.")
        changed = config.replace(default_ttl=60)
        assert changed.prefix == "a."
        assert changed.default_ttl == 60
        assert config.default_ttl == DEFAULT_TTL

    def test_replace_unknown_option(self):
        with pytest.raises(ConfigurationError):
            TokenIndexConfig().replace(ttl=60)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TOKENINDEX_PREFIX", "env.")
        monkeypatch.setenv("TOKENINDEX_DEFAULT_TTL", "5m")
        monkeypatch.setenv("TOKENINDEX_SERIALIZER", "json")
        monkeypatch.setenv("TOKENINDEX_SCAN_COUNT", "500")
        monkeypatch.setenv("TOKENINDEX_TRANSACTIONAL_BATCHES", "false")

        config = TokenIndexConfig.from_env(prefix="override.")
        assert config.prefix == "override."
        assert config.default_ttl == 300
        assert config.serializer == "json"
        assert config.scan_count == 500
        assert config.transactional_batches is False

    def test_redis_kwargs_force_bytes(self):
        config = TokenIndexConfig(redis_options={"decode_responses": True, "socket_timeout": 5})
        assert config.redis_kwargs() == {"decode_responses": False, "socket_timeout": 5}


class TestTokenIndexConstruction:
    """Test building a TokenIndex from configuration."""

    def test_injected_client(self, redis_client):
        index = TokenIndex(redis_client)
        assert index.redis is redis_client
        assert index.default_ttl == DEFAULT_TTL

    def test_overrides(self, redis_client):
        index = TokenIndex(redis_client, default_ttl=5555, prefix="x.")
        assert index.default_ttl == 5555
        assert index.prefix == "x."
        assert index.codec.prefix == "x."

    def test_config_object(self, redis_client):
        index = TokenIndex(redis_client, config=TokenIndexConfig(serializer="json", default_ttl=8888))
        assert isinstance(index.serializer, JsonSerializer)
        assert index.default_ttl == 8888

    def test_client_from_url(self):
        index = TokenIndex(redis_url="redis://localhost:12345/3", default_ttl=9999)
        kwargs = index.redis.connection_pool.connection_kwargs
        assert kwargs["port"] == 12345
        assert kwargs["db"] == 3
        assert index.default_ttl == 9999
        index.close()

    def test_invalid_configuration(self, redis_client):
        with pytest.raises(ConfigurationError):
            TokenIndex(redis_client, default_ttl=-1)
        with pytest.raises(ConfigurationError):
            TokenIndex(redis_client, serializer="yaml")

    def test_from_env(self, redis_client, monkeypatch):
        monkeypatch.setenv("TOKENINDEX_PREFIX", "env.")
        index = TokenIndex.from_env(redis_client, default_ttl=42)
        assert index.prefix == "env."
        assert index.default_ttl == 42


class TestConfigUtils:
    """Test configuration helpers."""

    def test_parse_duration_string(self):
        assert parse_duration_string("30s") == timedelta(seconds=30)
        assert parse_duration_string("5m") == timedelta(minutes=5)
        assert parse_duration_string("14d") == timedelta(days=14)
        with pytest.raises(ValueError):
            parse_duration_string("5w")

    def test_parse_ttl(self):
        assert parse_ttl(10) == 10
        assert parse_ttl("1h") == 3600
        with pytest.raises(ValueError):
            parse_ttl(True)

    def test_ttl_or_default(self):
        assert ttl_or_default(None, 100) == 100
        assert ttl_or_default("1m", 100) == 60
        with pytest.raises(InvalidArgumentError):
            ttl_or_default(-5, 100)
        with pytest.raises(InvalidArgumentError):
            ttl_or_default("soon", 100)

    def test_get_config_value(self, monkeypatch):
        monkeypatch.setenv("TOKENINDEX_FLAG", "yes")
        monkeypatch.setenv("TOKENINDEX_NUMBER", "nan-ish")
        assert get_config_value("flag", cast_type=bool) is True
        assert get_config_value("number", 7, int) == 7
        assert get_config_value("missing", "fallback") == "fallback"
