"""
Shared fixtures for tokenindex tests.
"""

import fakeredis
import pytest

from tokenindex import TokenIndex

PREFIX = "tokens."


@pytest.fixture
def redis_client():
    """An isolated in-process Redis server"""
    client = fakeredis.FakeRedis(server=fakeredis.FakeServer())
    yield client
    client.close()


@pytest.fixture
def index(redis_client):
    """A token index on the default (native) serializer"""
    return TokenIndex(redis_client, prefix=PREFIX)


@pytest.fixture
def json_index(redis_client):
    """A token index storing records as JSON"""
    return TokenIndex(redis_client, prefix="json.", serializer="json")


def assert_ttl_near(actual: int, expected: int, tolerance: int = 2):
    """Redis rounds TTLs to whole seconds; allow for the clock moving on"""
    assert expected - tolerance <= actual <= expected, f"ttl {actual} not near {expected}"
