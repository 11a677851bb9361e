"""
tokenindex Demo Application

Walks through the token lifecycle against the Redis instance named by
TOKENINDEX_REDIS_URL (redis://localhost:6379/0 by default):

- Token creation with and without an owner
- Lookup with sliding expiration
- Payload update keeping the remaining TTL
- Listing tokens per owner
- Bulk deletion
"""

import logging
import sys

import redis

from tokenindex.common.utils import format_duration, mask_token
from tokenindex.core.index import TokenIndex
from tokenindex.util.config import get_config_value

DEMO_PREFIX = "tokenindex.demo."


def main() -> int:
    """Main demo function"""
    logging.basicConfig(
        level=get_config_value("log_level", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    print("tokenindex Demo Application")
    print("=" * 50)
    print()

    index = TokenIndex.from_env(prefix=DEMO_PREFIX)
    try:
        index.redis.ping()
        print(f"✓ Connected: {index!r}")
        print(f"  - Default TTL: {format_duration(index.default_ttl)}")
        print()
    except redis.RedisError as e:
        print(f"✗ Cannot reach Redis: {e}")
        index.close()
        return 1

    with index:
        print("Step 1: Create tokens")
        print("-" * 40)
        token = index.create("u1", payload={"type": "native"})
        for _ in range(3):
            index.create("u2")
        anonymous = index.create(payload={"guest": True}, ttl="1h")
        print(f"✓ Token for u1: {mask_token(token)}")
        print(f"✓ Ownerless token: {mask_token(anonymous)}")
        print()

        print("Step 2: Read and slide expiration")
        print("-" * 40)
        record = index.get(token, ttl=600)
        print(f"✓ Payload: {record.payload}, owner: {record.owner}")
        print(f"  - TTL after sliding: {format_duration(index.ttl(token))}")
        print()

        print("Step 3: Update payload")
        print("-" * 40)
        index.set(token, payload={"type": "web"})
        print(f"✓ Payload: {index.get(token, slide_expire=False).payload}")
        print(f"  - TTL kept: {format_duration(index.ttl(token))}")
        print()

        print("Step 4: List tokens")
        print("-" * 40)
        print(f"✓ u1: {index.enumerate('u1').count()} token(s)")
        print(f"✓ u2: {index.enumerate('u2').count()} token(s)")
        print(f"✓ no owner: {index.enumerate(None).count()} token(s)")
        print(f"✓ everybody: {index.enumerate(include_all=True).count()} token(s)")
        print()

        print("Step 5: Cleanup")
        print("-" * 40)
        print(f"✓ Deleted u2 tokens: {index.delete_matching('u2')}")
        print(f"✓ Deleted u1 token: {index.delete(token)}")
        print(f"✓ Lookup after delete: {index.get(token)}")
        print(f"✓ Deleted remaining: {index.delete_matching(include_all=True)}")
        print()

    print("Demo completed successfully!")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
        sys.exit(1)
