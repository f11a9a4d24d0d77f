"""Shared redis.asyncio client, created on first use.

Only the redis lock backend talks to Redis; cards and history live in
PostgreSQL, so a deployment with USER_LOCK_BACKEND=local never connects.
"""

import redis.asyncio as aioredis

from config.settings import settings

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _client


async def close_redis() -> None:
    """Release the pool on shutdown; a no-op if Redis was never used."""
    global _client  # noqa: PLW0603
    if _client is None:
        return
    await _client.aclose()
    _client = None
