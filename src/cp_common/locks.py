"""Per-user mutual exclusion for read-modify-write of a user's collection.

Every card mutation loads the caller's whole list, rebuilds it and writes it
back. Two such updates for the same user must never interleave, otherwise
one of them is lost. Cross-user admin operations lock several users; locks
are always taken in sorted user-id order so two of them cannot deadlock.

Backends:
  - LocalUserLocks: one asyncio.Lock per user (single uvicorn worker, tests)
  - RedisUserLocks: redis.asyncio Lock per user (multiple workers/hosts)
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from contextlib import AbstractAsyncContextManager, AsyncExitStack, asynccontextmanager
from typing import Protocol

import redis.asyncio as aioredis
from redis.asyncio.lock import Lock
from redis.exceptions import LockNotOwnedError

from config.settings import settings
from src.cp_common.errors import UserBusyError
from src.cp_common.redis_client import get_redis

logger = logging.getLogger(__name__)


class UserLocks(Protocol):
    def hold(self, user_id: str) -> AbstractAsyncContextManager[None]: ...

    def hold_many(self, user_ids: Iterable[str]) -> AbstractAsyncContextManager[None]: ...


class LocalUserLocks:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        async with self._lock_for(user_id):
            yield

    @asynccontextmanager
    async def hold_many(self, user_ids: Iterable[str]) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for user_id in sorted(set(user_ids)):
                await stack.enter_async_context(self._lock_for(user_id))
            yield


class RedisUserLocks:
    """Distributed variant. A lock that cannot be taken within the timeout
    raises UserBusyError (409) instead of waiting forever."""

    _KEY = "cards:lock:{user_id}"

    def __init__(
        self,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        timeout: float = settings.USER_LOCK_TIMEOUT_SECONDS,
        lease: float = settings.USER_LOCK_LEASE_SECONDS,
    ) -> None:
        self._redis_factory = redis_factory
        self._timeout = timeout
        self._lease = max(lease, timeout)

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        async with self.hold_many([user_id]):
            yield

    @asynccontextmanager
    async def hold_many(self, user_ids: Iterable[str]) -> AsyncIterator[None]:
        redis = await self._redis_factory()
        async with AsyncExitStack() as stack:
            for user_id in sorted(set(user_ids)):
                lock = redis.lock(
                    self._KEY.format(user_id=user_id),
                    timeout=self._lease,
                    blocking_timeout=self._timeout,
                )
                if not await lock.acquire():
                    logger.warning("lock timeout user=%s", user_id)
                    raise UserBusyError(user_id)
                stack.push_async_callback(_release, lock, user_id)
            yield


async def _release(lock: Lock, user_id: str) -> None:
    """Release after the commit; an expired lease is logged, not raised."""
    try:
        await lock.release()
    except LockNotOwnedError:
        logger.warning("lock lease expired before release user=%s", user_id)


_default_locks: UserLocks | None = None


def get_user_locks() -> UserLocks:
    """Process-wide lock registry selected by settings.USER_LOCK_BACKEND."""
    global _default_locks  # noqa: PLW0603
    if _default_locks is None:
        if settings.USER_LOCK_BACKEND == "redis":
            _default_locks = RedisUserLocks()
        else:
            _default_locks = LocalUserLocks()
    return _default_locks
