"""Unit tests for per-user write guards and the locked unit of work."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import LockNotOwnedError

from src.cp_common.errors import UserBusyError
from src.cp_common.locks import LocalUserLocks, RedisUserLocks
from src.cp_common.transaction import locked_transaction


class TestLocalUserLocks:
    async def test_same_user_is_serialized(self) -> None:
        locks = LocalUserLocks()
        events: list[str] = []

        async def worker(name: str) -> None:
            async with locks.hold("u1"):
                events.append(f"{name}-in")
                await asyncio.sleep(0.01)
                events.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    async def test_different_users_run_concurrently(self) -> None:
        locks = LocalUserLocks()
        inside = asyncio.Event()

        async def holder() -> None:
            async with locks.hold("u1"):
                inside.set()
                await asyncio.sleep(0.05)

        task = asyncio.create_task(holder())
        await inside.wait()
        async with locks.hold("u2"):
            pass  # must not wait for u1
        await task

    async def test_hold_many_in_opposite_order_does_not_deadlock(self) -> None:
        locks = LocalUserLocks()

        async def swap(a: str, b: str) -> None:
            async with locks.hold_many([a, b]):
                await asyncio.sleep(0.01)

        await asyncio.wait_for(
            asyncio.gather(swap("u1", "u2"), swap("u2", "u1")), timeout=1.0
        )

    async def test_hold_many_with_duplicates(self) -> None:
        locks = LocalUserLocks()
        async with locks.hold_many(["u1", "u1"]):
            pass


class TestRedisUserLocks:
    def _redis(self, acquired: bool) -> tuple[MagicMock, AsyncMock]:
        lock = AsyncMock()
        lock.acquire.return_value = acquired
        redis = MagicMock()
        redis.lock.return_value = lock
        return redis, lock

    async def test_acquire_and_release(self) -> None:
        redis, lock = self._redis(acquired=True)
        locks = RedisUserLocks(
            redis_factory=AsyncMock(return_value=redis), timeout=2.0, lease=5.0
        )

        async with locks.hold("u1"):
            lock.release.assert_not_awaited()

        redis.lock.assert_called_once_with("cards:lock:u1", timeout=5.0, blocking_timeout=2.0)
        lock.release.assert_awaited_once()

    async def test_lease_never_shorter_than_wait(self) -> None:
        redis, _ = self._redis(acquired=True)
        locks = RedisUserLocks(
            redis_factory=AsyncMock(return_value=redis), timeout=10.0, lease=1.0
        )
        async with locks.hold("u1"):
            pass
        assert redis.lock.call_args.kwargs["timeout"] == 10.0

    async def test_expired_lease_does_not_fail_committed_work(self) -> None:
        redis, lock = self._redis(acquired=True)
        lock.release.side_effect = LockNotOwnedError("expired")
        locks = RedisUserLocks(redis_factory=AsyncMock(return_value=redis), timeout=1.0)
        db = AsyncMock()

        async with locked_transaction(db, locks, ["u1"]):
            pass

        db.commit.assert_awaited_once()
        lock.release.assert_awaited_once()

    async def test_busy_user_raises(self) -> None:
        redis, _ = self._redis(acquired=False)
        locks = RedisUserLocks(redis_factory=AsyncMock(return_value=redis), timeout=0.1)

        with pytest.raises(UserBusyError) as exc_info:
            async with locks.hold("u1"):
                pass
        assert exc_info.value.http_status == 409

    async def test_keys_taken_in_sorted_order(self) -> None:
        redis, _ = self._redis(acquired=True)
        locks = RedisUserLocks(redis_factory=AsyncMock(return_value=redis))

        async with locks.hold_many(["zed", "amy"]):
            pass

        keys = [c.args[0] for c in redis.lock.call_args_list]
        assert keys == ["cards:lock:amy", "cards:lock:zed"]


class TestLockedTransaction:
    async def test_commits_on_success(self) -> None:
        db = AsyncMock()
        async with locked_transaction(db, LocalUserLocks(), ["u1"]):
            pass
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    async def test_rolls_back_and_reraises(self) -> None:
        db = AsyncMock()
        with pytest.raises(ValueError):
            async with locked_transaction(db, LocalUserLocks(), ["u1"]):
                raise ValueError("boom")
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_lock_released_after_failure(self) -> None:
        locks = LocalUserLocks()
        db = AsyncMock()
        with pytest.raises(ValueError):
            async with locked_transaction(db, locks, ["u1"]):
                raise ValueError("boom")
        await asyncio.wait_for(_enter(locks), timeout=0.5)


async def _enter(locks: LocalUserLocks) -> None:
    async with locks.hold("u1"):
        pass
