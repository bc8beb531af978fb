# booking_api/services/scheduling/locks.py
"""
Booking locks: serialize the re-check + insert of bookings per (tenant, date).

Key format: booking:{tenant_id}:{YYYY-MM-DD}

One lock per date (not per staff member): a booking without staff is checked
against every reservation of the day, so it must exclude all writers of that
day.

- RedisBookingLocks: redis-py Lock, shared by every worker process
- LocalBookingLocks: threading.Lock registry for single-process deployments
"""

import logging
import threading
from contextlib import contextmanager
from datetime import date
from functools import lru_cache
from typing import Iterator

from redis import Redis
from redis.exceptions import LockError

from ...errors import BookingBusyError
from ...redis_client import redis_client
from .config import get_scheduling_config

logger = logging.getLogger(__name__)


def lock_key(tenant_id: int, target_date: date) -> str:
    return f"booking:{tenant_id}:{target_date.isoformat()}"


class LocalBookingLocks:
    """
    In-process locks (one interpreter, many threads).

    Entries are reference counted: a key stays in the registry only while
    some thread holds or waits for it.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # key -> [lock, users]

    def active_count(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, tenant_id: int, target_date: date) -> Iterator[None]:
        key = lock_key(tenant_id, target_date)
        lock = self._checkout(key)
        try:
            if not lock.acquire(timeout=self.timeout):
                logger.warning(f"Timed out waiting for {key}")
                raise BookingBusyError("Another booking for this day is in progress, please retry")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(key)


class RedisBookingLocks:
    """Distributed locks; the TTL frees the key if a worker dies mid-booking."""

    LOCK_TTL_SECONDS = 30

    def __init__(self, redis: Redis, timeout: float):
        self.redis = redis
        self.timeout = timeout

    @contextmanager
    def hold(self, tenant_id: int, target_date: date) -> Iterator[None]:
        key = lock_key(tenant_id, target_date)
        lock = self.redis.lock(key, timeout=self.LOCK_TTL_SECONDS, blocking_timeout=self.timeout)
        if not lock.acquire():
            logger.warning(f"Timed out waiting for {key}")
            raise BookingBusyError("Another booking for this day is in progress, please retry")
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError:
                # TTL expired while we were still writing
                logger.error(f"Lock {key} expired before release")


@lru_cache
def get_booking_locks() -> LocalBookingLocks | RedisBookingLocks:
    """FastAPI dependency (singleton)."""
    timeout = get_scheduling_config().booking_lock_timeout
    if redis_client is not None:
        return RedisBookingLocks(redis_client, timeout)
    return LocalBookingLocks(timeout)
