# booking_api/redis_client.py
"""
Optional Redis connection.

Redis carries the booking locks and the event queue. Without REDIS_URL the
service runs single-process: locks fall back to in-process locks and events
are skipped.
"""

from redis import Redis

from .config import settings


def create_redis_client(url: str | None) -> Redis | None:
    if not url:
        return None
    return Redis.from_url(url, decode_responses=True, socket_timeout=2.0)


redis_client = create_redis_client(settings.redis_url)


def get_redis() -> Redis | None:
    """FastAPI dependency."""
    return redis_client
