from typing import Optional

from redis.asyncio import Redis

from app.platform.config import settings

_redis: Optional[Redis] = None


def get_redis() -> Redis:
    """Lazily create the shared async Redis client."""
    global _redis

    if _redis is None:
        _redis = Redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def get_cache() -> Redis:
    """FastAPI dependency for the keyed cache store."""
    return get_redis()


async def close_redis() -> None:
    global _redis

    if _redis is not None:
        await _redis.aclose()
        _redis = None
