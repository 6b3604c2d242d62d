"""Process-wide Redis client for the user cache and rate limiter."""

import redis.asyncio as redis

from rentbid.core.config import settings

_client: redis.Redis | None = None


async def get_redis() -> redis.Redis:
    """Return the shared client, creating it on first use.

    Creating the client does not connect; connections are opened lazily by
    its pool, so callers see ``RedisError`` only when they issue a command.
    """
    global _client
    if _client is None:
        _client = redis.Redis.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            decode_responses=True,
        )
    return _client


async def close_redis() -> None:
    """Close the shared client and its pool; the next get_redis() starts fresh."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
