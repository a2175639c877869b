"""Shared Redis client.

Redis only backs the request rate limiter; the API keeps working without it,
so callers treat ``RuntimeError`` from ``get_redis()`` as "not available".
"""

import redis.asyncio as redis

KEY_PREFIX = "garage"

_client: redis.Redis | None = None


def make_key(*parts: object) -> str:
    """Namespaced key, e.g. ``garage:ratelimit:1.2.3.4:29000000``."""
    return ":".join([KEY_PREFIX, *(str(p) for p in parts)])


async def init_redis(url: str) -> None:
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        decode_responses=True,
        max_connections=10,
        socket_connect_timeout=2,
        health_check_interval=30,
    )


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None


def get_redis() -> redis.Redis:
    """Return the client, or raise RuntimeError before ``init_redis``."""
    if _client is None:
        msg = "Redis is not configured"
        raise RuntimeError(msg)
    return _client
