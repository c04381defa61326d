from redis.asyncio import Redis
from geoquiz.core.config import settings

_redis: Redis | None = None

async def get_redis() -> Redis:
    """
    Returns the singleton Redis client. TLS works through the rediss:// scheme,
    timeouts are tuned for managed cloud providers.
    """
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            health_check_interval=30,
            socket_timeout=3,
            socket_connect_timeout=3,
            retry_on_timeout=True,
            max_connections=50,
        )
        await _redis.ping()
    return _redis

async def close_redis():
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
