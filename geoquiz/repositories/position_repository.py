import logging
from typing import Optional

from redis.asyncio import Redis

log = logging.getLogger(__name__)

REDIS_PREFIX = "geoquiz:screen:"
# field name of the saved cursor inside the per-screen hash
KEY_INDEX = "index"


class PositionRepository:
    def __init__(self, client: Redis, ttl_seconds: int) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds

    def k_screen(self, session_id: str) -> str:
        return f"{REDIS_PREFIX}{session_id}"

    async def save(self, session_id: str, index: int) -> None:
        key = self.k_screen(session_id)
        await self.client.hset(key, mapping={KEY_INDEX: index})
        await self.client.expire(key, self.ttl_seconds)

    async def load(self, session_id: str) -> Optional[int]:
        """
        Returns the saved index, or None when nothing usable is stored.
        The value is not range-checked here; the quiz state normalizes it.
        """
        raw = await self.client.hget(self.k_screen(session_id), KEY_INDEX)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            log.warning("Ignoring malformed saved index %r for screen %s", raw, session_id)
            return None

    async def delete(self, session_id: str) -> None:
        await self.client.delete(self.k_screen(session_id))
