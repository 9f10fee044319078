# backend/app/cache.py

import logging
import time
from typing import Dict, Optional

import redis.asyncio as redis

from app.prompts import Audience

logger = logging.getLogger("uvicorn.error")

KEY_SEP = "|:|"


def cache_key(original: str, audience: Audience, stamp_ms: Optional[int] = None) -> str:
    if stamp_ms is None:
        stamp_ms = int(time.time() * 1000)
    return KEY_SEP.join(["prompt", original, audience.value, str(stamp_ms)])


class MemoryStore:
    """In-process stand-in used when no Redis URL is configured.

    Entries are never evicted, so this is meant for local development only.
    """

    def __init__(self):
        self.data: Dict[str, str] = {}

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def close(self) -> None:
        pass


class RedisStore:
    def __init__(self, url: str):
        self._redis = redis.from_url(url, decode_responses=True)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def close(self) -> None:
        await self._redis.aclose()


def make_store(redis_url: Optional[str]):
    if redis_url:
        logger.info("Cache: using Redis store.")
        return RedisStore(redis_url)
    logger.warning("Cache: REDIS_URL not set, using unbounded in-memory store (development only).")
    return MemoryStore()


async def save_result(store, original: str, audience: Audience, simplified: str) -> str:
    key = cache_key(original, audience)
    await store.set(key, simplified)
    return key
