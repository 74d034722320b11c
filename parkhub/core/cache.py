"""
Read-through cache on top of Redis.
Cache failures never fail a request: errors are logged and treated as a miss.
"""
import json
from typing import Any, Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from parkhub.config import settings
from parkhub.core.logging_config import get_logger

logger = get_logger(__name__)


class Cache:
    def __init__(self, client: Optional[aioredis.Redis] = None):
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def get(self, key: str) -> Optional[Any]:
        if self.client is None:
            return None
        try:
            raw = await self.client.get(key)
        except RedisError as e:
            logger.warning("Cache GET %s failed: %s", key, e)
            return None
        if raw is None:
            logger.debug("Cache miss: %s", key)
            return None
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Cache payload for %s is not valid JSON: %s", key, e)
            return None
        logger.debug("Cache hit: %s", key)
        return payload.get("data") if isinstance(payload, dict) else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        if self.client is None:
            return
        try:
            raw = json.dumps({"data": value}, default=str)
        except (TypeError, ValueError) as e:
            logger.warning("Cache value for %s is not serializable: %s", key, e)
            return
        try:
            await self.client.setex(key, ttl or settings.cache_ttl_seconds, raw)
        except RedisError as e:
            logger.warning("Cache SETEX %s failed: %s", key, e)

    async def delete(self, *keys: str) -> None:
        if self.client is None or not keys:
            return
        try:
            await self.client.delete(*keys)
        except RedisError as e:
            logger.warning("Cache DEL %s failed: %s", ", ".join(keys), e)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()


def create_cache() -> Cache:
    if not settings.redis_url:
        logger.info("REDIS_URL is not set, cache disabled")
        return Cache()
    return Cache(aioredis.from_url(settings.redis_url, decode_responses=True))


_cache: Optional[Cache] = None


def get_cache() -> Cache:
    """FastAPI dependency: process-wide cache instance."""
    global _cache
    if _cache is None:
        _cache = create_cache()
    return _cache


# Cache keys. Writes delete the keys of the entity they touch.
RIDES_KEY = "view_rides_cache"
STORES_KEY = "view_stores_cache"
SOUVENIRS_ALL_KEY = "view_souvenirs_cache_all"
SOUVENIR_ORDERS_KEY = "view_order_souvenirs_cache"
LOST_AND_FOUND_KEY = "view_logs_cache"
CUSTOMER_SERVICE_CHATS_KEY = "view_customer_service_chats_for_staff_cache"


def souvenirs_store_key(store_id: str) -> str:
    return f"view_souvenirs_cache_store_{store_id}"


def user_chats_key(user_id: str) -> str:
    return f"view_chats_user_{user_id}"


def chat_messages_key(chat_id: str) -> str:
    return f"get_messages_chat_{chat_id}"
