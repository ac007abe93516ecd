"""
Redis cache for assembled restaurant details.
"""
from typing import Any, Optional

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from dinescore.models import RestaurantDetail
from dinescore.utils.config import Settings
from dinescore.utils.logger import app_logger

KEY_PREFIX = "restaurant:"


class RestaurantCache:
    """Key-value store for RestaurantDetail records keyed by place id.

    Redis being unreachable is never fatal: reads behave as misses and
    writes report failure.
    """

    def __init__(self, settings: Settings, redis_client: Optional[Any] = None):
        self.settings = settings
        self.ttl = settings.cache_ttl_seconds
        self.redis_client = redis_client
        self.hits = 0
        self.misses = 0
        if self.redis_client is None:
            self._connect()

    def _connect(self):
        """Connect to Redis."""
        try:
            self.redis_client = redis.from_url(self.settings.redis_url, decode_responses=True)
            app_logger.info("Connected to Redis cache")
        except (RedisError, ValueError) as e:
            app_logger.warning(f"Redis cache not available: {e}")
            app_logger.info("Continuing without cache")
            self.redis_client = None

    @staticmethod
    def _key(place_id: str) -> str:
        return f"{KEY_PREFIX}{place_id}"

    async def get(self, place_id: str) -> Optional[RestaurantDetail]:
        """Get a cached restaurant, or None on miss."""
        if not self.redis_client:
            self.misses += 1
            return None

        try:
            value = await self.redis_client.get(self._key(place_id))
        except RedisError as e:
            app_logger.warning(f"Cache read failed for {place_id}: {e}")
            self.misses += 1
            return None

        if not value:
            self.misses += 1
            return None

        try:
            detail = RestaurantDetail.model_validate_json(value)
        except ValidationError as e:
            app_logger.warning(f"Discarding unreadable cache entry for {place_id}: {e}")
            self.misses += 1
            return None

        self.hits += 1
        return detail

    async def put(self, place_id: str, detail: RestaurantDetail) -> bool:
        """Store a restaurant with the configured expiration."""
        if not self.redis_client:
            return False

        try:
            await self.redis_client.setex(self._key(place_id), self.ttl, detail.model_dump_json(by_alias=True))
            return True
        except RedisError as e:
            app_logger.warning(f"Cache write failed for {place_id}: {e}")
            return False

    async def delete(self, place_id: str) -> bool:
        """Invalidate a cached restaurant."""
        if not self.redis_client:
            return False

        try:
            return await self.redis_client.delete(self._key(place_id)) > 0
        except RedisError as e:
            app_logger.warning(f"Cache delete failed for {place_id}: {e}")
            return False

    def get_stats(self) -> dict:
        """Get cache statistics."""
        total = self.hits + self.misses
        return {
            "connected": self.redis_client is not None,
            "ttl_seconds": self.ttl,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total * 100, 1) if total > 0 else 0.0,
        }

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            app_logger.info("Redis connection closed")
