import json
import redis
from typing import Optional, Any

from app.config import get_settings

settings = get_settings()

# Create Redis client
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

# Key prefix for product detail entries
PRODUCT_CACHE_PREFIX = "product"


class CacheService:
    """
    Redis cache for product detail lookups.

    Cache failures never break a request: reads fall back to the database
    and writes/invalidations report False.
    """

    def __init__(self, client: redis.Redis = None, ttl: int = None):
        self.client = client or redis_client
        self.ttl = ttl or settings.CACHE_TTL

    def _make_key(self, prefix: str, key: str) -> str:
        """Create a namespaced cache key."""
        return f"{prefix}:{key}"

    def get(self, prefix: str, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            prefix: Cache key prefix (e.g., 'product')
            key: Unique identifier

        Returns:
            Cached value or None if missing or unreadable
        """
        cache_key = self._make_key(prefix, key)
        try:
            value = self.client.get(cache_key)
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, json.JSONDecodeError):
            return None

    def set(self, prefix: str, key: str, value: Any, ttl: int = None) -> bool:
        """Store a JSON-serialized value with a TTL (defaults to CACHE_TTL)."""
        cache_key = self._make_key(prefix, key)
        try:
            self.client.setex(cache_key, ttl or self.ttl, json.dumps(value, default=str))
            return True
        except (redis.RedisError, TypeError):
            return False

    def delete(self, prefix: str, key: str) -> bool:
        """Drop a cached value."""
        try:
            self.client.delete(self._make_key(prefix, key))
            return True
        except redis.RedisError:
            return False


# Singleton cache service instance
cache_service = CacheService()
