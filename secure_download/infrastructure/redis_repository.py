"""
Redis Repository Base Class

Provides namespaced JSON storage with TTL on top of a Redis client.
"""

import json
import logging
from typing import Any, Optional

import redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisRepository:
    """Base Redis repository storing JSON documents under a key prefix."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "", separator: str = "/"):
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.separator = separator

    def _make_key(self, key: str) -> str:
        """Create a prefixed key for Redis storage."""
        return f"{self.key_prefix}{self.separator}{key}" if self.key_prefix else key

    def set_json(self, key: str, data: Any, ttl: Optional[int] = None) -> bool:
        """
        Set JSON data with optional TTL.

        Args:
            key: Redis key (without prefix)
            data: JSON-serializable value
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        try:
            redis_key = self._make_key(key)
            json_data = json.dumps(data)

            if ttl:
                return bool(self.redis.setex(redis_key, ttl, json_data))
            return bool(self.redis.set(redis_key, json_data))
        except (RedisError, TypeError, ValueError) as e:
            logger.error(f"Error setting JSON data for key {key[:8]}: {e}")
            return False

    def get_json(self, key: str) -> Optional[Any]:
        """
        Get JSON data from Redis.

        Args:
            key: Redis key (without prefix)

        Returns:
            Decoded value, or None if the key does not exist

        Raises:
            ValueError: If the stored value is not valid JSON
            RedisError: If Redis cannot be reached
        """
        data = self.redis.get(self._make_key(key))
        if data is None:
            return None

        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)

    def delete(self, key: str) -> bool:
        """
        Delete a key from Redis.

        Args:
            key: Redis key to delete (without prefix)

        Returns:
            True if key was deleted, False otherwise
        """
        try:
            return self.redis.delete(self._make_key(key)) > 0
        except RedisError as e:
            logger.error(f"Error deleting key {key[:8]}: {e}")
            return False


class RedisConnectionManager:
    """Manages Redis connection with connection pooling."""

    def __init__(self, host: str = 'localhost', port: int = 6379, db: int = 0,
                 password: Optional[str] = None, max_connections: int = 20):
        self.connection_pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            max_connections=max_connections,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client instance with connection pooling."""
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            return bool(self.client.ping())
        except RedisError:
            return False
