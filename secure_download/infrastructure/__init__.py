"""Infrastructure layer for Redis."""

from .redis_repository import RedisConnectionManager, RedisRepository
from .redis_transaction_repository import RedisTransactionRepository

__all__ = [
    "RedisRepository",
    "RedisConnectionManager",
    "RedisTransactionRepository",
]
