"""
Redis Transaction Repository Implementation

Concrete Redis-based implementation of TransactionRepository.
Stores transactions as JSON with automatic expiration using Redis TTL.
"""

import logging
from typing import Optional, Tuple

from redis.exceptions import RedisError

from ..domain.errors import TransactionStoreError
from ..domain.transactions.entities import Transaction
from ..domain.transactions.repositories import TransactionRepository
from .redis_repository import RedisRepository

logger = logging.getLogger(__name__)


class RedisTransactionRepository(TransactionRepository):
    """
    Redis-based implementation of TransactionRepository.

    Keys have the form ``{prefix}/{token}``; the prefix is the one the
    given RedisRepository was created with.
    """

    def __init__(self, redis_repository: RedisRepository):
        """
        Initialize with Redis repository.

        Args:
            redis_repository: RedisRepository namespaced with the cache prefix
        """
        self.redis_repo = redis_repository

    def put(self, token: str, transaction: Transaction, ttl_seconds: int) -> bool:
        """Save a transaction to Redis with TTL."""
        if ttl_seconds <= 0:
            return False
        return self.redis_repo.set_json(token, transaction.to_dict(), ttl=ttl_seconds)

    def get(self, token: str) -> Tuple[Optional[Transaction], bool]:
        """
        Retrieve a transaction by token.

        Unreadable JSON counts as a miss. Readable JSON that does not
        describe a transaction is returned as ``(None, False)``.

        Raises:
            TransactionStoreError: If Redis cannot be reached
        """
        try:
            data = self.redis_repo.get_json(token)
        except RedisError as e:
            raise TransactionStoreError(f"Unable to read transaction {token[:8]}", e) from e
        except ValueError as e:
            logger.warning(f"Unreadable transaction data for token {token[:8]}: {e}")
            return None, True

        if data is None:
            return None, True

        try:
            return Transaction.from_dict(data), False
        except ValueError as e:
            logger.warning(f"Stored value for token {token[:8]} is not a transaction: {e}")
            return None, False

    def invalidate(self, token: str) -> bool:
        """Delete a transaction from Redis."""
        return self.redis_repo.delete(token)
