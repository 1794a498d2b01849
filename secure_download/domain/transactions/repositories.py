"""
Transaction Repositories

Repository interface for transaction persistence.
Concrete implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .entities import Transaction


class TransactionRepository(ABC):
    """Abstract repository interface over a TTL-capable key-value cache."""

    @abstractmethod
    def put(self, token: str, transaction: Transaction, ttl_seconds: int) -> bool:
        """
        Store a transaction under the given token.

        Args:
            token: Transaction token
            transaction: Transaction to store
            ttl_seconds: Time to live in seconds

        Returns:
            True if the write succeeded, False otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, token: str) -> Tuple[Optional[Transaction], bool]:
        """
        Retrieve a transaction by token.

        Args:
            token: Transaction token

        Returns:
            Tuple of (transaction, is_miss). ``is_miss`` is True when the
            entry is absent, expired or unreadable. When the entry is
            readable but is not a transaction, returns ``(None, False)``.
        """
        pass  # pragma: no cover

    @abstractmethod
    def invalidate(self, token: str) -> bool:
        """
        Delete a stored transaction.

        Args:
            token: Transaction token

        Returns:
            True if an entry was deleted, False otherwise
        """
        pass  # pragma: no cover
