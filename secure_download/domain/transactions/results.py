"""
Transaction Result Value Objects

Encapsulate the outcome of registration and retrieval operations.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import ErrorCode, ErrorRecord, TransactionRejectedError
from .entities import Transaction


def _error_payload(errors: List[ErrorRecord]) -> Dict[str, Any]:
    return {
        "error_code": int(errors[0].code) if errors else None,
        "errors": [error.to_dict() for error in errors],
    }


@dataclass
class RegistrationResult:
    """
    Value object representing the result of a registration.

    ``token`` is set only when the transaction was persisted.
    """

    transaction: Transaction
    token: Optional[str] = None
    ttl_seconds: Optional[int] = None

    @classmethod
    def create_success(cls, transaction: Transaction, ttl_seconds: int) -> 'RegistrationResult':
        return cls(transaction=transaction, token=transaction.token, ttl_seconds=ttl_seconds)

    @classmethod
    def create_failure(cls, transaction: Transaction) -> 'RegistrationResult':
        return cls(transaction=transaction)

    @property
    def success(self) -> bool:
        return self.token is not None and self.transaction.is_processable()

    @property
    def errors(self) -> List[ErrorRecord]:
        return list(self.transaction.errors)

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.errors[0].code if self.errors else None

    def unwrap(self) -> str:
        """
        Return the token or raise.

        Raises:
            TransactionRejectedError: If the registration was rejected
        """
        if not self.success:
            raise TransactionRejectedError(self.errors, self.transaction.locator)
        return self.token

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"status": "registered", "token": self.token, "expires_in": self.ttl_seconds}
        return {"status": "rejected", **_error_payload(self.errors)}


@dataclass
class RetrievalResult:
    """
    Value object representing the result of a retrieval.

    A rejected result still carries a transaction: an empty placeholder
    for missing or malformed entries, or the stored transaction annotated
    with the failure when the access key did not match.
    """

    transaction: Transaction

    @property
    def granted(self) -> bool:
        return self.transaction.is_processable()

    @property
    def errors(self) -> List[ErrorRecord]:
        return list(self.transaction.errors)

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.errors[0].code if self.errors else None

    def unwrap(self) -> Transaction:
        """
        Return the granted transaction or raise.

        Raises:
            TransactionRejectedError: If the retrieval was rejected
        """
        if not self.granted:
            raise TransactionRejectedError(self.errors, self.transaction.locator)
        return self.transaction

    def to_dict(self) -> Dict[str, Any]:
        if self.granted:
            return {"status": "granted", "token": self.transaction.token}
        return {"status": "rejected", **_error_payload(self.errors)}
