"""
Transaction Services

Domain service issuing and checking transaction tokens.
"""

import re
from typing import Optional

from ..errors import ErrorCode, ErrorRecord
from .entities import Transaction
from .repositories import TransactionRepository
from .results import RegistrationResult, RetrievalResult
from .value_objects import BrokerSettings

_REPEATED_SLASHES = re.compile(r"/{2,}")


class TokenBroker:
    """
    Domain service for the transaction token lifecycle.

    Registration builds a transaction, derives its token and stores it
    with a TTL. Retrieval fetches it back and checks the access key.
    Every failure is reported as error records on the returned result;
    only an unreachable store raises (TransactionStoreError).
    """

    def __init__(self, transaction_repository: TransactionRepository, settings: BrokerSettings):
        """
        Initialize TokenBroker.

        Args:
            transaction_repository: Store for transactions, already
                namespaced with ``settings.cache_prefix``
            settings: Broker configuration
        """
        self.transaction_repo = transaction_repository
        self.settings = settings

    @property
    def default_ttl(self) -> int:
        return self.settings.default_ttl_seconds

    def register(self, path: str, access_key: str, ttl: Optional[int] = None) -> RegistrationResult:
        """
        Register a file and issue a token for it.

        Repeated slashes in the path are collapsed first, so equivalent
        spellings of a path share one token.

        Args:
            path: Path to the file on the server
            access_key: Secret required to retrieve the file later
            ttl: Token lifetime in seconds (default lifetime if not given)

        Returns:
            RegistrationResult with the token, or with INVALID_PATH /
            UNKNOWN errors when nothing was stored
        """
        path = _REPEATED_SLASHES.sub("/", path)
        return self._persist(Transaction.for_path(path, access_key), ttl)

    def pre_authorize(self, identifier: str, access_key: str, ttl: Optional[int] = None) -> RegistrationResult:
        """
        Register an opaque resource identifier and issue a token for it.

        The identifier is not checked; it must identify the resource
        uniquely across the whole system.
        """
        return self._persist(Transaction.for_resource(identifier, access_key), ttl)

    def retrieve(self, token: str, access_key: str) -> RetrievalResult:
        """
        Fetch a transaction and check the access key.

        Args:
            token: Token returned at registration
            access_key: Access key given at registration

        Returns:
            RetrievalResult; rejected with DOCUMENT_EXPIRED,
            INVALID_STORED_TYPE or INVALID_ACCESS_KEY

        Raises:
            TransactionStoreError: If the store cannot be reached
        """
        transaction, is_miss = self.transaction_repo.get(token)

        if is_miss:
            # A corrupt entry can be reported as a miss; make sure it is gone
            self.transaction_repo.invalidate(token)
            return RetrievalResult(Transaction.placeholder(
                ErrorRecord(ErrorCode.DOCUMENT_EXPIRED, "Document hash expired / missing.")
            ))

        if not isinstance(transaction, Transaction):
            return RetrievalResult(Transaction.placeholder(
                ErrorRecord(ErrorCode.INVALID_STORED_TYPE, "Given hash doesn't match a transaction.")
            ))

        if not transaction.is_access_key_valid(access_key):
            transaction.add_error(
                ErrorRecord(ErrorCode.INVALID_ACCESS_KEY, "Invalid access key provided for given document hash.")
            )

        return RetrievalResult(transaction)

    def check_authorization(self, token: str, access_key: str) -> bool:
        """Check whether the token and access key would be granted."""
        return self.retrieve(token, access_key).granted

    def invalidate_transaction(self, token: str, access_key: str) -> RetrievalResult:
        """
        Delete a stored transaction, provided the access key matches.

        Args:
            token: Token returned at registration
            access_key: Access key given at registration

        Returns:
            The retrieval result; the entry is deleted only when granted
        """
        result = self.retrieve(token, access_key)
        if result.granted:
            self.transaction_repo.invalidate(token)
        return result

    def _persist(self, transaction: Transaction, ttl: Optional[int]) -> RegistrationResult:
        if not transaction.is_processable():
            return RegistrationResult.create_failure(transaction)

        ttl_seconds = ttl or self.default_ttl
        if ttl_seconds < 0:
            transaction.add_error(ErrorRecord(ErrorCode.UNKNOWN, f"TTL must be positive, got {ttl_seconds}."))
            return RegistrationResult.create_failure(transaction)

        token = transaction.derive_token(self.settings.hash_salt)

        if not self.transaction_repo.put(token, transaction, ttl_seconds):
            transaction.add_error(ErrorRecord(ErrorCode.UNKNOWN, "Unable to store transaction in cache."))
            return RegistrationResult.create_failure(transaction)

        return RegistrationResult.create_success(transaction, ttl_seconds)
