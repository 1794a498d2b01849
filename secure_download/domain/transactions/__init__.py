"""
Transactions Domain

Handles transaction tokens: registration, retrieval and invalidation.
"""

from .entities import OpaqueData, PathBacked, Transaction
from .repositories import TransactionRepository
from .results import RegistrationResult, RetrievalResult
from .services import TokenBroker
from .value_objects import BrokerSettings, InvalidBrokerSettingsError

__all__ = [
    "Transaction",
    "PathBacked",
    "OpaqueData",
    "TransactionRepository",
    "RegistrationResult",
    "RetrievalResult",
    "TokenBroker",
    "BrokerSettings",
    "InvalidBrokerSettingsError",
]
