"""
Transaction Value Objects

Immutable value objects for type safety and validation.
"""

from dataclasses import dataclass


class InvalidBrokerSettingsError(ValueError):
    """Raised when broker settings are invalid."""
    pass


@dataclass(frozen=True)
class BrokerSettings:
    """
    Value object holding the token broker configuration.

    Attributes:
        cache_prefix: Namespace prepended to every stored token key
        default_ttl_seconds: Lifetime used when a registration gives none
        hash_salt: System-wide secret mixed into token derivation
    """
    cache_prefix: str
    default_ttl_seconds: int
    hash_salt: str

    def __post_init__(self):
        if not isinstance(self.cache_prefix, str) or not self.cache_prefix:
            raise InvalidBrokerSettingsError("cache_prefix must be a non-empty string")
        if isinstance(self.default_ttl_seconds, bool) or not isinstance(self.default_ttl_seconds, int):
            raise InvalidBrokerSettingsError(
                f"default_ttl_seconds must be an integer, got {self.default_ttl_seconds!r}"
            )
        if self.default_ttl_seconds <= 0:
            raise InvalidBrokerSettingsError(
                f"default_ttl_seconds must be positive, got {self.default_ttl_seconds}"
            )
        if not isinstance(self.hash_salt, str) or not self.hash_salt:
            raise InvalidBrokerSettingsError("hash_salt must be a non-empty string")
