"""
Shared pytest fixtures and configuration for the Secure Download test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Broker settings, in-memory repository and broker fixtures
- Sample files on disk
"""

import pytest

# Hypothesis configuration
from hypothesis import settings, HealthCheck

from secure_download.domain.transactions.services import TokenBroker
from secure_download.domain.transactions.value_objects import BrokerSettings
from tests.fixtures.mock_repositories import InMemoryTransactionRepository

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")


# =============================================================================
# Broker Fixtures
# =============================================================================

@pytest.fixture
def broker_settings() -> BrokerSettings:
    """Provide broker settings with a short default TTL."""
    return BrokerSettings(
        cache_prefix="test_secure_download",
        default_ttl_seconds=300,
        hash_salt="test-salt",
    )


@pytest.fixture
def transaction_repository() -> InMemoryTransactionRepository:
    """Provide an empty in-memory transaction repository."""
    return InMemoryTransactionRepository()


@pytest.fixture
def token_broker(transaction_repository, broker_settings) -> TokenBroker:
    """Provide a TokenBroker over the in-memory repository."""
    return TokenBroker(transaction_repository, broker_settings)


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def sample_file(tmp_path) -> str:
    """Provide a small PDF-named file on disk."""
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4 test content")
    return str(path)


@pytest.fixture
def missing_file(tmp_path) -> str:
    """Provide a path that does not exist."""
    return str(tmp_path / "nonexistent" / "file.pdf")
