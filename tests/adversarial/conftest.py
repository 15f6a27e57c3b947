"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests.
"""

import pytest

from src.adapters.repository.memory import InMemoryAccountStore
from src.domain.registration import RegistrationService

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def store() -> InMemoryAccountStore:
    """Fresh store for each test."""
    return InMemoryAccountStore()


@pytest.fixture
def service(store: InMemoryAccountStore) -> RegistrationService:
    """Registration service with minimum bcrypt cost for fast concurrent runs."""
    return RegistrationService(store=store, bcrypt_cost=4, store_timeout=10.0)
