"""
Registration domain service - Validation and uniqueness pipeline.

This module turns an untrusted registration payload into exactly one
RegistrationOutcome.

Per-Request State Machine
=========================

    Received -> Validating -> Rejected (validation)
                           -> Persisting -> Created
                                         -> Rejected (duplicate)
                                         -> Failed (storage)

The store is never touched when validation fails. Uniqueness is decided
by the store's atomic create_if_absent(); there is no separate lookup
before the insert. Storage failures are returned, not retried.
"""

import logging
from dataclasses import dataclass

import bcrypt

from .models import (
    Created,
    EmailTaken,
    RegistrationOutcome,
    RegistrationPayload,
    StorageError,
    ValidationFailed,
)
from .ports import AccountStore
from .validation import validate_registration

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: field validation, password
    hashing and atomic account creation.
    """

    store: AccountStore
    bcrypt_cost: int = 10
    store_timeout: float | None = None

    def register(self, payload: RegistrationPayload) -> RegistrationOutcome:
        """
        Register a new account.

        Args:
            payload: Registration data (email, name, password)

        Returns:
            Created, ValidationFailed, EmailTaken or StorageError
        """
        result = validate_registration(payload)
        if not result.is_valid:
            return ValidationFailed(errors=result.errors)

        password_hash = self._hash_password(payload.password)

        try:
            outcome = self.store.create_if_absent(
                payload, password_hash, timeout=self.store_timeout
            )
        except Exception as exc:
            return StorageError(cause=exc)

        if isinstance(outcome, EmailTaken):
            logger.info("Registration rejected, email already in use: %s", outcome.email)
        elif isinstance(outcome, Created):
            logger.info("Account created: %s", outcome.account.id)
        return outcome

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        secret = password.encode()[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
