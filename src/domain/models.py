"""
Domain models - Value types for the registration pipeline.

This module defines the immutable data passed between the validator,
the registration service and the account store, together with the
tagged union of registration outcomes.

Outcome Variants
================

Every call to RegistrationService.register() produces exactly one of:

- Created(account): account persisted
- ValidationFailed(errors): payload rejected, store never touched
- EmailTaken(email): another account already owns the email
- StorageError(cause): backend failure or timeout

Callers dispatch on the variant type (e.g. with a match statement).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RegistrationPayload:
    """Caller-supplied registration data. Request-scoped."""

    email: str = ""
    name: str = ""
    password: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "RegistrationPayload":
        """
        Build a payload from a decoded request body.

        Missing keys and None values become empty strings so the
        validator reports them as required instead of crashing.
        """
        data = data or {}
        return cls(
            email=as_text(data.get("email")),
            name=as_text(data.get("name")),
            password=as_text(data.get("password")),
        )


def as_text(value: Any) -> str:
    """Coerce a loosely-typed field value to text. None becomes ""."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class FieldError:
    """A validation failure attributed to one input field."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Ordered field errors for one payload. Valid iff there are none."""

    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class Account:
    """Persisted account. Created once per unique email, never mutated."""

    id: str
    email: str
    name: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class StoreStats:
    """Aggregate store statistics exposed by the health endpoint."""

    total_accounts: int


@dataclass(frozen=True)
class Created:
    account: Account


@dataclass(frozen=True)
class ValidationFailed:
    errors: tuple[FieldError, ...]


@dataclass(frozen=True)
class EmailTaken:
    email: str


@dataclass(frozen=True)
class StorageError:
    cause: BaseException


CreateResult = Created | EmailTaken
RegistrationOutcome = Created | ValidationFailed | EmailTaken | StorageError


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()
