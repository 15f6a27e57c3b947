"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration validation-and-uniqueness
pipeline. It defines its own port interface for persistence, ensuring
the HTTP and database adapters stay outside the domain.
"""

from .exceptions import RegistrationError, StoreUnavailable
from .models import (
    Account,
    Created,
    CreateResult,
    EmailTaken,
    FieldError,
    RegistrationOutcome,
    RegistrationPayload,
    StorageError,
    StoreStats,
    ValidationFailed,
    ValidationResult,
    normalize_email,
)
from .ports import AccountStore
from .registration import RegistrationService
from .validation import validate_registration

__all__ = [
    "Account",
    "AccountStore",
    "CreateResult",
    "Created",
    "EmailTaken",
    "FieldError",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationPayload",
    "RegistrationService",
    "StorageError",
    "StoreStats",
    "StoreUnavailable",
    "ValidationFailed",
    "ValidationResult",
    "normalize_email",
    "validate_registration",
]
