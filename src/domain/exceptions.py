"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
infrastructure failures without leaking adapter details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class StoreUnavailable(RegistrationError):
    """Account store failed, was unreachable, or timed out."""

    pass
