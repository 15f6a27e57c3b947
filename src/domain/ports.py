"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interface (port) that the domain requires
from persistence. Adapters implement this protocol.
"""

from typing import Protocol

from .models import Account, CreateResult, RegistrationPayload, StoreStats


class AccountStore(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Account | None:
        """
        Look up an account by email.

        The email is normalized (stripped, lowercased) before lookup.
        Pure read, safe to call concurrently with any other operation.

        Args:
            email: Email address as supplied by the caller

        Returns:
            The matching Account, or None if absent

        Raises:
            StoreUnavailable: If the backend cannot be reached
        """
        ...

    def create_if_absent(
        self,
        payload: RegistrationPayload,
        password_hash: str,
        timeout: float | None = None,
    ) -> CreateResult:
        """
        Atomically create an account unless the email is already taken.

        The check and the insert are indivisible: of two concurrent calls
        with the same normalized email, exactly one returns Created and
        the other returns EmailTaken.

        Args:
            payload: Validated registration payload
            password_hash: bcrypt hash of the payload password
            timeout: Maximum seconds to wait for the backend (None = no bound)

        Returns:
            Created(account) on insert, EmailTaken(email) on conflict

        Raises:
            StoreUnavailable: On backend failure or timeout
        """
        ...

    def stats(self) -> StoreStats:
        """Return aggregate statistics. Never mutates state."""
        ...
