"""
In-memory repository adapter - Implements AccountStore protocol.

Reference store for development and tests. All state lives in two dicts
guarded by a single lock, which serializes writers so the email check
and the insert in create_if_absent() cannot interleave.
"""

import threading
import uuid
from datetime import datetime, timezone

from src.domain.exceptions import StoreUnavailable
from src.domain.models import (
    Account,
    Created,
    CreateResult,
    EmailTaken,
    RegistrationPayload,
    StoreStats,
    normalize_email,
)


class InMemoryAccountStore:
    """
    Implements AccountStore protocol with process-local dicts.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[str, Account] = {}
        self._email_index: dict[str, str] = {}

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._email_index.get(normalize_email(email))
            if account_id is None:
                return None
            return self._accounts.get(account_id)

    def create_if_absent(
        self,
        payload: RegistrationPayload,
        password_hash: str,
        timeout: float | None = None,
    ) -> CreateResult:
        """
        Atomically create an account unless the email is already taken.

        Args:
            payload: Validated registration payload
            password_hash: bcrypt hash of the payload password
            timeout: Maximum seconds to wait for the store lock

        Returns:
            Created(account) on insert, EmailTaken(email) on conflict

        Raises:
            StoreUnavailable: If the lock cannot be acquired within timeout
        """
        email = normalize_email(payload.email)

        # Lock.acquire() takes -1 for "wait forever"
        if not self._lock.acquire(timeout=-1 if timeout is None else timeout):
            raise StoreUnavailable(f"Timed out after {timeout}s waiting for account store")
        try:
            if email in self._email_index:
                return EmailTaken(email=email)

            account = Account(
                id=str(uuid.uuid4()),
                email=email,
                name=payload.name.strip(),
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._accounts[account.id] = account
            self._email_index[email] = account.id
            return Created(account=account)
        finally:
            self._lock.release()

    def stats(self) -> StoreStats:
        with self._lock:
            return StoreStats(total_accounts=len(self._accounts))
