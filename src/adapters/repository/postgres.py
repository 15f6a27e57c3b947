"""
PostgreSQL repository adapter - Implements AccountStore protocol.

This module provides the PostgreSQL implementation of the domain's
store port using psycopg3 with raw SQL.

Uniqueness Design:
------------------
create_if_absent() is one statement:

    INSERT ... ON CONFLICT (email) DO NOTHING RETURNING ...

The UNIQUE constraint on accounts.email decides the winner between
concurrent inserts. A returned row means Created; no row means the email
was already present. There is no SELECT before the INSERT.

Timeouts:
---------
The caller's timeout bounds both the pool checkout and the statement
(via statement_timeout, scoped to the transaction). Any psycopg error,
including PoolTimeout, is raised as StoreUnavailable.
"""

import logging
import uuid
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

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

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = "id, email, name, password_hash, created_at"


class PostgresAccountStore:
    """
    Implements AccountStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (normalize_email(email),))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise StoreUnavailable("Account lookup failed") from e

        return _to_account(row) if row is not None else None

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
            timeout: Maximum seconds for pool checkout and the INSERT

        Returns:
            Created(account) on insert, EmailTaken(email) on conflict

        Raises:
            StoreUnavailable: On any database error or timeout
        """
        email = normalize_email(payload.email)
        sql = f"""
            INSERT INTO accounts (id, email, name, password_hash, created_at)
            VALUES (%s, %s, %s, %s, NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_ACCOUNT_COLUMNS}
        """

        try:
            with self._pool.connection(timeout=timeout) as conn, conn.cursor() as cursor:
                if timeout is not None:
                    cursor.execute(
                        "SELECT set_config('statement_timeout', %s, true)",
                        (str(int(timeout * 1000)),),
                    )
                cursor.execute(
                    sql, (str(uuid.uuid4()), email, payload.name.strip(), password_hash)
                )
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise StoreUnavailable("Account insert failed") from e

        if row is None:
            return EmailTaken(email=email)
        return Created(account=_to_account(row))

    def stats(self) -> StoreStats:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("SELECT COUNT(*) FROM accounts")
                (count,) = cursor.fetchone()
        except psycopg.Error as e:
            raise StoreUnavailable("Account count failed") from e

        return StoreStats(total_accounts=count)


def _to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        email=row[1],
        name=row[2],
        password_hash=row[3],
        created_at=row[4],
    )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
