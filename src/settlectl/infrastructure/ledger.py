"""Ledger — repository pattern over accounts, contracts, and jobs.

The Ledger is the single dependency injected into every service. It owns
the database engine and offers two kinds of access:

- **Reads**: point lookups and unpaid-job sums on a short-lived
  connection (deferred ``BEGIN``, no write lock).
- **Writes**: :meth:`Ledger.transaction` yields a
  :class:`LedgerTransaction` on a connection that opened with
  ``BEGIN IMMEDIATE``. Every balance change and job flip goes through it;
  SQLAlchemy commits on normal exit and rolls back on any exception.

Guarded writes (``debit`` and ``mark_job_paid``) raise
:class:`LedgerConflict` when their ``WHERE`` guard matches no row, which
aborts the enclosing transaction.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, func, or_, select, update

from settlectl.domain.money import from_cents
from settlectl.domain.types import Account, Contract, ContractStatus, Job, PayableJob
from settlectl.infrastructure.database.engine import init_database
from settlectl.infrastructure.database.schema import contracts, jobs, profiles

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

    from settlectl.config.settings import SettleSettings

logger = logging.getLogger(__name__)


class LedgerConflict(RuntimeError):
    """A guarded write matched no row; the transaction must not commit."""


def to_db_time(moment: datetime) -> datetime:
    """Normalize *moment* to the naive UTC form stored in the database."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.replace(tzinfo=None)


def from_db_time(value: datetime | None) -> datetime | None:
    """Attach UTC to a naive timestamp read back from the database."""
    if value is None:
        return None
    return value.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Row conversion
# ---------------------------------------------------------------------------


def _account_from_row(row: Row[Any]) -> Account:
    return Account(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        profession=row.profession,
        balance=from_cents(row.balance),
        role=row.role,
    )


def _contract_from_row(row: Row[Any]) -> Contract:
    return Contract(
        id=row.id,
        terms=row.terms,
        status=row.status,
        client_id=row.client_id,
        contractor_id=row.contractor_id,
        created_at=from_db_time(row.created_at),
        updated_at=from_db_time(row.updated_at),
    )


def _job_from_row(row: Row[Any]) -> Job:
    return Job(
        id=row.id,
        description=row.description,
        price=from_cents(row.price),
        paid=bool(row.paid),
        payment_date=from_db_time(row.payment_date),
        contract_id=row.contract_id,
        created_at=from_db_time(row.created_at),
    )


# ---------------------------------------------------------------------------
# Shared statements (used on both read connections and transactions)
# ---------------------------------------------------------------------------


def _select_account(conn: Connection, account_id: int) -> Account | None:
    row = conn.execute(select(profiles).where(profiles.c.id == account_id)).first()
    return _account_from_row(row) if row is not None else None


def _select_payable_job(conn: Connection, job_id: int, client_id: int) -> PayableJob | None:
    stmt = (
        select(
            jobs,
            contracts.c.client_id,
            contracts.c.contractor_id,
        )
        .join(contracts, jobs.c.contract_id == contracts.c.id)
        .where(
            jobs.c.id == job_id,
            jobs.c.paid == false(),
            contracts.c.client_id == client_id,
        )
    )
    row = conn.execute(stmt).first()
    if row is None:
        return None
    return PayableJob(
        job=_job_from_row(row),
        contract_id=row.contract_id,
        client_id=row.client_id,
        contractor_id=row.contractor_id,
    )


def _select_unpaid_total(conn: Connection, client_id: int) -> int:
    stmt = (
        select(func.coalesce(func.sum(jobs.c.price), 0))
        .select_from(jobs.join(contracts, jobs.c.contract_id == contracts.c.id))
        .where(jobs.c.paid == false(), contracts.c.client_id == client_id)
    )
    return int(conn.execute(stmt).scalar_one())


# ---------------------------------------------------------------------------
# LedgerTransaction — yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class LedgerTransaction:
    """Active write transaction over the ledger tables.

    Reads inside the transaction see the locked, current state. Balance
    amounts are integer cents.
    """

    conn: Connection

    def get_account(self, account_id: int) -> Account | None:
        return _select_account(self.conn, account_id)

    def balance_cents(self, account_id: int) -> int:
        """Current balance in cents for an account known to exist."""
        return int(
            self.conn.execute(
                select(profiles.c.balance).where(profiles.c.id == account_id)
            ).scalar_one()
        )

    def find_payable_job(self, job_id: int, client_id: int) -> PayableJob | None:
        return _select_payable_job(self.conn, job_id, client_id)

    def unpaid_total(self, client_id: int) -> int:
        return _select_unpaid_total(self.conn, client_id)

    def debit(self, account_id: int, cents: int) -> None:
        """Decrement a balance, refusing to take it below zero."""
        result = self.conn.execute(
            update(profiles)
            .where(profiles.c.id == account_id, profiles.c.balance >= cents)
            .values(balance=profiles.c.balance - cents, updated_at=to_db_time(_now()))
        )
        if result.rowcount != 1:
            msg = f"Debit of {cents} cents from account {account_id} matched no row"
            raise LedgerConflict(msg)

    def credit(self, account_id: int, cents: int) -> None:
        """Increment a balance in a single atomic update."""
        result = self.conn.execute(
            update(profiles)
            .where(profiles.c.id == account_id)
            .values(balance=profiles.c.balance + cents, updated_at=to_db_time(_now()))
        )
        if result.rowcount != 1:
            msg = f"Credit of {cents} cents to account {account_id} matched no row"
            raise LedgerConflict(msg)

    def mark_job_paid(self, job_id: int, paid_at: datetime) -> None:
        """Flip a job from unpaid to paid (compare-and-set on ``paid``)."""
        stamp = to_db_time(paid_at)
        result = self.conn.execute(
            update(jobs)
            .where(jobs.c.id == job_id, jobs.c.paid == false())
            .values(paid=True, payment_date=stamp, updated_at=stamp)
        )
        if result.rowcount != 1:
            msg = f"Job {job_id} was already paid or disappeared"
            raise LedgerConflict(msg)


def _now() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Ledger — the repository
# ---------------------------------------------------------------------------


class Ledger:
    """Repository encapsulating all access to the settlement database.

    Constructed once at CLI startup from :class:`SettleSettings` and
    stored on the click context. Services receive the Ledger via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: SettleSettings) -> None:
        self._engine: Engine = init_database(
            settings.db_path,
            busy_timeout=settings.database.busy_timeout_seconds,
        )

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Read-side lookups
    # ------------------------------------------------------------------

    def get_account(self, account_id: int) -> Account | None:
        """Resolve an account id to its profile, or None if unknown."""
        with self._engine.connect() as conn:
            return _select_account(conn, account_id)

    def get_job(self, job_id: int) -> Job | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(jobs).where(jobs.c.id == job_id)).first()
        return _job_from_row(row) if row is not None else None

    def get_contract_for(self, contract_id: int, account_id: int) -> Contract | None:
        """Fetch a contract only if *account_id* is one of its parties."""
        stmt = select(contracts).where(
            contracts.c.id == contract_id,
            or_(contracts.c.client_id == account_id, contracts.c.contractor_id == account_id),
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _contract_from_row(row) if row is not None else None

    def list_active_contracts(self, account: Account) -> list[Contract]:
        """Non-terminated contracts on the account's side of the agreement."""
        party_col = contracts.c.client_id if account.is_client else contracts.c.contractor_id
        stmt = (
            select(contracts)
            .where(
                party_col == account.id,
                contracts.c.status != ContractStatus.TERMINATED.value,
            )
            .order_by(contracts.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_contract_from_row(r) for r in rows]

    def list_unpaid_jobs(self, account: Account) -> list[tuple[Job, Contract]]:
        """Unpaid jobs of in-progress contracts on the account's side."""
        party_col = contracts.c.client_id if account.is_client else contracts.c.contractor_id
        contract_cols = [c.label(f"c_{c.name}") for c in contracts.c]
        stmt = (
            select(jobs, *contract_cols)
            .join(contracts, jobs.c.contract_id == contracts.c.id)
            .where(
                and_(
                    jobs.c.paid == false(),
                    party_col == account.id,
                    contracts.c.status == ContractStatus.IN_PROGRESS.value,
                )
            )
            .order_by(jobs.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()

        pairs: list[tuple[Job, Contract]] = []
        for row in rows:
            contract = Contract(
                id=row.contract_id,
                terms=row.c_terms,
                status=row.c_status,
                client_id=row.c_client_id,
                contractor_id=row.c_contractor_id,
                created_at=from_db_time(row.c_created_at),
                updated_at=from_db_time(row.c_updated_at),
            )
            pairs.append((_job_from_row(row), contract))
        return pairs

    def unpaid_total(self, client_id: int) -> int:
        """Sum of unpaid job prices (cents) across the client's contracts."""
        with self._engine.connect() as conn:
            return _select_unpaid_total(conn, client_id)

    # ------------------------------------------------------------------
    # Write transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[LedgerTransaction]:
        """Scoped write transaction opened with ``BEGIN IMMEDIATE``.

        Commits when the block exits normally and rolls back when it
        raises. Returning early from the block (a validation failure)
        commits an empty transaction.

        Usage::

            with ledger.transaction() as txn:
                txn.debit(client_id, cents)
                txn.credit(contractor_id, cents)
                txn.mark_job_paid(job_id, paid_at)
        """
        writer = self._engine.execution_options(sqlite_begin="IMMEDIATE")
        with writer.begin() as conn:
            try:
                yield LedgerTransaction(conn=conn)
            except BaseException:
                logger.debug("Ledger transaction rolled back", exc_info=True)
                raise
