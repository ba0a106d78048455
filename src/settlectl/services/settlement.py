"""SettlementService — pay a job by moving its price from client to contractor.

Pipeline: AUTHORIZE → LOCATE → FUND CHECK → TRANSFER → RESPOND

All four stages run inside one ``BEGIN IMMEDIATE`` transaction, so a
second payment of the same job waits for the first to commit and then
finds the job already paid. Validation failures return before any write.
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError

from settlectl.domain.money import from_cents, to_cents
from settlectl.infrastructure.ledger import LedgerConflict
from settlectl.services._helpers import is_row_id
from settlectl.services.base import BaseService
from settlectl.services.contracts import PaymentData, dump_validated
from settlectl.services.result import ServiceResult
from settlectl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class SettlementService(BaseService):
    """Settles a single job payment, all-or-nothing."""

    @traced
    def pay_job(self, caller_id: int, job_id: int) -> ServiceResult:
        """Pay *job_id* on behalf of the client *caller_id*.

        Failure codes, in the order they are checked:

        - ``UNAUTHORIZED``: caller unknown or not a client.
        - ``JOB_NOT_FOUND``: job absent, on another client's contract, or
          already paid. The three cases are indistinguishable on purpose.
        - ``INSUFFICIENT_FUNDS``: balance below the job price; detail
          carries the price and balance.
        - ``TRANSACTION_FAILED``: the store failed mid-transfer; nothing
          was committed.
        """
        op = "pay_job"
        context: dict[str, object] = {"job_id": job_id, "client_id": caller_id}

        try:
            with trace_span("settlement_transaction"), self._ledger.transaction() as txn:
                # ── AUTHORIZE ────────────────────────────────────────
                caller = txn.get_account(caller_id) if is_row_id(caller_id) else None
                if caller is None or not caller.is_client:
                    return ServiceResult.failure(
                        op,
                        "UNAUTHORIZED",
                        "Only clients are allowed to authorise payment.",
                    )

                # ── LOCATE ───────────────────────────────────────────
                payable = (
                    txn.find_payable_job(job_id, caller_id) if is_row_id(job_id) else None
                )
                if payable is None:
                    return ServiceResult.failure(
                        op, "JOB_NOT_FOUND", f"No unpaid job {job_id} found for this client."
                    )

                price_cents = to_cents(payable.job.price)
                balance_cents = txn.balance_cents(caller_id)
                context.update(
                    job_price=payable.job.price,
                    client_balance=from_cents(balance_cents),
                    contract_id=payable.contract_id,
                    contractor_id=payable.contractor_id,
                )

                # ── FUND CHECK ───────────────────────────────────────
                if balance_cents < price_cents:
                    return ServiceResult.failure(
                        op, "INSUFFICIENT_FUNDS", "Insufficient funds.", **context
                    )

                # ── TRANSFER ─────────────────────────────────────────
                paid_at = self._clock()
                txn.debit(caller_id, price_cents)
                txn.credit(payable.contractor_id, price_cents)
                txn.mark_job_paid(job_id, paid_at)
        except (SQLAlchemyError, LedgerConflict) as exc:
            log.warning("settlement.failed", error=str(exc), **context)
            return ServiceResult.failure(
                op,
                "TRANSACTION_FAILED",
                "Payment could not be completed; no funds were moved.",
                **context,
            )

        log.info(
            "settlement.committed",
            amount=payable.job.price,
            **context,
        )

        # ── RESPOND ──────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                PaymentData,
                {
                    "job_id": job_id,
                    "contract_id": payable.contract_id,
                    "contractor_id": payable.contractor_id,
                    "client_id": caller_id,
                    "amount": payable.job.price,
                    "paid_at": paid_at,
                    "message": "Paid successfully.",
                },
            ),
        )
