"""DepositService — credit a client's balance within the deposit quota.

A client may deposit at most a quarter of what they currently owe on
unpaid jobs. The unpaid total is recomputed inside the deposit
transaction on every call, so back-to-back deposits each see the ceiling
as it stands at that moment.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from sqlalchemy.exc import SQLAlchemyError

from settlectl.domain.money import deposit_cap, exceeds_deposit_cap, from_cents, to_cents
from settlectl.infrastructure.ledger import LedgerConflict
from settlectl.services._helpers import is_row_id
from settlectl.services.base import BaseService
from settlectl.services.contracts import DepositData, dump_validated
from settlectl.services.result import ServiceResult
from settlectl.services.telemetry import traced

log = structlog.get_logger(__name__)


class DepositService(BaseService):
    """Validates and applies client deposits."""

    @traced
    def deposit(
        self,
        caller_id: int,
        amount: Decimal | int | float | str | None,
    ) -> ServiceResult:
        """Deposit *amount* into the balance of client *caller_id*.

        Unlike payments, every rejection here is reported with its own
        code: ``UNAUTHORIZED``, ``INVALID_AMOUNT``,
        ``NO_OUTSTANDING_BALANCE``, ``DEPOSIT_LIMIT_EXCEEDED``, and
        ``TRANSACTION_FAILED`` for a store failure.
        """
        op = "deposit"

        try:
            with self._ledger.transaction() as txn:
                caller = txn.get_account(caller_id) if is_row_id(caller_id) else None
                if caller is None or not caller.is_client:
                    return ServiceResult.failure(
                        op,
                        "UNAUTHORIZED",
                        "Only clients are allowed to authorise deposits.",
                    )

                if amount is None:
                    return ServiceResult.failure(
                        op, "INVALID_AMOUNT", "Deposit amount not mentioned."
                    )
                try:
                    amount_cents = to_cents(amount)
                except ValueError as exc:
                    return ServiceResult.failure(op, "INVALID_AMOUNT", str(exc))
                if amount_cents <= 0:
                    return ServiceResult.failure(
                        op,
                        "INVALID_AMOUNT",
                        "Deposit amount must be positive.",
                        deposit_amount=from_cents(amount_cents),
                    )

                unpaid_cents = txn.unpaid_total(caller_id)
                if unpaid_cents <= 0:
                    return ServiceResult.failure(
                        op,
                        "NO_OUTSTANDING_BALANCE",
                        "No unpaid jobs.",
                        client_id=caller_id,
                    )

                if exceeds_deposit_cap(amount_cents, unpaid_cents):
                    return ServiceResult.failure(
                        op,
                        "DEPOSIT_LIMIT_EXCEEDED",
                        "Can't deposit more than 25% of your unpaid balance.",
                        client_id=caller_id,
                        deposit_amount=from_cents(amount_cents),
                        total_unpaid=from_cents(unpaid_cents),
                        cap=deposit_cap(unpaid_cents),
                    )

                old_cents = txn.balance_cents(caller_id)
                txn.credit(caller_id, amount_cents)
                new_cents = txn.balance_cents(caller_id)
        except (SQLAlchemyError, LedgerConflict) as exc:
            log.warning("deposit.failed", client_id=caller_id, error=str(exc))
            return ServiceResult.failure(
                op,
                "TRANSACTION_FAILED",
                "Deposit could not be completed; balance unchanged.",
                client_id=caller_id,
            )

        log.info(
            "deposit.committed",
            client_id=caller_id,
            amount=from_cents(amount_cents),
            new_balance=from_cents(new_cents),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                DepositData,
                {
                    "client_id": caller_id,
                    "deposit_amount": from_cents(amount_cents),
                    "old_balance": from_cents(old_cents),
                    "new_balance": from_cents(new_cents),
                    "total_unpaid": from_cents(unpaid_cents),
                    "message": "Amount deposited.",
                },
            ),
        )
