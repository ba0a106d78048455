"""QueryService — caller-scoped contract and job lookups.

Read-only surfaces for the account holder's own agreements:
- get_contract: one contract the caller is party to
- list_contracts: the caller's non-terminated contracts
- unpaid_jobs: unpaid jobs on the caller's in-progress contracts
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from settlectl.domain.money import from_cents, to_cents
from settlectl.services._helpers import is_row_id
from settlectl.services.base import BaseService
from settlectl.services.contracts import (
    ContractItem,
    ContractListData,
    UnpaidJobsData,
    dump_validated,
)
from settlectl.services.result import ServiceResult
from settlectl.services.telemetry import traced

if TYPE_CHECKING:
    from settlectl.domain.types import Account, Contract


class QueryService(BaseService):
    """Handles contract and job retrieval for a resolved caller."""

    def _caller(self, caller_id: int) -> Account | None:
        if not is_row_id(caller_id):
            return None
        return self._ledger.get_account(caller_id)

    @traced
    def get_contract(self, caller_id: int, contract_id: int) -> ServiceResult:
        op = "get_contract"
        caller = self._caller(caller_id)
        if caller is None:
            return _unknown_caller(op)

        contract = (
            self._ledger.get_contract_for(contract_id, caller.id)
            if is_row_id(contract_id)
            else None
        )
        if contract is None:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"No contract found with ID: {contract_id}"
            )
        return ServiceResult(
            ok=True, op=op, data=dump_validated(ContractItem, _contract_dict(contract))
        )

    @traced
    def list_contracts(self, caller_id: int) -> ServiceResult:
        op = "list_contracts"
        caller = self._caller(caller_id)
        if caller is None:
            return _unknown_caller(op)

        items = [_contract_dict(c) for c in self._ledger.list_active_contracts(caller)]
        if not items:
            return ServiceResult.failure(op, "NOT_FOUND", "No active contracts.")
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ContractListData, {"count": len(items), "items": items}),
        )

    @traced
    def unpaid_jobs(self, caller_id: int) -> ServiceResult:
        op = "unpaid_jobs"
        caller = self._caller(caller_id)
        if caller is None:
            return _unknown_caller(op)

        items = _unpaid_items(self._ledger.list_unpaid_jobs(caller))
        if not items:
            return ServiceResult.failure(op, "NOT_FOUND", "No unpaid jobs on active contracts.")

        total = from_cents(sum(to_cents(item["price"]) for item in items))
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                UnpaidJobsData, {"count": len(items), "total": total, "items": items}
            ),
        )


def _unknown_caller(op: str) -> ServiceResult:
    return ServiceResult.failure(op, "UNAUTHORIZED", "Unknown profile.")


def _contract_dict(contract: Contract) -> dict[str, Any]:
    return {
        "id": contract.id,
        "terms": contract.terms,
        "status": str(contract.status),
        "client_id": contract.client_id,
        "contractor_id": contract.contractor_id,
        "created_at": contract.created_at,
        "updated_at": contract.updated_at,
    }


def _unpaid_items(pairs: list[tuple[Any, Contract]]) -> list[dict[str, Any]]:
    return [
        {
            "id": job.id,
            "description": job.description,
            "price": job.price,
            "contract_id": contract.id,
            "client_id": contract.client_id,
            "contractor_id": contract.contractor_id,
        }
        for job, contract in pairs
    ]

