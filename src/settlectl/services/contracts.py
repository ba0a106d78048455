"""Typed payload contracts for service results.

These models validate the ``data`` payload shape before it leaves the
service layer, so a renamed key fails in tests rather than in a caller.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class PaymentData(BaseModel):
    """Payload contract for ``SettlementService.pay_job``."""

    job_id: int
    contract_id: int
    contractor_id: int
    client_id: int
    amount: Decimal
    paid_at: datetime
    message: str


class DepositData(BaseModel):
    """Payload contract for ``DepositService.deposit``."""

    client_id: int
    deposit_amount: Decimal
    old_balance: Decimal
    new_balance: Decimal
    total_unpaid: Decimal
    message: str


class ProfessionTotal(BaseModel):
    """Payload contract for ``ReportingService.best_profession``."""

    start: date
    end: date
    profession: str
    paid_amount: Decimal


class ClientTotal(BaseModel):
    """One ranked client in ``ReportingService.top_clients``."""

    id: int
    first_name: str
    last_name: str
    profession: str
    paid_amount: Decimal


class TopClientsData(BaseModel):
    """Payload contract for ``ReportingService.top_clients``."""

    start: date
    end: date
    limit: int
    count: int
    items: list[ClientTotal]


class ContractItem(BaseModel):
    """One contract row."""

    model_config = ConfigDict(extra="allow")

    id: int
    terms: str
    status: str
    client_id: int
    contractor_id: int


class ContractListData(BaseModel):
    """Payload contract for ``QueryService.list_contracts``."""

    count: int
    items: list[ContractItem]


class UnpaidJobItem(BaseModel):
    """One unpaid job with its contract."""

    id: int
    description: str
    price: Decimal
    contract_id: int
    client_id: int
    contractor_id: int


class UnpaidJobsData(BaseModel):
    """Payload contract for ``QueryService.unpaid_jobs``."""

    count: int
    total: Decimal
    items: list[UnpaidJobItem]
