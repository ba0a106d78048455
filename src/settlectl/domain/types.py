"""Typed entities for accounts, contracts, and jobs.

Rows loaded by the infrastructure layer are converted into these frozen
models before they reach service logic, so no service ever reads a raw
column by name from a result row.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class Role(StrEnum):
    """Account holder class."""

    CLIENT = "client"
    CONTRACTOR = "contractor"


class ContractStatus(StrEnum):
    """Contract lifecycle states (transitions are managed outside the engine)."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class Account(BaseModel):
    """A client or contractor profile with its funds balance."""

    model_config = {"frozen": True}

    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Decimal = Field(ge=0)
    role: Role

    @property
    def is_client(self) -> bool:
        return self.role is Role.CLIENT


class Contract(BaseModel):
    """Agreement linking one client account to one contractor account."""

    model_config = {"frozen": True}

    id: int
    terms: str
    status: ContractStatus
    client_id: int
    contractor_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Job(BaseModel):
    """A unit of billable work under a contract."""

    model_config = {"frozen": True}

    id: int
    description: str
    price: Decimal = Field(gt=0)
    paid: bool = False
    payment_date: datetime | None = None
    contract_id: int
    created_at: datetime | None = None


class PayableJob(BaseModel):
    """An unpaid job joined with the two parties of its contract."""

    model_config = {"frozen": True}

    job: Job
    contract_id: int
    client_id: int
    contractor_id: int
