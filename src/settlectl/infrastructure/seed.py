"""Fixture loader for profiles, contracts, and jobs.

Accounts, contracts, and jobs are created outside the settlement engine.
This loader is that outside: it validates a JSON document and inserts
its rows in one transaction, so a bad fixture leaves the database
untouched.

Fixture shape::

    {
      "profiles":  [{"id": 1, "first_name": "Harry", "last_name": "Potter",
                     "profession": "Wizard", "balance": "1150", "role": "client"}],
      "contracts": [{"id": 1, "terms": "...", "status": "in_progress",
                     "client_id": 1, "contractor_id": 5}],
      "jobs":      [{"id": 1, "description": "work", "price": "200",
                     "contract_id": 1, "paid": true,
                     "payment_date": "2020-08-15T19:11:26",
                     "created_at": "2020-08-10T19:11:26"}]
    }
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, model_validator
from sqlalchemy import insert

from settlectl.domain.money import to_cents
from settlectl.domain.types import ContractStatus, Role
from settlectl.infrastructure.database.schema import contracts, jobs, profiles
from settlectl.infrastructure.ledger import to_db_time

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class ProfileSeed(BaseModel):
    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Decimal = Field(default=Decimal(0), ge=0)
    role: Role


class ContractSeed(BaseModel):
    id: int
    terms: str
    status: ContractStatus = ContractStatus.NEW
    client_id: int
    contractor_id: int


class JobSeed(BaseModel):
    id: int
    description: str
    price: Decimal = Field(gt=0)
    contract_id: int
    paid: bool = False
    payment_date: datetime | None = None
    created_at: datetime | None = None

    @model_validator(mode="after")
    def _payment_date_iff_paid(self) -> JobSeed:
        if self.paid != (self.payment_date is not None):
            msg = f"Job {self.id}: payment_date must be set exactly when paid is true"
            raise ValueError(msg)
        return self


class SeedFixture(BaseModel):
    profiles: list[ProfileSeed] = Field(default_factory=list)
    contracts: list[ContractSeed] = Field(default_factory=list)
    jobs: list[JobSeed] = Field(default_factory=list)

    @model_validator(mode="after")
    def _contract_parties_have_roles(self) -> SeedFixture:
        roles = {p.id: p.role for p in self.profiles}
        for c in self.contracts:
            if roles.get(c.client_id) is not Role.CLIENT:
                msg = f"Contract {c.id}: profile {c.client_id} is not a client"
                raise ValueError(msg)
            if roles.get(c.contractor_id) is not Role.CONTRACTOR:
                msg = f"Contract {c.id}: profile {c.contractor_id} is not a contractor"
                raise ValueError(msg)
        return self


def load_fixture(engine: Engine, data: dict[str, Any], *, now: datetime) -> dict[str, int]:
    """Validate *data* and insert every row in a single transaction.

    Jobs without ``created_at`` are stamped with *now*.

    Returns:
        Row counts per table.

    Raises:
        pydantic.ValidationError: If the fixture is malformed.
    """
    fixture = SeedFixture.model_validate(data)
    stamp = to_db_time(now)

    with engine.begin() as conn:
        if fixture.profiles:
            conn.execute(
                insert(profiles),
                [
                    {
                        "id": p.id,
                        "first_name": p.first_name,
                        "last_name": p.last_name,
                        "profession": p.profession,
                        "balance": to_cents(p.balance),
                        "role": str(p.role),
                        "created_at": stamp,
                        "updated_at": stamp,
                    }
                    for p in fixture.profiles
                ],
            )
        if fixture.contracts:
            conn.execute(
                insert(contracts),
                [
                    {
                        "id": c.id,
                        "terms": c.terms,
                        "status": str(c.status),
                        "client_id": c.client_id,
                        "contractor_id": c.contractor_id,
                        "created_at": stamp,
                        "updated_at": stamp,
                    }
                    for c in fixture.contracts
                ],
            )
        if fixture.jobs:
            conn.execute(
                insert(jobs),
                [
                    {
                        "id": j.id,
                        "description": j.description,
                        "price": to_cents(j.price),
                        "contract_id": j.contract_id,
                        "paid": j.paid,
                        "payment_date": to_db_time(j.payment_date) if j.payment_date else None,
                        "created_at": to_db_time(j.created_at) if j.created_at else stamp,
                        "updated_at": stamp,
                    }
                    for j in fixture.jobs
                ],
            )

    return {
        "profiles": len(fixture.profiles),
        "contracts": len(fixture.contracts),
        "jobs": len(fixture.jobs),
    }


def load_fixture_file(engine: Engine, path: Path, *, now: datetime) -> dict[str, int]:
    """Read a JSON fixture from *path* and load it via :func:`load_fixture`."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return load_fixture(engine, data, now=now)
