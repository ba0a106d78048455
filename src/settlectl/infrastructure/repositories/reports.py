"""Read-only repository for windowed payment aggregates."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select, true
from sqlalchemy.engine import Engine

from settlectl.infrastructure.database.schema import contracts, jobs, profiles
from settlectl.infrastructure.ledger import to_db_time


class ReportRepository:
    """Encapsulates SQL for grouped, date-bounded payment totals.

    Every query filters paid jobs whose ``created_at`` falls in the
    half-open window ``[start, end)`` and returns plain dicts with the
    summed price in cents under ``paid_cents``.

    Groups are ordered by discovery, meaning the smallest job id that
    contributed to the group, so ties break the same way on every run.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def profession_totals(self, start: datetime, end: datetime) -> list[dict[str, Any]]:
        """Paid totals per contractor profession, in discovery order."""
        contractor = profiles.alias("contractor")
        paid_cents = func.sum(jobs.c.price).label("paid_cents")
        first_seen = func.min(jobs.c.id).label("first_seen")
        stmt = (
            select(contractor.c.profession, paid_cents, first_seen)
            .select_from(
                jobs.join(contracts, jobs.c.contract_id == contracts.c.id).join(
                    contractor, contracts.c.contractor_id == contractor.c.id
                )
            )
            .where(*self._window(start, end))
            .group_by(contractor.c.profession)
            .order_by(first_seen)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [dict(row) for row in rows]

    def client_totals(
        self,
        start: datetime,
        end: datetime,
        *,
        limit: int,
    ) -> list[dict[str, Any]]:
        """Top *limit* clients by paid total, ties in discovery order."""
        client = profiles.alias("client")
        paid_cents = func.sum(jobs.c.price).label("paid_cents")
        first_seen = func.min(jobs.c.id).label("first_seen")
        stmt = (
            select(
                client.c.id,
                client.c.first_name,
                client.c.last_name,
                client.c.profession,
                paid_cents,
                first_seen,
            )
            .select_from(
                jobs.join(contracts, jobs.c.contract_id == contracts.c.id).join(
                    client, contracts.c.client_id == client.c.id
                )
            )
            .where(*self._window(start, end))
            .group_by(client.c.id, client.c.first_name, client.c.last_name, client.c.profession)
            .order_by(paid_cents.desc(), first_seen)
            .limit(limit)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [dict(row) for row in rows]

    @staticmethod
    def _window(start: datetime, end: datetime) -> list[Any]:
        return [
            jobs.c.paid == true(),
            jobs.c.created_at >= to_db_time(start),
            jobs.c.created_at < to_db_time(end),
        ]
