"""ReportingService — windowed rankings of money moved.

Two read-only surfaces using ``engine.connect()`` (no write lock):

- best_profession: contractor profession with the highest paid volume
- top_clients: clients ranked by paid volume

Windows are half-open calendar-date ranges ``[start, end)`` applied to
the job creation time, so adjacent windows never count a job twice.
Reports may lag a payment committed a moment earlier.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from settlectl.domain.money import from_cents
from settlectl.infrastructure.repositories.reports import ReportRepository
from settlectl.services._helpers import MAX_ROW_ID, day_start
from settlectl.services.base import BaseService
from settlectl.services.contracts import ProfessionTotal, TopClientsData, dump_validated
from settlectl.services.result import ServiceResult
from settlectl.services.telemetry import traced

DEFAULT_TOP_CLIENTS = 2


class ReportingService(BaseService):
    """Aggregate payment reports over a date window."""

    @property
    def _repo(self) -> ReportRepository:
        return ReportRepository(self._ledger.engine)

    # ------------------------------------------------------------------
    # best_profession
    # ------------------------------------------------------------------

    @traced
    def best_profession(self, start: date, end: date) -> ServiceResult:
        """The profession whose contractors earned the most in the window.

        Ties go to the profession seen first (lowest contributing job id).
        """
        op = "best_profession"
        invalid = _check_range(op, start, end)
        if invalid is not None:
            return invalid

        groups = self._repo.profession_totals(day_start(start), day_start(end))
        if not groups:
            return _no_data(op, start, end)

        best = groups[0]
        for group in groups[1:]:
            if group["paid_cents"] > best["paid_cents"]:
                best = group

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ProfessionTotal,
                {
                    "start": start,
                    "end": end,
                    "profession": best["profession"],
                    "paid_amount": from_cents(best["paid_cents"]),
                },
            ),
        )

    # ------------------------------------------------------------------
    # top_clients
    # ------------------------------------------------------------------

    @traced
    def top_clients(
        self,
        start: date,
        end: date,
        limit: int | None = None,
    ) -> ServiceResult:
        """Clients who paid the most in the window, highest first.

        Args:
            start: First day of the window (inclusive).
            end: Day after the window (exclusive).
            limit: Maximum entries; defaults to two.
        """
        op = "top_clients"
        if limit is None:
            limit = DEFAULT_TOP_CLIENTS
        invalid = _check_range(op, start, end)
        if invalid is not None:
            return invalid
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_ROW_ID:
            return ServiceResult.failure(
                op, "INVALID_LIMIT", f"Limit must be a positive integer, got {limit!r}."
            )

        rows = self._repo.client_totals(day_start(start), day_start(end), limit=limit)
        if not rows:
            return _no_data(op, start, end)

        items: list[dict[str, Any]] = [
            {
                "id": row["id"],
                "first_name": row["first_name"],
                "last_name": row["last_name"],
                "profession": row["profession"],
                "paid_amount": from_cents(row["paid_cents"]),
            }
            for row in rows
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                TopClientsData,
                {"start": start, "end": end, "limit": limit, "count": len(items), "items": items},
            ),
        )


def _check_range(op: str, start: Any, end: Any) -> ServiceResult | None:
    """Reject anything but two calendar dates with ``start < end``."""
    # datetime subclasses date; a time component would blur the window edges.
    if (
        not isinstance(start, date)
        or not isinstance(end, date)
        or isinstance(start, datetime)
        or isinstance(end, datetime)
    ):
        return ServiceResult.failure(
            op, "INVALID_RANGE", "Start and end must be calendar dates."
        )
    if start >= end:
        return ServiceResult.failure(
            op,
            "INVALID_RANGE",
            "Start date should be earlier than end date.",
            start=start.isoformat(),
            end=end.isoformat(),
        )
    return None


def _no_data(op: str, start: date, end: date) -> ServiceResult:
    return ServiceResult.failure(
        op,
        "NO_DATA",
        "No paid jobs found in this date range.",
        start=start.isoformat(),
        end=end.isoformat(),
    )
