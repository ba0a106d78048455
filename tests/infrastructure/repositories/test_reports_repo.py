"""Tests for ReportRepository — grouped, windowed payment totals."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from settlectl.infrastructure.ledger import Ledger
from settlectl.infrastructure.repositories.reports import ReportRepository
from tests.conftest import client, contract, contractor, job, seed

START = datetime(2020, 8, 1, tzinfo=UTC)
END = datetime(2020, 9, 1, tzinfo=UTC)


@pytest.fixture
def repo(ledger: Ledger) -> ReportRepository:
    seed(
        ledger,
        profiles=[
            client(1, first_name="Ann"),
            client(2, first_name="Bob"),
            contractor(3, profession="Painter"),
            contractor(4, profession="Roofer"),
        ],
        contracts=[contract(1, 1, 3), contract(2, 2, 4), contract(3, 2, 3)],
        jobs=[
            job(1, 2, 30, paid=True, created_at=datetime(2020, 8, 2, tzinfo=UTC)),
            job(2, 1, 20, paid=True, created_at=datetime(2020, 8, 3, tzinfo=UTC)),
            job(3, 3, 10, paid=True, created_at=datetime(2020, 8, 31, 23, 59, tzinfo=UTC)),
            job(4, 1, 500, paid=True, created_at=END),
            job(5, 1, 700, created_at=datetime(2020, 8, 5, tzinfo=UTC)),
        ],
    )
    return ReportRepository(ledger.engine)


class TestProfessionTotals:
    def test_grouped_in_discovery_order(self, repo: ReportRepository) -> None:
        assert repo.profession_totals(START, END) == [
            {"profession": "Roofer", "paid_cents": 3000, "first_seen": 1},
            {"profession": "Painter", "paid_cents": 3000, "first_seen": 2},
        ]

    def test_empty_window(self, repo: ReportRepository) -> None:
        assert repo.profession_totals(END.replace(year=2021), END.replace(year=2022)) == []


class TestClientTotals:
    def test_ranked_with_limit(self, repo: ReportRepository) -> None:
        rows = repo.client_totals(START, END, limit=1)
        assert len(rows) == 1
        assert rows[0]["first_name"] == "Bob"
        assert rows[0]["paid_cents"] == 4000

    def test_all_clients(self, repo: ReportRepository) -> None:
        rows = repo.client_totals(START, END, limit=10)
        assert [(r["id"], r["paid_cents"]) for r in rows] == [(2, 4000), (1, 2000)]

    def test_end_bound_excluded(self, repo: ReportRepository) -> None:
        rows = repo.client_totals(END, END.replace(month=10), limit=10)
        assert [(r["id"], r["paid_cents"]) for r in rows] == [(1, 50000)]
