"""Tests for the JSON fixture loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from settlectl.infrastructure.database.schema import jobs, profiles
from settlectl.infrastructure.seed import load_fixture, load_fixture_file
from tests.conftest import FIXED_NOW, client, contract, contractor, job, standard_fixture


def _count(engine: Engine, table: Any) -> int:
    with engine.connect() as conn:
        return int(conn.execute(select(func.count()).select_from(table)).scalar_one())


class TestLoadFixture:
    def test_counts_returned(self, db_engine: Engine) -> None:
        counts = load_fixture(db_engine, standard_fixture(), now=FIXED_NOW)
        assert counts == {"profiles": 5, "contracts": 4, "jobs": 7}
        assert _count(db_engine, jobs) == 7

    def test_money_stored_as_cents(self, db_engine: Engine) -> None:
        load_fixture(db_engine, {"profiles": [client(1, "231.11")]}, now=FIXED_NOW)
        with db_engine.connect() as conn:
            assert conn.execute(select(profiles.c.balance)).scalar_one() == 23111

    def test_missing_created_at_stamped_with_now(self, db_engine: Engine) -> None:
        bare = job(1, 1, 10)
        del bare["created_at"]
        load_fixture(
            db_engine,
            {
                "profiles": [client(1), contractor(2)],
                "contracts": [contract(1, 1, 2)],
                "jobs": [bare],
            },
            now=FIXED_NOW,
        )
        with db_engine.connect() as conn:
            stamp = conn.execute(select(jobs.c.created_at)).scalar_one()
        assert stamp == FIXED_NOW.replace(tzinfo=None)

    def test_paid_without_date_rejected(self, db_engine: Engine) -> None:
        bad = job(1, 1, 10, paid=True)
        bad["payment_date"] = None
        with pytest.raises(ValidationError, match="payment_date"):
            load_fixture(db_engine, {"jobs": [bad]}, now=FIXED_NOW)

    def test_contract_party_roles_checked(self, db_engine: Engine) -> None:
        data = {"profiles": [client(1), client(2)], "contracts": [contract(1, 1, 2)]}
        with pytest.raises(ValidationError, match="not a contractor"):
            load_fixture(db_engine, data, now=FIXED_NOW)
        assert _count(db_engine, profiles) == 0

    def test_bad_row_leaves_database_untouched(self, db_engine: Engine) -> None:
        data = {"profiles": [client(1)], "contracts": [], "jobs": [job(1, 77, 10)]}
        with pytest.raises(IntegrityError):
            load_fixture(db_engine, data, now=FIXED_NOW)
        assert _count(db_engine, profiles) == 0


class TestLoadFixtureFile:
    def test_reads_json(self, db_engine: Engine, tmp_path: Path) -> None:
        path = tmp_path / "market.json"
        path.write_text(json.dumps(standard_fixture()), encoding="utf-8")
        assert load_fixture_file(db_engine, path, now=FIXED_NOW)["jobs"] == 7

    def test_malformed_json(self, db_engine: Engine, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_fixture_file(db_engine, path, now=FIXED_NOW)
