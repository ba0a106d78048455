"""Shared pytest fixtures and test helpers for settlectl tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from settlectl.config.settings import SettleSettings
from settlectl.infrastructure.database.engine import init_database
from settlectl.infrastructure.ledger import Ledger
from settlectl.infrastructure.seed import load_fixture

FIXED_NOW = datetime(2020, 8, 20, 12, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SettleSettings:
    """Settings rooted at a temp directory with no config file in play."""
    monkeypatch.delenv("SETTLECTL_CONFIG", raising=False)
    return SettleSettings.from_cli(root=tmp_path, config_path=str(tmp_path / "none.toml"))


@pytest.fixture
def ledger(settings: SettleSettings) -> Generator[Ledger]:
    """Fully initialized, empty ledger on a temp database."""
    lg = Ledger(settings)
    try:
        yield lg
    finally:
        lg.close()


@pytest.fixture
def _isolated_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_db")`` on command test
    classes.
    """
    monkeypatch.delenv("SETTLECTL_CONFIG", raising=False)
    monkeypatch.delenv("SETTLECTL_PROFILE", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Fixture builders (used across service and command test modules)
# ---------------------------------------------------------------------------


def client(
    id: int,
    balance: str | int = "0",
    *,
    profession: str = "Engineer",
    first_name: str | None = None,
    last_name: str = "Client",
) -> dict[str, Any]:
    return {
        "id": id,
        "first_name": first_name or f"Client{id}",
        "last_name": last_name,
        "profession": profession,
        "balance": str(balance),
        "role": "client",
    }


def contractor(
    id: int,
    balance: str | int = "0",
    *,
    profession: str = "Programmer",
) -> dict[str, Any]:
    return {
        "id": id,
        "first_name": f"Contractor{id}",
        "last_name": "Worker",
        "profession": profession,
        "balance": str(balance),
        "role": "contractor",
    }


def contract(
    id: int,
    client_id: int,
    contractor_id: int,
    *,
    status: str = "in_progress",
) -> dict[str, Any]:
    return {
        "id": id,
        "terms": f"terms of contract {id}",
        "status": status,
        "client_id": client_id,
        "contractor_id": contractor_id,
    }


def job(
    id: int,
    contract_id: int,
    price: str | int,
    *,
    paid: bool = False,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    created = created_at or datetime(2020, 8, 15, 10, 0, tzinfo=UTC)
    return {
        "id": id,
        "description": f"job {id}",
        "price": str(price),
        "contract_id": contract_id,
        "paid": paid,
        "payment_date": created.isoformat() if paid else None,
        "created_at": created.isoformat(),
    }


def seed(
    ledger: Ledger,
    *,
    profiles: list[dict[str, Any]],
    contracts: list[dict[str, Any]] | None = None,
    jobs: list[dict[str, Any]] | None = None,
) -> None:
    """Insert fixture rows, asserting the loader accepted them."""
    load_fixture(
        ledger.engine,
        {"profiles": profiles, "contracts": contracts or [], "jobs": jobs or []},
        now=FIXED_NOW,
    )


def balance_of(ledger: Ledger, account_id: int) -> Decimal:
    account = ledger.get_account(account_id)
    assert account is not None
    return account.balance


def standard_fixture() -> dict[str, list[dict[str, Any]]]:
    """A small marketplace: two clients, three contractors, mixed jobs."""
    return {
        "profiles": [
            client(1, "1150", first_name="Harry", last_name="Potter", profession="Wizard"),
            client(2, "231.11", first_name="Mr", last_name="Robot", profession="Hacker"),
            contractor(5, "64", profession="Musician"),
            contractor(6, "1214", profession="Programmer"),
            contractor(7, "22", profession="Programmer"),
        ],
        "contracts": [
            contract(1, 1, 5, status="terminated"),
            contract(2, 1, 6),
            contract(3, 2, 6),
            contract(4, 2, 7, status="new"),
        ],
        "jobs": [
            job(1, 1, 200),
            job(2, 2, 201),
            job(3, 3, 202),
            job(4, 4, 200),
            job(5, 2, 150, paid=True),
            job(6, 3, 300, paid=True),
            job(7, 1, 21, paid=True),
        ],
    }


@pytest.fixture
def market(ledger: Ledger) -> Ledger:
    """Ledger loaded with :func:`standard_fixture`."""
    seed(ledger, **standard_fixture())
    return ledger


@pytest.fixture
def seeded_db(tmp_path: Path, cli_runner: CliRunner, _isolated_db: None) -> Path:
    """Run ``settlectl init --seed`` on :func:`standard_fixture` in the temp CWD."""
    from settlectl.cli import cli

    fixture_path = tmp_path / "market.json"
    fixture_path.write_text(json.dumps(standard_fixture()), encoding="utf-8")
    result = cli_runner.invoke(cli, ["init", "--seed", str(fixture_path)])
    assert result.exit_code == 0, result.output
    return tmp_path / ".settlectl" / "settlectl.db"
