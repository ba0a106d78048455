"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from settlectl.commands._base import SettleCommand
from settlectl.services.result import ServiceResult

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext

_INIT_EXAMPLES = """\
  settlectl init
  settlectl --db /tmp/ledger.db init --seed fixtures.json
  settlectl --json init --seed fixtures.json"""


@click.command("init", cls=SettleCommand, examples=_INIT_EXAMPLES)
@click.option(
    "--seed",
    "seed_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON fixture of profiles, contracts, and jobs to load.",
)
@click.pass_obj
def init_cmd(app: AppContext, seed_path: Path | None) -> None:
    """Create the settlement database, optionally loading a fixture."""
    from settlectl.infrastructure.seed import load_fixture_file
    from settlectl.services._helpers import utc_now

    ledger = app.ledger
    data: dict[str, object] = {"db_path": str(app.settings.db_path)}

    if seed_path is not None:
        try:
            counts = load_fixture_file(ledger.engine, seed_path, now=utc_now())
        except (json.JSONDecodeError, ValidationError, IntegrityError) as exc:
            app.emit(
                ServiceResult.failure(
                    "init", "INVALID_SEED", f"Could not load {seed_path}: {exc}"
                )
            )
            return
        data.update(counts)

    app.emit(ServiceResult(ok=True, op="init", data=data))
