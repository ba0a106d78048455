"""Command: pay for a job (client only)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from settlectl.commands._base import ROW_ID, SettleCommand, profile_option

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext


@click.command(
    cls=SettleCommand,
    examples="""\
  settlectl pay 7 -p 1
  SETTLECTL_PROFILE=1 settlectl --json pay 7""",
)
@click.argument("job_id", type=ROW_ID)
@profile_option
@click.pass_obj
def pay(app: AppContext, job_id: int, profile_id: int) -> None:
    """Pay JOB_ID from the acting client's balance to the contractor."""
    from settlectl.services.settlement import SettlementService

    app.emit(SettlementService(app.ledger).pay_job(profile_id, job_id))
