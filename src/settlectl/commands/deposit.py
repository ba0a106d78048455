"""Command: deposit funds into a client balance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from settlectl.commands._base import SettleCommand, profile_option

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext


@click.command(
    cls=SettleCommand,
    examples="""\
  settlectl deposit 25 -p 1
  settlectl --json deposit 12.50 -p 2""",
)
@click.argument("amount")
@profile_option
@click.pass_obj
def deposit(app: AppContext, amount: str, profile_id: int) -> None:
    """Deposit AMOUNT (at most 25% of what the client still owes)."""
    from settlectl.services.deposit import DepositService

    app.emit(DepositService(app.ledger).deposit(profile_id, amount))
