"""Command group: the acting profile's contracts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from settlectl.commands._base import ROW_ID, SettleGroup, profile_option
from settlectl.services.query import QueryService

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext


@click.group(
    cls=SettleGroup,
    examples="""\
  settlectl contracts list -p 1
  settlectl contracts get 2 -p 1""",
)
@click.pass_obj
def contracts(app: AppContext) -> None:
    """Look up contracts the acting profile is party to."""


@contracts.command()
@click.argument("contract_id", type=ROW_ID)
@profile_option
@click.pass_obj
def get(app: AppContext, contract_id: int, profile_id: int) -> None:
    """Show CONTRACT_ID if the acting profile is its client or contractor."""
    app.emit(QueryService(app.ledger).get_contract(profile_id, contract_id))


@contracts.command(name="list")
@profile_option
@click.pass_obj
def list_cmd(app: AppContext, profile_id: int) -> None:
    """List non-terminated contracts."""
    app.emit(QueryService(app.ledger).list_contracts(profile_id))
