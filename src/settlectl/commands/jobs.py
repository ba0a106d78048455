"""Command group: jobs on the acting profile's contracts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from settlectl.commands._base import SettleGroup, profile_option
from settlectl.services.query import QueryService

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext


@click.group(
    cls=SettleGroup,
    examples="""\
  settlectl jobs unpaid -p 1
  settlectl --json jobs unpaid -p 6""",
)
@click.pass_obj
def jobs(app: AppContext) -> None:
    """Inspect jobs."""


@jobs.command()
@profile_option
@click.pass_obj
def unpaid(app: AppContext, profile_id: int) -> None:
    """Unpaid jobs on in-progress contracts."""
    app.emit(QueryService(app.ledger).unpaid_jobs(profile_id))
