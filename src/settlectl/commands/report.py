"""Command group: windowed payment reports."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import click

from settlectl.commands._base import SettleGroup
from settlectl.services._helpers import MAX_ROW_ID
from settlectl.services.reporting import ReportingService

if TYPE_CHECKING:
    from settlectl.commands._context import AppContext

_REPORT_EXAMPLES = """\
  settlectl report best-profession --start 08-01-2020 --end 08-31-2020
  settlectl report best-clients --start 08-01-2020 --end 08-31-2020 --limit 3"""


class _WindowDate(click.ParamType):
    """Calendar date parsed with the configured ``[reports] date_format``."""

    name = "date"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        fmt = "%m-%d-%Y"
        app = ctx.obj if ctx is not None else None
        if app is not None and hasattr(app, "settings"):
            fmt = app.settings.reports.date_format
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            self.fail(f"{value!r} does not match date format {fmt!r}", param, ctx)


WINDOW_DATE = _WindowDate()


def _window_options(func: Any) -> Any:
    func = click.option(
        "--end", type=WINDOW_DATE, required=True, help="Window end (exclusive)."
    )(func)
    func = click.option(
        "--start", type=WINDOW_DATE, required=True, help="Window start (inclusive)."
    )(func)
    return func


@click.group(cls=SettleGroup, examples=_REPORT_EXAMPLES)
@click.pass_obj
def report(app: AppContext) -> None:
    """Rank professions and clients by money paid in a date window."""


@report.command(
    "best-profession",
    examples="""\
  settlectl report best-profession --start 08-01-2020 --end 08-31-2020""",
)
@_window_options
@click.pass_obj
def best_profession(app: AppContext, start: Any, end: Any) -> None:
    """The contractor profession that earned the most in the window."""
    app.emit(ReportingService(app.ledger).best_profession(start, end))


@report.command(
    "best-clients",
    examples="""\
  settlectl report best-clients --start 08-01-2020 --end 08-31-2020
  settlectl --json report best-clients --start 08-01-2020 --end 09-01-2020 --limit 5""",
)
@_window_options
@click.option(
    "--limit",
    type=click.IntRange(max=MAX_ROW_ID),
    default=None,
    help="Max clients (default from config).",
)
@click.pass_obj
def best_clients(app: AppContext, start: Any, end: Any, limit: int | None) -> None:
    """Clients who paid the most in the window."""
    if limit is None:
        limit = app.settings.reports.default_limit
    app.emit(ReportingService(app.ledger).top_clients(start, end, limit))
