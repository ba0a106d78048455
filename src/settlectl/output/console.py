"""Rich Console factory and theme for settlectl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SETTLE_THEME = Theme(
    {
        "settle.ok": "bold green",
        "settle.error": "bold red",
        "settle.op": "bold cyan",
        "settle.key": "dim",
        "settle.id": "bold blue",
        "settle.money": "bold magenta",
        "settle.status.new": "cyan",
        "settle.status.in_progress": "yellow",
        "settle.status.terminated": "dim",
    }
)

MONEY_KEYS = frozenset(
    {
        "amount",
        "paid_amount",
        "price",
        "total",
        "deposit_amount",
        "old_balance",
        "new_balance",
        "total_unpaid",
        "job_price",
        "client_balance",
        "cap",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SETTLE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a contract status."""
    return f"settle.status.{status}" if status in ("new", "in_progress", "terminated") else ""
