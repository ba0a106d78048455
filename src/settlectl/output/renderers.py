"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from settlectl.output.console import MONEY_KEYS, create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from settlectl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_fields)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "settle.ok"), (f"  {result.op}", "settle.op")))


def _field(console: Console, key: str, value: Any) -> None:
    if key == "id" or key.endswith("_id"):
        style = "settle.id"
    elif key in MONEY_KEYS:
        style = "settle.money"
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "settle.key"), (str(value), style)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text.assemble(
            ("ERROR", "settle.error"),
            (f"  {result.op}{code}", "settle.op"),
            " - ",
            msg,
        )
    )
    # Funds and quota diagnostics are useful even without --verbose.
    if err and err.detail and (verbose or err.code in _ALWAYS_DETAIL):
        for key, value in err.detail.items():
            _field(console, key, value)


_ALWAYS_DETAIL = frozenset({"INSUFFICIENT_FUNDS", "DEPOSIT_LIMIT_EXCEEDED"})


# ── Operation renderers ───────────────────────────────────────────────


def _render_fields(result: ServiceResult, console: Console) -> None:
    """Generic key-value rendering (pay_job, deposit, best_profession, ...)."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_top_clients(result: ServiceResult, console: Console) -> None:
    d = result.data
    table = Table(
        title=f"Top clients {d['start']} to {d['end']}",
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    table.add_column("#", justify="right")
    table.add_column("ID", style="settle.id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Profession")
    table.add_column("Paid", style="settle.money", justify="right")
    for rank, item in enumerate(d.get("items", []), start=1):
        table.add_row(
            str(rank),
            str(item["id"]),
            Text(f"{item['first_name']} {item['last_name']}"),
            Text(str(item["profession"])),
            str(item["paid_amount"]),
        )
    console.print(table)


def _render_best_profession(result: ServiceResult, console: Console) -> None:
    d = result.data
    body = f"{escape(str(d['profession']))}\npaid: {d['paid_amount']}"
    console.print(
        Panel(body, title=f"Best profession {d['start']} to {d['end']}", expand=False)
    )


def _render_contract(result: ServiceResult, console: Console) -> None:
    d = result.data
    status = str(d.get("status", ""))
    lines = [
        f"status: [{style_for_status(status) or 'default'}]{status}[/]",
        f"client: {d.get('client_id')}",
        f"contractor: {d.get('contractor_id')}",
        "",
        escape(str(d.get("terms", ""))),
    ]
    console.print(Panel("\n".join(lines), title=f"Contract {d.get('id')}", expand=False))


def _render_contract_list(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="settle.id", no_wrap=True)
    table.add_column("Status")
    table.add_column("Client", justify="right")
    table.add_column("Contractor", justify="right")
    table.add_column("Terms")
    for item in result.data.get("items", []):
        status = str(item["status"])
        table.add_row(
            str(item["id"]),
            Text(status, style=style_for_status(status)),
            str(item["client_id"]),
            str(item["contractor_id"]),
            Text(str(item["terms"])),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} contracts")


def _render_unpaid_jobs(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="settle.id", no_wrap=True)
    table.add_column("Contract", justify="right")
    table.add_column("Description")
    table.add_column("Price", style="settle.money", justify="right")
    for item in result.data.get("items", []):
        table.add_row(
            str(item["id"]),
            str(item["contract_id"]),
            Text(str(item["description"])),
            str(item["price"]),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} jobs, {result.data.get('total')} outstanding")


_OP_RENDERERS: dict[str, Renderer] = {
    "best_profession": _render_best_profession,
    "top_clients": _render_top_clients,
    "get_contract": _render_contract,
    "list_contracts": _render_contract_list,
    "unpaid_jobs": _render_unpaid_jobs,
}
