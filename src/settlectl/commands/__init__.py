"""Subcommand modules for settlectl.

Provides register_commands() which uses deferred imports to keep
``settlectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from settlectl.commands.contracts import contracts
    from settlectl.commands.jobs import jobs
    from settlectl.commands.report import report

    cli.add_command(contracts)
    cli.add_command(jobs)
    cli.add_command(report)

    # --- Standalone commands ---
    from settlectl.commands.deposit import deposit
    from settlectl.commands.init_cmd import init_cmd
    from settlectl.commands.pay import pay

    cli.add_command(init_cmd)
    cli.add_command(pay)
    cli.add_command(deposit)
