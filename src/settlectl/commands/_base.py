"""Custom Click base classes and shared options.

SettleCommand and SettleGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits.
"""

from __future__ import annotations

from typing import Any

import click

from settlectl.services._helpers import MAX_ROW_ID


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class SettleCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class SettleGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = SettleCommand`` so subcommands accept
    ``examples`` without an explicit ``cls=``.
    """

    command_class = SettleCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# Row ids must fit a signed 64-bit SQLite INTEGER.
ROW_ID = click.IntRange(1, MAX_ROW_ID)

# The caller's resolved account id (stands in for request authentication).
profile_option = click.option(
    "-p",
    "--profile",
    "profile_id",
    type=ROW_ID,
    required=True,
    envvar="SETTLECTL_PROFILE",
    help="Acting profile id (or SETTLECTL_PROFILE).",
)
