"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints usage examples and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _attach_examples(cmd: click.Command, examples: str) -> None:
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


class ForcemapCommand(click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            _attach_examples(self, examples)


class ForcemapGroup(click.Group):
    """Group whose subcommands are :class:`ForcemapCommand` by default."""

    command_class = ForcemapCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            _attach_examples(self, examples)
