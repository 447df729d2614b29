"""Subcommand modules for forcemap.

register_commands() imports command modules lazily to keep ``--help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach the ``graph`` group and the ``layout``/``export`` commands."""
    from forcemap.commands.export import export
    from forcemap.commands.graph import graph
    from forcemap.commands.layout import layout

    cli.add_command(graph)
    cli.add_command(layout)
    cli.add_command(export)
