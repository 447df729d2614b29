"""Command: run the force layout and print settled positions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from forcemap.commands._base import ForcemapCommand
from forcemap.services.layout import LayoutService

if TYPE_CHECKING:
    from forcemap.commands._context import AppContext


@click.command(
    cls=ForcemapCommand,
    examples="""\
  forcemap layout
  forcemap layout --center svc1 --seed 7
  forcemap layout --steps 50
  forcemap layout --center svc2 --pin svc2 0 0
  forcemap --json layout --center table1""",
)
@click.option("--center", default="", help="Lay out only the neighborhood of this node.")
@click.option("--steps", type=click.IntRange(min=0), default=None, help="Step budget.")
@click.option("--seed", type=int, default=None, help="Seed for deterministic placement.")
@click.option(
    "--pin",
    "pins",
    type=(str, float, float),
    multiple=True,
    metavar="ID X Y",
    help="Fix a node at X Y (repeatable).",
)
@click.pass_obj
def layout(
    app: AppContext,
    center: str,
    steps: int | None,
    seed: int | None,
    pins: tuple[tuple[str, float, float], ...],
) -> None:
    """Simulate until the layout settles and print node positions."""
    app.emit(
        LayoutService(app.store, app.settings).compute(center, steps=steps, seed=seed, pins=pins)
    )
