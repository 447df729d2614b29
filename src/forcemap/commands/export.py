"""Command: export a settled layout as JSON or SVG."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from forcemap.commands._base import ForcemapCommand
from forcemap.services.export import ExportFormat, ExportService

if TYPE_CHECKING:
    from forcemap.commands._context import AppContext


@click.command(
    cls=ForcemapCommand,
    examples="""\
  forcemap export svg --output graph.svg
  forcemap export json --center svc1
  forcemap export svg --center table4 --seed 3 -o table4.svg""",
)
@click.argument("fmt", metavar="FORMAT", type=click.Choice([f.value for f in ExportFormat]))
@click.option("--center", default="", help="Export only the neighborhood of this node.")
@click.option("--seed", type=int, default=None, help="Seed for deterministic placement.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.pass_obj
def export(
    app: AppContext, fmt: str, center: str, seed: int | None, output: Path | None
) -> None:
    """Export the settled layout in FORMAT (json or svg)."""
    app.emit(
        ExportService(app.store, app.settings).export_layout(
            fmt, center, seed=seed, output=output
        )
    )
