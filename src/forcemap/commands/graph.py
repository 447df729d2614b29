"""Command group: neighborhood queries and graph summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from forcemap.commands._base import ForcemapGroup
from forcemap.services.graph import GraphService

if TYPE_CHECKING:
    from forcemap.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  forcemap graph neighborhood svc1
  forcemap graph groups
  forcemap graph groups --center table1
  forcemap graph summary --top 5"""


@click.group(cls=ForcemapGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Query the dependency graph."""


@graph.command(
    examples="""\
  forcemap graph neighborhood svc1
  forcemap --json graph neighborhood table4
  forcemap -q graph neighborhood web8"""
)
@click.argument("node_id", required=False, default="")
@click.pass_obj
def neighborhood(app: AppContext, node_id: str) -> None:
    """Show NODE_ID and its direct neighbors (full graph when omitted)."""
    app.emit(GraphService(app.store, app.settings).neighborhood(node_id))


@graph.command(
    examples="""\
  forcemap graph groups
  forcemap graph groups --center svc2"""
)
@click.option("--center", default="", help="Restrict to the neighborhood of this node.")
@click.pass_obj
def groups(app: AppContext, center: str) -> None:
    """List node ids per group."""
    app.emit(GraphService(app.store, app.settings).groups(center))


@graph.command(
    examples="""\
  forcemap graph summary
  forcemap --json graph summary --top 3"""
)
@click.option("--top", default=10, type=click.IntRange(min=0), help="Number of hubs to list.")
@click.pass_obj
def summary(app: AppContext, top: int) -> None:
    """Counts, connectivity, and highest-degree nodes."""
    app.emit(GraphService(app.store, app.settings).summary(top=top))
