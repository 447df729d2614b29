"""Graph model — nodes, edges, and immutable graph snapshots.

A :class:`GraphSnapshot` is a complete graph at a point in time. It is
validated once at construction: node ids must be unique and every edge
endpoint must resolve to a node of the same snapshot. Simulation state
(positions, velocities) never lives here; it belongs to the layout engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator


class Node(BaseModel):
    """A graph entity with identity and an ordinal display group."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    group: int = 0


class Edge(BaseModel):
    """An undirected connection between two node ids.

    ``weight`` is a visual thickness hint only; it never enters the physics.
    Datasets spell it ``value``.
    """

    model_config = {"frozen": True}

    source: str
    target: str
    weight: float = Field(default=1.0, gt=0, validation_alias=AliasChoices("weight", "value"))

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


class GraphSnapshot(BaseModel):
    """Immutable node/edge sequences with referential integrity.

    Node order carries no physical meaning but is kept stable so that
    renderers and tests see a deterministic sequence.
    """

    model_config = {"frozen": True}

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @model_validator(mode="after")
    def _check_integrity(self) -> GraphSnapshot:
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                msg = f"Duplicate node id '{node.id}'"
                raise ValueError(msg)
            seen.add(node.id)
        for index, edge in enumerate(self.edges):
            for endpoint in (edge.source, edge.target):
                if endpoint not in seen:
                    msg = (
                        f"Edge {index} ({edge.source} -> {edge.target}) "
                        f"references unknown node '{endpoint}'"
                    )
                    raise ValueError(msg)
        return self

    @classmethod
    def from_dataset(cls, data: dict[str, Any]) -> GraphSnapshot:
        """Build a snapshot from the ``{"nodes": [...], "links": [...]}`` shape."""
        return cls.model_validate(
            {"nodes": data.get("nodes", []), "edges": data.get("links", [])}
        )

    def to_dataset(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dataset`."""
        return {
            "nodes": [{"id": n.id, "group": n.group} for n in self.nodes],
            "links": [
                {"source": e.source, "target": e.target, "value": e.weight} for e in self.edges
            ],
        }

    @property
    def is_empty(self) -> bool:
        return not self.nodes
