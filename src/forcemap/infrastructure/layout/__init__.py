"""Force-directed layout: quadtree, forces, stepped simulation, drag input."""

from forcemap.infrastructure.layout.drag import DragController
from forcemap.infrastructure.layout.simulation import (
    EdgeSegment,
    ForceLayoutEngine,
    LayoutFrame,
    NodePosition,
    SimulationHandle,
)

__all__ = [
    "DragController",
    "EdgeSegment",
    "ForceLayoutEngine",
    "LayoutFrame",
    "NodePosition",
    "SimulationHandle",
]
