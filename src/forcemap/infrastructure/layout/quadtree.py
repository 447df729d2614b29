"""Quadtree over simulation nodes for Barnes–Hut many-body approximation.

Each leaf holds one point, or several points that share exact coordinates.
After :meth:`QuadTree.accumulate`, every quad carries the summed charge of
its subtree and the charge-weighted centre of that charge.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forcemap.infrastructure.layout.forces import SimNode

# Points closer than size / 2**_MAX_DEPTH share a leaf.
_MAX_DEPTH = 32


class Quad:
    __slots__ = ("x0", "y0", "x1", "y1", "children", "points", "cx", "cy", "strength")

    def __init__(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.children: list[Quad | None] | None = None
        self.points: list[SimNode] = []
        self.cx = 0.0
        self.cy = 0.0
        self.strength = 0.0

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def child_for(self, x: float, y: float) -> Quad:
        """Return (creating if needed) the child quadrant containing ``(x, y)``."""
        assert self.children is not None
        mx = (self.x0 + self.x1) / 2
        my = (self.y0 + self.y1) / 2
        right = x >= mx
        bottom = y >= my
        index = int(right) | (int(bottom) << 1)
        child = self.children[index]
        if child is None:
            child = Quad(
                mx if right else self.x0,
                my if bottom else self.y0,
                self.x1 if right else mx,
                self.y1 if bottom else my,
            )
            self.children[index] = child
        return child


class QuadTree:
    """Square quadtree covering the bounding box of *nodes*."""

    def __init__(self, nodes: Iterable[SimNode]) -> None:
        points = list(nodes)
        if points:
            x0 = min(p.x for p in points)
            y0 = min(p.y for p in points)
            size = max(max(p.x for p in points) - x0, max(p.y for p in points) - y0) or 1.0
        else:
            x0 = y0 = 0.0
            size = 1.0
        self.root = Quad(x0, y0, x0 + size, y0 + size)
        for point in points:
            self._insert(point)

    def _insert(self, node: SimNode) -> None:
        quad = self.root
        depth = 0
        while True:
            if quad.children is None:
                if (
                    not quad.points
                    or depth >= _MAX_DEPTH
                    or (quad.points[0].x == node.x and quad.points[0].y == node.y)
                ):
                    quad.points.append(node)
                    return
                occupants = quad.points
                quad.points = []
                quad.children = [None, None, None, None]
                quad.child_for(occupants[0].x, occupants[0].y).points = occupants
            quad = quad.child_for(node.x, node.y)
            depth += 1

    def quads(self) -> list[Quad]:
        """All quads in pre-order (parents before children)."""
        order: list[Quad] = []
        stack = [self.root]
        while stack:
            quad = stack.pop()
            order.append(quad)
            if quad.children is not None:
                stack.extend(c for c in quad.children if c is not None)
        return order

    def accumulate(self, strength_of: Callable[[SimNode], float]) -> None:
        """Compute aggregate charge and centre of charge bottom-up."""
        for quad in reversed(self.quads()):
            if quad.children is None:
                quad.strength = sum(strength_of(p) for p in quad.points)
                if quad.points:
                    quad.cx = quad.points[0].x
                    quad.cy = quad.points[0].y
                continue
            total = weight = wx = wy = 0.0
            for child in quad.children:
                if child is None:
                    continue
                c = abs(child.strength)
                total += child.strength
                weight += c
                wx += c * child.cx
                wy += c * child.cy
            quad.strength = total
            if weight:
                quad.cx = wx / weight
                quad.cy = wy / weight

    def visit(self, callback: Callable[[Quad], bool]) -> None:
        """Pre-order traversal; *callback* returns True to skip a quad's children."""
        stack = [self.root]
        while stack:
            quad = stack.pop()
            if callback(quad) or quad.children is None:
                continue
            stack.extend(c for c in quad.children if c is not None)
