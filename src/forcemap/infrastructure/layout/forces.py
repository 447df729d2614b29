"""Forces for the layout simulation.

Every force follows the same two-phase protocol: ``initialize`` once per
bound snapshot, then ``apply(alpha)`` once per step. Forces accumulate into
node velocities (link, many-body) or shift positions directly (center);
the simulation integrates velocities afterwards.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from forcemap.infrastructure.layout.quadtree import Quad, QuadTree


@dataclass(slots=True)
class SimNode:
    """Mutable per-node simulation state."""

    id: str
    index: int
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    fx: float | None = None
    fy: float | None = None


type Link = tuple[SimNode, SimNode]


def jiggle(rng: random.Random) -> float:
    """Tiny random offset that separates coincident points."""
    return (rng.random() - 0.5) * 1e-6


class Force(Protocol):
    def initialize(
        self, nodes: Sequence[SimNode], links: Sequence[Link], rng: random.Random
    ) -> None: ...

    def apply(self, alpha: float) -> None: ...


class LinkForce:
    """Spring along each edge toward ``distance``.

    Strength is ``1 / min(degree(source), degree(target))`` so hubs are not
    yanked by every neighbour; the correction is split by degree so the
    better-connected endpoint moves less.
    """

    def __init__(self, *, distance: float = 30.0, iterations: int = 1) -> None:
        self.distance = distance
        self.iterations = iterations
        self._links: list[Link] = []
        self._strengths: list[float] = []
        self._bias: list[float] = []
        self._rng = random.Random()

    def initialize(
        self, nodes: Sequence[SimNode], links: Sequence[Link], rng: random.Random
    ) -> None:
        self._rng = rng
        self._links = list(links)
        count = [0] * len(nodes)
        for source, target in self._links:
            count[source.index] += 1
            count[target.index] += 1
        self._strengths = [
            1 / min(count[s.index], count[t.index]) for s, t in self._links
        ]
        self._bias = [
            count[s.index] / (count[s.index] + count[t.index]) for s, t in self._links
        ]

    def apply(self, alpha: float) -> None:
        for _ in range(self.iterations):
            for (source, target), strength, bias in zip(
                self._links, self._strengths, self._bias, strict=True
            ):
                x = target.x + target.vx - source.x - source.vx or jiggle(self._rng)
                y = target.y + target.vy - source.y - source.vy or jiggle(self._rng)
                length = math.sqrt(x * x + y * y)
                if length == 0:
                    continue
                k = (length - self.distance) / length * alpha * strength
                x *= k
                y *= k
                target.vx -= x * bias
                target.vy -= y * bias
                source.vx += x * (1 - bias)
                source.vy += y * (1 - bias)


class ManyBodyForce:
    """Pairwise repulsion (negative strength) or attraction (positive).

    Uses a Barnes–Hut quadtree when ``theta > 0``: a quad whose width over
    distance is below ``theta`` is treated as a single aggregate body.
    ``theta == 0`` sums every pair exactly.
    """

    def __init__(
        self,
        *,
        strength: float = -30.0,
        theta: float = 0.9,
        distance_min: float = 1.0,
        distance_max: float = math.inf,
    ) -> None:
        self.strength = strength
        self.theta = theta
        self._dmin2 = distance_min * distance_min
        self._dmax2 = distance_max * distance_max
        self._nodes: list[SimNode] = []
        self._rng = random.Random()

    def initialize(
        self, nodes: Sequence[SimNode], links: Sequence[Link], rng: random.Random
    ) -> None:
        self._nodes = list(nodes)
        self._rng = rng

    def apply(self, alpha: float) -> None:
        if len(self._nodes) < 2 or not self.strength:
            return
        if self.theta <= 0:
            self._apply_exact(alpha)
            return
        tree = QuadTree(self._nodes)
        tree.accumulate(lambda _node: self.strength)
        for node in self._nodes:
            tree.visit(self._visitor(node, alpha))

    def _pull(self, node: SimNode, dx: float, dy: float, charge: float, alpha: float) -> None:
        """Add the velocity change from a body of *charge* at offset ``(dx, dy)``."""
        l2 = dx * dx + dy * dy
        if l2 >= self._dmax2:
            return
        if dx == 0:
            dx = jiggle(self._rng)
            l2 += dx * dx
        if dy == 0:
            dy = jiggle(self._rng)
            l2 += dy * dy
        if l2 < self._dmin2:
            l2 = math.sqrt(self._dmin2 * l2)
        w = charge * alpha / l2
        node.vx += dx * w
        node.vy += dy * w

    def _visitor(self, node: SimNode, alpha: float) -> Callable[[Quad], bool]:
        theta2 = self.theta * self.theta

        def visit(quad: Quad) -> bool:
            if not quad.strength:
                return True
            dx = quad.cx - node.x
            dy = quad.cy - node.y
            width = quad.width
            if width * width / theta2 < dx * dx + dy * dy:
                self._pull(node, dx, dy, quad.strength, alpha)
                return True
            if not quad.is_leaf:
                return False
            for other in quad.points:
                if other is not node:
                    self._pull(node, other.x - node.x, other.y - node.y, self.strength, alpha)
            return True

        return visit

    def _apply_exact(self, alpha: float) -> None:
        for node in self._nodes:
            for other in self._nodes:
                if other is not node:
                    self._pull(node, other.x - node.x, other.y - node.y, self.strength, alpha)


class CenterForce:
    """Translate all nodes so their centroid moves toward ``(x, y)``."""

    def __init__(self, *, x: float = 0.0, y: float = 0.0, strength: float = 1.0) -> None:
        self.x = x
        self.y = y
        self.strength = strength
        self._nodes: list[SimNode] = []

    def initialize(
        self, nodes: Sequence[SimNode], links: Sequence[Link], rng: random.Random
    ) -> None:
        self._nodes = list(nodes)

    def apply(self, alpha: float) -> None:
        if not self._nodes:
            return
        n = len(self._nodes)
        sx = (sum(node.x for node in self._nodes) / n - self.x) * self.strength
        sy = (sum(node.y for node in self._nodes) / n - self.y) * self.strength
        for node in self._nodes:
            node.x -= sx
            node.y -= sy
