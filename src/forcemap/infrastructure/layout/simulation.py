"""ForceLayoutEngine — stepped force simulation over a bound GraphSnapshot.

The engine never runs on its own clock. A host loop drives it one step at
a time (``handle.step()`` or iterating ``handle.frames()``) and may render
or handle input between steps. Binding a new snapshot stops the previous
handle; stepping a stopped handle is a no-op.

Pin/unpin requests are queued and applied at the start of the next step,
before the force pass, so a step always sees a consistent set of pins.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from forcemap.config.models import LayoutConfig
from forcemap.domain.graph import GraphSnapshot
from forcemap.infrastructure.layout.forces import (
    CenterForce,
    Force,
    LinkForce,
    ManyBodyForce,
    SimNode,
)

logger = logging.getLogger(__name__)

_INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


@dataclass(frozen=True, slots=True)
class NodePosition:
    id: str
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class EdgeSegment:
    """Line endpoints for one edge; ``width`` is ``sqrt(weight)``."""

    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float
    width: float


@dataclass(frozen=True, slots=True)
class LayoutFrame:
    """Everything a renderer needs to draw one step."""

    tick: int
    alpha: float
    settled: bool
    positions: tuple[NodePosition, ...]
    segments: tuple[EdgeSegment, ...]


class SimulationHandle:
    """Simulation state for exactly one snapshot.

    Created by :meth:`ForceLayoutEngine.bind`; callers should not build
    handles directly.
    """

    def __init__(
        self,
        snapshot: GraphSnapshot,
        config: LayoutConfig,
        initial_positions: Mapping[str, tuple[float, float]] | None = None,
    ) -> None:
        self.snapshot = snapshot
        self._config = config
        self._rng = random.Random(config.seed)
        self._nodes = [SimNode(id=n.id, index=i) for i, n in enumerate(snapshot.nodes)]
        self._by_id = {node.id: node for node in self._nodes}
        self._links = [(self._by_id[e.source], self._by_id[e.target]) for e in snapshot.edges]
        self._widths = [math.sqrt(e.weight) for e in snapshot.edges]

        self._alpha = 1.0
        self._alpha_target = 0.0
        self._alpha_min = config.alpha_min
        self._alpha_decay = config.resolved_alpha_decay()
        self._velocity_keep = 1 - config.velocity_decay
        self._tick = 0
        self._stopped = False
        # node id -> pin target, or None for unpin; drained at the next step.
        self._pending: dict[str, tuple[float, float] | None] = {}

        self._place(initial_positions or {})
        self._forces: list[Force] = [
            LinkForce(distance=config.link_distance, iterations=config.link_iterations),
            ManyBodyForce(
                strength=config.charge_strength,
                theta=config.theta,
                distance_min=config.distance_min,
                distance_max=config.distance_max,
            ),
            CenterForce(strength=config.center_strength),
        ]
        for force in self._forces:
            force.initialize(self._nodes, self._links, self._rng)

    def _place(self, known: Mapping[str, tuple[float, float]]) -> None:
        """Phyllotaxis spiral for nodes without a known position."""
        for node in self._nodes:
            if node.id in known:
                node.x, node.y = known[node.id]
                continue
            radius = self._config.initial_radius * math.sqrt(0.5 + node.index)
            angle = node.index * _INITIAL_ANGLE
            node.x = radius * math.cos(angle)
            node.y = radius * math.sin(angle)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def alpha_target(self) -> float:
        return self._alpha_target

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def settled(self) -> bool:
        """True once alpha has decayed below ``alpha_min`` (always for empty graphs)."""
        return not self._nodes or self._alpha < self._alpha_min

    def position(self, node_id: str) -> NodePosition | None:
        node = self._by_id.get(node_id)
        if node is None:
            return None
        return NodePosition(node.id, node.x, node.y)

    def positions(self) -> list[NodePosition]:
        return [NodePosition(n.id, n.x, n.y) for n in self._nodes]

    def frame(self) -> LayoutFrame:
        segments = tuple(
            EdgeSegment(s.id, t.id, s.x, s.y, t.x, t.y, width)
            for (s, t), width in zip(self._links, self._widths, strict=True)
        )
        return LayoutFrame(
            tick=self._tick,
            alpha=self._alpha,
            settled=self.settled,
            positions=tuple(self.positions()),
            segments=segments,
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> list[NodePosition]:
        """Advance one tick and return positions in snapshot order."""
        if self._stopped:
            return self.positions()

        self._drain_pins()
        self._alpha += (self._alpha_target - self._alpha) * self._alpha_decay
        for force in self._forces:
            force.apply(self._alpha)

        keep = self._velocity_keep
        for node in self._nodes:
            if node.fx is None:
                node.vx *= keep
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= keep
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

        self._tick += 1
        return self.positions()

    def frames(self, max_steps: int | None = None) -> Iterator[LayoutFrame]:
        """Yield one frame per step until settled, stopped, or *max_steps*.

        Control returns to the caller after every step; calling :meth:`stop`
        from the consuming loop ends iteration before the next step.
        """
        limit = self._config.max_steps if max_steps is None else max_steps
        taken = 0
        while taken < limit and not self._stopped and not self.settled:
            self.step()
            taken += 1
            yield self.frame()

    def run(
        self,
        on_tick: Callable[[LayoutFrame], None] | None = None,
        *,
        max_steps: int | None = None,
    ) -> LayoutFrame:
        """Drive :meth:`frames` to completion and return the last frame."""
        last = self.frame()
        for last in self.frames(max_steps):
            if on_tick is not None:
                on_tick(last)
        return last

    def stop(self) -> None:
        """Halt stepping. Safe to call repeatedly and after settling."""
        if self._stopped:
            return
        self._stopped = True
        self._pending.clear()
        logger.debug("Simulation stopped at tick %d (alpha=%.4f)", self._tick, self._alpha)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def pin(self, node_id: str, x: float, y: float) -> bool:
        """Fix *node_id* at ``(x, y)`` from the next step on.

        Returns False (and does nothing) for ids outside this snapshot,
        non-finite coordinates, or after the handle was stopped.
        """
        if not self._accepts(node_id, "pin"):
            return False
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("Ignoring pin of '%s' at non-finite (%s, %s)", node_id, x, y)
            return False
        self._pending[node_id] = (x, y)
        return True

    def unpin(self, node_id: str) -> bool:
        """Release *node_id* back to the simulation from the next step on."""
        if not self._accepts(node_id, "unpin"):
            return False
        self._pending[node_id] = None
        return True

    def reheat(self, alpha: float | None = None) -> None:
        """Raise alpha so a settled layout responds again; hold it until :meth:`cool`."""
        if self._stopped:
            return
        level = self._config.reheat_alpha if alpha is None else alpha
        self._alpha_target = level
        self._alpha = max(self._alpha, level)

    def cool(self) -> None:
        """Let alpha decay toward zero again."""
        self._alpha_target = 0.0

    def _accepts(self, node_id: str, action: str) -> bool:
        if self._stopped:
            logger.debug("Ignoring %s of '%s' on stopped simulation", action, node_id)
            return False
        if node_id not in self._by_id:
            logger.debug("Ignoring %s of unknown node '%s'", action, node_id)
            return False
        return True

    def _drain_pins(self) -> None:
        for node_id, target in self._pending.items():
            node = self._by_id[node_id]
            if target is None:
                node.fx = node.fy = None
            else:
                node.fx, node.fy = target
                node.x, node.y = target
                node.vx = node.vy = 0.0
        self._pending.clear()


class ForceLayoutEngine:
    """Owns at most one live :class:`SimulationHandle` at a time."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self._config = config or LayoutConfig()
        self._handle: SimulationHandle | None = None

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def current(self) -> SimulationHandle | None:
        return self._handle

    def bind(
        self,
        snapshot: GraphSnapshot,
        *,
        seed: int | None = None,
        initial_positions: Mapping[str, tuple[float, float]] | None = None,
    ) -> SimulationHandle:
        """Discard any previous simulation and start one for *snapshot*."""
        if self._handle is not None:
            self._handle.stop()
        config = self._config if seed is None else self._config.model_copy(update={"seed": seed})
        self._handle = SimulationHandle(snapshot, config, initial_positions)
        logger.debug(
            "Bound snapshot (%d nodes, %d edges, seed=%d)",
            len(snapshot.nodes),
            len(snapshot.edges),
            config.seed,
        )
        return self._handle

    def step(self) -> list[NodePosition]:
        if self._handle is None:
            return []
        return self._handle.step()

    def pin(self, node_id: str, x: float, y: float) -> bool:
        if self._handle is None:
            return False
        return self._handle.pin(node_id, x, y)

    def unpin(self, node_id: str) -> bool:
        if self._handle is None:
            return False
        return self._handle.unpin(node_id)

    def stop(self, handle: SimulationHandle | None = None) -> None:
        """Stop *handle* (default: the current one). Idempotent."""
        target = handle or self._handle
        if target is None:
            return
        target.stop()
        if target is self._handle:
            self._handle = None
