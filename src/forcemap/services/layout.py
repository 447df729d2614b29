"""LayoutService — run the force simulation for the full graph or a neighborhood.

Filters the store's snapshot, binds it to a fresh :class:`ForceLayoutEngine`,
applies any requested pins, and drives the simulation until it settles
(or a step budget runs out).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import structlog

from forcemap.domain.graph import GraphSnapshot
from forcemap.infrastructure.layout import ForceLayoutEngine, LayoutFrame
from forcemap.infrastructure.store import DatasetError
from forcemap.services.base import BaseService
from forcemap.services.result import ServiceResult


type Pin = tuple[str, float, float]


def _round(value: float) -> float:
    return round(value, 3)


class LayoutService(BaseService):
    """Computes settled node positions."""

    def settle(
        self,
        center: str | None = None,
        *,
        steps: int | None = None,
        seed: int | None = None,
        pins: Sequence[Pin] = (),
        on_tick: Callable[[LayoutFrame], None] | None = None,
    ) -> tuple[GraphSnapshot, LayoutFrame, list[str]]:
        """Lay out the (filtered) snapshot and return it with its last frame.

        Raises:
            DatasetError: The dataset failed validation.
        """
        snapshot = self._snapshot(center)
        warnings = self._no_match_warning(center, snapshot)

        engine = ForceLayoutEngine(self._settings.layout)
        handle = engine.bind(snapshot, seed=seed)
        for node_id, x, y in pins:
            if handle.pin(node_id, x, y):
                continue
            if handle.position(node_id) is None:
                warnings.append(f"Pin ignored: '{node_id}' is not in the displayed graph")
            else:
                warnings.append(f"Pin ignored: '{node_id}' has non-finite coordinates ({x}, {y})")

        log = structlog.get_logger(__name__).bind(
            center=center or None, nodes=len(snapshot.nodes)
        )
        log.debug("layout.start", seed=seed if seed is not None else engine.config.seed)
        try:
            frame = handle.run(on_tick, max_steps=steps)
        finally:
            engine.stop(handle)
        log.debug(
            "layout.done", ticks=frame.tick, alpha=round(frame.alpha, 6), settled=frame.settled
        )

        if not frame.settled:
            warnings.append(
                f"Layout not settled after {frame.tick} steps (alpha={frame.alpha:.4f})"
            )
        return snapshot, frame, warnings

    def compute(
        self,
        center: str | None = None,
        *,
        steps: int | None = None,
        seed: int | None = None,
        pins: Sequence[Pin] = (),
    ) -> ServiceResult:
        """Positions and edge segments of the settled layout."""
        try:
            snapshot, frame, warnings = self.settle(center, steps=steps, seed=seed, pins=pins)
        except DatasetError as exc:
            return self._dataset_error("layout", exc)

        groups = {n.id: n.group for n in snapshot.nodes}
        positions: list[dict[str, Any]] = [
            {"id": p.id, "group": groups[p.id], "x": _round(p.x), "y": _round(p.y)}
            for p in frame.positions
        ]
        segments: list[dict[str, Any]] = [
            {
                "source": s.source,
                "target": s.target,
                "x1": _round(s.x1),
                "y1": _round(s.y1),
                "x2": _round(s.x2),
                "y2": _round(s.y2),
                "width": _round(s.width),
            }
            for s in frame.segments
        ]
        return ServiceResult(
            ok=True,
            op="layout",
            data={
                "center": center or None,
                "count": len(positions),
                "items": positions,
                "segments": segments,
            },
            warnings=warnings,
            meta={"ticks": frame.tick, "alpha": round(frame.alpha, 6), "settled": frame.settled},
        )
