"""DragController — maps renderer drag gestures onto engine pins.

``start`` reheats the simulation (only for the first concurrent drag) and
pins the node where it currently is; ``move`` re-pins; ``end`` unpins and,
once no drag remains active, lets the layout cool again. Gestures that
refer to nodes of a superseded snapshot are ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forcemap.infrastructure.layout.simulation import ForceLayoutEngine, SimulationHandle

logger = logging.getLogger(__name__)


class DragController:
    def __init__(self, engine: ForceLayoutEngine) -> None:
        self._engine = engine
        self._handle: SimulationHandle | None = None
        self._active: set[str] = set()

    @property
    def active(self) -> frozenset[str]:
        self._sync()
        return frozenset(self._active)

    def _sync(self) -> SimulationHandle | None:
        """Forget drags that belonged to a handle the engine no longer runs."""
        handle = self._engine.current
        if handle is not self._handle:
            self._handle = handle
            self._active.clear()
        return handle

    def start(self, node_id: str) -> bool:
        handle = self._sync()
        if handle is None:
            return False
        current = handle.position(node_id)
        if current is None:
            logger.debug("Drag start on unknown node '%s' ignored", node_id)
            return False
        if not self._active:
            handle.reheat()
        self._active.add(node_id)
        return handle.pin(node_id, current.x, current.y)

    def move(self, node_id: str, x: float, y: float) -> bool:
        handle = self._sync()
        if handle is None or node_id not in self._active:
            return False
        return handle.pin(node_id, x, y)

    def end(self, node_id: str) -> bool:
        handle = self._sync()
        if handle is None or node_id not in self._active:
            return False
        self._active.discard(node_id)
        if not self._active:
            handle.cool()
        return handle.unpin(node_id)
