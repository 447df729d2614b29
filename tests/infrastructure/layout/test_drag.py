"""Tests for DragController gesture handling."""

from __future__ import annotations

import pytest

from forcemap.domain.graph import GraphSnapshot
from forcemap.infrastructure.layout import DragController, ForceLayoutEngine, NodePosition


@pytest.fixture
def engine() -> ForceLayoutEngine:
    return ForceLayoutEngine()


@pytest.fixture
def drag(engine: ForceLayoutEngine) -> DragController:
    return DragController(engine)


class TestDragLifecycle:
    def test_start_reheats_and_pins_in_place(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        handle.run()
        where = handle.position("B")
        assert drag.start("B")
        assert handle.alpha_target == pytest.approx(0.3)
        handle.step()
        assert handle.position("B") == where

    def test_move_repins(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        drag.start("A")
        assert drag.move("A", 40.0, 40.0)
        handle.step()
        assert handle.position("A") == NodePosition("A", 40.0, 40.0)

    def test_end_unpins_and_cools(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        drag.start("A")
        drag.move("A", 40.0, 40.0)
        handle.step()
        assert drag.end("A")
        assert handle.alpha_target == 0.0
        assert drag.active == frozenset()
        handle.step()
        assert handle.position("A") != NodePosition("A", 40.0, 40.0)

    def test_concurrent_drags_cool_after_last(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        drag.start("A")
        drag.start("C")
        drag.end("A")
        assert handle.alpha_target == pytest.approx(0.3)
        assert drag.active == frozenset({"C"})
        drag.end("C")
        assert handle.alpha_target == 0.0


class TestIgnoredGestures:
    def test_no_bound_snapshot(self, drag: DragController) -> None:
        assert drag.start("A") is False
        assert drag.move("A", 0.0, 0.0) is False
        assert drag.end("A") is False

    def test_unknown_node(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        assert drag.start("Z") is False
        assert handle.alpha_target == 0.0

    def test_move_without_start(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        engine.bind(abc_snapshot)
        assert drag.move("A", 1.0, 1.0) is False
        assert drag.end("A") is False

    def test_rebind_forgets_active_drags(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        engine.bind(abc_snapshot)
        drag.start("A")
        fresh = engine.bind(abc_snapshot)
        assert drag.active == frozenset()
        assert drag.move("A", 5.0, 5.0) is False
        assert fresh.alpha_target == 0.0

    def test_move_to_non_finite_point(
        self, engine: ForceLayoutEngine, drag: DragController, abc_snapshot: GraphSnapshot
    ) -> None:
        handle = engine.bind(abc_snapshot)
        drag.start("A")
        handle.step()
        held = handle.position("A")
        assert drag.move("A", float("nan"), 0.0) is False
        handle.step()
        assert handle.position("A") == held
