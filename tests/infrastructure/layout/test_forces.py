"""Tests for link, many-body, and center forces."""

from __future__ import annotations

import math
import random

import pytest

from forcemap.infrastructure.layout.forces import (
    CenterForce,
    LinkForce,
    ManyBodyForce,
    SimNode,
)


def _nodes(*coords: tuple[float, float]) -> list[SimNode]:
    return [SimNode(id=f"n{i}", index=i, x=x, y=y) for i, (x, y) in enumerate(coords)]


class TestLinkForce:
    def test_stretched_link_pulls_endpoints_together(self) -> None:
        a, b = _nodes((0, 0), (60, 0))
        force = LinkForce(distance=30)
        force.initialize([a, b], [(a, b)], random.Random(1))
        force.apply(1.0)
        assert a.vx == pytest.approx(15.0)
        assert b.vx == pytest.approx(-15.0)

    def test_compressed_link_pushes_apart(self) -> None:
        a, b = _nodes((0, 0), (10, 0))
        force = LinkForce(distance=30)
        force.initialize([a, b], [(a, b)], random.Random(1))
        force.apply(1.0)
        assert a.vx < 0 < b.vx

    def test_link_at_rest_length_is_neutral(self) -> None:
        a, b = _nodes((0, 0), (30, 0))
        force = LinkForce(distance=30)
        force.initialize([a, b], [(a, b)], random.Random(1))
        force.apply(1.0)
        assert a.vx == pytest.approx(0.0)
        assert b.vx == pytest.approx(0.0)

    def test_hub_moves_less_than_leaf(self) -> None:
        hub, leaf1, leaf2, leaf3 = _nodes((0, 0), (100, 0), (-100, 0), (0, 100))
        force = LinkForce(distance=30)
        links = [(leaf1, hub), (leaf2, hub), (leaf3, hub)]
        force.initialize([hub, leaf1, leaf2, leaf3], links, random.Random(1))
        force.apply(1.0)
        # Correction for leaf1 is 70 units; degree 1 vs 3 gives the leaf 3/4 of it.
        assert leaf1.vx == pytest.approx(-52.5)

    def test_scaled_by_alpha(self) -> None:
        a, b = _nodes((0, 0), (60, 0))
        force = LinkForce(distance=30)
        force.initialize([a, b], [(a, b)], random.Random(1))
        force.apply(0.1)
        assert a.vx == pytest.approx(1.5)


class TestManyBodyForce:
    def test_pair_repels(self) -> None:
        a, b = _nodes((0, 0), (10, 0))
        force = ManyBodyForce(strength=-30, theta=0)
        force.initialize([a, b], [], random.Random(1))
        force.apply(1.0)
        assert a.vx == pytest.approx(-3.0)
        assert b.vx == pytest.approx(3.0)

    def test_repulsion_decays_with_distance(self) -> None:
        near = _nodes((0, 0), (10, 0))
        far = _nodes((0, 0), (20, 0))
        for pair in (near, far):
            force = ManyBodyForce(theta=0)
            force.initialize(pair, [], random.Random(1))
            force.apply(1.0)
        assert abs(near[0].vx) > abs(far[0].vx) > 0

    def test_barnes_hut_matches_exact_for_pair(self) -> None:
        exact = _nodes((0, 0), (10, 0))
        approx = _nodes((0, 0), (10, 0))
        for nodes, theta in ((exact, 0.0), (approx, 0.9)):
            force = ManyBodyForce(theta=theta)
            force.initialize(nodes, [], random.Random(1))
            force.apply(1.0)
        assert approx[0].vx == pytest.approx(exact[0].vx)
        assert approx[1].vx == pytest.approx(exact[1].vx)

    def test_far_cluster_approximation_is_close(self) -> None:
        coords = [(0.0, 0.0), (100.0, 0.5), (100.5, -0.5), (99.5, 0.0), (100.0, -0.2)]
        exact = _nodes(*coords)
        approx = _nodes(*coords)
        for nodes, theta in ((exact, 0.0), (approx, 0.9)):
            force = ManyBodyForce(theta=theta)
            force.initialize(nodes, [], random.Random(1))
            force.apply(1.0)
        assert approx[0].vx == pytest.approx(exact[0].vx, rel=0.05)

    def test_distance_max_cuts_off(self) -> None:
        a, b = _nodes((0, 0), (10, 0))
        force = ManyBodyForce(theta=0, distance_max=5)
        force.initialize([a, b], [], random.Random(1))
        force.apply(1.0)
        assert a.vx == 0.0
        assert b.vx == 0.0

    def test_coincident_nodes_are_separated(self) -> None:
        a, b = _nodes((5, 5), (5, 5))
        force = ManyBodyForce()
        force.initialize([a, b], [], random.Random(1))
        force.apply(1.0)
        assert (a.vx, a.vy) != (0.0, 0.0)
        assert all(math.isfinite(v) for v in (a.vx, a.vy, b.vx, b.vy))

    def test_single_node_feels_nothing(self) -> None:
        (a,) = _nodes((1, 1))
        force = ManyBodyForce()
        force.initialize([a], [], random.Random(1))
        force.apply(1.0)
        assert (a.vx, a.vy) == (0.0, 0.0)


class TestCenterForce:
    def test_moves_centroid_to_origin(self) -> None:
        a, b = _nodes((10, 4), (20, 8))
        force = CenterForce()
        force.initialize([a, b], [], random.Random(1))
        force.apply(1.0)
        assert (a.x, a.y) == pytest.approx((-5.0, -2.0))
        assert (b.x, b.y) == pytest.approx((5.0, 2.0))

    def test_partial_strength(self) -> None:
        (a,) = _nodes((10, 0))
        force = CenterForce(strength=0.5)
        force.initialize([a], [], random.Random(1))
        force.apply(1.0)
        assert a.x == pytest.approx(5.0)

    def test_empty_is_noop(self) -> None:
        force = CenterForce()
        force.initialize([], [], random.Random(1))
        force.apply(1.0)
