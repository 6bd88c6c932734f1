"""
ClusterGenerator: clearing supersedes exactly what lies inside the radius,
members stay within the footprint, counts and radii follow the cluster kind.
"""

from __future__ import annotations

import pytest

from terrapop.core.clusters import ClusterGenerator
from terrapop.core.placement_grid import PlacementGrid
from terrapop.core.rng import PseudoRandomSource
from terrapop.core.types import ClusterKind, Placement, PlacementCategory


def _lattice_grid(step: float = 5.0) -> tuple[PlacementGrid, list[Placement]]:
    """200x200 world, 20-unit cells, one SCATTER placement every step units."""
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    placed: list[Placement] = []
    n = int(200.0 / step)
    for i in range(n):
        for j in range(n):
            pos = (step / 2 + i * step, step / 2 + j * step)
            p = Placement(position=pos, cell=grid.coordinate_of(pos), category=PlacementCategory.SCATTER)
            grid.insert(p)
            placed.append(p)
    return grid, placed


def _add_origin(grid: PlacementGrid, pos: tuple[float, float]) -> Placement:
    origin = Placement(position=pos, cell=grid.coordinate_of(pos), category=PlacementCategory.ORIGIN_CANDIDATE)
    grid.insert(origin)
    return origin


@pytest.mark.parametrize("structure_chance", [0.0, 1.0])
def test_clearing_supersedes_exactly_inside_radius(structure_chance: float) -> None:
    grid, scatter = _lattice_grid()
    origin = _add_origin(grid, (101.0, 99.0))
    report = ClusterGenerator(grid, structure_chance=structure_chance).generate(origin, PseudoRandomSource(7))
    assert origin.category is PlacementCategory.ORIGIN
    assert report.superseded
    for p in scatter:
        if p.distance_to(origin.position) < report.clearing_radius:
            assert p.category is PlacementCategory.SUPERSEDED
        else:
            assert p.category is PlacementCategory.SCATTER
    assert len(report.superseded) == sum(1 for p in scatter if p.category is PlacementCategory.SUPERSEDED)


def test_structure_cluster_shape() -> None:
    grid, _ = _lattice_grid()
    origin = _add_origin(grid, (100.0, 100.0))
    report = ClusterGenerator(grid, structure_chance=1.0).generate(origin, PseudoRandomSource(3))
    assert report.kind is ClusterKind.STRUCTURE
    assert report.clearing_radius == pytest.approx(20.0)
    assert 1 <= report.requested_count <= 6
    assert 1 <= len(report.members) <= report.requested_count
    assert report.dropped == 0
    for m in report.members:
        assert m.category is PlacementCategory.CLUSTER_BARN
        assert m.orientation_deg is not None
        assert -180.0 < m.orientation_deg <= 180.0


def test_vegetation_cluster_shape() -> None:
    grid, _ = _lattice_grid()
    origin = _add_origin(grid, (100.0, 100.0))
    report = ClusterGenerator(grid, structure_chance=0.0).generate(origin, PseudoRandomSource(5))
    assert report.kind is ClusterKind.VEGETATION
    assert any(report.clearing_radius == pytest.approx(r) for r in (20.0, 24.0, 28.0, 32.0, 36.0))
    assert 10 <= report.requested_count <= 39
    assert 1 <= len(report.members) <= report.requested_count
    for m in report.members:
        assert m.category is PlacementCategory.CLUSTER_TREE
        assert m.orientation_deg is None
        assert m.cluster_id == report.cluster_id


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_members_within_clearing_radius(seed: int) -> None:
    grid, _ = _lattice_grid()
    origin = _add_origin(grid, (100.0, 100.0))
    report = ClusterGenerator(grid, structure_chance=0.5).generate(origin, PseudoRandomSource(seed))
    for m in report.members:
        # Local sample lives in the unit disk, so members sit within half the radius
        assert m.distance_to(origin.position) <= report.clearing_radius / 2 + 1e-9
        assert m in grid.cell(m.cell)


def test_members_outside_grid_are_dropped() -> None:
    grid, _ = _lattice_grid()
    origin = _add_origin(grid, (1.0, 1.0))
    report = ClusterGenerator(grid, structure_chance=0.0).generate(origin, PseudoRandomSource(11))
    for m in report.members:
        assert grid.contains(m.cell)
        assert 0.0 <= m.x < 200.0 and 0.0 <= m.y < 200.0
    assert len(report.members) + report.dropped <= report.requested_count


def test_processed_origin_is_protected() -> None:
    grid, _ = _lattice_grid()
    first = _add_origin(grid, (100.0, 100.0))
    gen = ClusterGenerator(grid, structure_chance=1.0)
    gen.generate(first, PseudoRandomSource(1), cluster_id=0)
    second = _add_origin(grid, (110.0, 100.0))
    gen.generate(second, PseudoRandomSource(2), cluster_id=1)
    assert first.category is PlacementCategory.ORIGIN
    assert first.cluster_id == 0
    assert second.category is PlacementCategory.ORIGIN


def test_pending_candidate_inside_radius_is_superseded() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    origin = _add_origin(grid, (100.0, 100.0))
    pending = _add_origin(grid, (105.0, 100.0))
    ClusterGenerator(grid).generate(origin, PseudoRandomSource(4))
    assert pending.category is PlacementCategory.SUPERSEDED


def test_same_seed_same_cluster() -> None:
    def run() -> list[tuple[float, float]]:
        grid, _ = _lattice_grid()
        origin = _add_origin(grid, (100.0, 100.0))
        report = ClusterGenerator(grid).generate(origin, PseudoRandomSource(99))
        return [m.position for m in report.members]

    assert run() == run()
