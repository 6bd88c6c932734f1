"""
PlacementGrid: sizing, bounds checks, clipped neighbourhoods, stable column-major order.
"""

from __future__ import annotations

import pytest

from terrapop.core.placement_grid import PlacementGrid
from terrapop.core.types import GridCoordinate, Placement, PlacementCategory


def _placement(grid: PlacementGrid, x: float, y: float) -> Placement:
    return Placement(position=(x, y), cell=grid.coordinate_of((x, y)), category=PlacementCategory.SCATTER)


def test_for_extent() -> None:
    grid = PlacementGrid.for_extent(200.0, 100.0, 20.0)
    assert (grid.columns, grid.rows) == (10, 5)


def test_coordinate_of_uses_floor() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    assert grid.coordinate_of((39.9, 0.0)) == GridCoordinate(1, 0)
    assert grid.coordinate_of((-0.1, 5.0)) == GridCoordinate(-1, 0)
    assert grid.contains(GridCoordinate(-1, 0)) is False


def test_insert_out_of_range_is_dropped() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    assert grid.insert(_placement(grid, 200.0, 50.0)) is False
    assert grid.insert(_placement(grid, -1.0, 50.0)) is False
    assert grid.insert(_placement(grid, 199.9, 50.0)) is True
    assert len(grid) == 1


def test_cell_accessor_bounds_checked() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    with pytest.raises(IndexError):
        grid.cell(GridCoordinate(10, 0))


def test_neighborhood_clipped_at_edges() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    assert len(list(grid.neighborhood(GridCoordinate(0, 0), 1))) == 4
    assert len(list(grid.neighborhood(GridCoordinate(5, 5), 1))) == 9
    assert len(list(grid.neighborhood(GridCoordinate(5, 5), 2))) == 25


def test_iteration_is_column_major_and_stable() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    a = _placement(grid, 25.0, 5.0)   # cell (1, 0)
    b = _placement(grid, 5.0, 25.0)   # cell (0, 1)
    c = _placement(grid, 6.0, 26.0)   # cell (0, 1), inserted after b
    for p in (a, b, c):
        grid.insert(p)
    assert list(grid) == [b, c, a]


def test_placements_near_covers_radius() -> None:
    grid = PlacementGrid.for_extent(200.0, 200.0, 20.0)
    near = _placement(grid, 135.0, 100.0)
    far = _placement(grid, 190.0, 190.0)
    grid.insert(near)
    grid.insert(far)
    found = list(grid.placements_near((100.0, 100.0), 36.0))
    assert near in found
    assert far not in found


def test_invalid_grid_rejected() -> None:
    with pytest.raises(ValueError):
        PlacementGrid(0, 5, 20.0)
    with pytest.raises(ValueError):
        PlacementGrid(5, 5, 0.0)
