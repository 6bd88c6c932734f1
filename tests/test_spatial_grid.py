"""
SpatialGrid: sizing from min distance, bounds-checked cells, strict neighbour test.
"""

from __future__ import annotations

import math

import pytest

from terrapop.core.spatial_grid import SpatialGrid
from terrapop.core.types import GridCoordinate, SamplePoint


def test_cell_size_from_min_distance() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    assert grid.cell_size == pytest.approx(0.1 / math.sqrt(2))
    assert grid.width == int(1.0 // grid.cell_size) + 1
    assert grid.height == grid.width


def test_window_radius_covers_min_distance() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    assert grid.window_radius(0.1) == 2
    assert grid.window_radius(0.1) * grid.cell_size >= 0.1


def test_insert_and_read_back() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    p = SamplePoint(0.42, 0.17)
    coord = grid.insert(p)
    assert coord == grid.coordinate_of(p)
    assert grid.cell(coord) == p
    assert grid.occupied_count() == 1


def test_empty_cell_is_invalid_sentinel() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    assert grid.cell(GridCoordinate(0, 0)).valid is False


def test_far_boundary_point_has_a_cell() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    grid.insert(SamplePoint(1.0, 1.0))
    assert grid.occupied_count() == 1


def test_out_of_range_access_raises() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    with pytest.raises(IndexError):
        grid.insert(SamplePoint(1.5, 0.2))
    with pytest.raises(IndexError):
        grid.cell(GridCoordinate(-1, 0))


def test_neighbor_detection_is_strict() -> None:
    grid = SpatialGrid.for_min_distance(0.25)
    grid.insert(SamplePoint(0.5, 0.5))
    assert grid.has_neighbor_within(SamplePoint(0.5, 0.6), 0.25) is True
    # Exactly min_dist away is allowed
    assert grid.has_neighbor_within(SamplePoint(0.5, 0.75), 0.25) is False
    assert grid.has_neighbor_within(SamplePoint(0.9, 0.9), 0.25) is False


def test_neighbor_across_diagonal_cells() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    grid.insert(SamplePoint(0.30, 0.30))
    assert grid.has_neighbor_within(SamplePoint(0.369, 0.369), 0.1) is True


def test_empty_grid_has_no_neighbors() -> None:
    grid = SpatialGrid.for_min_distance(0.1)
    assert grid.has_neighbor_within(SamplePoint(0.5, 0.5), 0.1) is False


def test_non_positive_cell_size_rejected() -> None:
    with pytest.raises(ValueError):
        SpatialGrid(1.0, 0.0)
