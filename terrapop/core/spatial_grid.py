# terrapop/core/spatial_grid.py
"""
Sampling-time bucket grid for blue-noise rejection tests.

Cell size is min_dist / sqrt(2): a cell's diagonal equals min_dist, so two accepted
points can never share a cell and insert() may overwrite without a conflict check.
"""

from __future__ import annotations

import math

import numpy as np

from terrapop.core.types import EMPTY_SAMPLE, GridCoordinate, SamplePoint


class SpatialGrid:
    """Uniform 2D arena of SamplePoint slots addressed by bounds-checked GridCoordinate."""

    def __init__(self, extent: float, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = float(cell_size)
        # floor + 1 so a point sitting exactly on the far edge still has a cell
        n = int(extent // self.cell_size) + 1
        self.width = n
        self.height = n
        self._xy = np.zeros((n, n, 2), dtype=np.float64)
        self._valid = np.zeros((n, n), dtype=bool)

    @classmethod
    def for_min_distance(cls, min_dist: float, extent: float = 1.0) -> SpatialGrid:
        return cls(extent, min_dist / math.sqrt(2.0))

    def coordinate_of(self, point: SamplePoint) -> GridCoordinate:
        return GridCoordinate.of(point.x, point.y, self.cell_size)

    def contains(self, coord: GridCoordinate) -> bool:
        return 0 <= coord.column < self.width and 0 <= coord.row < self.height

    def _check(self, coord: GridCoordinate) -> None:
        if not self.contains(coord):
            raise IndexError(f"cell {coord} outside {self.width}x{self.height} grid")

    def cell(self, coord: GridCoordinate) -> SamplePoint:
        """Occupant of a cell, or an invalid sentinel when empty."""
        self._check(coord)
        if not self._valid[coord.column, coord.row]:
            return EMPTY_SAMPLE
        x, y = self._xy[coord.column, coord.row]
        return SamplePoint(float(x), float(y))

    def insert(self, point: SamplePoint) -> GridCoordinate:
        coord = self.coordinate_of(point)
        self._check(coord)
        self._xy[coord.column, coord.row] = (point.x, point.y)
        self._valid[coord.column, coord.row] = True
        return coord

    def window_radius(self, min_dist: float) -> int:
        """Cells to scan on each side so every point closer than min_dist is covered."""
        return max(1, math.ceil(min_dist / self.cell_size))

    def has_neighbor_within(self, point: SamplePoint, min_dist: float) -> bool:
        """True if a valid occupant is strictly closer than min_dist to point."""
        g = self.coordinate_of(point)
        d = self.window_radius(min_dist)
        c0, c1 = max(g.column - d, 0), min(g.column + d + 1, self.width)
        r0, r1 = max(g.row - d, 0), min(g.row + d + 1, self.height)
        if c0 >= c1 or r0 >= r1:
            return False
        valid = self._valid[c0:c1, r0:r1]
        if not valid.any():
            return False
        xy = self._xy[c0:c1, r0:r1][valid]
        dist = np.hypot(xy[:, 0] - point.x, xy[:, 1] - point.y)
        return bool((dist < min_dist).any())

    def occupied_count(self) -> int:
        return int(self._valid.sum())
