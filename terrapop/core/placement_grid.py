# terrapop/core/placement_grid.py
"""
World-space placement grid: (column, row) buckets of Placement records.
Coarser than, and independent from, the sampling grid. Iteration is column-major
and stable within a cell, so cluster scans are reproducible.
"""

from __future__ import annotations

import math
from typing import Iterator

from terrapop.core.error_codes import INVALID_CELL_SIZE, INVALID_DIMENSIONS, ConfigError
from terrapop.core.types import GridCoordinate, Placement


class PlacementGrid:
    def __init__(self, columns: int, rows: int, cell_size: float) -> None:
        if columns <= 0 or rows <= 0:
            raise ConfigError(INVALID_DIMENSIONS, f"grid {columns}x{rows}")
        if cell_size <= 0:
            raise ConfigError(INVALID_CELL_SIZE, f"cell_size={cell_size}")
        self.columns = columns
        self.rows = rows
        self.cell_size = float(cell_size)
        self._cells: list[list[list[Placement]]] = [
            [[] for _ in range(rows)] for _ in range(columns)
        ]

    @classmethod
    def for_extent(cls, width: float, height: float, cell_size: float) -> PlacementGrid:
        return cls(int(width // cell_size), int(height // cell_size), cell_size)

    def coordinate_of(self, position: tuple[float, float]) -> GridCoordinate:
        return GridCoordinate.of(position[0], position[1], self.cell_size)

    def contains(self, coord: GridCoordinate) -> bool:
        return 0 <= coord.column < self.columns and 0 <= coord.row < self.rows

    def cell(self, coord: GridCoordinate) -> list[Placement]:
        """Bucket at coord. Raises IndexError outside the grid."""
        if not self.contains(coord):
            raise IndexError(f"cell {coord} outside {self.columns}x{self.rows} grid")
        return self._cells[coord.column][coord.row]

    def insert(self, placement: Placement) -> bool:
        """Append placement to its cell. Returns False (and stores nothing) when out of range."""
        if not self.contains(placement.cell):
            return False
        self._cells[placement.cell.column][placement.cell.row].append(placement)
        return True

    def neighborhood(self, center: GridCoordinate, radius_cells: int) -> Iterator[GridCoordinate]:
        """Cells within radius_cells of center (square window), clipped at the grid edges."""
        for dc in range(-radius_cells, radius_cells + 1):
            for dr in range(-radius_cells, radius_cells + 1):
                coord = center.offset(dc, dr)
                if self.contains(coord):
                    yield coord

    def placements_near(self, position: tuple[float, float], radius: float) -> Iterator[Placement]:
        """Placements in the cells that can hold a point within radius of position."""
        radius_cells = max(1, math.ceil(radius / self.cell_size))
        for coord in self.neighborhood(self.coordinate_of(position), radius_cells):
            yield from self._cells[coord.column][coord.row]

    def cells(self) -> Iterator[tuple[GridCoordinate, list[Placement]]]:
        for column in range(self.columns):
            for row in range(self.rows):
                yield GridCoordinate(column, row), self._cells[column][row]

    def __iter__(self) -> Iterator[Placement]:
        for _, bucket in self.cells():
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for _, bucket in self.cells())
