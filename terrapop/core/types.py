# terrapop/core/types.py
"""
Dataclasses and enums for samples, grid keys, placements, cluster reports and
the final hand-off records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class SamplePoint:
    """A sampled point in unit-domain coordinates. valid=False marks an empty grid slot."""
    x: float = 0.0
    y: float = 0.0
    valid: bool = True


EMPTY_SAMPLE = SamplePoint(0.0, 0.0, valid=False)


@dataclass(frozen=True)
class GridCoordinate:
    """(column, row) of a uniform grid cell; always derived, never stored on its own."""
    column: int
    row: int

    @classmethod
    def of(cls, x: float, y: float, cell_size: float) -> GridCoordinate:
        return cls(math.floor(x / cell_size), math.floor(y / cell_size))

    def offset(self, dc: int, dr: int) -> GridCoordinate:
        return GridCoordinate(self.column + dc, self.row + dr)


class PlacementCategory(Enum):
    """Closed set of placement states. Values are the tags handed to the instantiation layer."""
    SCATTER = "hay"
    ORIGIN_CANDIDATE = "originPoint"
    ORIGIN = "origin"
    CLUSTER_TREE = "tree"
    CLUSTER_BARN = "barn"
    SUPERSEDED = "default"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def is_final(self) -> bool:
        """True for categories that become visible instances in the final pass."""
        return self in (
            PlacementCategory.SCATTER,
            PlacementCategory.CLUSTER_TREE,
            PlacementCategory.CLUSTER_BARN,
        )


class ClusterKind(Enum):
    STRUCTURE = "structure"
    VEGETATION = "vegetation"

    @property
    def member_category(self) -> PlacementCategory:
        if self is ClusterKind.STRUCTURE:
            return PlacementCategory.CLUSTER_BARN
        return PlacementCategory.CLUSTER_TREE


@dataclass
class Placement:
    """
    A world-space placement bucketed in the placement grid.
    category is mutable: SUPERSEDED is a soft delete that keeps the record in its bucket.
    """
    position: tuple[float, float]
    cell: GridCoordinate
    category: PlacementCategory
    orientation_deg: float | None = None
    cluster_id: int | None = None

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def distance_to(self, other: tuple[float, float]) -> float:
        return math.hypot(self.position[0] - other[0], self.position[1] - other[1])


@dataclass
class ClusterReport:
    """Outcome of one cluster pass around an origin."""
    cluster_id: int
    origin: tuple[float, float]
    kind: ClusterKind
    clearing_radius: float
    requested_count: int
    members: list[Placement] = field(default_factory=list)
    superseded: list[Placement] = field(default_factory=list)
    dropped: int = 0


@dataclass(frozen=True)
class InstanceRecord:
    """
    Final hand-off record for the instantiation layer.
    Ground plane is x/z; position[1] is height.
    """
    name: str
    category: PlacementCategory
    position: tuple[float, float, float]
    rotation_deg: float = 0.0
    rotation_axis: tuple[float, float, float] = (0.0, 1.0, 0.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class GroundTile:
    """One ground-plane tile; origin is its (x, z) corner."""
    name: str
    origin: tuple[float, float]
    size: float
