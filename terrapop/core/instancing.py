# terrapop/core/instancing.py
"""
Final pass: turn surviving placements into InstanceRecords for the instantiation
layer, and lay out the ground-plane tiles. Records carry placement hints only
(position, rotation, scale, tags); meshes and materials are chosen downstream.
"""

from __future__ import annotations

from terrapop.core.config import (
    BARN_SCALE_BASE,
    BARN_SCALE_STEPS,
    HAY_LIFT,
    HAY_ROLL_DEG,
    HAY_TAGS,
    TILE_SIZE,
    TREE_SCALE_BASE,
    TREE_SCALE_STEPS,
)
from terrapop.core.placement_grid import PlacementGrid
from terrapop.core.rng import PseudoRandomSource
from terrapop.core.types import GroundTile, InstanceRecord, Placement, PlacementCategory

Z_AXIS = (0.0, 0.0, 1.0)
Y_AXIS = (0.0, 1.0, 0.0)


def _record(placement: Placement, prng: PseudoRandomSource) -> InstanceRecord:
    cat = placement.category
    name = f"{cat.tag}{placement.cell.column}{placement.cell.row}"
    x, z = placement.position
    if cat is PlacementCategory.SCATTER:
        return InstanceRecord(
            name=name,
            category=cat,
            position=(x, HAY_LIFT, z),
            rotation_deg=HAY_ROLL_DEG,
            rotation_axis=Z_AXIS,
            tags=HAY_TAGS,
        )
    if cat is PlacementCategory.CLUSTER_TREE:
        s = TREE_SCALE_BASE + prng.uniform_int(TREE_SCALE_STEPS - 1) / 10.0
        return InstanceRecord(name=name, category=cat, position=(x, 0.0, z), scale=(s, s, s))
    if cat is PlacementCategory.CLUSTER_BARN:
        sx, sy, sz = (
            BARN_SCALE_BASE + prng.uniform_int(BARN_SCALE_STEPS - 1) / 100.0 for _ in range(3)
        )
        return InstanceRecord(
            name=name,
            category=cat,
            position=(x, 0.0, z),
            rotation_deg=placement.orientation_deg or 0.0,
            rotation_axis=Y_AXIS,
            scale=(sx, sy, sz),
        )
    raise ValueError(f"no instance record for category {cat.name}")


def build_instance_records(grid: PlacementGrid, prng: PseudoRandomSource) -> list[InstanceRecord]:
    """One record per final placement (hay, tree, barn), in column-major grid order."""
    return [_record(p, prng) for p in grid if p.category.is_final]


def ground_tiles(width_tiles: int, height_tiles: int, tile_size: float = TILE_SIZE) -> list[GroundTile]:
    """Ground-plane tiles covering the map, one per (i, j) tile."""
    return [
        GroundTile(name=f"Ground{i}{j}", origin=(i * tile_size, j * tile_size), size=tile_size)
        for i in range(width_tiles)
        for j in range(height_tiles)
    ]
