# terrapop/core/config.py
"""
Central configuration for terrain population.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Blue-noise sampling -----
BRANCHING_FACTOR: int = 30
"""Candidates tried around each popped active point (Bridson's k)."""

MAP_BRANCHING_FACTOR: int = 50
"""Branching factor for the map-wide scatter pass."""

CLUSTER_BRANCHING_FACTOR: int = 70
"""Branching factor for the local sample inside each cluster."""

DISTANCE_TOLERANCE: float = 1e-9
"""Float tolerance when checking pairwise minimum distance."""

# ----- Map layout -----
TILE_SIZE: float = 100.0
"""World units per ground tile; map dimensions are given in tiles."""

PLACEMENT_CELL_SIZE: float = 20.0
"""Cell size (world units) of the placement grid. Independent of the sampling grid."""

DEFAULT_DENSITY: float = 1.0
"""Scatter density multiplier; scales point count and shrinks spacing."""

ORIGIN_CHANCE: float = 0.15
"""Probability that a scattered placement becomes a cluster-origin candidate."""

# ----- Clusters -----
STRUCTURE_CLUSTER_CHANCE: float = 0.20
"""Probability that a cluster is a structure (barn) cluster rather than vegetation."""

STRUCTURE_COUNT_RANGE: tuple[int, int] = (1, 6)
"""Inclusive member count range requested for structure clusters."""

VEGETATION_COUNT_RANGE: tuple[int, int] = (10, 39)
"""Inclusive member count range requested for vegetation clusters."""

VEGETATION_RADIUS_STEPS: int = 5
"""Vegetation clearing radius = (1 + step / VEGETATION_RADIUS_STEPS) * cell size, step in [0, steps)."""

STRUCTURE_ORIENTATIONS_DEG: tuple[float, ...] = (0.0, 90.0)
"""Fixed orientation choices for structures; one extra choice faces away from the origin."""

# ----- Instancing hints -----
HAY_TAGS: tuple[str, ...] = ("canPickUp", "canCollect")
HAY_LIFT: float = 0.5
"""Vertical offset applied to hay records so they rest on the ground plane."""

HAY_ROLL_DEG: float = 90.0
"""Hay bales are rolled a quarter turn about the z axis."""

TREE_SCALE_BASE: float = 1.25
TREE_SCALE_STEPS: int = 5
"""Tree scale = TREE_SCALE_BASE + step / 10, step in [0, TREE_SCALE_STEPS)."""

BARN_SCALE_BASE: float = 1.3
BARN_SCALE_STEPS: int = 80
"""Barn per-axis scale = BARN_SCALE_BASE + step / 100, step in [0, BARN_SCALE_STEPS)."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 800

CATEGORY_COLORS: dict[str, str] = {
    "hay": "goldenrod",
    "tree": "forestgreen",
    "barn": "firebrick",
    "origin": "black",
    "originPoint": "dimgray",
    "default": "lightgray",
}
"""Marker color per category tag in debug renders."""

# ----- Determinism -----
SEED: int | None = 42
"""Master random seed; None for non-deterministic."""

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Default log level for CLI entrypoints. Set env LOG_LEVEL=DEBUG for per-cluster detail."""
