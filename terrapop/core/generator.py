# terrapop/core/generator.py
"""
Map generation orchestration: scatter blue-noise points over the map, classify
them, run a cluster pass for every origin candidate, then build the final
instance records. One call to generate() is one complete, synchronous pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from terrapop.core.clusters import ClusterGenerator
from terrapop.core.config import (
    CLUSTER_BRANCHING_FACTOR,
    DEFAULT_DENSITY,
    MAP_BRANCHING_FACTOR,
    ORIGIN_CHANCE,
    PLACEMENT_CELL_SIZE,
    STRUCTURE_CLUSTER_CHANCE,
    TILE_SIZE,
)
from terrapop.core.error_codes import (
    INVALID_BRANCHING_FACTOR,
    INVALID_CELL_SIZE,
    INVALID_DENSITY,
    INVALID_DIMENSIONS,
    INVALID_PROBABILITY,
    ConfigError,
)
from terrapop.core.instancing import build_instance_records, ground_tiles
from terrapop.core.placement_grid import PlacementGrid
from terrapop.core.rng import PseudoRandomSource
from terrapop.core.sampler import generate_blue_noise
from terrapop.core.types import (
    ClusterReport,
    GroundTile,
    InstanceRecord,
    Placement,
    PlacementCategory,
    SamplePoint,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything one generation pass produced. records is the hand-off list."""
    width: float
    height: float
    cell_size: float
    density: float
    seed: int | None
    entropy: int
    grid: PlacementGrid
    requested_count: int
    sample_count: int
    dropped_out_of_range: int
    clusters: list[ClusterReport] = field(default_factory=list)
    records: list[InstanceRecord] = field(default_factory=list)
    ground_tiles: list[GroundTile] = field(default_factory=list)

    def placements(self, category: PlacementCategory | None = None) -> list[Placement]:
        return [p for p in self.grid if category is None or p.category is category]


class MapGenerator:
    """
    Populates a map of width_tiles x height_tiles ground tiles.
    Either pass a PseudoRandomSource or a seed (None draws fresh entropy).
    """

    def __init__(
        self,
        width_tiles: int,
        height_tiles: int,
        density: float = DEFAULT_DENSITY,
        cell_size: float = PLACEMENT_CELL_SIZE,
        prng: PseudoRandomSource | None = None,
        seed: int | None = None,
        origin_chance: float = ORIGIN_CHANCE,
        structure_chance: float = STRUCTURE_CLUSTER_CHANCE,
        tile_size: float = TILE_SIZE,
        map_branching_factor: int = MAP_BRANCHING_FACTOR,
        cluster_branching_factor: int = CLUSTER_BRANCHING_FACTOR,
    ) -> None:
        for tiles in (width_tiles, height_tiles):
            if isinstance(tiles, bool) or not float(tiles).is_integer():
                raise ConfigError(INVALID_DIMENSIONS, f"{width_tiles}x{height_tiles} tiles")
        width_tiles, height_tiles = int(width_tiles), int(height_tiles)
        if width_tiles <= 0 or height_tiles <= 0 or tile_size <= 0:
            raise ConfigError(INVALID_DIMENSIONS, f"{width_tiles}x{height_tiles} tiles of {tile_size}")
        if not density > 0:
            raise ConfigError(INVALID_DENSITY, f"density={density}")
        if cell_size <= 0 or cell_size > width_tiles * tile_size or cell_size > height_tiles * tile_size:
            raise ConfigError(INVALID_CELL_SIZE, f"cell_size={cell_size}")
        for chance in (origin_chance, structure_chance):
            if not 0.0 <= chance <= 1.0:
                raise ConfigError(INVALID_PROBABILITY, f"chance={chance}")
        for k in (map_branching_factor, cluster_branching_factor):
            if k < 0:
                raise ConfigError(INVALID_BRANCHING_FACTOR, f"branching_factor={k}")

        self.width_tiles = width_tiles
        self.height_tiles = height_tiles
        self.tile_size = float(tile_size)
        self.width = width_tiles * self.tile_size
        self.height = height_tiles * self.tile_size
        self.density = float(density)
        self.origin_chance = origin_chance
        self.map_branching_factor = map_branching_factor
        self.prng = prng if prng is not None else PseudoRandomSource(seed)
        self.seed = seed if prng is None else prng.seed

        self._cell_size = float(cell_size)
        self.cluster_branching_factor = cluster_branching_factor
        self.structure_chance = structure_chance
        self.reset()

    def reset(self) -> None:
        """Fresh placement grid, cluster reports and drop counter. The random stream carries on."""
        self.grid = PlacementGrid.for_extent(self.width, self.height, self._cell_size)
        self.clusters = ClusterGenerator(
            self.grid,
            branching_factor=self.cluster_branching_factor,
            structure_chance=self.structure_chance,
        )
        self.reports: list[ClusterReport] = []
        self.dropped_out_of_range = 0

    @property
    def cell_size(self) -> float:
        return self.grid.cell_size

    def requested_count(self) -> int:
        return max(1, round((self.grid.columns + 1) * (self.grid.rows + 1) * self.density))

    def sample_min_distance(self) -> float:
        """Unit-domain spacing: one point per placement cell along the shorter axis, scaled by density."""
        return 1.0 / (self.density * min(self.grid.columns, self.grid.rows))

    def sample_unit_points(self) -> list[SamplePoint]:
        return generate_blue_noise(
            self.requested_count(),
            self.prng,
            self.map_branching_factor,
            domain_is_disk=False,
            min_dist=self.sample_min_distance(),
        )

    def _classify(self) -> PlacementCategory:
        if self.prng.uniform_int(99) < round(self.origin_chance * 100):
            return PlacementCategory.ORIGIN_CANDIDATE
        return PlacementCategory.SCATTER

    def scatter(self, points: list[SamplePoint]) -> list[Placement]:
        """Scale unit points to world space, classify each one and bucket it."""
        placed: list[Placement] = []
        for p in points:
            position = (p.x * self.width, p.y * self.height)
            placement = Placement(
                position=position,
                cell=self.grid.coordinate_of(position),
                category=self._classify(),
            )
            if not self.grid.insert(placement):
                self.dropped_out_of_range += 1
                continue
            placed.append(placement)
        return placed

    def generate_clusters(self) -> list[ClusterReport]:
        """
        Cluster pass over every remaining origin candidate, in column-major grid order.
        Candidates superseded by an earlier cluster are skipped.
        """
        candidates = [p for p in self.grid if p.category is PlacementCategory.ORIGIN_CANDIDATE]
        for origin in candidates:
            if origin.category is not PlacementCategory.ORIGIN_CANDIDATE:
                continue
            report = self.clusters.generate(origin, self.prng.spawn(), cluster_id=len(self.reports))
            self.reports.append(report)
        return self.reports

    def finalize(self) -> list[InstanceRecord]:
        return build_instance_records(self.grid, self.prng)

    def generate(self) -> GenerationResult:
        """One complete pass on a fresh grid; earlier results are left untouched."""
        self.reset()
        tiles = ground_tiles(self.width_tiles, self.height_tiles, self.tile_size)
        points = self.sample_unit_points()
        self.scatter(points)
        self.generate_clusters()
        records = self.finalize()

        result = GenerationResult(
            width=self.width,
            height=self.height,
            cell_size=self.cell_size,
            density=self.density,
            seed=self.seed,
            entropy=self.prng.entropy,
            grid=self.grid,
            requested_count=self.requested_count(),
            sample_count=len(points),
            dropped_out_of_range=self.dropped_out_of_range,
            clusters=list(self.reports),
            records=records,
            ground_tiles=tiles,
        )
        logger.info(
            "generated %gx%g map (entropy %d): %d/%d samples, %d clusters, %d records, %d dropped",
            self.width, self.height, result.entropy, len(points), result.requested_count,
            len(self.reports), len(records), self.dropped_out_of_range,
        )
        return result


def generate_map(
    width_tiles: int,
    height_tiles: int,
    density: float = DEFAULT_DENSITY,
    seed: int | None = None,
    **kwargs: object,
) -> GenerationResult:
    """Convenience wrapper: build a MapGenerator and run one full pass."""
    return MapGenerator(width_tiles, height_tiles, density=density, seed=seed, **kwargs).generate()  # type: ignore[arg-type]
