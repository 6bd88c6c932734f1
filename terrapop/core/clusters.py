# terrapop/core/clusters.py
"""
Cluster pass: around an origin placement, supersede earlier placements inside the
clearing radius, then scatter a small local blue-noise sample of trees or barns.

Clearing is a soft delete: records stay in their buckets with category SUPERSEDED,
so scans already walking the grid are never invalidated.
"""

from __future__ import annotations

import logging

from terrapop.core.config import (
    CLUSTER_BRANCHING_FACTOR,
    STRUCTURE_CLUSTER_CHANCE,
    STRUCTURE_COUNT_RANGE,
    STRUCTURE_ORIENTATIONS_DEG,
    VEGETATION_COUNT_RANGE,
    VEGETATION_RADIUS_STEPS,
)
from terrapop.core.geometry import oriented_angle_deg
from terrapop.core.placement_grid import PlacementGrid
from terrapop.core.rng import PseudoRandomSource
from terrapop.core.sampler import generate_blue_noise
from terrapop.core.types import ClusterKind, ClusterReport, Placement, PlacementCategory

logger = logging.getLogger(__name__)

# Categories a clearing never touches: processed origins and records already removed.
_PROTECTED = (PlacementCategory.ORIGIN, PlacementCategory.SUPERSEDED)


def _chance(prng: PseudoRandomSource, probability: float) -> bool:
    """Percent draw: uniform_int(99) < probability * 100."""
    return prng.uniform_int(99) < round(probability * 100)


def _draw_in_range(prng: PseudoRandomSource, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return lo + prng.uniform_int(hi - lo)


class ClusterGenerator:
    """Runs cluster passes against one PlacementGrid. Each call takes its own random source."""

    def __init__(
        self,
        grid: PlacementGrid,
        branching_factor: int = CLUSTER_BRANCHING_FACTOR,
        structure_chance: float = STRUCTURE_CLUSTER_CHANCE,
    ) -> None:
        self.grid = grid
        self.branching_factor = branching_factor
        self.structure_chance = structure_chance

    def choose_kind(self, prng: PseudoRandomSource) -> ClusterKind:
        return ClusterKind.STRUCTURE if _chance(prng, self.structure_chance) else ClusterKind.VEGETATION

    def clearing_radius(self, kind: ClusterKind, prng: PseudoRandomSource) -> float:
        cell = self.grid.cell_size
        if kind is ClusterKind.STRUCTURE:
            return cell
        step = prng.uniform_int(VEGETATION_RADIUS_STEPS - 1)
        return (1.0 + step / VEGETATION_RADIUS_STEPS) * cell

    def member_count(self, kind: ClusterKind, prng: PseudoRandomSource) -> int:
        if kind is ClusterKind.STRUCTURE:
            return _draw_in_range(prng, STRUCTURE_COUNT_RANGE)
        return _draw_in_range(prng, VEGETATION_COUNT_RANGE)

    def clear(self, origin: Placement, radius: float) -> list[Placement]:
        """Mark every placement within radius of origin as SUPERSEDED; return them."""
        superseded: list[Placement] = []
        for placement in self.grid.placements_near(origin.position, radius):
            if placement is origin or placement.category in _PROTECTED:
                continue
            if placement.distance_to(origin.position) < radius:
                placement.category = PlacementCategory.SUPERSEDED
                superseded.append(placement)
        return superseded

    def _orientation(self, origin: Placement, position: tuple[float, float], prng: PseudoRandomSource) -> float:
        choice = prng.uniform_int(len(STRUCTURE_ORIENTATIONS_DEG))
        if choice < len(STRUCTURE_ORIENTATIONS_DEG):
            return STRUCTURE_ORIENTATIONS_DEG[choice]
        offset = (position[0] - origin.x, position[1] - origin.y)
        return oriented_angle_deg(origin.position, offset)

    def generate(self, origin: Placement, prng: PseudoRandomSource, cluster_id: int = 0) -> ClusterReport:
        """
        Run one cluster pass around origin. origin ends up as ORIGIN.
        Members falling outside the grid are dropped and counted.
        """
        kind = self.choose_kind(prng)
        radius = self.clearing_radius(kind, prng)
        origin.category = PlacementCategory.ORIGIN
        origin.cluster_id = cluster_id
        superseded = self.clear(origin, radius)

        n = self.member_count(kind, prng)
        points = generate_blue_noise(n, prng, self.branching_factor)

        report = ClusterReport(
            cluster_id=cluster_id,
            origin=origin.position,
            kind=kind,
            clearing_radius=radius,
            requested_count=n,
            superseded=superseded,
        )
        half = radius / 2.0
        for p in points:
            position = (origin.x + p.x * radius - half, origin.y + p.y * radius - half)
            member = Placement(
                position=position,
                cell=self.grid.coordinate_of(position),
                category=kind.member_category,
                cluster_id=cluster_id,
            )
            if not self.grid.contains(member.cell):
                report.dropped += 1
                continue
            if kind is ClusterKind.STRUCTURE:
                member.orientation_deg = self._orientation(origin, position, prng)
            self.grid.insert(member)
            report.members.append(member)

        logger.debug(
            "cluster %d: %s at (%.1f, %.1f) r=%.1f, %d/%d members, %d superseded, %d dropped",
            cluster_id, kind.value, origin.x, origin.y, radius,
            len(report.members), n, len(superseded), report.dropped,
        )
        return report
