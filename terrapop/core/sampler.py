# terrapop/core/sampler.py
"""
Blue-noise (Poisson-disk) sampling over the unit square or the inscribed unit disk.

Dart throwing with an active list, after Bridson, "Fast Poisson Disk Sampling in
Arbitrary Dimensions" (SIGGRAPH 2007):
    1. Seed with one uniform point inside the domain.
    2. Pop an active point at a uniformly random index.
    3. Throw k candidates in the annulus [min_dist, 2 * min_dist) around it; keep
       those inside the domain with no neighbour closer than min_dist.
    4. Stop when the active list is empty or `count` points were accepted.
Output is in acceptance order, not spatially sorted. The result may hold fewer
than `count` points when the domain saturates.
"""

from __future__ import annotations

import logging
import math

from terrapop.core.config import BRANCHING_FACTOR
from terrapop.core.error_codes import (
    INVALID_BRANCHING_FACTOR,
    INVALID_COUNT,
    INVALID_MIN_DISTANCE,
    ConfigError,
)
from terrapop.core.geometry import in_domain
from terrapop.core.rng import PseudoRandomSource
from terrapop.core.spatial_grid import SpatialGrid
from terrapop.core.types import SamplePoint

logger = logging.getLogger(__name__)


def auto_min_distance(count: int) -> float:
    """sqrt(count) / count: keeps density roughly constant as count grows."""
    if count <= 0:
        return 1.0
    return math.sqrt(count) / count


def _pop_random(active: list[SamplePoint], prng: PseudoRandomSource) -> SamplePoint:
    idx = prng.uniform_int(len(active) - 1)
    return active.pop(idx)


def _random_point_around(p: SamplePoint, min_dist: float, prng: PseudoRandomSource) -> SamplePoint:
    r1 = prng.uniform_float()
    r2 = prng.uniform_float()
    radius = min_dist * (r1 + 1.0)
    angle = 2.0 * math.pi * r2
    return SamplePoint(p.x + radius * math.cos(angle), p.y + radius * math.sin(angle))


def _first_point(prng: PseudoRandomSource, disk: bool) -> SamplePoint:
    while True:
        p = SamplePoint(prng.uniform_float(), prng.uniform_float())
        if in_domain(p, disk):
            return p


def generate_blue_noise(
    count: int,
    prng: PseudoRandomSource,
    branching_factor: int = BRANCHING_FACTOR,
    domain_is_disk: bool = True,
    min_dist: float = -1.0,
) -> list[SamplePoint]:
    """
    Return up to `count` points in the unit domain, pairwise at least min_dist apart.
    min_dist < 0 derives it as sqrt(count) / count.
    Raises ConfigError for a negative count or branching factor, or min_dist == 0.
    """
    if count < 0:
        raise ConfigError(INVALID_COUNT, f"count={count}")
    if branching_factor < 0:
        raise ConfigError(INVALID_BRANCHING_FACTOR, f"branching_factor={branching_factor}")
    if count == 0:
        return []
    if count == 1:
        return [_first_point(prng, domain_is_disk)]

    if min_dist < 0:
        min_dist = auto_min_distance(count)
    elif min_dist == 0:
        raise ConfigError(INVALID_MIN_DISTANCE, "min_dist=0")

    grid = SpatialGrid.for_min_distance(min_dist)

    first = _first_point(prng, domain_is_disk)
    active = [first]
    samples = [first]
    grid.insert(first)

    while active and len(samples) < count:
        point = _pop_random(active, prng)
        for _ in range(branching_factor):
            if len(samples) >= count:
                break
            candidate = _random_point_around(point, min_dist, prng)
            if not in_domain(candidate, domain_is_disk):
                continue
            if grid.has_neighbor_within(candidate, min_dist):
                continue
            active.append(candidate)
            samples.append(candidate)
            grid.insert(candidate)

    logger.debug(
        "blue noise: %d/%d points (min_dist=%.4f, k=%d, %s, %s)",
        len(samples), count, min_dist, branching_factor,
        "disk" if domain_is_disk else "square",
        "saturated" if len(samples) < count else "complete",
    )
    return samples
