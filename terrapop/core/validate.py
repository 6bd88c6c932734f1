# terrapop/core/validate.py
"""
Checks for sampler and generation invariants: minimum spacing, domain containment,
cluster containment. Return (ok, measured) pairs rather than raising.
"""

from __future__ import annotations

from collections import Counter

import numpy as np
from shapely.geometry import Point

from terrapop.core.config import DISTANCE_TOLERANCE
from terrapop.core.generator import GenerationResult
from terrapop.core.geometry import in_domain
from terrapop.core.types import Placement, SamplePoint


def _as_array(points: list[SamplePoint] | list[tuple[float, float]]) -> np.ndarray:
    if not points:
        return np.zeros((0, 2))
    if isinstance(points[0], SamplePoint):
        return np.array([(p.x, p.y) for p in points], dtype=np.float64)
    return np.asarray(points, dtype=np.float64)


def min_pairwise_distance(points: list[SamplePoint] | list[tuple[float, float]]) -> float:
    """Smallest distance between any two points; inf for fewer than two."""
    xy = _as_array(points)
    if xy.shape[0] < 2:
        return float("inf")
    diff = xy[:, None, :] - xy[None, :, :]
    d = np.hypot(diff[..., 0], diff[..., 1])
    np.fill_diagonal(d, np.inf)
    return float(d.min())


def check_min_distance(
    points: list[SamplePoint] | list[tuple[float, float]],
    min_dist: float,
    tolerance: float = DISTANCE_TOLERANCE,
) -> tuple[bool, float]:
    """True if every pair is at least min_dist apart (within tolerance). Also returns the minimum."""
    d = min_pairwise_distance(points)
    return d >= min_dist - tolerance, d


def check_domain(points: list[SamplePoint], disk: bool) -> tuple[bool, int]:
    """True if all points satisfy the domain predicate. Also returns the violation count."""
    outside = sum(1 for p in points if not (p.valid and in_domain(p, disk)))
    return outside == 0, outside


def check_cluster_containment(
    result: GenerationResult,
    tolerance: float = 0.0,
) -> tuple[bool, list[Placement]]:
    """
    True if every cluster member lies within its cluster's clearing radius
    (plus tolerance) of the origin. Also returns the offending members.
    """
    offenders: list[Placement] = []
    for report in result.clusters:
        origin = Point(report.origin)
        limit = report.clearing_radius + tolerance
        for member in report.members:
            # exact distance: a buffered polygon lies inside the circle
            if origin.distance(Point(member.position)) > limit:
                offenders.append(member)
    return not offenders, offenders


def summarize_result(result: GenerationResult) -> dict:
    """Counts per category tag plus headline numbers, for reports and sweeps."""
    by_tag = Counter(p.category.tag for p in result.grid)
    return {
        "requested_count": result.requested_count,
        "sample_count": result.sample_count,
        "dropped_out_of_range": result.dropped_out_of_range,
        "cluster_count": len(result.clusters),
        "record_count": len(result.records),
        "categories": dict(sorted(by_tag.items())),
        "cluster_members_dropped": sum(r.dropped for r in result.clusters),
    }
