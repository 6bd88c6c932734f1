"""
Validation helpers: pairwise spacing, domain checks, cluster containment, summaries.
"""

from __future__ import annotations

import math

from terrapop.core.generator import generate_map
from terrapop.core.types import ClusterKind, ClusterReport, GridCoordinate, Placement, PlacementCategory, SamplePoint
from terrapop.core.validate import (
    check_cluster_containment,
    check_domain,
    check_min_distance,
    min_pairwise_distance,
    summarize_result,
)


def test_min_pairwise_distance() -> None:
    assert min_pairwise_distance([(0.0, 0.0), (3.0, 4.0), (10.0, 10.0)]) == 5.0
    assert min_pairwise_distance([SamplePoint(0.1, 0.1)]) == math.inf
    assert min_pairwise_distance([]) == math.inf


def test_check_min_distance() -> None:
    pts = [SamplePoint(0.0, 0.0), SamplePoint(0.1, 0.0)]
    ok, d = check_min_distance(pts, 0.1)
    assert ok
    assert d == 0.1
    assert not check_min_distance(pts, 0.2)[0]


def test_check_domain() -> None:
    pts = [SamplePoint(0.5, 0.5), SamplePoint(0.9, 0.9)]
    assert check_domain(pts, disk=False) == (True, 0)
    assert check_domain(pts, disk=True) == (False, 1)
    assert check_domain([SamplePoint(0.5, 0.5, valid=False)], disk=False) == (False, 1)


def test_cluster_containment_on_generated_map() -> None:
    result = generate_map(2, 2, seed=42)
    ok, offenders = check_cluster_containment(result)
    assert ok, offenders


def test_cluster_containment_flags_stray_member() -> None:
    result = generate_map(2, 2, seed=1, origin_chance=0.0)
    stray = Placement(position=(150.0, 150.0), cell=GridCoordinate(7, 7), category=PlacementCategory.CLUSTER_TREE)
    result.clusters.append(
        ClusterReport(
            cluster_id=0, origin=(50.0, 50.0), kind=ClusterKind.VEGETATION,
            clearing_radius=20.0, requested_count=1, members=[stray],
        )
    )
    ok, offenders = check_cluster_containment(result)
    assert not ok
    assert offenders == [stray]


def test_summarize_result() -> None:
    result = generate_map(2, 2, seed=42)
    summary = summarize_result(result)
    for key in (
        "requested_count", "sample_count", "dropped_out_of_range", "cluster_count",
        "record_count", "categories", "cluster_members_dropped",
    ):
        assert key in summary
    assert summary["record_count"] == len(result.records)
    assert sum(summary["categories"].values()) == len(result.grid)


def test_member_exactly_on_clearing_radius_is_contained() -> None:
    result = generate_map(2, 2, seed=1, origin_chance=0.0)
    edge = Placement(position=(70.0, 50.0), cell=GridCoordinate(3, 2), category=PlacementCategory.CLUSTER_BARN)
    result.clusters.append(
        ClusterReport(
            cluster_id=0, origin=(50.0, 50.0), kind=ClusterKind.STRUCTURE,
            clearing_radius=20.0, requested_count=1, members=[edge],
        )
    )
    assert check_cluster_containment(result) == (True, [])
    assert check_cluster_containment(result, tolerance=-0.5)[0] is False
