# terrapop/core/geometry.py
"""
Geometry helpers: unit-domain predicates, distances, oriented angles,
cluster footprints and map bounds as shapely geometries.
"""

from __future__ import annotations

import math

import numpy as np
from shapely.geometry import Point, Polygon, box

from terrapop.core.types import SamplePoint

UNIT_DISK_CENTER: tuple[float, float] = (0.5, 0.5)
UNIT_DISK_RADIUS: float = 0.5


def in_unit_square(x: float, y: float) -> bool:
    return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0


def in_unit_disk(x: float, y: float) -> bool:
    """Disk of radius 0.5 centered at (0.5, 0.5), boundary included."""
    fx = x - UNIT_DISK_CENTER[0]
    fy = y - UNIT_DISK_CENTER[1]
    return fx * fx + fy * fy <= UNIT_DISK_RADIUS * UNIT_DISK_RADIUS


def in_domain(point: SamplePoint, disk: bool) -> bool:
    return in_unit_disk(point.x, point.y) if disk else in_unit_square(point.x, point.y)


def distance(a: tuple[float, float] | SamplePoint, b: tuple[float, float] | SamplePoint) -> float:
    ax, ay = (a.x, a.y) if isinstance(a, SamplePoint) else a
    bx, by = (b.x, b.y) if isinstance(b, SamplePoint) else b
    return math.hypot(ax - bx, ay - by)


def oriented_angle_deg(u: tuple[float, float], v: tuple[float, float]) -> float:
    """
    Signed angle in degrees (-180, 180] rotating direction u onto direction v.
    Returns 0.0 when either vector has zero length.
    """
    nu = float(np.hypot(u[0], u[1]))
    nv = float(np.hypot(v[0], v[1]))
    if nu == 0.0 or nv == 0.0:
        return 0.0
    ux, uy = u[0] / nu, u[1] / nu
    vx, vy = v[0] / nv, v[1] / nv
    cross = ux * vy - uy * vx
    dot = ux * vx + uy * vy
    return math.degrees(math.atan2(cross, dot))


def cluster_footprint(center: tuple[float, float], radius: float) -> Polygon:
    """Disk footprint of a cluster's clearing radius."""
    if radius <= 0:
        return Polygon()
    return Point(center).buffer(radius)


def map_bounds(width: float, height: float) -> Polygon:
    """World-space rectangle of the map."""
    return box(0.0, 0.0, width, height)
