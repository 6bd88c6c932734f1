# terrapop/core/render.py
"""
Matplotlib PNG rendering: map.png (final records) and debug.png (every placement
by category, cluster footprints, placement grid lines).
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from shapely.geometry.base import BaseGeometry

from terrapop.core.config import CATEGORY_COLORS, RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from terrapop.core.generator import GenerationResult
from terrapop.core.geometry import cluster_footprint, map_bounds
from terrapop.core.types import PlacementCategory


def set_axes_to_bounds(ax: plt.Axes, bounds: BaseGeometry, pad_frac: float = 0.05) -> None:
    """Set xlim/ylim from bounds with margin; equal aspect; hide axes."""
    minx, miny, maxx, maxy = bounds.bounds
    dx = max(1.0, (maxx - minx) * pad_frac)
    dy = max(1.0, (maxy - miny) * pad_frac)
    ax.set_xlim(minx - dx, maxx + dx)
    ax.set_ylim(miny - dy, maxy + dy)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.axis("off")
    return fig, ax


def _draw_outline(ax: plt.Axes, geom: BaseGeometry, **kwargs: object) -> None:
    if geom is None or geom.is_empty:
        return
    xy = np.array(geom.exterior.coords)
    ax.plot(xy[:, 0], xy[:, 1], **kwargs)


def _save(fig: plt.Figure, output_path: str | Path, **kwargs: object) -> None:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", **kwargs)
    plt.close(fig)


def render_map(
    result: GenerationResult,
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    scale: int = 1,
) -> None:
    """Render final records only, as the instantiation layer would see them."""
    fig, ax = _new_fig(width_px * scale, height_px * scale)
    bounds = map_bounds(result.width, result.height)
    ax.fill(*np.array(bounds.exterior.coords).T, facecolor="honeydew", edgecolor="darkgreen", linewidth=1)
    for cat in (PlacementCategory.SCATTER, PlacementCategory.CLUSTER_TREE, PlacementCategory.CLUSTER_BARN):
        xs = [r.position[0] for r in result.records if r.category is cat]
        zs = [r.position[2] for r in result.records if r.category is cat]
        if xs:
            ax.scatter(xs, zs, s=10 * scale, color=CATEGORY_COLORS[cat.tag], zorder=3)
    set_axes_to_bounds(ax, bounds)
    _save(fig, output_path)


def render_debug(
    result: GenerationResult,
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    scale: int = 1,
    show_grid: bool = True,
) -> None:
    """Every placement by category (superseded included), cluster footprints, grid lines."""
    w, h = width_px * scale, height_px * scale
    fig = plt.figure(figsize=(w / 100.0, h / 100.0), dpi=100, constrained_layout=False)
    # Leave bottom margin so legend does not overlap the image
    ax = fig.add_axes([0.05, 0.08, 0.9, 0.88])
    ax.axis("off")
    bounds = map_bounds(result.width, result.height)
    _draw_outline(ax, bounds, color="darkgreen", linewidth=1)

    if show_grid:
        for c in range(1, result.grid.columns):
            ax.axvline(c * result.cell_size, color="gainsboro", linewidth=0.5, zorder=0)
        for r in range(1, result.grid.rows):
            ax.axhline(r * result.cell_size, color="gainsboro", linewidth=0.5, zorder=0)

    for report in result.clusters:
        fp = cluster_footprint(report.origin, report.clearing_radius)
        _draw_outline(ax, fp, color="slategray", linewidth=0.8, linestyle="--")

    for cat in PlacementCategory:
        pts = result.placements(cat)
        if not pts:
            continue
        ax.scatter(
            [p.x for p in pts], [p.y for p in pts],
            s=8 * scale,
            color=CATEGORY_COLORS[cat.tag],
            marker="x" if cat is PlacementCategory.SUPERSEDED else "o",
            label=f"{cat.tag} ({len(pts)})",
            zorder=3,
        )

    set_axes_to_bounds(ax, bounds)
    leg = ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=3, fontsize=8)
    _save(fig, output_path, bbox_inches="tight", bbox_extra_artists=[leg])
