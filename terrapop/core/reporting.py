# terrapop/core/reporting.py
"""
Create reports/<run_name>/ and write result.json, run_metadata.json and an
optional points.txt dump. Diagnostics only; nothing reads these back.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from terrapop.core.config import (
    BRANCHING_FACTOR,
    CLUSTER_BRANCHING_FACTOR,
    MAP_BRANCHING_FACTOR,
    ORIGIN_CHANCE,
    PLACEMENT_CELL_SIZE,
    REPORTS_DIR,
    SEED,
    STRUCTURE_CLUSTER_CHANCE,
    TILE_SIZE,
)
from terrapop.core.generator import GenerationResult
from terrapop.core.types import ClusterReport, InstanceRecord, Placement, SamplePoint
from terrapop.core.validate import summarize_result

SCHEMA_VERSION = "1.0"


def placement_to_dict(p: Placement) -> dict:
    out = {
        "x": p.x,
        "y": p.y,
        "cell": [p.cell.column, p.cell.row],
        "category": p.category.tag,
    }
    if p.orientation_deg is not None:
        out["orientation_deg"] = p.orientation_deg
    if p.cluster_id is not None:
        out["cluster_id"] = p.cluster_id
    return out


def record_to_dict(r: InstanceRecord) -> dict:
    return {
        "name": r.name,
        "category": r.category.tag,
        "position": list(r.position),
        "rotation_deg": r.rotation_deg,
        "rotation_axis": list(r.rotation_axis),
        "scale": list(r.scale),
        "tags": list(r.tags),
    }


def cluster_to_dict(c: ClusterReport) -> dict:
    return {
        "cluster_id": c.cluster_id,
        "origin": {"x": c.origin[0], "y": c.origin[1]},
        "kind": c.kind.value,
        "clearing_radius": c.clearing_radius,
        "requested_count": c.requested_count,
        "member_count": len(c.members),
        "superseded_count": len(c.superseded),
        "dropped": c.dropped,
    }


def result_to_dict(result: GenerationResult) -> dict:
    """Exact structure for result.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "map": {
            "width": result.width,
            "height": result.height,
            "cell_size": result.cell_size,
            "columns": result.grid.columns,
            "rows": result.grid.rows,
            "density": result.density,
            "seed": result.seed,
            "entropy": result.entropy,
        },
        "summary": summarize_result(result),
        "ground_tiles": [
            {"name": t.name, "origin": list(t.origin), "size": t.size} for t in result.ground_tiles
        ],
        "clusters": [cluster_to_dict(c) for c in result.clusters],
        "placements": [placement_to_dict(p) for p in result.grid],
        "records": [record_to_dict(r) for r in result.records],
    }


def run_metadata_dict(
    run_name: str,
    width_tiles: int,
    height_tiles: int,
    density: float,
    seed: int | None,
    entropy: int | None = None,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json. entropy reproduces a run seeded with None."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "width_tiles": width_tiles,
        "height_tiles": height_tiles,
        "density": density,
        "seed": seed,
        "entropy": entropy,
        "config": {
            "BRANCHING_FACTOR": BRANCHING_FACTOR,
            "MAP_BRANCHING_FACTOR": MAP_BRANCHING_FACTOR,
            "CLUSTER_BRANCHING_FACTOR": CLUSTER_BRANCHING_FACTOR,
            "PLACEMENT_CELL_SIZE": PLACEMENT_CELL_SIZE,
            "TILE_SIZE": TILE_SIZE,
            "ORIGIN_CHANCE": ORIGIN_CHANCE,
            "STRUCTURE_CLUSTER_CHANCE": STRUCTURE_CLUSTER_CHANCE,
            "SEED": SEED,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_result_json(report_dir: Path, result: GenerationResult) -> Path:
    """Write result.json to report_dir. Returns path to file."""
    path = report_dir / "result.json"
    path.write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    width_tiles: int,
    height_tiles: int,
    density: float,
    seed: int | None,
    entropy: int | None = None,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, width_tiles, height_tiles, density, seed, entropy)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_points_txt(path: Path, points: list[SamplePoint] | list[Placement]) -> Path:
    """One 'x y' line per point; a plain dump for external plotting."""
    lines = [f"{p.x:.6f} {p.y:.6f}" for p in points]
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return path
