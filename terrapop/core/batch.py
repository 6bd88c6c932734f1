# terrapop/core/batch.py
"""
Seed sweep: run generation for several seeds (and optionally several densities).
Output: reports/batch_<run_name>/index.csv and cases/<case_id>/result.json.
"""

from __future__ import annotations

import argparse
import csv
import logging
import time
from pathlib import Path

from terrapop.core.config import DEFAULT_DENSITY, LOG_LEVEL, REPORTS_DIR
from terrapop.core.error_codes import ConfigError
from terrapop.core.generator import MapGenerator
from terrapop.core.reporting import ensure_report_dir, write_result_json
from terrapop.core.types import PlacementCategory
from terrapop.core.validate import check_cluster_containment, check_min_distance, summarize_result

logger = logging.getLogger(__name__)


def parse_int_list(s: str) -> list[int]:
    """Parse comma-separated ints, e.g. '1,2,3'. Non-numeric parts are skipped."""
    out: list[int] = []
    for part in (s or "").strip().split(","):
        part = part.strip()
        if part:
            try:
                out.append(int(part))
            except ValueError:
                continue
    return out


def parse_float_list(s: str, default: float) -> list[float]:
    out: list[float] = []
    for part in (s or "").strip().split(","):
        part = part.strip()
        if part:
            try:
                out.append(float(part))
            except ValueError:
                continue
    return out or [default]


def _error_row(case_id: str, seed: int, density: float, mode: str, t0: float) -> dict:
    return {
        "case_id": case_id, "seed": seed, "density": density, "status": mode,
        "requested_count": "", "sample_count": "", "cluster_count": "", "record_count": "",
        "superseded_count": "", "min_spacing_ok": "", "clusters_contained": "",
        "duration_ms": int((time.perf_counter() - t0) * 1000),
    }


def run_batch(
    run_name: str,
    seeds: list[int],
    width_tiles: int = 2,
    height_tiles: int = 2,
    densities: list[float] | None = None,
    repo_root: Path | None = None,
    write_cases: bool = True,
) -> Path:
    """Run one generation per (seed, density). Returns report directory containing index.csv."""
    root = repo_root or Path.cwd().resolve()
    batch_dir = ensure_report_dir(root, f"batch_{run_name}", output_dir=REPORTS_DIR)
    cases_dir = batch_dir / "cases"
    cases_dir.mkdir(parents=True, exist_ok=True)
    rows: list[dict] = []
    for density in densities or [DEFAULT_DENSITY]:
        for seed in seeds:
            case_id = f"case_s{seed}_d{density:g}"
            t0 = time.perf_counter()
            try:
                gen = MapGenerator(width_tiles, height_tiles, density=density, seed=seed)
            except ConfigError as e:
                logger.warning("%s: %s", case_id, e)
                rows.append(_error_row(case_id, seed, density, e.key, t0))
                continue
            result = gen.generate()
            duration_ms = int((time.perf_counter() - t0) * 1000)
            unit_points = [
                (p.x / result.width, p.y / result.height)
                for p in result.grid
                if p.cluster_id is None or p.category is PlacementCategory.ORIGIN
            ]
            spacing_ok, _ = check_min_distance(unit_points, gen.sample_min_distance())
            contained, _ = check_cluster_containment(result)
            summary = summarize_result(result)
            if write_cases:
                case_dir = cases_dir / case_id
                case_dir.mkdir(parents=True, exist_ok=True)
                write_result_json(case_dir, result)
            rows.append({
                "case_id": case_id, "seed": seed, "density": density, "status": "ok",
                "requested_count": summary["requested_count"],
                "sample_count": summary["sample_count"],
                "cluster_count": summary["cluster_count"],
                "record_count": summary["record_count"],
                "superseded_count": summary["categories"].get("default", 0),
                "min_spacing_ok": spacing_ok,
                "clusters_contained": contained,
                "duration_ms": duration_ms,
            })
    index_path = batch_dir / "index.csv"
    if rows:
        with open(index_path, "w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            w.writeheader()
            w.writerows(rows)
    return batch_dir


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Seed sweep over map generation.")
    p.add_argument("--run-name", type=str, default="sweep", dest="run_name")
    p.add_argument("--seeds", type=str, default="1,2,3,4,5", help="Seeds e.g. '1,2,3'")
    p.add_argument("--densities", type=str, default="", help="Densities e.g. '0.5,1,2'")
    p.add_argument("--width", type=int, default=2)
    p.add_argument("--height", type=int, default=2)
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root")
    p.add_argument("--log-level", type=str, default=LOG_LEVEL, dest="log_level")
    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    out = run_batch(
        run_name=args.run_name,
        seeds=parse_int_list(args.seeds),
        width_tiles=args.width,
        height_tiles=args.height,
        densities=parse_float_list(args.densities, DEFAULT_DENSITY),
        repo_root=Path(args.repo_root).resolve() if args.repo_root else None,
    )
    print(out / "index.csv")


if __name__ == "__main__":
    main()
