# terrapop/core/runner.py
"""
CLI entrypoint: run one generation pass, write result/metadata JSON, optional
points dump and PNG renders, print the written paths.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from terrapop.core.config import (
    DEFAULT_DENSITY,
    LOG_LEVEL,
    ORIGIN_CHANCE,
    PLACEMENT_CELL_SIZE,
    REPORTS_DIR,
    SEED,
)
from terrapop.core.error_codes import ConfigError, user_message
from terrapop.core.generator import MapGenerator
from terrapop.core.reporting import (
    ensure_report_dir,
    write_points_txt,
    write_result_json,
    write_run_metadata_json,
)

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Populate a terrain map with scatter and clusters.")
    p.add_argument("--width", type=int, default=2, help="Map width in ground tiles")
    p.add_argument("--height", type=int, default=2, help="Map height in ground tiles")
    p.add_argument("--density", type=float, default=DEFAULT_DENSITY, help="Scatter density multiplier")
    p.add_argument("--cell-size", type=float, default=PLACEMENT_CELL_SIZE, dest="cell_size", help="Placement grid cell size")
    p.add_argument("--origin-chance", type=float, default=ORIGIN_CHANCE, dest="origin_chance", help="Chance a point seeds a cluster")
    p.add_argument("--seed", type=int, default=SEED, help="Master random seed")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip PNG rendering")
    p.add_argument("--dump-points", action="store_true", dest="dump_points", help="Also write points.txt")
    p.add_argument("--log-level", type=str, default=LOG_LEVEL, dest="log_level", help="Logging level")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    try:
        generator = MapGenerator(
            args.width,
            args.height,
            density=args.density,
            cell_size=args.cell_size,
            seed=args.seed,
            origin_chance=args.origin_chance,
        )
    except ConfigError as e:
        logger.error("invalid configuration: %s", e)
        print(user_message(e.key), file=sys.stderr)
        return 2
    result = generator.generate()

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    paths = [
        write_result_json(report_dir, result),
        write_run_metadata_json(
            report_dir, args.run_name, args.width, args.height, args.density, args.seed, result.entropy
        ),
    ]
    if args.dump_points:
        paths.append(write_points_txt(report_dir / "points.txt", result.placements()))
    if not args.no_render:
        from terrapop.core.render import render_debug, render_map
        render_map(result, report_dir / "map.png")
        render_debug(result, report_dir / "debug.png")
        paths.extend([report_dir / "map.png", report_dir / "debug.png"])

    for p in paths:
        print(p)
    print("Records:", len(result.records), "Clusters:", len(result.clusters))
    return 0


if __name__ == "__main__":
    sys.exit(main())
