# terrapop/core/smoke.py
"""
Single entrypoint to verify generation end-to-end: default map, report files and
renders under reports/smoke/. Does not run on import.
"""

from __future__ import annotations

from pathlib import Path

from terrapop.core.config import DEFAULT_DENSITY, SEED
from terrapop.core.generator import MapGenerator
from terrapop.core.render import render_debug, render_map
from terrapop.core.reporting import (
    ensure_report_dir,
    write_result_json,
    write_run_metadata_json,
)
from terrapop.core.validate import check_cluster_containment


def main() -> None:
    """Generate a 2x2-tile map with run_name='smoke' and fail loudly on broken invariants."""
    repo_root = Path.cwd().resolve()
    result = MapGenerator(2, 2, density=DEFAULT_DENSITY, seed=SEED).generate()
    ok, offenders = check_cluster_containment(result)
    if not ok:
        raise RuntimeError(f"{len(offenders)} cluster members outside their clearing radius")

    report_dir = ensure_report_dir(repo_root, "smoke")
    write_result_json(report_dir, result)
    write_run_metadata_json(report_dir, "smoke", 2, 2, DEFAULT_DENSITY, SEED, result.entropy)
    render_map(result, report_dir / "map.png")
    render_debug(result, report_dir / "debug.png")


if __name__ == "__main__":
    main()
