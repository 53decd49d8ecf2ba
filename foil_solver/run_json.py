# foil_solver/run_json.py
# Runner for JSON job files (pool + stairs + paddling + material + objective).
#
# Usage:
#   python -m foil_solver.run_json --job pool.json
#   python -m foil_solver.run_json --job pool.json --objective minRolls --out out/
#
# --objective / --material override the values stored in the job file.

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from .cli import print_run
from .config import MATERIALS
from .io_json import load_job_json
from .logger import get_logger, set_enabled
from .run import run_job
from .types import OBJECTIVES


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the pool foil planner from a JSON job file.")
    p.add_argument("--job", type=str, required=True, help="Path to job JSON (pool/stairs/paddling/material)")
    p.add_argument("--objective", type=str, default="", choices=["", *OBJECTIVES], help="Override job objective")
    p.add_argument("--material", type=str, default="", choices=["", *sorted(MATERIALS)], help="Override job material")

    p.add_argument("--exact", action="store_true", help="Also compute the exact minimum roll count (CP-SAT)")
    p.add_argument("--time", type=float, default=10.0, help="Time limit for the exact check (seconds)")

    # Output
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="", help="Export filename prefix (default: job name)")
    p.add_argument("--verbose", action="store_true", help="Print optimizer diagnostics")
    return p


def main(argv: Optional[list[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(bool(args.verbose))

    job_path = Path(args.job)
    log = get_logger()
    if not job_path.exists():
        log.error(f"Job JSON not found: {job_path}")
        raise SystemExit(2)

    try:
        job = load_job_json(job_path)
    except ValueError as e:
        log.error(f"{job_path}: {e}")
        raise SystemExit(2)

    out_dir = args.out.strip() or None
    prefix = args.prefix.strip() or job.name.replace(" ", "_")

    res = run_job(
        job.geometry,
        material=args.material or job.material,
        objective=args.objective or job.objective,
        exact=bool(args.exact),
        exact_time_limit_s=float(args.time),
        out_dir=out_dir,
        export_prefix=prefix,
    )

    g = job.geometry
    print(f"Job: {job.name}  pool={g.length}x{g.width}x{g.depth}  material={job.material.name}")
    print_run(res)

    if out_dir is not None:
        print(f"Exported CSV + JSON to: {out_dir}")


if __name__ == "__main__":
    main()
