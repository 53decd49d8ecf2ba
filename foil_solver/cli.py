# foil_solver/cli.py
# Command-line planner for one rectangular pool given on the command line:
# - pool size as LxWxD, optional slope / stairs / paddling pool
# - material preset and objective
# - optional CSV + JSON export folder and exact roll count check
#
# Run:
#   python -m foil_solver.cli --dims 10x5x1.5 --objective minRolls --out out/
#   python -m foil_solver.cli --dims 8x4x1.4 --stairs 4 --step_depth 0.3 --paddling 2x3x0.4 --verbose

from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from .config import MATERIALS, parse_dims_text
from .debug import print_result
from .logger import get_logger, set_enabled
from .run import RunResult, run_job
from .types import OBJECTIVES, PaddlingSpec, PoolGeometry, StairsSpec


def _parse_stairs_width(s: str) -> Optional[float]:
    s = str(s).strip().lower()
    if s in ("", "full"):
        return None
    return float(s)


def build_geometry(args: argparse.Namespace) -> PoolGeometry:
    length, width, depth = parse_dims_text(args.dims)

    stairs = None
    if args.stairs > 0:
        stairs = StairsSpec(
            step_count=int(args.stairs),
            step_depth=float(args.step_depth),
            step_height=float(args.step_height),
            width=_parse_stairs_width(args.stairs_width),
        )

    paddling = None
    if args.paddling.strip():
        pw, pl, pd = parse_dims_text(args.paddling)
        paddling = PaddlingSpec(width=pw, length=pl, depth=pd, dividing_wall_offset_cm=float(args.wall_offset))

    return PoolGeometry(
        length=length,
        width=width,
        depth=depth,
        slope_depth=args.slope if args.slope > 0 else None,
        stairs=stairs,
        paddling=paddling,
    )


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Pool foil roll-cutting planner")
    p.add_argument("--dims", type=str, required=True, help="Pool LxWxD in meters, e.g. 10x5x1.5")
    p.add_argument("--slope", type=float, default=0.0, help="Depth at the deep end for a sloped bottom (0 = flat)")

    p.add_argument("--stairs", type=int, default=0, help="Number of stair steps (0 = no stairs)")
    p.add_argument("--step_depth", type=float, default=0.30, help="Stair tread depth (m)")
    p.add_argument("--step_height", type=float, default=0.20, help="Stair riser height (m)")
    p.add_argument("--stairs_width", type=str, default="full", help="Stairs width in m or 'full'")

    p.add_argument("--paddling", type=str, default="", help="Paddling pool WxLxD in meters (optional)")
    p.add_argument("--wall_offset", type=float, default=0.0, help="Dividing wall offset above paddling floor (cm)")

    p.add_argument("--material", type=str, default="single-color", choices=sorted(MATERIALS), help="Foil material")
    p.add_argument("--objective", type=str, default="minWaste", choices=list(OBJECTIVES), help="Optimization goal")

    p.add_argument("--exact", action="store_true", help="Also compute the exact minimum roll count (CP-SAT)")
    p.add_argument("--time", type=float, default=10.0, help="Time limit for the exact check (seconds)")
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="foil", help="Export filename prefix")
    p.add_argument("--verbose", action="store_true", help="Print optimizer diagnostics")
    return p


def print_run(res: RunResult) -> None:
    print_result(res.config, res.rolls, res.pricing)

    if res.offcuts:
        print("Reusable offcuts: " + ", ".join(f"R{o.roll_number} {o.length} m ({o.area} m²)" for o in res.offcuts))

    paired = [p for p in res.pairings if p.bottom_uid is not None]
    for p in paired:
        print(f"  {p.strip_uid} rides with {p.bottom_uid} (leftover {p.leftover:.2f} m)")

    if res.exact:
        for e in res.exact:
            exact = "-" if e.exact_rolls is None else str(e.exact_rolls)
            tag = "optimal" if e.optimal else "best found"
            print(f"Exact check {e.roll_width} m: packed={e.heuristic_rolls} exact={exact} ({tag})")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(bool(args.verbose))

    try:
        geometry = build_geometry(args)
    except ValueError as e:
        get_logger().error(f"invalid pool: {e}")
        raise SystemExit(2)

    res = run_job(
        geometry,
        material=args.material,
        objective=args.objective,
        exact=bool(args.exact),
        exact_time_limit_s=float(args.time),
        out_dir=args.out.strip() or None,
        export_prefix=args.prefix,
    )
    print_run(res)
    if args.out.strip():
        print(f"Exported CSV + JSON to: {args.out.strip()}")


if __name__ == "__main__":
    main()
