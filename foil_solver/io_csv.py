# foil_solver/io_csv.py
# CSV export helpers:
# - cutting list per roll (one row per strip)
# - reusable offcuts
# - per-surface summary (width choice, strip count, areas)

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from .packing import get_reusable_offcuts
from .types import MixConfiguration, Offcut, RollAllocation


def export_rolls_csv(rolls: Sequence[RollAllocation], path: str | Path) -> None:
    """
    One row per strip, in roll order.
    Rolls with no strips still get a row so the roll count stays visible.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "roll_number",
        "roll_width",
        "strip_uid",
        "surface",
        "length",
        "roll_used_length",
        "roll_waste_length",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rolls:
            base = {
                "roll_number": r.roll_number,
                "roll_width": r.roll_width,
                "roll_used_length": round(r.used_length, 3),
                "roll_waste_length": round(r.waste_length, 3),
            }
            if not r.strips:
                w.writerow({**base, "strip_uid": "", "surface": "", "length": ""})
            for s in r.strips:
                w.writerow({**base, "strip_uid": s.uid, "surface": s.surface, "length": round(s.length, 3)})


def export_offcuts_csv(offcuts: Sequence[Offcut], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["roll_number", "roll_width", "length", "area"])
        w.writeheader()
        for o in offcuts:
            w.writerow({"roll_number": o.roll_number, "roll_width": o.roll_width, "length": o.length, "area": o.area})


def export_surfaces_csv(config: MixConfiguration, path: str | Path) -> None:
    """
    One row per surface, plus one row per continuous wall strip when a wall plan is present.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "surface",
        "label",
        "foil",
        "roll_widths",
        "strip_count",
        "strip_length",
        "area_m2",
        "waste_m2",
        "manual",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for sc in config.surfaces:
            w.writerow(
                {
                    "surface": sc.key,
                    "label": sc.label,
                    "foil": sc.foil_assignment,
                    "roll_widths": "+".join(f"{g.count}x{g.roll_width}" for g in sc.groups),
                    "strip_count": sc.strip_count,
                    "strip_length": round(sc.surface.strip_length, 3),
                    "area_m2": round(sc.area, 2),
                    "waste_m2": round(sc.waste_area, 2),
                    "manual": int(sc.is_manual_override),
                }
            )

        if config.wall_plan is not None:
            for ws in config.wall_plan.strips:
                w.writerow(
                    {
                        "surface": "walls",
                        "label": ws.label,
                        "foil": "main",
                        "roll_widths": f"{ws.rows}x{ws.roll_width}",
                        "strip_count": ws.rows,
                        "strip_length": round(ws.total_length, 3),
                        "area_m2": round(ws.foil_area, 2),
                        "waste_m2": "",
                        "manual": "",
                    }
                )


def export_all(
    config: MixConfiguration,
    rolls: Sequence[RollAllocation],
    out_dir: str | Path,
    prefix: str = "foil",
) -> None:
    """
    Export rolls, reusable offcuts and the per-surface summary into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_rolls_csv(rolls, out_dir / f"{prefix}_rolls.csv")
    export_offcuts_csv(get_reusable_offcuts(rolls), out_dir / f"{prefix}_offcuts.csv")
    export_surfaces_csv(config, out_dir / f"{prefix}_surfaces.csv")
