# foil_solver/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON export for a full run (configuration + rolls + pricing)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence

from .packing import get_reusable_offcuts
from .types import FoilPricingResult, MixConfiguration, RollAllocation


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("optimize") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def _to_jsonable(obj: Any) -> Any:
    """Convert dataclasses and other objects to JSON-serializable structures."""
    if is_dataclass(obj):
        return _to_jsonable(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj


def result_to_dict(
    config: MixConfiguration,
    rolls: Sequence[RollAllocation],
    pricing: Optional[FoilPricingResult] = None,
) -> Dict[str, Any]:
    """
    JSON-friendly dict for the pricing / visualization layer.
    Keeps only what consumers read: surfaces, wall strips, rolls, offcuts, totals.
    """
    out: Dict[str, Any] = {
        "objective": config.objective,
        "surfaces": [
            {
                "key": sc.key,
                "label": sc.label,
                "foil": sc.foil_assignment,
                "roll_width": sc.roll_width,
                "groups": [{"roll_width": g.roll_width, "count": g.count, "length": g.length} for g in sc.groups],
                "strip_count": sc.strip_count,
                "area": sc.area,
                "waste_area": sc.waste_area,
                "manual": sc.is_manual_override,
            }
            for sc in config.surfaces
        ],
        "wall_plan": None,
        "rolls": [
            {
                "roll_number": r.roll_number,
                "roll_width": r.roll_width,
                "used_length": r.used_length,
                "waste_length": r.waste_length,
                "strips": [{"uid": s.uid, "surface": s.surface, "length": s.length} for s in r.strips],
            }
            for r in rolls
        ],
        "offcuts": get_reusable_offcuts(rolls),
        "totals": {
            "rolls": config.total_rolls(),
            "rolls_narrow": config.total_rolls_narrow,
            "rolls_wide": config.total_rolls_wide,
            "waste_area": config.total_waste,
            "waste_percentage": config.waste_percentage,
        },
        "pricing": None,
    }

    plan = config.wall_plan
    if plan is not None:
        out["wall_plan"] = {
            "strips": [
                {
                    "label": s.label,
                    "segments": list(s.segment_indices),
                    "base_length": s.base_length,
                    "vertical_overlap": s.vertical_overlap,
                    "total_length": s.total_length,
                    "roll_width": s.roll_width,
                    "rows": s.rows,
                }
                for s in plan.strips
            ],
            "waste_area": plan.waste_area,
            "reusable_offcut_area": plan.reusable_offcut_area,
            "score": plan.score,
        }

    if pricing is not None:
        out["pricing"] = {**asdict(pricing), "total_area": pricing.total_area}

    return _to_jsonable(out)


def save_result_json(
    config: MixConfiguration,
    rolls: Sequence[RollAllocation],
    path: str | Path,
    *,
    pricing: Optional[FoilPricingResult] = None,
    indent: int = 2,
) -> None:
    """Save a run (configuration + rolls + pricing) into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = result_to_dict(config, rolls, pricing)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=indent)
