# foil_solver/io_json.py
# Load a pool job from JSON into PoolGeometry + material + objective.
#
# Expected JSON shape:
# {
#   "name": "garden pool",
#   "pool": {"length": 10, "width": 5, "depth": 1.5, "slope_depth": 1.8},
#   "stairs": {"step_count": 4, "step_depth": 0.3, "step_height": 0.2, "width": "full"},
#   "paddling": {"width": 2, "length": 3, "depth": 0.4, "dividing_wall_offset_cm": 10},
#   "material": "single-color",
#   "objective": "minWaste"
# }
# "pool.vertices" ([[x, y], ...]) is optional for irregular outlines.

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .config import get_material
from .types import MaterialSpec, PaddlingSpec, PoolGeometry, StairsSpec, check_objective


@dataclass(frozen=True)
class JobSpec:
    geometry: PoolGeometry
    material: MaterialSpec
    objective: str = "minWaste"
    name: str = "pool"


def _stairs_from_dict(d: Optional[Dict[str, Any]]) -> Optional[StairsSpec]:
    if not d:
        return None
    width = d.get("width")
    if isinstance(width, str):
        if width.strip().lower() != "full":
            raise ValueError(f"stairs.width must be a number or 'full', got {width!r}")
        width = None
    return StairsSpec(
        step_count=int(d.get("step_count", 0)),
        step_depth=float(d.get("step_depth", 0.0)),
        step_height=float(d.get("step_height", 0.20)),
        width=float(width) if width is not None else None,
    )


def _paddling_from_dict(d: Optional[Dict[str, Any]]) -> Optional[PaddlingSpec]:
    if not d:
        return None
    return PaddlingSpec(
        width=float(d["width"]),
        length=float(d["length"]),
        depth=float(d["depth"]),
        dividing_wall_offset_cm=float(d.get("dividing_wall_offset_cm", 0.0)),
    )


def job_from_dict(data: Dict[str, Any]) -> JobSpec:
    """Convert an already-parsed JSON object into a JobSpec."""
    pool = data.get("pool")
    if not pool:
        raise ValueError("JSON missing 'pool' (need length, width, depth).")
    try:
        length = float(pool["length"])
        width = float(pool["width"])
        depth = float(pool["depth"])
    except KeyError as e:
        raise ValueError(f"pool is missing {e.args[0]!r}") from e

    slope = pool.get("slope_depth")
    vertices = tuple((float(x), float(y)) for x, y in (pool.get("vertices") or []))

    geometry = PoolGeometry(
        length=length,
        width=width,
        depth=depth,
        slope_depth=float(slope) if slope is not None else None,
        stairs=_stairs_from_dict(data.get("stairs")),
        paddling=_paddling_from_dict(data.get("paddling")),
        vertices=vertices,
    )

    return JobSpec(
        geometry=geometry,
        material=get_material(data.get("material")),
        objective=check_objective(str(data.get("objective", "minWaste"))),
        name=str(data.get("name") or "pool"),
    )


def load_job_json(path: str | Path) -> JobSpec:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at the top level")
    return job_from_dict(data)
