# foil_solver/run.py
# High-level convenience runner that ties together:
# - auto-optimization (surface widths + continuous wall plan)
# - final roll packing
# - validation
# - pricing areas + metrics
# - optional exact roll count check (CP-SAT)
# - optional CSV / JSON export
#
# This is meant to be called from your own scripts or a future API layer.
# Example:
#   from foil_solver.run import run_job
#   res = run_job(geometry, material="single-color", objective="minRolls", out_dir="out")

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import get_material
from .costing import calculate_foil_area_for_pricing
from .io_csv import export_all
from .logger import LOGGER
from .metrics import Metrics, compute_roll_metrics
from .optimizer import auto_optimize_mix_config
from .packing import get_reusable_offcuts, pack_strips_into_rolls
from .pairing import OffcutPairing, plan_offcut_pairings
from .types import (
    FoilPricingResult,
    MaterialSpec,
    MixConfiguration,
    Objective,
    Offcut,
    PoolGeometry,
    RollAllocation,
)
from .utils import save_result_json, timer
from .validate import raise_on_errors, validate_configuration


@dataclass(frozen=True)
class RunResult:
    config: MixConfiguration
    rolls: List[RollAllocation]
    offcuts: List[Offcut]
    pricing: FoilPricingResult
    metrics: Metrics
    pairings: List[OffcutPairing]
    exact: Optional[list] = None  # List[ExactRollCount] when the exact check ran
    seconds: float = 0.0


def run_job(
    geometry: PoolGeometry,
    *,
    material: Union[str, MaterialSpec, None] = None,
    objective: Objective = "minWaste",
    validate: bool = True,
    exact: bool = False,
    exact_time_limit_s: float = 10.0,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "foil",
) -> RunResult:
    """
    Run the optimizer end-to-end for one pool.
    """
    mat = get_material(material)

    with timer("optimize") as t:
        config = auto_optimize_mix_config(geometry, mat, objective)
        rolls = pack_strips_into_rolls(config)

    if validate:
        raise_on_errors(validate_configuration(config, rolls))

    exact_counts = None
    if exact:
        # CP-SAT is only needed for the exact check
        from .solver_rolls_cp_sat import SolverParams, exact_roll_counts

        exact_counts = exact_roll_counts(rolls, SolverParams(time_limit_s=float(exact_time_limit_s)))
        for e in exact_counts:
            LOGGER.info(f"{e.roll_width} m rolls: heuristic={e.heuristic_rolls} exact={e.exact_rolls} optimal={e.optimal}")

    res = RunResult(
        config=config,
        rolls=rolls,
        offcuts=get_reusable_offcuts(rolls),
        pricing=calculate_foil_area_for_pricing(config),
        metrics=compute_roll_metrics(rolls),
        pairings=plan_offcut_pairings(config),
        exact=exact_counts,
        seconds=t["seconds"],
    )
    LOGGER.info(f"{config.total_rolls()} roll(s), {config.total_waste:.2f} m² waste in {res.seconds:.3f}s")

    if out_dir is not None:
        export_all(config, rolls, out_dir=Path(out_dir), prefix=export_prefix)
        save_result_json(config, rolls, Path(out_dir) / f"{export_prefix}.json", pricing=res.pricing)

    return res
