# foil_solver/__init__.py
"""
Pool foil roll-cutting optimizer.

Current state:
- Surface catalog for rectangular (or outlined) pools with optional slope, stairs and paddling pool
- Strip width calculator (overlap within [min, max], edge waste never negative)
- Continuous wall plan: partition search over the perimeter with seam overlap assignment
- Greedy pairing of wall / stairs / paddling strips into bottom roll tails
- First-fit-decreasing roll packing per width, reusable offcuts
- Chargeable main / structural foil area (rounded up) and weld area
- Optional exact roll count check (OR-Tools CP-SAT)
"""

from .types import (
    MaterialSpec,
    StairsSpec,
    PaddlingSpec,
    PoolGeometry,
    Surface,
    WallSegment,
    StripWidthResult,
    WallStripConfig,
    WallStripPlan,
    StripGroup,
    SurfaceRollConfig,
    RollAllocation,
    Offcut,
    MixConfiguration,
    FoilPricingResult,
    expand_strips,
)

from .config import DEFAULTS, MATERIALS, get_material

from .strips import calculate_strips_for_width

from .surfaces import get_surface_definitions, get_wall_segments

from .wall_optimizer import get_optimal_wall_strip_plan

from .packing import get_reusable_offcuts, pack_strips_into_rolls

from .optimizer import (
    auto_optimize_mix_config,
    calculate_comparison,
    update_surface_roll_width,
)

from .costing import calculate_foil_area_for_pricing

from .run import RunResult, run_job

__all__ = [
    # types
    "MaterialSpec",
    "StairsSpec",
    "PaddlingSpec",
    "PoolGeometry",
    "Surface",
    "WallSegment",
    "StripWidthResult",
    "WallStripConfig",
    "WallStripPlan",
    "StripGroup",
    "SurfaceRollConfig",
    "RollAllocation",
    "Offcut",
    "MixConfiguration",
    "FoilPricingResult",
    "expand_strips",
    # config
    "DEFAULTS",
    "MATERIALS",
    "get_material",
    # planning
    "calculate_strips_for_width",
    "get_surface_definitions",
    "get_wall_segments",
    "get_optimal_wall_strip_plan",
    "pack_strips_into_rolls",
    "get_reusable_offcuts",
    "auto_optimize_mix_config",
    "calculate_comparison",
    "update_surface_roll_width",
    "calculate_foil_area_for_pricing",
    # runner
    "RunResult",
    "run_job",
]
