# foil_solver/costing.py
# Chargeable foil area for pricing:
# - surfaces are split into "main" and "structural" foil groups
# - per group: strip area (overlap included) - reusable edge waste + unusable roll-end waste,
#   rounded UP to whole m² (a purchasing quantity, never rounded down)
# - weld / overlap area is reported separately (0.1 m²), it is not subtracted
#
# Notes:
# - the continuous wall plan (when present) replaces the wall-long / wall-short surfaces
# - roll-end waste is taken from packing each foil group on its own rolls

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import DEFAULTS
from .packing import pack_strip_instances, unusable_roll_waste_area
from .strips import calculate_strips_for_width
from .types import (
    SURFACE_WALL_LONG,
    SURFACE_WALLS,
    WALL_KEYS,
    FoilPricingResult,
    MixConfiguration,
    StripInstance,
    SurfaceRollConfig,
    WallStripPlan,
    expand_strips,
)

_CEIL_EPS = 1e-9


@dataclass(frozen=True)
class FoilGroupArea:
    strip_area: float
    reusable_waste_area: float
    unusable_roll_waste_area: float
    weld_area: float

    @property
    def chargeable_area(self) -> int:
        raw = self.strip_area - self.reusable_waste_area + self.unusable_roll_waste_area
        return max(0, math.ceil(raw - _CEIL_EPS))


def partition_surfaces_by_foil_type(
    config: MixConfiguration,
) -> Tuple[List[SurfaceRollConfig], List[SurfaceRollConfig]]:
    """(main, structural) surface configs. Wall surfaces are left out when a wall plan replaces them."""
    main: List[SurfaceRollConfig] = []
    structural: List[SurfaceRollConfig] = []
    for sc in config.surfaces:
        if config.wall_plan is not None and sc.key in WALL_KEYS:
            continue
        (structural if sc.surface.is_structural else main).append(sc)
    return main, structural


def _strips_per_instance(sc: SurfaceRollConfig) -> int:
    if sc.surface.count <= 0:
        return 0
    return sc.strip_count // sc.surface.count


def _surface_weld_area(sc: SurfaceRollConfig) -> float:
    seams = max(0, _strips_per_instance(sc) - 1)
    return seams * sc.actual_overlap * sc.surface.strip_length * sc.surface.count


def _surface_reusable_waste(sc: SurfaceRollConfig) -> float:
    if sc.edge_waste_width >= DEFAULTS.min_reusable_waste_width and sc.surface.strip_length >= DEFAULTS.min_reusable_offcut_length:
        return sc.waste_area
    return 0.0


def _wall_cover(config: MixConfiguration) -> float:
    wall = config.surface(SURFACE_WALL_LONG)
    return wall.surface.cover_width if wall is not None else 0.0


def _wall_plan_areas(plan: WallStripPlan, wall_cover: float) -> Tuple[float, float, float]:
    """(strip area, reusable edge waste, weld area) of the continuous wall strips."""
    strip_area = 0.0
    reusable = 0.0
    weld = 0.0
    for s in plan.strips:
        strip_area += s.total_length * s.roll_width * s.rows
        weld += s.vertical_overlap * s.roll_width * s.rows

        calc = calculate_strips_for_width(wall_cover, s.roll_width, DEFAULTS.min_overlap_wall)
        weld += max(0, s.rows - 1) * calc.actual_overlap * s.total_length
        if calc.edge_waste_width >= DEFAULTS.min_reusable_waste_width and s.total_length >= DEFAULTS.min_reusable_offcut_length:
            reusable += calc.edge_waste_width * s.total_length
    return strip_area, reusable, weld


def _group_strips(config: MixConfiguration, structural: bool) -> List[StripInstance]:
    keys = {sc.key for sc in config.surfaces if sc.surface.is_structural == structural}
    if not structural and config.wall_plan is not None:
        keys.add(SURFACE_WALLS)
    return [s for s in expand_strips(config) if s.surface in keys]


def foil_group_area(config: MixConfiguration, structural: bool) -> FoilGroupArea:
    main, struct = partition_surfaces_by_foil_type(config)
    surfaces = struct if structural else main

    strip_area = sum(sc.strip_area for sc in surfaces)
    reusable = sum(_surface_reusable_waste(sc) for sc in surfaces)
    weld = sum(_surface_weld_area(sc) for sc in surfaces)

    if not structural and config.wall_plan is not None:
        w_area, w_reusable, w_weld = _wall_plan_areas(config.wall_plan, _wall_cover(config))
        strip_area += w_area
        reusable += w_reusable
        weld += w_weld

    rolls = pack_strip_instances(_group_strips(config, structural))
    return FoilGroupArea(
        strip_area=strip_area,
        reusable_waste_area=reusable,
        unusable_roll_waste_area=unusable_roll_waste_area(rolls),
        weld_area=max(0.0, weld),
    )


def calculate_foil_area_for_pricing(config: MixConfiguration) -> FoilPricingResult:
    main = foil_group_area(config, structural=False)
    structural = foil_group_area(config, structural=True)
    return FoilPricingResult(
        main_foil_area=main.chargeable_area,
        main_weld_area=round(main.weld_area, 1),
        structural_foil_area=structural.chargeable_area,
        structural_weld_area=round(structural.weld_area, 1),
    )


def calculate_butt_joint_length(config: MixConfiguration, surfaces: Optional[List[SurfaceRollConfig]] = None) -> float:
    """Total length of butt-joint seams (surfaces joined edge to edge instead of welded)."""
    if surfaces is None:
        surfaces = config.surfaces
    total = 0.0
    for sc in surfaces:
        if not sc.surface.butt_joint:
            continue
        seams = max(0, _strips_per_instance(sc) - 1)
        total += seams * sc.surface.strip_length * sc.surface.count
    return total
