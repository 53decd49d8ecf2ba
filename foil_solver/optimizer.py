# foil_solver/optimizer.py
# Surface orchestrator: picks a roll width (or width mix) per surface, attaches the continuous
# wall plan and fills in roll totals from the final packing.
#
# Forced-width rules:
#   - structural surfaces (stairs, paddling bottom) and narrow-only materials -> narrow
#   - walls follow the depth comfort window (see config.wall_widths_for_depth)
# The minRolls result is never worse (in packed rolls) than the minWaste result for the same pool.

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union

from .config import DEFAULTS, get_material, is_narrow_only, wall_widths_for_depth
from .logger import LOGGER
from .packing import pack_strips_into_rolls, unusable_roll_waste_area
from .strips import (
    WidthChoice,
    best_bottom_mix,
    calculate_strips_for_width,
    compare_roll_widths,
    evaluate_mixed_strips,
    find_optimal_mixed_widths,
    pick_width_choice,
    widths_from_mix,
)
from .surfaces import get_surface_definitions
from .types import (
    SURFACE_BOTTOM,
    SURFACE_WALL_LONG,
    SURFACE_WALLS,
    WALL_KEYS,
    MaterialSpec,
    MixConfiguration,
    Objective,
    PoolGeometry,
    RollAllocation,
    StripGroup,
    Surface,
    SurfaceRollConfig,
    check_objective,
    expand_strips,
)
from .wall_optimizer import get_optimal_wall_strip_plan

MaterialLike = Union[str, MaterialSpec, None]


# ----------------------------
# Per-surface configuration
# ----------------------------

def _empty_config(surface: Surface) -> SurfaceRollConfig:
    return SurfaceRollConfig(
        surface=surface,
        roll_width=DEFAULTS.roll_width_narrow,
        groups=(),
        area=0.0,
        waste_area=0.0,
    )


def _max_overlap(surface: Surface) -> Optional[float]:
    # butt joints lie edge to edge: no overlap to absorb excess width
    return DEFAULTS.butt_joint_overlap if surface.butt_joint else None


def _single_width_config(surface: Surface, width: float, manual: bool = False) -> SurfaceRollConfig:
    calc = calculate_strips_for_width(surface.cover_width, width, surface.min_overlap, _max_overlap(surface))
    return SurfaceRollConfig(
        surface=surface,
        roll_width=width,
        groups=(StripGroup(roll_width=width, count=calc.count * surface.count, length=surface.strip_length),),
        area=surface.cover_area,
        waste_area=calc.edge_waste_width * surface.strip_length * surface.count,
        edge_waste_width=calc.edge_waste_width,
        actual_overlap=calc.actual_overlap,
        is_manual_override=manual,
    )


def _mixed_config(surface: Surface, mix: Tuple[Tuple[float, int], ...]) -> SurfaceRollConfig:
    res = evaluate_mixed_strips(surface.cover_width, widths_from_mix(mix), surface.min_overlap, _max_overlap(surface))
    return SurfaceRollConfig(
        surface=surface,
        roll_width=mix[0][0],
        groups=tuple(StripGroup(roll_width=w, count=c * surface.count, length=surface.strip_length) for w, c in mix),
        area=surface.cover_area,
        waste_area=res.edge_waste_width * surface.strip_length * surface.count,
        edge_waste_width=res.edge_waste_width,
        actual_overlap=res.actual_overlap,
    )


def _from_choice(surface: Surface, choice: WidthChoice) -> SurfaceRollConfig:
    if choice.is_mixed:
        return _mixed_config(surface, choice.mix)
    return _single_width_config(surface, choice.roll_width)


def configure_surface(
    surface: Surface,
    geometry: PoolGeometry,
    material: Optional[MaterialSpec],
    objective: Objective,
    forced_width: Optional[float] = None,
    manual: bool = False,
) -> SurfaceRollConfig:
    """Roll width (or wide/narrow mix) and strips for one surface."""
    if surface.count <= 0 or surface.cover_width <= 0 or surface.strip_length <= 0:
        return _empty_config(surface)

    if surface.is_structural or is_narrow_only(material):
        return _single_width_config(surface, DEFAULTS.roll_width_narrow)

    if forced_width is not None:
        return _single_width_config(surface, forced_width, manual=manual)

    if surface.key in WALL_KEYS:
        allowed = wall_widths_for_depth(geometry.wall_depth, material)
        if len(allowed) == 1:
            return _single_width_config(surface, allowed[0])
        options = compare_roll_widths(surface.cover_width, surface.strip_length, surface.min_overlap)
        return _from_choice(surface, pick_width_choice(options, objective))

    if surface.key == SURFACE_BOTTOM:
        best = best_bottom_mix(surface.cover_width, surface.strip_length, surface.min_overlap, objective)
        if best is None:
            return _empty_config(surface)
        mix, _ = best
        if len(mix) == 1:
            return _single_width_config(surface, mix[0][0])
        return _mixed_config(surface, mix)

    choice = find_optimal_mixed_widths(surface.cover_width, surface.strip_length, surface.min_overlap, objective)
    return _from_choice(surface, choice)


# ----------------------------
# Totals
# ----------------------------

def wall_edge_waste_area(config: MixConfiguration) -> float:
    """Edge waste of the continuous wall strips (rows that overshoot wall height + fold)."""
    if config.wall_plan is None:
        return 0.0
    wall = config.surface(SURFACE_WALL_LONG)
    if wall is None:
        return 0.0
    cover = wall.surface.cover_width
    total = 0.0
    for s in config.wall_plan.strips:
        calc = calculate_strips_for_width(cover, s.roll_width, DEFAULTS.min_overlap_wall)
        total += calc.edge_waste_width * s.total_length
    return total


def calculate_totals(config: MixConfiguration) -> MixConfiguration:
    """Pack the configuration and record roll counts, waste and waste percentage."""
    rolls = pack_strips_into_rolls(config)
    narrow = sum(1 for r in rolls if r.roll_width == DEFAULTS.roll_width_narrow)
    wide = len(rolls) - narrow

    edge = sum(
        sc.waste_area for sc in config.surfaces if not (config.wall_plan is not None and sc.key in WALL_KEYS)
    )
    edge += wall_edge_waste_area(config)
    total_waste = edge + unusable_roll_waste_area(rolls)

    strip_area = sum(s.length * s.roll_width for s in expand_strips(config))
    pct = (total_waste / strip_area * 100.0) if strip_area > 0 else 0.0

    return replace(
        config,
        total_rolls_narrow=narrow,
        total_rolls_wide=wide,
        total_waste=max(0.0, total_waste),
        waste_percentage=max(0.0, pct),
    )


# ----------------------------
# Configuration builders
# ----------------------------

def _build_config(
    geometry: PoolGeometry,
    material: Optional[MaterialSpec],
    objective: Objective,
    overrides: Optional[Dict[str, float]] = None,
    manual: bool = True,
) -> MixConfiguration:
    overrides = overrides or {}
    wall_override = overrides.get(SURFACE_WALLS)

    surfaces: List[SurfaceRollConfig] = []
    for surface in get_surface_definitions(geometry, material):
        forced = overrides.get(surface.key)
        if forced is None and surface.key in WALL_KEYS:
            forced = wall_override
        sc = configure_surface(surface, geometry, material, objective, forced_width=forced, manual=manual)
        LOGGER.info(
            f"{surface.label}: {sc.strip_count} strip(s) "
            + "+".join(f"{g.count}x{g.roll_width}" for g in sc.groups)
            + f" waste={sc.waste_area:.2f}m²"
        )
        surfaces.append(sc)

    config = MixConfiguration(surfaces=surfaces, objective=objective)

    wall_widths = None
    if wall_override is not None and not is_narrow_only(material):
        wall_widths = [wall_override]
    plan = get_optimal_wall_strip_plan(geometry, config, material, objective, widths=wall_widths)
    config.wall_plan = plan

    config = calculate_totals(config)
    config.is_optimized = not (overrides and manual)
    return config


def _rolls_key(config: MixConfiguration, rolls: List[RollAllocation]) -> Tuple[int, float, float]:
    ordered = sum(r.roll_width * r.roll_length for r in rolls)
    return (len(rolls), round(ordered, 6), round(config.total_waste, 6))


def auto_optimize_mix_config(
    geometry: PoolGeometry,
    material: MaterialLike = None,
    objective: Objective = "minWaste",
) -> MixConfiguration:
    """
    Full configuration for a pool.

    minWaste: every surface picks its least-waste option.
    minRolls: candidates are the minRolls layout, each single wall width and the minWaste layout;
    the one with fewest packed rolls wins (then least ordered roll area, then least waste).
    """
    check_objective(objective)
    mat = get_material(material)

    if objective == "minWaste":
        return _build_config(geometry, mat, "minWaste")

    candidates = [_build_config(geometry, mat, "minRolls")]
    allowed = wall_widths_for_depth(geometry.wall_depth, mat)
    if len(allowed) > 1:
        for w in allowed:
            candidates.append(_build_config(geometry, mat, "minRolls", overrides={SURFACE_WALLS: w}, manual=False))
    candidates.append(replace(_build_config(geometry, mat, "minWaste"), objective="minRolls"))

    keyed = [(_rolls_key(c, pack_strips_into_rolls(c)), i) for i, c in enumerate(candidates)]
    _, best_index = min(keyed)
    best = candidates[best_index]
    LOGGER.info(f"minRolls: picked candidate {best_index} of {len(candidates)} ({best.total_rolls()} rolls)")
    return best


def update_surface_roll_width(
    config: MixConfiguration,
    key: str,
    roll_width: float,
    geometry: PoolGeometry,
    material: MaterialLike = None,
) -> MixConfiguration:
    """
    Manual width override for one surface (or "walls" for the whole perimeter).
    Ignored for narrow-only materials and structural surfaces. Returns a new configuration.
    """
    if roll_width not in (DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide):
        raise ValueError(
            f"roll_width must be {DEFAULTS.roll_width_narrow} or {DEFAULTS.roll_width_wide}, got {roll_width}"
        )
    mat = get_material(material)

    if is_narrow_only(mat):
        LOGGER.warn(f"{mat.name} is sold in narrow rolls only; ignoring width override for {key}")
        return config

    target = config.surface(key)
    if key != SURFACE_WALLS and target is None:
        raise ValueError(f"Unknown surface {key!r}")
    if target is not None and target.surface.is_structural:
        LOGGER.warn(f"{target.label} uses structural foil (narrow only); ignoring width override")
        return config

    overrides = {sc.key: sc.roll_width for sc in config.surfaces if sc.is_manual_override}
    for k in WALL_KEYS:
        if k in overrides:
            overrides[SURFACE_WALLS] = overrides.pop(k)
    if key in WALL_KEYS or key == SURFACE_WALLS:
        overrides[SURFACE_WALLS] = roll_width
    else:
        overrides[key] = roll_width

    return _build_config(geometry, mat, config.objective, overrides=overrides)


@dataclass(frozen=True)
class ComparisonResult:
    narrow: MixConfiguration
    wide: MixConfiguration
    optimized: MixConfiguration


def calculate_comparison(
    geometry: PoolGeometry,
    material: MaterialLike = None,
    objective: Objective = "minWaste",
) -> ComparisonResult:
    """Narrow-only vs wide-only vs optimized layouts for the same pool."""
    mat = get_material(material)
    keys = [s.key for s in get_surface_definitions(geometry, mat)] + [SURFACE_WALLS]

    def forced(width: float) -> MixConfiguration:
        if is_narrow_only(mat):
            return _build_config(geometry, mat, objective)
        return _build_config(geometry, mat, objective, overrides={k: width for k in keys})

    return ComparisonResult(
        narrow=forced(DEFAULTS.roll_width_narrow),
        wide=forced(DEFAULTS.roll_width_wide),
        optimized=auto_optimize_mix_config(geometry, mat, objective),
    )
