# foil_solver/debug.py
# Debug / inspection helpers:
# - pretty-print rolls and the wall plan
# - quick text summary of a full run

from __future__ import annotations

from typing import Iterable, Optional

from .types import FoilPricingResult, MixConfiguration, RollAllocation, WallStripPlan


def print_rolls(rolls: Iterable[RollAllocation]) -> None:
    for r in rolls:
        strips = ", ".join(f"{s.uid}={s.length:.2f}" for s in r.strips)
        print(
            f"[R{r.roll_number:02d}] {r.roll_width:.2f} m  used={r.used_length:6.2f}  "
            f"waste={r.waste_length:6.2f}  | {strips}"
        )


def print_wall_plan(plan: WallStripPlan) -> None:
    print(f"Wall strips: {plan.strip_count}  score={plan.score:.2f}")
    for s in plan.strips:
        rows = f" x{s.rows}" if s.rows > 1 else ""
        print(
            f"  {s.label:12s} {s.roll_width:.2f} m{rows}  "
            f"base={s.base_length:6.2f} + overlap={s.vertical_overlap:.2f} = {s.total_length:6.2f}"
        )
    print(
        f"  waste={plan.waste_area:.2f} m²  reusable={plan.reusable_offcut_area:.2f} m²  "
        f"paired leftover={plan.paired_leftover:.2f} m"
    )


def print_config(config: MixConfiguration) -> None:
    print(f"Objective: {config.objective}")
    for sc in config.surfaces:
        widths = " + ".join(f"{g.count}x{g.roll_width}" for g in sc.groups) or "-"
        flag = " (manual)" if sc.is_manual_override else ""
        print(f"  {sc.label:24s} {widths:18s} waste={sc.waste_area:6.2f} m²{flag}")
    if config.wall_plan is not None:
        print_wall_plan(config.wall_plan)


def print_result(
    config: MixConfiguration,
    rolls: Iterable[RollAllocation],
    pricing: Optional[FoilPricingResult] = None,
) -> None:
    print_config(config)
    print("-- Rolls --")
    print_rolls(rolls)
    print(
        f"ROLLS: {config.total_rolls()} (1.65 m: {config.total_rolls_narrow}, 2.05 m: {config.total_rolls_wide})"
    )
    print(f"WASTE: {config.total_waste:.2f} m² ({config.waste_percentage:.1f}%)")
    if pricing is not None:
        print(
            f"FOIL: main {pricing.main_foil_area} m² (weld {pricing.main_weld_area} m²), "
            f"structural {pricing.structural_foil_area} m² (weld {pricing.structural_weld_area} m²), "
            f"total {pricing.total_area} m²"
        )
