# foil_solver/packing.py
# Final bin packing: every strip of every surface goes onto a physical roll.
#
# First-fit decreasing per roll width:
#   - one bucket per width (wide bucket first, then narrow)
#   - strips sorted by length, longest first (stable, so equal lengths keep surface order)
#   - each strip goes on the first open roll with room, else a new roll is opened
# Rolls are numbered 1.. across all buckets in the order they are opened.

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple, Union

from .config import DEFAULTS
from .types import MixConfiguration, Offcut, RollAllocation, RollStrip, StripInstance, expand_strips


def pack_strip_instances(strips: Sequence[StripInstance], roll_length: float = DEFAULTS.roll_length) -> List[RollAllocation]:
    tol = DEFAULTS.length_tolerance

    for s in strips:
        if s.length > roll_length + tol:
            raise ValueError(
                f"Strip {s.uid} ({s.label}) is {s.length:.3f} m long, longer than a {roll_length} m roll"
            )

    buckets: Dict[float, List[StripInstance]] = {}
    for s in strips:
        if s.length <= 0:
            continue
        buckets.setdefault(s.roll_width, []).append(s)

    rolls: List[RollAllocation] = []
    for width in sorted(buckets, reverse=True):
        open_rolls: List[RollAllocation] = []
        for s in sorted(buckets[width], key=lambda st: -st.length):
            target = next((r for r in open_rolls if r.fits(s.length, tol)), None)
            if target is None:
                target = RollAllocation(roll_number=len(rolls) + 1, roll_width=width, roll_length=roll_length)
                open_rolls.append(target)
                rolls.append(target)
            target.strips.append(RollStrip(uid=s.uid, surface=s.surface, length=s.length))

    return rolls


def pack_strips_into_rolls(config: Union[MixConfiguration, Sequence[StripInstance]]) -> List[RollAllocation]:
    """Pack a whole configuration (or an explicit strip list) into rolls."""
    strips = expand_strips(config) if isinstance(config, MixConfiguration) else list(config)
    return pack_strip_instances(strips)


def get_reusable_offcuts(rolls: Sequence[RollAllocation]) -> List[Offcut]:
    """Roll tails long enough to reuse (length rounded to 0.1 m, area to 0.01 m²)."""
    out: List[Offcut] = []
    for r in rolls:
        tail = r.waste_length
        if tail >= DEFAULTS.min_reusable_offcut_length - 1e-9:
            out.append(
                Offcut(
                    roll_number=r.roll_number,
                    roll_width=r.roll_width,
                    length=round(tail, 1),
                    area=round(tail * r.roll_width, 2),
                )
            )
    return out


def count_rolls_by_width(rolls: Sequence[RollAllocation]) -> Tuple[int, int]:
    """(narrow, wide) roll counts."""
    narrow = sum(1 for r in rolls if r.roll_width == DEFAULTS.roll_width_narrow)
    return narrow, len(rolls) - narrow


def unusable_roll_waste_area(rolls: Sequence[RollAllocation]) -> float:
    """Area of roll tails too short to reuse."""
    total = 0.0
    for r in rolls:
        tail = r.waste_length
        if DEFAULTS.negligible_residual < tail < DEFAULTS.min_reusable_offcut_length - 1e-9:
            total += tail * r.roll_width
    return total
