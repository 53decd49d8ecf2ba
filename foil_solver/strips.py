# foil_solver/strips.py
# Strip width calculator: how many parallel strips of a roll width span a cover width,
# which weld overlap they use and how much edge material is left over.
#
# Overlap is NOT waste: it is required weld material. Only the edge excess that cannot be
# absorbed into an overlap within [min_overlap, max_overlap] is counted as waste.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULTS
from .types import MixedStripResult, Objective, StripWidthResult

# Guards ceil() against float noise such as 2.0000000000004
_CEIL_EPS = 1e-9


@dataclass(frozen=True)
class WidthChoice:
    """Candidate way to cover one surface: a single width, or a wide/narrow mix."""
    roll_width: float
    strip_count: int
    waste_area: float
    mix: Tuple[Tuple[float, int], ...] = ()  # ((width, count), ...) when mixed

    @property
    def is_mixed(self) -> bool:
        return len(self.mix) > 1


def calculate_strips_for_width(
    cover_width: float,
    roll_width: float,
    min_overlap: float,
    max_overlap: Optional[float] = None,
) -> StripWidthResult:
    """
    Strips of `roll_width` needed to span `cover_width` with at least `min_overlap` between them.

    - cover_width <= 0 -> zero strips (nothing to cover)
    - cover_width <= roll_width -> one strip, edge waste = roll_width - cover_width
    - otherwise n = 1 + ceil((cover - roll) / (roll - min_overlap)); the overlap giving an exact
      fit is used when inside [min_overlap, max_overlap], else it is clamped and the residual
      is reported as edge waste.
    """
    hi = DEFAULTS.max_overlap if max_overlap is None else max_overlap
    hi = max(hi, min_overlap)

    if cover_width <= 0:
        return StripWidthResult(
            count=0,
            actual_overlap=0.0,
            edge_waste_width=0.0,
            material_width_used=0.0,
            total_covered_width=0.0,
        )

    if cover_width <= roll_width:
        return StripWidthResult(
            count=1,
            actual_overlap=0.0,
            edge_waste_width=roll_width - cover_width,
            material_width_used=roll_width,
            total_covered_width=roll_width,
        )

    effective = roll_width - min_overlap
    if effective <= 0:
        raise ValueError(f"min_overlap={min_overlap} leaves no usable width on a {roll_width} m roll")

    additional = math.ceil((cover_width - roll_width) / effective - _CEIL_EPS)
    n = 1 + max(1, additional)
    material = n * roll_width

    exact = (material - cover_width) / (n - 1)
    if min_overlap <= exact <= hi:
        overlap = exact
        edge = 0.0
    elif exact > hi:
        overlap = hi
        edge = material - (n - 1) * hi - cover_width
    else:
        overlap = min_overlap
        edge = material - (n - 1) * min_overlap - cover_width

    return StripWidthResult(
        count=n,
        actual_overlap=overlap,
        edge_waste_width=max(0.0, edge),
        material_width_used=material,
        total_covered_width=material - (n - 1) * overlap,
    )


def evaluate_mixed_strips(
    cover_width: float,
    widths: Sequence[float],
    min_overlap: float,
    max_overlap: Optional[float] = None,
) -> MixedStripResult:
    """Evaluate an explicit list of strip widths laid side by side."""
    hi = DEFAULTS.max_overlap if max_overlap is None else max_overlap
    hi = max(hi, min_overlap)

    if cover_width <= 0:
        return MixedStripResult(True, 0, 0.0, 0.0, 0.0, 0.0)
    if not widths:
        return MixedStripResult(False, 0, 0.0, 0.0, 0.0, 0.0)

    n = len(widths)
    material = float(sum(widths))

    if n == 1:
        return MixedStripResult(
            is_valid=material >= cover_width,
            count=1,
            actual_overlap=0.0,
            edge_waste_width=max(0.0, material - cover_width),
            material_width_used=material,
            total_covered_width=material,
        )

    exact = (material - cover_width) / (n - 1)
    overlap = max(min_overlap, min(hi, exact))
    covered = material - (n - 1) * overlap
    return MixedStripResult(
        is_valid=covered >= cover_width - 1e-6,
        count=n,
        actual_overlap=overlap,
        edge_waste_width=max(0.0, covered - cover_width),
        material_width_used=material,
        total_covered_width=covered,
    )


def widths_from_mix(mix: Sequence[Tuple[float, int]]) -> List[float]:
    out: List[float] = []
    for w, c in mix:
        out.extend([w] * c)
    return out


def compare_roll_widths(cover_width: float, strip_length: float, min_overlap: float) -> List[WidthChoice]:
    """Narrow-only and wide-only options for one surface, in that order."""
    out: List[WidthChoice] = []
    for w in (DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide):
        calc = calculate_strips_for_width(cover_width, w, min_overlap)
        out.append(WidthChoice(roll_width=w, strip_count=calc.count, waste_area=calc.edge_waste_width * strip_length))
    return out


def _mostly_wide_mix(cover_width: float, strip_length: float, min_overlap: float) -> Optional[WidthChoice]:
    """Wide strips plus exactly one narrow remainder strip; None when one wide strip already covers."""
    wide, narrow = DEFAULTS.roll_width_wide, DEFAULTS.roll_width_narrow
    if cover_width <= wide:
        return None
    upper = math.ceil(cover_width / (wide - min_overlap)) + 1
    for m in range(1, upper + 1):
        res = evaluate_mixed_strips(cover_width, [wide] * m + [narrow], min_overlap)
        if res.is_valid:
            return WidthChoice(
                roll_width=wide,
                strip_count=res.count,
                waste_area=res.edge_waste_width * strip_length,
                mix=((wide, m), (narrow, 1)),
            )
    return None


def _choice_key(choice: WidthChoice, objective: Objective) -> Tuple[float, ...]:
    # Waste is compared at cm² resolution so float noise never decides a tie
    waste = round(choice.waste_area, 2)
    if objective == "minRolls":
        return (choice.strip_count, waste)
    return (waste, choice.strip_count)


def pick_width_choice(options: Sequence[WidthChoice], objective: Objective) -> WidthChoice:
    return min(options, key=lambda c: _choice_key(c, objective))


def find_optimal_mixed_widths(
    cover_width: float,
    strip_length: float,
    min_overlap: float,
    objective: Objective = "minWaste",
) -> WidthChoice:
    """
    Pick between all-narrow, all-wide and a speculative mostly-wide mix.
    minWaste compares waste then strip count; minRolls compares strip count then waste.
    """
    options = compare_roll_widths(cover_width, strip_length, min_overlap)
    mixed = _mostly_wide_mix(cover_width, strip_length, min_overlap)
    if mixed is not None:
        options.append(mixed)
    return pick_width_choice(options, objective)


def best_bottom_mix(
    cover_width: float,
    strip_length: float,
    min_overlap: float,
    objective: Objective = "minWaste",
) -> Optional[Tuple[Tuple[Tuple[float, int], ...], MixedStripResult]]:
    """
    Enumerate every (wide count, narrow count) combination for the bottom.
    minWaste: least edge waste, then fewest strips.
    minRolls: least strip material (m²), then fewest strips, then least edge waste.
    """
    wide, narrow = DEFAULTS.roll_width_wide, DEFAULTS.roll_width_narrow
    if cover_width <= 0:
        return None

    min_strips = max(1, math.ceil(cover_width / wide - _CEIL_EPS))
    max_strips = math.ceil(cover_width / narrow) + 2

    best = None
    best_key = None
    for n in range(min_strips, max_strips + 1):
        for wide_count in range(n + 1):
            narrow_count = n - wide_count
            mix = tuple((w, c) for w, c in ((wide, wide_count), (narrow, narrow_count)) if c > 0)
            res = evaluate_mixed_strips(cover_width, widths_from_mix(mix), min_overlap)
            if not res.is_valid:
                continue
            waste = round(res.edge_waste_width * strip_length, 6)
            if objective == "minRolls":
                key = (round(res.material_width_used * strip_length, 6), res.count, waste)
            else:
                key = (waste, res.count)
            if best_key is None or key < best_key:
                best, best_key = (mix, res), key
    return best
