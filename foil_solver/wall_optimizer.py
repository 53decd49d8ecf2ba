# foil_solver/wall_optimizer.py
# Wall partition optimizer: decides how many continuous strips go around the (cyclic) perimeter,
# where their vertical seams sit and which roll width each strip uses.
#
# Generate-and-score search:
#   1) partitions of the cycle into contiguous groups (1 group, N groups, 2 or 3 groups)
#   2) width assignment per group (cartesian product over admissible widths)
#   3) groups longer than a roll minus one seam overlap are rejected
#   4) each seam's overlap goes entirely to one neighbour (narrower, else longer),
#      or to the other neighbour when the preferred strip would no longer fit a roll
#   5) score by objective, pick the minimum with a deterministic total order
#
# Candidates are generated lazily; the winner is picked by a fold over a total order.

from __future__ import annotations

import itertools
from functools import reduce
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULTS, wall_widths_for_depth
from .logger import LOGGER
from .pairing import BottomStrip, WasteEstimate, bottom_strips_from_config, estimate_plan_waste
from .strips import calculate_strips_for_width
from .types import (
    MaterialSpec,
    MixConfiguration,
    Objective,
    PoolGeometry,
    WallSegment,
    WallStripConfig,
    WallStripPlan,
    check_objective,
)
from .surfaces import get_wall_segments

Partition = Tuple[Tuple[int, ...], ...]


# ----------------------------
# Candidate generation
# ----------------------------

def generate_wall_partitions(n: int) -> Iterator[Partition]:
    """
    Contiguous partitions of segments 0..n-1 with the first seam fixed at corner A:
      - everything in one strip
      - every segment separate
      - every split into exactly 2 groups
      - every split into exactly 3 groups
    Larger splits (4+ groups other than "every segment separate") are not explored.
    Duplicates (small n) are yielded once.
    """
    if n <= 0:
        return
    idx = tuple(range(n))
    candidates = itertools.chain(
        [(idx,), tuple((i,) for i in idx)],
        ((idx[:s], idx[s:]) for s in range(1, n)),
        ((idx[:a], idx[a:b], idx[b:]) for a in range(1, n - 1) for b in range(a + 1, n)),
    )

    seen = set()
    for p in candidates:
        if p in seen:
            continue
        seen.add(p)
        yield p


def generate_width_combinations(group_count: int, widths: Sequence[float]) -> Iterator[Tuple[float, ...]]:
    """Every assignment of an admissible roll width to each group."""
    return itertools.product(tuple(widths), repeat=group_count)


def distribute_vertical_overlap(
    base_lengths: Sequence[float],
    widths: Sequence[float],
    seam_overlap: Optional[float] = None,
    max_length: Optional[float] = None,
) -> List[float]:
    """
    Strips form a closed ring; seam i joins strip i and strip (i + 1) % k.
    The whole seam overlap goes to the narrower neighbour; on a width tie to the longer one
    (first strip wins an exact tie). A single strip closes on itself and takes its own seam.

    With `max_length`, a seam that would push its preferred strip past the roll goes to the
    other neighbour instead. If that still leaves a strip too long, every strip takes exactly
    one seam (seam i -> strip i), which fits whenever each base + one seam overlap fits.
    """
    ov = DEFAULTS.vertical_join_overlap if seam_overlap is None else seam_overlap
    k = len(base_lengths)
    out = [0.0] * k
    if k == 0:
        return out
    if k == 1:
        out[0] = ov
        return out

    def fits(idx: int) -> bool:
        return max_length is None or base_lengths[idx] + out[idx] + ov <= max_length

    for i in range(k):
        j = (i + 1) % k
        if widths[i] != widths[j]:
            target, other = (i, j) if widths[i] < widths[j] else (j, i)
        else:
            target, other = (i, j) if base_lengths[i] >= base_lengths[j] else (j, i)
        if not fits(target) and fits(other):
            target = other
        out[target] += ov

    if max_length is not None and any(b + o > max_length for b, o in zip(base_lengths, out)):
        return [ov] * k
    return out


def wall_rows(roll_width: float, wall_cover: float) -> int:
    """Stacked strips needed to span wall height + fold with one roll width."""
    calc = calculate_strips_for_width(wall_cover, roll_width, DEFAULTS.min_overlap_wall)
    return max(1, calc.count)


# ----------------------------
# Scoring
# ----------------------------

def score_wall_plan(estimate: WasteEstimate, strips: Sequence[WallStripConfig], objective: Objective) -> float:
    strip_count = sum(s.rows for s in strips)
    foil_area = sum(s.foil_area for s in strips)

    if objective == "minRolls":
        return (
            estimate.additional_roll_area * 1_000_000
            + estimate.paired_leftover * 10_000
            + foil_area * 1_000
            + estimate.waste_area * 10
            + strip_count
        )
    return (
        estimate.waste_area * 1_000_000
        + estimate.paired_leftover * 10_000
        + strip_count * 100
        + foil_area * 0.01
    )


def build_wall_strip_plan(
    partition: Partition,
    widths: Sequence[float],
    segments: Sequence[WallSegment],
    bottoms: Sequence[BottomStrip],
    objective: Objective,
    wall_cover: float,
) -> Optional[WallStripPlan]:
    """
    Scored plan for one (partition, widths) candidate, or None if a strip does not fit a roll.
    A group is admissible when its base length plus one seam's overlap fits; seams are then
    moved between neighbours so that no strip ends up longer than the roll.
    """
    limit = DEFAULTS.roll_length + DEFAULTS.length_tolerance
    seam = DEFAULTS.vertical_join_overlap
    bases = [sum(segments[i].length for i in group) for group in partition]
    if any(b + seam > limit for b in bases):
        return None
    overlaps = distribute_vertical_overlap(bases, widths, seam, max_length=limit)

    strips: List[WallStripConfig] = []
    for group, base, ov, w in zip(partition, bases, overlaps, widths):
        cfg = WallStripConfig(
            segment_indices=group,
            labels=tuple(segments[i].label for i in group),
            base_length=base,
            vertical_overlap=ov,
            roll_width=w,
            rows=wall_rows(w, wall_cover),
        )
        if cfg.total_length > DEFAULTS.roll_length + DEFAULTS.length_tolerance:
            return None
        strips.append(cfg)

    est = estimate_plan_waste(strips, bottoms)
    return WallStripPlan(
        strips=tuple(strips),
        waste_area=est.waste_area,
        reusable_offcut_area=est.reusable_area,
        paired_leftover=est.paired_leftover,
        roll_count_narrow=est.roll_count_narrow,
        roll_count_wide=est.roll_count_wide,
        score=score_wall_plan(est, strips, objective),
        dedicated_rolls_narrow=est.dedicated_rolls_narrow,
        dedicated_rolls_wide=est.dedicated_rolls_wide,
    )


def generate_wall_strip_plans(
    segments: Sequence[WallSegment],
    widths: Sequence[float],
    bottoms: Sequence[BottomStrip],
    objective: Objective,
    wall_cover: float,
) -> Iterator[WallStripPlan]:
    """Lazily yield every valid scored plan."""
    for partition in generate_wall_partitions(len(segments)):
        for combo in generate_width_combinations(len(partition), widths):
            plan = build_wall_strip_plan(partition, combo, segments, bottoms, objective, wall_cover)
            if plan is not None:
                yield plan


def _plan_key(plan: WallStripPlan, index: int) -> Tuple[float, int, float, int]:
    return (plan.score, plan.strip_count, plan.total_foil_area, index)


def select_optimal_wall_plan(plans: Iterator[WallStripPlan]) -> WallStripPlan:
    """
    Minimum over (score, strip count, foil area, generation index).
    Raises ValueError when there is no valid candidate at all.
    """
    keyed = ((_plan_key(p, i), p) for i, p in enumerate(plans))
    best = reduce(lambda a, b: b if a is None or b[0] < a[0] else a, keyed, None)
    if best is None:
        raise ValueError(
            f"No wall strip plan fits a {DEFAULTS.roll_length} m roll: a wall segment is longer than "
            f"{DEFAULTS.roll_length - DEFAULTS.vertical_join_overlap:.2f} m "
            f"(roll length minus one {DEFAULTS.vertical_join_overlap} m seam overlap)"
        )
    return best[1]


def get_optimal_wall_strip_plan(
    geometry: PoolGeometry,
    config: Optional[MixConfiguration] = None,
    material: Optional[MaterialSpec] = None,
    objective: Objective = "minWaste",
    widths: Optional[Sequence[float]] = None,
) -> WallStripPlan:
    """
    Best continuous wall plan for the pool.
    `config` supplies the bottom strips whose roll tails wall strips may share.
    `widths` restricts the admissible wall widths (defaults to the depth comfort window).
    """
    check_objective(objective)
    segments = get_wall_segments(geometry)
    if widths is None:
        widths = wall_widths_for_depth(geometry.wall_depth, material)
    bottoms = bottom_strips_from_config(config) if config is not None else []
    wall_cover = geometry.wall_depth + DEFAULTS.fold_at_bottom

    plan = select_optimal_wall_plan(generate_wall_strip_plans(segments, widths, bottoms, objective, wall_cover))
    LOGGER.info(
        f"wall plan ({objective}): "
        + ", ".join(f"{s.label} {s.total_length:.2f}m@{s.roll_width}" for s in plan.strips)
        + f" | waste={plan.waste_area:.2f}m² score={plan.score:.2f}"
    )
    return plan
