# foil_solver/validate.py
# Validation utilities:
# - conservation per roll (used + waste == roll length), no strip longer than a roll
# - strip width results: non-negative waste, overlap bounds, coverage
# - wall plans: total = base + overlap, every strip fits a roll
#
# Useful both during development and to sanity-check optimizer output.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import DEFAULTS
from .types import MixConfiguration, RollAllocation, StripWidthResult, WallStripPlan

_EPS = 1e-6


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    roll_number: Optional[int] = None
    surface: Optional[str] = None


def validate_rolls(rolls: Sequence[RollAllocation]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    seen = set()

    for r in rolls:
        if r.roll_number in seen:
            issues.append(ValidationIssue("ERROR", "Duplicate roll number", roll_number=r.roll_number))
        seen.add(r.roll_number)

        if not r.strips:
            issues.append(ValidationIssue("WARN", "Roll has no strips", roll_number=r.roll_number))

        for s in r.strips:
            if s.length <= 0:
                issues.append(
                    ValidationIssue("ERROR", f"Non-positive strip length {s.length}", r.roll_number, s.surface)
                )
            if s.length > r.roll_length + DEFAULTS.length_tolerance:
                issues.append(
                    ValidationIssue(
                        "ERROR",
                        f"Strip {s.uid} ({s.length:.3f} m) is longer than the roll ({r.roll_length} m)",
                        r.roll_number,
                        s.surface,
                    )
                )

        if r.used_length > r.roll_length + DEFAULTS.length_tolerance:
            issues.append(
                ValidationIssue(
                    "ERROR",
                    f"Used length {r.used_length:.3f} exceeds roll length {r.roll_length}",
                    roll_number=r.roll_number,
                )
            )
        elif abs(r.used_length + r.waste_length - r.roll_length) > DEFAULTS.length_tolerance:
            issues.append(
                ValidationIssue(
                    "ERROR",
                    f"used + waste = {r.used_length + r.waste_length:.6f} != roll length {r.roll_length}",
                    roll_number=r.roll_number,
                )
            )

    return issues


def validate_strip_result(
    res: StripWidthResult,
    cover_width: float,
    min_overlap: float,
    max_overlap: Optional[float] = None,
    label: str = "",
) -> List[ValidationIssue]:
    hi = max(DEFAULTS.max_overlap if max_overlap is None else max_overlap, min_overlap)
    issues: List[ValidationIssue] = []

    if res.edge_waste_width < 0:
        issues.append(ValidationIssue("ERROR", f"Negative edge waste {res.edge_waste_width}", surface=label))
    if res.count > 1 and not (min_overlap - _EPS <= res.actual_overlap <= hi + _EPS):
        issues.append(
            ValidationIssue(
                "ERROR",
                f"Overlap {res.actual_overlap:.4f} outside [{min_overlap}, {hi}]",
                surface=label,
            )
        )
    if cover_width > 0 and res.total_covered_width < cover_width - _EPS:
        issues.append(
            ValidationIssue(
                "ERROR",
                f"Strips cover {res.total_covered_width:.4f} m < required {cover_width:.4f} m",
                surface=label,
            )
        )
    return issues


def validate_wall_plan(plan: WallStripPlan, segment_count: Optional[int] = None) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    covered = []
    for s in plan.strips:
        covered.extend(s.segment_indices)
        if abs(s.total_length - (s.base_length + s.vertical_overlap)) > _EPS:
            issues.append(ValidationIssue("ERROR", f"{s.label}: total != base + overlap", surface="walls"))
        if s.total_length > DEFAULTS.roll_length + DEFAULTS.length_tolerance:
            issues.append(
                ValidationIssue(
                    "ERROR",
                    f"{s.label}: {s.total_length:.3f} m does not fit a {DEFAULTS.roll_length} m roll",
                    surface="walls",
                )
            )
        if s.vertical_overlap < 0:
            issues.append(ValidationIssue("ERROR", f"{s.label}: negative vertical overlap", surface="walls"))

    if segment_count is not None and sorted(covered) != list(range(segment_count)):
        issues.append(
            ValidationIssue("ERROR", f"Wall strips cover segments {sorted(covered)}, expected 0..{segment_count - 1}")
        )

    for name in ("waste_area", "reusable_offcut_area", "paired_leftover"):
        if getattr(plan, name) < 0:
            issues.append(ValidationIssue("ERROR", f"Wall plan {name} is negative", surface="walls"))

    return issues


def validate_configuration(config: MixConfiguration, rolls: Sequence[RollAllocation]) -> List[ValidationIssue]:
    """
    Validate a full configuration against its packed rolls.
    Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []

    for sc in config.surfaces:
        if sc.waste_area < 0:
            issues.append(ValidationIssue("ERROR", f"Negative waste area {sc.waste_area}", surface=sc.key))
        for g in sc.groups:
            if g.roll_width not in (DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide):
                issues.append(ValidationIssue("ERROR", f"Unknown roll width {g.roll_width}", surface=sc.key))
        if sc.surface.is_structural and any(g.roll_width != DEFAULTS.roll_width_narrow for g in sc.groups):
            issues.append(ValidationIssue("ERROR", "Structural surface must use narrow rolls", surface=sc.key))

    if config.wall_plan is not None:
        issues.extend(validate_wall_plan(config.wall_plan))

    issues.extend(validate_rolls(rolls))

    packed = sum(len(r.strips) for r in rolls)
    narrow = sum(1 for r in rolls if r.roll_width == DEFAULTS.roll_width_narrow)
    if (narrow, len(rolls) - narrow) != (config.total_rolls_narrow, config.total_rolls_wide):
        issues.append(ValidationIssue("WARN", "Roll totals differ from the packed rolls"))
    if packed == 0:
        issues.append(ValidationIssue("WARN", "Configuration has 0 strips."))

    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] roll={e.roll_number} surface={e.surface} :: {e.message}" for e in errs)
        raise ValueError("Validation failed:\n" + msg)
