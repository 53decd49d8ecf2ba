# foil_solver/metrics.py
# Metrics for packed rolls:
# - used length / waste length per roll
# - reusable offcut area (tails >= reuse threshold) vs unusable tail area
# - utilization (used length / roll length)
#
# These metrics work on any list of RollAllocation, whichever packer produced it.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .config import DEFAULTS
from .types import RollAllocation


@dataclass(frozen=True)
class RollMetrics:
    roll_number: int
    roll_width: float
    used_length: float
    waste_length: float
    reusable_area: float
    unusable_area: float

    @property
    def utilization(self) -> float:
        total = self.used_length + self.waste_length
        return self.used_length / total if total > 0 else 0.0


@dataclass(frozen=True)
class Metrics:
    rolls: List[RollMetrics]
    roll_count_narrow: int
    roll_count_wide: int
    used_area: float
    reusable_area: float
    unusable_area: float

    @property
    def roll_count(self) -> int:
        return self.roll_count_narrow + self.roll_count_wide

    @property
    def utilization(self) -> float:
        total = self.used_area + self.reusable_area + self.unusable_area
        return self.used_area / total if total > 0 else 0.0


def compute_single_roll_metrics(roll: RollAllocation) -> RollMetrics:
    if roll.used_length > roll.roll_length + DEFAULTS.length_tolerance:
        raise ValueError(
            f"Roll {roll.roll_number}: used length {roll.used_length:.3f} exceeds roll length {roll.roll_length}"
        )

    tail = roll.waste_length
    reusable = 0.0
    unusable = 0.0
    if tail >= DEFAULTS.min_reusable_offcut_length - 1e-9:
        reusable = tail * roll.roll_width
    elif tail > DEFAULTS.negligible_residual:
        unusable = tail * roll.roll_width

    return RollMetrics(
        roll_number=roll.roll_number,
        roll_width=roll.roll_width,
        used_length=roll.used_length,
        waste_length=tail,
        reusable_area=reusable,
        unusable_area=unusable,
    )


def compute_roll_metrics(rolls: Sequence[RollAllocation]) -> Metrics:
    """Per-roll metrics plus totals."""
    per_roll = [compute_single_roll_metrics(r) for r in rolls]
    narrow = sum(1 for r in rolls if r.roll_width == DEFAULTS.roll_width_narrow)
    return Metrics(
        rolls=per_roll,
        roll_count_narrow=narrow,
        roll_count_wide=len(rolls) - narrow,
        used_area=sum(m.used_length * m.roll_width for m in per_roll),
        reusable_area=sum(m.reusable_area for m in per_roll),
        unusable_area=sum(m.unusable_area for m in per_roll),
    )
