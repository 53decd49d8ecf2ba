# foil_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (roll sizes, overlaps, thresholds) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .types import MaterialSpec


@dataclass(frozen=True)
class Defaults:
    # Stock rolls (m)
    roll_length: float = 25.0
    roll_width_narrow: float = 1.65
    roll_width_wide: float = 2.05

    # Weld overlaps between parallel strips (m)
    min_overlap_bottom: float = 0.05
    min_overlap_wall: float = 0.10
    max_overlap: float = 0.10
    butt_joint_overlap: float = 0.0

    # Overlap at each vertical seam between wall strips around the perimeter
    vertical_join_overlap: float = 0.10

    # Wall foil folds onto the bottom by this much
    fold_at_bottom: float = 0.15

    # Offcuts / waste
    min_reusable_offcut_length: float = 2.0
    min_reusable_waste_width: float = 0.30
    negligible_residual: float = 0.01
    length_tolerance: float = 0.001

    # Wall "comfort window" for roll widths
    depth_threshold_for_wide: float = 1.55
    depth_threshold_for_double_narrow: float = 1.95

    dividing_wall_thickness: float = 0.15


DEFAULTS = Defaults()

MATERIALS: Dict[str, MaterialSpec] = {
    "single-color": MaterialSpec(name="single-color", narrow_only=False, joint="overlap"),
    "printed": MaterialSpec(name="printed", narrow_only=True, joint="overlap"),
    "structural": MaterialSpec(name="structural", narrow_only=True, joint="butt"),
}


def get_material(material: Union[str, MaterialSpec, None]) -> MaterialSpec:
    """Resolve a preset name (or None -> single-color) into a MaterialSpec."""
    if material is None:
        return MATERIALS["single-color"]
    if isinstance(material, MaterialSpec):
        return material
    key = str(material).strip().lower()
    if key not in MATERIALS:
        raise ValueError(f"Unknown material {material!r}, expected one of {sorted(MATERIALS)}")
    return MATERIALS[key]


def is_narrow_only(material: Optional[MaterialSpec]) -> bool:
    return bool(material is not None and material.narrow_only)


def uses_butt_joint(material: Optional[MaterialSpec]) -> bool:
    return bool(material is not None and material.joint == "butt")


def admissible_widths(material: Optional[MaterialSpec]) -> List[float]:
    if is_narrow_only(material):
        return [DEFAULTS.roll_width_narrow]
    return [DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide]


def wall_widths_for_depth(depth: float, material: Optional[MaterialSpec]) -> List[float]:
    """
    Roll widths allowed on walls:
      depth <= 1.55       -> both widths
      1.55 < depth <= 1.95 -> wide only
      depth > 1.95        -> narrow only (stacked strips)
    Narrow-only materials always get narrow.
    """
    if is_narrow_only(material):
        return [DEFAULTS.roll_width_narrow]
    if depth <= DEFAULTS.depth_threshold_for_wide:
        return [DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide]
    if depth <= DEFAULTS.depth_threshold_for_double_narrow:
        return [DEFAULTS.roll_width_wide]
    return [DEFAULTS.roll_width_narrow]


def parse_dims_text(dims_text: str) -> Tuple[float, float, float]:
    """
    Parse '10x5x1.5' -> (10.0, 5.0, 1.5)
    """
    s = dims_text.lower().replace(" ", "")
    parts = s.split("x")
    if len(parts) != 3:
        raise ValueError("dims_text must be like '10x5x1.5' (length x width x depth)")
    a, b, c = (float(p) for p in parts)
    return a, b, c
