# foil_solver/types.py
# Core data structures for pool foil roll planning.
# Keep this file dependency-light so it can be imported everywhere.
# All lengths are in meters, areas in m².

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

Objective = Literal["minWaste", "minRolls"]
FoilAssignment = Literal["main", "structural"]

OBJECTIVES: Tuple[str, ...] = ("minWaste", "minRolls")

# Surface keys produced by the surface catalog ("walls" is the continuous perimeter plan)
SURFACE_BOTTOM = "bottom"
SURFACE_WALL_LONG = "wall-long"
SURFACE_WALL_SHORT = "wall-short"
SURFACE_WALLS = "walls"
SURFACE_STAIRS = "stairs"
SURFACE_PADDLING = "paddling"
SURFACE_DIVIDING_WALL = "dividing-wall"

WALL_KEYS: Tuple[str, ...] = (SURFACE_WALL_LONG, SURFACE_WALL_SHORT)


def check_objective(objective: str) -> str:
    if objective not in OBJECTIVES:
        raise ValueError(f"Unknown objective {objective!r}, expected one of {OBJECTIVES}")
    return objective


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class MaterialSpec:
    """Foil subtype: which roll widths it is sold in and how its seams are joined."""
    name: str
    narrow_only: bool = False
    joint: str = "overlap"  # "overlap" (welded) or "butt"

    def __post_init__(self):
        if self.joint not in ("overlap", "butt"):
            raise ValueError(f"MaterialSpec.joint must be 'overlap' or 'butt', got {self.joint!r}")


@dataclass(frozen=True)
class StairsSpec:
    step_count: int
    step_depth: float
    step_height: float = 0.20
    width: Optional[float] = None  # None = "full" (along the shorter pool side)

    def __post_init__(self):
        if self.step_count < 0:
            raise ValueError(f"step_count must be >= 0, got {self.step_count}")
        if self.step_depth < 0 or self.step_height < 0:
            raise ValueError("Stair step depth/height must be >= 0")

    @property
    def run_length(self) -> float:
        """Length of foil running over all treads and risers."""
        return (self.step_depth + self.step_height) * self.step_count


@dataclass(frozen=True)
class PaddlingSpec:
    """Shallow (paddling) pool built into a corner of the main pool."""
    width: float
    length: float
    depth: float
    dividing_wall_offset_cm: float = 0.0

    def __post_init__(self):
        if self.width <= 0 or self.length <= 0 or self.depth <= 0:
            raise ValueError(f"Invalid paddling pool size: {self.width}x{self.length}x{self.depth}")

    @property
    def has_dividing_wall(self) -> bool:
        return self.dividing_wall_offset_cm > 0


@dataclass(frozen=True)
class PoolGeometry:
    """Rectangular container footprint plus optional sub-geometry."""
    length: float
    width: float
    depth: float
    slope_depth: Optional[float] = None
    stairs: Optional[StairsSpec] = None
    paddling: Optional[PaddlingSpec] = None

    # Optional irregular outline (x, y) in meters; walls become the polygon edges
    vertices: Tuple[Tuple[float, float], ...] = ()

    def __post_init__(self):
        if self.length <= 0 or self.width <= 0 or self.depth <= 0:
            raise ValueError(f"Invalid pool size: {self.length}x{self.width}x{self.depth}")
        if self.slope_depth is not None and self.slope_depth <= 0:
            raise ValueError(f"slope_depth must be > 0, got {self.slope_depth}")
        if self.vertices and len(self.vertices) < 3:
            raise ValueError("An irregular outline needs at least 3 vertices")

    @property
    def longer_side(self) -> float:
        return max(self.length, self.width)

    @property
    def shorter_side(self) -> float:
        return min(self.length, self.width)

    @property
    def wall_depth(self) -> float:
        """Deepest point the walls must cover."""
        if self.slope_depth is None:
            return self.depth
        return max(self.depth, self.slope_depth)


@dataclass(frozen=True)
class Surface:
    """
    One covering requirement from the surface catalog.
    Strips run along `strip_length`; together they must span `cover_width`.
    """
    key: str
    label: str
    strip_length: float
    cover_width: float
    count: int = 1
    min_overlap: float = 0.0
    foil_assignment: FoilAssignment = "main"
    butt_joint: bool = False

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be >= 0 for {self.key}")
        if self.min_overlap < 0:
            raise ValueError(f"min_overlap must be >= 0 for {self.key}")

    @property
    def is_structural(self) -> bool:
        return self.foil_assignment == "structural"

    @property
    def cover_area(self) -> float:
        return max(0.0, self.strip_length) * max(0.0, self.cover_width) * self.count


@dataclass(frozen=True)
class WallSegment:
    label: str   # e.g. "A-B"
    length: float


# ----------------------------
# Strip calculator results
# ----------------------------

@dataclass(frozen=True)
class StripWidthResult:
    """How a single roll width spans one cover width."""
    count: int
    actual_overlap: float
    edge_waste_width: float
    material_width_used: float
    total_covered_width: float

    @property
    def seams(self) -> int:
        return max(0, self.count - 1)


@dataclass(frozen=True)
class MixedStripResult:
    """Same as StripWidthResult, for an explicit list of (possibly different) strip widths."""
    is_valid: bool
    count: int
    actual_overlap: float
    edge_waste_width: float
    material_width_used: float
    total_covered_width: float


# ----------------------------
# Wall partition plans
# ----------------------------

@dataclass(frozen=True)
class WallStripConfig:
    """One continuous strip covering a run of consecutive wall segments."""
    segment_indices: Tuple[int, ...]
    labels: Tuple[str, ...]
    base_length: float
    vertical_overlap: float
    roll_width: float
    rows: int = 1  # stacked strips needed to span wall height with this width

    @property
    def total_length(self) -> float:
        return self.base_length + self.vertical_overlap

    @property
    def label(self) -> str:
        """Corner-to-corner label, e.g. ("A-B", "B-C") -> "A-B-C"."""
        if not self.labels:
            return ""
        corners = [lb.split("-", 1)[0] for lb in self.labels]
        corners.append(self.labels[-1].split("-", 1)[-1])
        return "-".join(corners)

    @property
    def foil_area(self) -> float:
        return self.total_length * self.roll_width * self.rows


@dataclass(frozen=True)
class WallStripPlan:
    strips: Tuple[WallStripConfig, ...]
    waste_area: float
    reusable_offcut_area: float
    paired_leftover: float
    roll_count_narrow: int   # one roll per physical wall strip
    roll_count_wide: int
    score: float = 0.0
    dedicated_rolls_narrow: int = 0  # strips no bottom roll tail can take
    dedicated_rolls_wide: int = 0

    @property
    def strip_count(self) -> int:
        return sum(s.rows for s in self.strips)

    @property
    def total_vertical_overlap(self) -> float:
        return sum(s.vertical_overlap for s in self.strips)

    @property
    def total_foil_area(self) -> float:
        return sum(s.foil_area for s in self.strips)


# ----------------------------
# Surface configurations / rolls
# ----------------------------

@dataclass(frozen=True)
class StripGroup:
    """`count` identical strips of one width and length."""
    roll_width: float
    count: int
    length: float
    label: str = ""


@dataclass(frozen=True)
class SurfaceRollConfig:
    """Chosen roll width(s), strip count and areas for one surface."""
    surface: Surface
    roll_width: float
    groups: Tuple[StripGroup, ...]
    area: float          # net area to cover
    waste_area: float    # edge waste (never overlap)
    edge_waste_width: float = 0.0  # per surface instance
    actual_overlap: float = 0.0    # between parallel strips
    is_manual_override: bool = False

    @property
    def key(self) -> str:
        return self.surface.key

    @property
    def label(self) -> str:
        return self.surface.label

    @property
    def foil_assignment(self) -> str:
        return self.surface.foil_assignment

    @property
    def strip_count(self) -> int:
        return sum(g.count for g in self.groups)

    @property
    def strip_area(self) -> float:
        return sum(g.count * g.length * g.roll_width for g in self.groups)

    @property
    def is_mixed(self) -> bool:
        return len({g.roll_width for g in self.groups}) > 1


@dataclass(frozen=True)
class StripInstance:
    """A single strip to be cut from a roll (expanded from StripGroup.count)."""
    uid: str            # e.g. "bottom#2"
    surface: str        # surface key
    label: str          # human label (wall strips carry their corner label)
    length: float
    roll_width: float


@dataclass(frozen=True)
class RollStrip:
    uid: str
    surface: str
    length: float


@dataclass
class RollAllocation:
    """One physical roll: strips placed end to end plus the unused tail."""
    roll_number: int
    roll_width: float
    roll_length: float
    strips: List[RollStrip] = field(default_factory=list)

    @property
    def used_length(self) -> float:
        return sum(s.length for s in self.strips)

    @property
    def waste_length(self) -> float:
        return max(0.0, self.roll_length - self.used_length)

    def fits(self, length: float, tolerance: float = 0.0) -> bool:
        return self.used_length + length <= self.roll_length + tolerance

    def surfaces(self) -> List[str]:
        out: List[str] = []
        for s in self.strips:
            if s.surface not in out:
                out.append(s.surface)
        return out


@dataclass(frozen=True)
class Offcut:
    roll_number: int
    roll_width: float
    length: float
    area: float


@dataclass
class MixConfiguration:
    surfaces: List[SurfaceRollConfig] = field(default_factory=list)
    wall_plan: Optional[WallStripPlan] = None
    objective: Objective = "minWaste"
    total_rolls_narrow: int = 0
    total_rolls_wide: int = 0
    total_waste: float = 0.0
    waste_percentage: float = 0.0
    is_optimized: bool = False

    def total_rolls(self) -> int:
        return self.total_rolls_narrow + self.total_rolls_wide

    def surface(self, key: str) -> Optional[SurfaceRollConfig]:
        for s in self.surfaces:
            if s.key == key:
                return s
        return None


@dataclass(frozen=True)
class FoilPricingResult:
    main_foil_area: int
    main_weld_area: float
    structural_foil_area: int
    structural_weld_area: float

    @property
    def total_area(self) -> int:
        return self.main_foil_area + self.structural_foil_area


# ----------------------------
# Helper utilities
# ----------------------------

def expand_strips(config: MixConfiguration) -> List[StripInstance]:
    """
    Expand every surface's strip groups into single strips (stable order).
    When a continuous wall plan is present it replaces the wall-long / wall-short strips.
    """
    out: List[StripInstance] = []
    use_wall_plan = config.wall_plan is not None

    for sc in config.surfaces:
        if use_wall_plan and sc.key in WALL_KEYS:
            continue
        k = 0
        for g in sc.groups:
            for _ in range(g.count):
                k += 1
                out.append(
                    StripInstance(
                        uid=f"{sc.key}#{k}",
                        surface=sc.key,
                        label=g.label or sc.label,
                        length=g.length,
                        roll_width=g.roll_width,
                    )
                )

    if use_wall_plan:
        k = 0
        for ws in config.wall_plan.strips:
            for _ in range(ws.rows):
                k += 1
                out.append(
                    StripInstance(
                        uid=f"{SURFACE_WALLS}#{k}",
                        surface=SURFACE_WALLS,
                        label=ws.label,
                        length=ws.total_length,
                        roll_width=ws.roll_width,
                    )
                )

    return out
