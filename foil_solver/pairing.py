# foil_solver/pairing.py
# Cross-surface packer: lets wall (and stairs / paddling) strips ride in the unused tail of a
# bottom roll of the same width.
#
# Matching is greedy and first-available (no backtracking, no optimal matching):
# iterate strips in order, scan unused bottom strips of the same width, take the first that fits.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULTS
from .types import (
    SURFACE_BOTTOM,
    SURFACE_PADDLING,
    SURFACE_STAIRS,
    MixConfiguration,
    StripInstance,
    WallStripConfig,
    expand_strips,
)


@dataclass(frozen=True)
class BottomStrip:
    roll_width: float
    length: float
    uid: str = ""

    @property
    def offcut_length(self) -> float:
        return DEFAULTS.roll_length - self.length


@dataclass(frozen=True)
class Pairing:
    """Result for one strip: the bottom strip it rides with (None = needs its own roll)."""
    strip_index: int
    bottom_index: Optional[int]
    leftover: float  # residual roll length after placing the strip (and its bottom partner)

    @property
    def paired(self) -> bool:
        return self.bottom_index is not None


@dataclass(frozen=True)
class WasteEstimate:
    waste_area: float          # unusable residual (charged)
    reusable_area: float       # residual >= reuse threshold (not charged)
    paired_leftover: float     # residual length summed over paired rolls
    roll_count_narrow: int     # one roll per strip, paired or not
    roll_count_wide: int
    additional_roll_area: float  # full-roll area bought specifically for unpaired strips
    dedicated_rolls_narrow: int = 0  # rolls opened for unpaired strips only
    dedicated_rolls_wide: int = 0


def can_pair(strip_length: float, bottom_length: float, roll_length: Optional[float] = None) -> bool:
    """A strip of length L rides with a bottom strip of length B iff L + B <= roll length."""
    rl = DEFAULTS.roll_length if roll_length is None else roll_length
    return strip_length + bottom_length <= rl + DEFAULTS.length_tolerance


def bottom_strips_from_config(config: MixConfiguration) -> List[BottomStrip]:
    """One entry per physical bottom strip, in strip-group order."""
    bottom = config.surface(SURFACE_BOTTOM)
    if bottom is None:
        return []
    out: List[BottomStrip] = []
    k = 0
    for g in bottom.groups:
        for _ in range(g.count):
            k += 1
            out.append(BottomStrip(roll_width=g.roll_width, length=g.length, uid=f"{SURFACE_BOTTOM}#{k}"))
    return out


def pair_into_bottom_offcuts(
    pieces: Sequence[Tuple[float, float]],
    bottoms: Sequence[BottomStrip],
) -> List[Pairing]:
    """
    pieces: (roll_width, length) per strip, in the order they should be matched.
    Each bottom strip can host at most one piece.
    """
    used = set()
    out: List[Pairing] = []
    rl = DEFAULTS.roll_length

    for i, (width, length) in enumerate(pieces):
        partner = None
        for bi, b in enumerate(bottoms):
            if bi in used or b.roll_width != width:
                continue
            if can_pair(length, b.length):
                partner = bi
                break

        if partner is None:
            out.append(Pairing(strip_index=i, bottom_index=None, leftover=rl - length))
        else:
            used.add(partner)
            out.append(Pairing(strip_index=i, bottom_index=partner, leftover=rl - length - bottoms[partner].length))

    return out


def wall_pieces(strips: Sequence[WallStripConfig]) -> List[Tuple[float, float]]:
    """Expand stacked rows so every physical wall strip is matched on its own."""
    out: List[Tuple[float, float]] = []
    for s in strips:
        out.extend([(s.roll_width, s.total_length)] * s.rows)
    return out


def estimate_waste(pieces: Sequence[Tuple[float, float]], bottoms: Sequence[BottomStrip]) -> WasteEstimate:
    """Waste bookkeeping for a set of strips matched greedily into bottom offcuts."""
    waste = 0.0
    reusable = 0.0
    paired_leftover = 0.0
    narrow = 0
    wide = 0
    dedicated_narrow = 0
    dedicated_wide = 0
    additional = 0.0

    for p in pair_into_bottom_offcuts(pieces, bottoms):
        width = pieces[p.strip_index][0]
        residual = max(0.0, p.leftover)
        is_narrow = width == DEFAULTS.roll_width_narrow
        if is_narrow:
            narrow += 1
        else:
            wide += 1

        if p.paired:
            paired_leftover += residual
        else:
            additional += width * DEFAULTS.roll_length
            if is_narrow:
                dedicated_narrow += 1
            else:
                dedicated_wide += 1

        if residual >= DEFAULTS.min_reusable_offcut_length:
            reusable += residual * width
        elif residual > DEFAULTS.negligible_residual:
            waste += residual * width

    return WasteEstimate(
        waste_area=waste,
        reusable_area=reusable,
        paired_leftover=paired_leftover,
        roll_count_narrow=narrow,
        roll_count_wide=wide,
        additional_roll_area=additional,
        dedicated_rolls_narrow=dedicated_narrow,
        dedicated_rolls_wide=dedicated_wide,
    )


def estimate_plan_waste(strips: Sequence[WallStripConfig], bottoms: Sequence[BottomStrip]) -> WasteEstimate:
    return estimate_waste(wall_pieces(strips), bottoms)


def estimate_additional_wall_roll_area(strips: Sequence[WallStripConfig], bottoms: Sequence[BottomStrip]) -> float:
    """Full-roll area (width x roll length) for every wall strip no bottom offcut can absorb."""
    return estimate_plan_waste(strips, bottoms).additional_roll_area


@dataclass(frozen=True)
class OffcutPairing:
    strip_uid: str
    surface: str
    bottom_uid: Optional[str]
    leftover: float


def plan_offcut_pairings(config: MixConfiguration) -> List[OffcutPairing]:
    """
    Greedy pairing across surfaces for reporting: wall strips first, then stairs, then paddling,
    each matched into the tail of an unused bottom roll of the same width.
    """
    bottoms = bottom_strips_from_config(config)
    order = {"walls": 0, "wall-long": 0, "wall-short": 0, SURFACE_STAIRS: 1, SURFACE_PADDLING: 2}
    candidates: List[StripInstance] = [s for s in expand_strips(config) if s.surface in order]
    candidates.sort(key=lambda s: order[s.surface])  # stable: keeps strip order within a surface

    pairings = pair_into_bottom_offcuts([(s.roll_width, s.length) for s in candidates], bottoms)
    return [
        OffcutPairing(
            strip_uid=candidates[p.strip_index].uid,
            surface=candidates[p.strip_index].surface,
            bottom_uid=bottoms[p.bottom_index].uid if p.paired else None,
            leftover=max(0.0, p.leftover),
        )
        for p in pairings
    ]
