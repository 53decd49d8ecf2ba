# foil_solver/surfaces.py
# Surface catalog: turns pool geometry + material into the list of surfaces to cover,
# and the pool outline into the cyclic list of wall segments.
#
# Policy:
#   - bottom strips run along the longer side and span the shorter side
#   - wall strips span depth + fold allowance
#   - stairs and paddling-pool bottom always use structural (anti-slip) foil
#   - the dividing wall of a paddling pool uses main foil

from __future__ import annotations

import math
from typing import List, Optional

from .config import DEFAULTS, uses_butt_joint
from .types import (
    SURFACE_BOTTOM,
    SURFACE_DIVIDING_WALL,
    SURFACE_PADDLING,
    SURFACE_STAIRS,
    SURFACE_WALL_LONG,
    SURFACE_WALL_SHORT,
    MaterialSpec,
    PoolGeometry,
    Surface,
    WallSegment,
)


def _corner(i: int) -> str:
    # A..Z, then A1.. for very irregular outlines
    letter = chr(ord("A") + i % 26)
    return letter if i < 26 else f"{letter}{i // 26}"


def bottom_strip_length(geometry: PoolGeometry) -> float:
    """Bottom strips follow the longer side; a sloped bottom makes them longer."""
    if geometry.slope_depth is None:
        return geometry.longer_side
    drop = abs(geometry.slope_depth - geometry.depth)
    return math.hypot(geometry.longer_side, drop)


def get_surface_definitions(geometry: PoolGeometry, material: Optional[MaterialSpec] = None) -> List[Surface]:
    """Ordered surface list: bottom, long walls, short walls, stairs, paddling bottom, dividing wall."""
    butt = uses_butt_joint(material)
    bottom_overlap = DEFAULTS.butt_joint_overlap if butt else DEFAULTS.min_overlap_bottom
    structural_overlap = DEFAULTS.butt_joint_overlap if butt else DEFAULTS.min_overlap_wall
    wall_cover = geometry.wall_depth + DEFAULTS.fold_at_bottom

    surfaces: List[Surface] = [
        Surface(
            key=SURFACE_BOTTOM,
            label="Bottom",
            strip_length=bottom_strip_length(geometry),
            cover_width=geometry.shorter_side,
            count=1,
            min_overlap=bottom_overlap,
            foil_assignment="main",
            butt_joint=butt,
        ),
        Surface(
            key=SURFACE_WALL_LONG,
            label="Long walls (2x)",
            strip_length=geometry.longer_side,
            cover_width=wall_cover,
            count=2,
            min_overlap=DEFAULTS.min_overlap_wall,
            foil_assignment="main",
        ),
        Surface(
            key=SURFACE_WALL_SHORT,
            label="Short walls (2x)",
            strip_length=geometry.shorter_side,
            cover_width=wall_cover,
            count=2,
            min_overlap=DEFAULTS.min_overlap_wall,
            foil_assignment="main",
        ),
    ]

    stairs = geometry.stairs
    if stairs is not None and stairs.step_count > 0:
        surfaces.append(
            Surface(
                key=SURFACE_STAIRS,
                label="Stairs",
                strip_length=stairs.run_length,
                cover_width=stairs.width if stairs.width is not None else geometry.shorter_side,
                count=1,
                min_overlap=structural_overlap,
                foil_assignment="structural",
                butt_joint=butt,
            )
        )

    pad = geometry.paddling
    if pad is not None:
        surfaces.append(
            Surface(
                key=SURFACE_PADDLING,
                label="Paddling pool (bottom)",
                strip_length=max(pad.length, pad.width),
                cover_width=pad.depth + DEFAULTS.fold_at_bottom,
                count=1,
                min_overlap=structural_overlap,
                foil_assignment="structural",
                butt_joint=butt,
            )
        )
        if pad.has_dividing_wall:
            offset_m = pad.dividing_wall_offset_cm / 100.0
            surfaces.append(
                Surface(
                    key=SURFACE_DIVIDING_WALL,
                    label="Dividing wall",
                    strip_length=pad.width,
                    cover_width=geometry.depth - pad.depth + offset_m,
                    count=1,
                    min_overlap=DEFAULTS.min_overlap_wall,
                    foil_assignment="main",
                )
            )

    return surfaces


def get_wall_segments(geometry: PoolGeometry) -> List[WallSegment]:
    """
    Cyclic wall segments. Rectangle: A-B (long), B-C (short), C-D (long), D-A (short).
    Irregular outline: one segment per polygon edge.
    """
    if geometry.vertices:
        pts = geometry.vertices
        n = len(pts)
        out: List[WallSegment] = []
        for i in range(n):
            x0, y0 = pts[i]
            x1, y1 = pts[(i + 1) % n]
            out.append(WallSegment(label=f"{_corner(i)}-{_corner((i + 1) % n)}", length=math.hypot(x1 - x0, y1 - y0)))
        return out

    a, b = geometry.longer_side, geometry.shorter_side
    return [
        WallSegment("A-B", a),
        WallSegment("B-C", b),
        WallSegment("C-D", a),
        WallSegment("D-A", b),
    ]


def perimeter(segments: List[WallSegment]) -> float:
    return sum(s.length for s in segments)
