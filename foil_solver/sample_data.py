# foil_solver/sample_data.py
# Utilities to generate sample / random pool geometries for quick benchmarking and property tests.
# Lets you stress-test waste vs roll count trade-offs without real customer drawings.

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .types import PaddlingSpec, PoolGeometry, StairsSpec


@dataclass(frozen=True)
class RandomPoolConfig:
    seed: int = 123
    n_pools: int = 20

    # size ranges (m)
    length_range: Tuple[float, float] = (3.0, 12.0)
    width_range: Tuple[float, float] = (2.0, 6.0)
    depth_range: Tuple[float, float] = (1.0, 2.2)

    # probability of optional sub-geometry
    p_slope: float = 0.20
    slope_extra_range: Tuple[float, float] = (0.2, 0.8)

    p_stairs: float = 0.30
    steps_range: Tuple[int, int] = (2, 5)

    p_paddling: float = 0.15
    p_dividing_wall: float = 0.5


def _pick(rnd: random.Random, lo_hi: Tuple[float, float], step: float = 0.05) -> float:
    # sizes on a 5 cm grid, like real quotes
    lo, hi = lo_hi
    n = int(round((hi - lo) / step))
    return round(lo + step * rnd.randint(0, n), 2)


def generate_random_pools(cfg: RandomPoolConfig) -> List[PoolGeometry]:
    """
    Random rectangular pools, some with a sloped bottom, stairs or a paddling pool.
    Every pool keeps its longest wall short enough to be covered on one roll.
    """
    rnd = random.Random(cfg.seed)
    pools: List[PoolGeometry] = []

    for _ in range(cfg.n_pools):
        length = _pick(rnd, cfg.length_range)
        width = min(_pick(rnd, cfg.width_range), length)
        depth = _pick(rnd, cfg.depth_range)

        slope = None
        if rnd.random() < cfg.p_slope:
            slope = round(depth + _pick(rnd, cfg.slope_extra_range), 2)

        stairs = None
        if rnd.random() < cfg.p_stairs:
            stairs = StairsSpec(
                step_count=rnd.randint(*cfg.steps_range),
                step_depth=_pick(rnd, (0.25, 0.40)),
                step_height=_pick(rnd, (0.15, 0.25)),
                width=None if rnd.random() < 0.5 else _pick(rnd, (1.0, min(2.0, width))),
            )

        paddling = None
        if rnd.random() < cfg.p_paddling:
            pw = _pick(rnd, (1.0, max(1.0, width / 2)))
            pl = _pick(rnd, (1.0, max(1.0, length / 3)))
            pd = _pick(rnd, (0.3, min(0.6, depth - 0.2)))
            offset = _pick(rnd, (5.0, 20.0), step=5.0) if rnd.random() < cfg.p_dividing_wall else 0.0
            paddling = PaddlingSpec(width=pw, length=pl, depth=pd, dividing_wall_offset_cm=offset)

        pools.append(
            PoolGeometry(
                length=length,
                width=width,
                depth=depth,
                slope_depth=slope,
                stairs=stairs,
                paddling=paddling,
            )
        )

    return pools
