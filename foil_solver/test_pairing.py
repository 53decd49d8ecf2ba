# foil_solver/test_pairing.py

from __future__ import annotations

import pytest

from foil_solver.optimizer import auto_optimize_mix_config
from foil_solver.pairing import (
    BottomStrip,
    bottom_strips_from_config,
    can_pair,
    estimate_additional_wall_roll_area,
    estimate_plan_waste,
    estimate_waste,
    pair_into_bottom_offcuts,
    plan_offcut_pairings,
)
from foil_solver.types import PoolGeometry, StairsSpec, WallStripConfig

N = 1.65
W = 2.05


def test_wall_strip_rides_with_bottom_strip() -> None:
    assert can_pair(6, 10)
    pairs = pair_into_bottom_offcuts([(N, 6.0)], [BottomStrip(N, 10.0)])
    assert pairs[0].paired
    assert pairs[0].bottom_index == 0
    assert pairs[0].leftover == pytest.approx(9.0)

    est = estimate_waste([(N, 6.0)], [BottomStrip(N, 10.0)])
    assert est.roll_count_narrow == 1
    assert est.dedicated_rolls_narrow == 0
    assert est.additional_roll_area == 0.0
    assert est.paired_leftover == pytest.approx(9.0)
    assert est.reusable_area == pytest.approx(9.0 * N)
    assert est.waste_area == 0.0


def test_pairing_limits() -> None:
    assert can_pair(15.0, 10.0)
    assert not can_pair(15.1, 10.0)
    # widths must match
    assert not pair_into_bottom_offcuts([(W, 5.0)], [BottomStrip(N, 10.0)])[0].paired


def test_each_bottom_strip_hosts_one_strip() -> None:
    pairs = pair_into_bottom_offcuts([(N, 6.0), (N, 6.0)], [BottomStrip(N, 10.0), BottomStrip(N, 12.0)])
    assert [p.bottom_index for p in pairs] == [0, 1]


def test_greedy_first_available_no_backtracking() -> None:
    # 5 m takes the first bottom strip; 14 m then no longer fits next to the 12 m one
    pairs = pair_into_bottom_offcuts([(N, 5.0), (N, 14.0)], [BottomStrip(N, 10.0), BottomStrip(N, 12.0)])
    assert pairs[0].bottom_index == 0
    assert not pairs[1].paired


def test_unpaired_strip_waste_classification() -> None:
    est = estimate_waste([(N, 24.0)], [])
    assert est.roll_count_narrow == 1
    assert est.dedicated_rolls_narrow == 1
    assert est.additional_roll_area == pytest.approx(N * 25)
    assert est.waste_area == pytest.approx(1.0 * N)
    assert est.reusable_area == 0.0

    est = estimate_waste([(W, 24.995)], [])
    assert est.roll_count_wide == 1
    assert est.waste_area == 0.0  # negligible residual


def test_stacked_rows_pair_separately() -> None:
    strip = WallStripConfig(
        segment_indices=(0,),
        labels=("A-B",),
        base_length=6.0,
        vertical_overlap=0.1,
        roll_width=N,
        rows=2,
    )
    bottoms = [BottomStrip(N, 10.0)]
    est = estimate_plan_waste([strip], bottoms)
    # one row rides with the bottom strip, the other needs its own roll
    assert est.roll_count_narrow == 2
    assert est.dedicated_rolls_narrow == 1
    assert estimate_additional_wall_roll_area([strip], bottoms) == pytest.approx(N * 25)


def test_bottom_strips_from_config() -> None:
    config = auto_optimize_mix_config(PoolGeometry(length=10, width=5, depth=1.5))
    bottoms = bottom_strips_from_config(config)
    assert [(b.roll_width, b.length) for b in bottoms] == [(W, 10), (N, 10), (N, 10)]
    assert [b.uid for b in bottoms] == ["bottom#1", "bottom#2", "bottom#3"]
    assert bottoms[0].offcut_length == pytest.approx(15.0)


def test_plan_offcut_pairings_includes_stairs() -> None:
    geo = PoolGeometry(length=10, width=5, depth=1.5, stairs=StairsSpec(step_count=4, step_depth=0.3))
    config = auto_optimize_mix_config(geo, objective="minWaste")
    pairings = plan_offcut_pairings(config)
    surfaces = [p.surface for p in pairings]
    assert surfaces.index("stairs") > max(i for i, s in enumerate(surfaces) if s == "walls")
    # wall strips of 15.1 m do not fit next to a 10 m bottom strip, the 2 m stairs strips do
    assert all(p.bottom_uid is None for p in pairings if p.surface == "walls")
    stairs_paired = [p for p in pairings if p.surface == "stairs" and p.bottom_uid is not None]
    assert len(stairs_paired) == 2
