# foil_solver/test_strips.py
# Strip width calculator and width-mix selection.

from __future__ import annotations

import random

import pytest

from foil_solver.config import DEFAULTS
from foil_solver.strips import (
    best_bottom_mix,
    calculate_strips_for_width,
    compare_roll_widths,
    evaluate_mixed_strips,
    find_optimal_mixed_widths,
)
from foil_solver.validate import validate_strip_result


def test_five_metres_on_narrow_rolls() -> None:
    res = calculate_strips_for_width(5.0, 1.65, 0.05)
    assert res.count == 4
    # exact fit would need 0.533 m overlap, so it clamps to the max and the rest is edge waste
    assert res.actual_overlap == pytest.approx(0.10)
    assert res.edge_waste_width == pytest.approx(1.30)
    assert res.total_covered_width >= 5.0 - 1e-9


def test_single_strip_edge_waste() -> None:
    res = calculate_strips_for_width(1.0, 1.65, 0.05)
    assert res.count == 1
    assert res.actual_overlap == 0.0
    assert res.edge_waste_width == pytest.approx(0.65)


def test_exact_fit_inside_overlap_bounds() -> None:
    res = calculate_strips_for_width(3.22, 1.65, 0.05)
    assert res.count == 2
    assert res.actual_overlap == pytest.approx(0.08)
    assert res.edge_waste_width == 0.0


def test_nothing_to_cover() -> None:
    for cover in (0.0, -1.0):
        res = calculate_strips_for_width(cover, 2.05, 0.05)
        assert res.count == 0
        assert res.material_width_used == 0.0
        assert res.edge_waste_width == 0.0


def test_overlap_larger_than_roll_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_strips_for_width(5.0, 1.65, 1.65)


def test_butt_joint_never_overlaps() -> None:
    res = calculate_strips_for_width(5.0, 1.65, 0.0, max_overlap=0.0)
    assert res.count == 4
    assert res.actual_overlap == 0.0
    assert res.edge_waste_width == pytest.approx(1.6)


def test_random_covers_respect_bounds_and_coverage() -> None:
    rnd = random.Random(7)
    for _ in range(300):
        cover = round(rnd.uniform(0.1, 12.0), 2)
        for width in (DEFAULTS.roll_width_narrow, DEFAULTS.roll_width_wide):
            for min_ov in (DEFAULTS.min_overlap_bottom, DEFAULTS.min_overlap_wall):
                res = calculate_strips_for_width(cover, width, min_ov)
                assert res.count >= 1
                assert res.edge_waste_width >= 0
                assert validate_strip_result(res, cover, min_ov) == []


def test_mixed_strips_validity() -> None:
    ok = evaluate_mixed_strips(5.0, [2.05, 1.65, 1.65], 0.05)
    assert ok.is_valid
    assert ok.count == 3
    assert ok.actual_overlap == pytest.approx(0.10)
    assert ok.edge_waste_width == pytest.approx(0.15)

    short = evaluate_mixed_strips(5.0, [1.65, 1.65, 1.65], 0.05)
    assert not short.is_valid


def test_compare_roll_widths_order() -> None:
    narrow, wide = compare_roll_widths(1.65, 10.0, 0.10)
    assert narrow.roll_width == DEFAULTS.roll_width_narrow
    assert wide.roll_width == DEFAULTS.roll_width_wide
    assert narrow.waste_area == pytest.approx(0.0)
    assert wide.waste_area == pytest.approx(4.0)


def test_find_optimal_prefers_least_waste_then_fewest_strips() -> None:
    choice = find_optimal_mixed_widths(1.65, 10.0, 0.10, "minWaste")
    assert choice.roll_width == DEFAULTS.roll_width_narrow
    assert choice.strip_count == 1


def test_find_optimal_min_rolls_counts_strips_first() -> None:
    # 3.9 m: two wide strips (0.1 waste width) vs three narrow strips
    choice = find_optimal_mixed_widths(3.9, 5.0, 0.10, "minRolls")
    assert choice.strip_count == 2


def test_best_bottom_mix_for_five_metres() -> None:
    best = best_bottom_mix(5.0, 10.0, 0.05, "minWaste")
    assert best is not None
    mix, res = best
    assert mix == ((2.05, 1), (1.65, 2))
    assert res.edge_waste_width == pytest.approx(0.15)


def test_best_bottom_mix_nothing_to_cover() -> None:
    assert best_bottom_mix(0.0, 10.0, 0.05) is None
