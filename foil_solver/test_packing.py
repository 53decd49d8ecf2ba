# foil_solver/test_packing.py

from __future__ import annotations

from typing import List

import pytest

from foil_solver.metrics import compute_roll_metrics
from foil_solver.optimizer import auto_optimize_mix_config
from foil_solver.packing import (
    count_rolls_by_width,
    get_reusable_offcuts,
    pack_strip_instances,
    pack_strips_into_rolls,
    unusable_roll_waste_area,
)
from foil_solver.solver_rolls_cp_sat import exact_roll_counts, solve_min_rolls
from foil_solver.types import PoolGeometry, StripInstance
from foil_solver.validate import validate_rolls

N = 1.65
W = 2.05


def _strips(spec) -> List[StripInstance]:
    return [StripInstance(uid=f"s#{i + 1}", surface="test", label="test", length=l, roll_width=w) for i, (w, l) in enumerate(spec)]


def test_first_fit_decreasing_wide_bucket_first() -> None:
    rolls = pack_strip_instances(_strips([(N, 10), (N, 20), (N, 5), (W, 12), (N, 15)]))
    assert [r.roll_number for r in rolls] == [1, 2, 3]
    assert [r.roll_width for r in rolls] == [W, N, N]
    assert [[s.length for s in r.strips] for r in rolls] == [[12], [20, 5], [15, 10]]
    assert count_rolls_by_width(rolls) == (2, 1)


def test_conservation_per_roll() -> None:
    rolls = pack_strip_instances(_strips([(N, 7.3), (N, 11.15), (N, 3.05), (N, 24.9), (W, 9.99)]))
    for r in rolls:
        assert r.used_length + r.waste_length == pytest.approx(r.roll_length)
        assert r.used_length <= r.roll_length + 1e-9
    assert validate_rolls(rolls) == []


def test_strip_longer_than_roll() -> None:
    with pytest.raises(ValueError):
        pack_strip_instances(_strips([(N, 25.5)]))


def test_reusable_offcuts_and_unusable_tails() -> None:
    rolls = pack_strip_instances(_strips([(W, 12), (N, 24), (N, 23)]))
    offcuts = get_reusable_offcuts(rolls)
    assert [o.roll_number for o in offcuts] == [1, 3]
    o = offcuts[0]
    assert (o.roll_width, o.length) == (W, 13.0)
    assert o.area == pytest.approx(26.65)
    assert offcuts[1].length == pytest.approx(2.0)

    # 1 m and 2 m tails: only the 1 m tail is unusable
    assert unusable_roll_waste_area(rolls) == pytest.approx(1.0 * N)


def test_roll_metrics() -> None:
    rolls = pack_strip_instances(_strips([(W, 12), (N, 24)]))
    m = compute_roll_metrics(rolls)
    assert m.roll_count == 2
    assert m.roll_count_wide == 1
    assert m.reusable_area == pytest.approx(13 * W)
    assert m.unusable_area == pytest.approx(1 * N)
    assert m.rolls[1].utilization == pytest.approx(24 / 25)


def test_pack_configuration_ten_by_five() -> None:
    config = auto_optimize_mix_config(PoolGeometry(length=10, width=5, depth=1.5))
    rolls = pack_strips_into_rolls(config)
    assert len(rolls) == 4
    assert rolls[0].roll_width == W
    assert sorted(r.waste_length for r in rolls[1:]) == pytest.approx([5.0, 9.9, 9.9])
    # every strip is placed exactly once
    assert sum(len(r.strips) for r in rolls) == 5


def test_exact_roll_count() -> None:
    assert solve_min_rolls([], max_rolls=1) == (0, True)

    count, optimal = solve_min_rolls([12.5, 12.5, 12.5, 12.5], max_rolls=4)
    assert optimal
    assert count == 2


def test_exact_check_against_packing() -> None:
    rolls = pack_strip_instances(_strips([(N, 10), (N, 20), (N, 5), (W, 12), (N, 15)]))
    checks = exact_roll_counts(rolls)
    assert [c.roll_width for c in checks] == [W, N]
    for c in checks:
        assert c.exact_rolls is not None
        assert c.exact_rolls <= c.heuristic_rolls
        assert c.gap == 0
