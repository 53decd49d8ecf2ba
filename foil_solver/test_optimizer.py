# foil_solver/test_optimizer.py

from __future__ import annotations

import pytest

from foil_solver.config import DEFAULTS
from foil_solver.optimizer import auto_optimize_mix_config, calculate_comparison, update_surface_roll_width
from foil_solver.packing import pack_strips_into_rolls
from foil_solver.sample_data import RandomPoolConfig, generate_random_pools
from foil_solver.types import PaddlingSpec, PoolGeometry, StairsSpec
from foil_solver.validate import validate_configuration

N = DEFAULTS.roll_width_narrow
W = DEFAULTS.roll_width_wide

TEN_BY_FIVE = PoolGeometry(length=10, width=5, depth=1.5)
WITH_EXTRAS = PoolGeometry(
    length=9,
    width=4.5,
    depth=1.4,
    stairs=StairsSpec(step_count=4, step_depth=0.3),
    paddling=PaddlingSpec(width=2, length=3, depth=0.4, dividing_wall_offset_cm=10),
)


def _widths(config, structural=None):
    out = set()
    for sc in config.surfaces:
        if structural is not None and sc.surface.is_structural != structural:
            continue
        out.update(g.roll_width for g in sc.groups)
    return out


def test_ten_by_five_min_waste() -> None:
    config = auto_optimize_mix_config(TEN_BY_FIVE, objective="minWaste")
    bottom = config.surface("bottom")
    assert [(g.roll_width, g.count) for g in bottom.groups] == [(W, 1), (N, 2)]
    assert bottom.waste_area == pytest.approx(1.5)
    assert (config.total_rolls_narrow, config.total_rolls_wide) == (3, 1)
    assert config.total_waste == pytest.approx(1.5)
    assert config.is_optimized


def test_min_rolls_needs_fewer_rolls() -> None:
    waste = auto_optimize_mix_config(TEN_BY_FIVE, objective="minWaste")
    rolls = auto_optimize_mix_config(TEN_BY_FIVE, objective="minRolls")
    assert rolls.objective == "minRolls"
    assert rolls.total_rolls() == 3
    assert rolls.total_rolls() < waste.total_rolls()


def test_min_rolls_never_increases_roll_count() -> None:
    for geo in generate_random_pools(RandomPoolConfig(seed=11, n_pools=8)):
        waste = auto_optimize_mix_config(geo, objective="minWaste")
        rolls = auto_optimize_mix_config(geo, objective="minRolls")
        assert rolls.total_rolls() <= waste.total_rolls()


def test_idempotent() -> None:
    for objective in ("minWaste", "minRolls"):
        a = auto_optimize_mix_config(WITH_EXTRAS, objective=objective)
        b = auto_optimize_mix_config(WITH_EXTRAS, objective=objective)
        assert a == b
        assert [r.strips for r in pack_strips_into_rolls(a)] == [r.strips for r in pack_strips_into_rolls(b)]


def test_structural_surfaces_always_narrow() -> None:
    for objective in ("minWaste", "minRolls"):
        config = auto_optimize_mix_config(WITH_EXTRAS, objective=objective)
        assert _widths(config, structural=True) == {N}


def test_structural_material_is_narrow_everywhere() -> None:
    for objective in ("minWaste", "minRolls"):
        config = auto_optimize_mix_config(WITH_EXTRAS, material="structural", objective=objective)
        assert _widths(config) == {N}
        assert {s.roll_width for s in config.wall_plan.strips} == {N}


def test_butt_joint_bottom_has_no_overlap() -> None:
    config = auto_optimize_mix_config(TEN_BY_FIVE, material="structural")
    bottom = config.surface("bottom")
    assert bottom.actual_overlap == 0.0
    assert bottom.strip_count == 4
    assert bottom.edge_waste_width == pytest.approx(1.6)


def test_configuration_validates() -> None:
    for geo in generate_random_pools(RandomPoolConfig(seed=5, n_pools=6)) + [WITH_EXTRAS]:
        config = auto_optimize_mix_config(geo)
        rolls = pack_strips_into_rolls(config)
        issues = validate_configuration(config, rolls)
        assert [i for i in issues if i.level == "ERROR"] == []
        assert config.total_waste >= 0
        assert config.waste_percentage >= 0


def test_manual_width_override() -> None:
    config = auto_optimize_mix_config(TEN_BY_FIVE)
    wide = update_surface_roll_width(config, "bottom", W, TEN_BY_FIVE)
    bottom = wide.surface("bottom")
    assert bottom.is_manual_override
    assert [(g.roll_width, g.count) for g in bottom.groups] == [(W, 3)]
    assert not wide.is_optimized
    # input configuration is left untouched
    assert config.surface("bottom").is_manual_override is False


def test_wall_override_applies_to_wall_plan() -> None:
    config = auto_optimize_mix_config(TEN_BY_FIVE)
    wide = update_surface_roll_width(config, "wall-long", W, TEN_BY_FIVE)
    assert {s.roll_width for s in wide.wall_plan.strips} == {W}
    assert wide.surface("wall-short").roll_width == W


def test_override_ignored_for_structural_and_narrow_only() -> None:
    config = auto_optimize_mix_config(WITH_EXTRAS)
    assert update_surface_roll_width(config, "stairs", W, WITH_EXTRAS) is config

    printed = auto_optimize_mix_config(TEN_BY_FIVE, material="printed")
    assert update_surface_roll_width(printed, "bottom", W, TEN_BY_FIVE, material="printed") is printed


def test_override_rejects_unknown_width_and_surface() -> None:
    config = auto_optimize_mix_config(TEN_BY_FIVE)
    with pytest.raises(ValueError):
        update_surface_roll_width(config, "bottom", 1.8, TEN_BY_FIVE)
    with pytest.raises(ValueError):
        update_surface_roll_width(config, "roof", W, TEN_BY_FIVE)


def test_comparison() -> None:
    cmp = calculate_comparison(TEN_BY_FIVE)
    assert _widths(cmp.narrow) == {N}
    assert {s.roll_width for s in cmp.narrow.wall_plan.strips} == {N}
    assert _widths(cmp.wide) == {W}
    assert {s.roll_width for s in cmp.wide.wall_plan.strips} == {W}
    assert cmp.optimized == auto_optimize_mix_config(TEN_BY_FIVE)


def test_unknown_material() -> None:
    with pytest.raises(ValueError):
        auto_optimize_mix_config(TEN_BY_FIVE, material="gold")
