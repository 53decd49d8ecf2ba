# foil_solver/test_pricing.py

from __future__ import annotations

import pytest

from foil_solver.costing import (
    FoilGroupArea,
    calculate_butt_joint_length,
    calculate_foil_area_for_pricing,
    foil_group_area,
    partition_surfaces_by_foil_type,
)
from foil_solver.optimizer import auto_optimize_mix_config
from foil_solver.types import PoolGeometry, StairsSpec

PLAIN = PoolGeometry(length=10, width=5, depth=1.5)
WITH_STAIRS = PoolGeometry(length=10, width=5, depth=1.5, stairs=StairsSpec(step_count=4, step_depth=0.3))


def test_plain_pool_pricing() -> None:
    pricing = calculate_foil_area_for_pricing(auto_optimize_mix_config(PLAIN))
    # 53.5 m² bottom + 2 x 15.1 m narrow wall strips = 103.33 m²
    assert pricing.main_foil_area == 104
    assert pricing.main_weld_area == pytest.approx(2.3)
    assert pricing.structural_foil_area == 0
    assert pricing.structural_weld_area == 0.0
    assert pricing.total_area == 104


def test_stairs_use_structural_foil() -> None:
    config = auto_optimize_mix_config(WITH_STAIRS)
    pricing = calculate_foil_area_for_pricing(config)
    # 4 narrow strips of 2 m, 1.3 m reusable edge strip
    assert pricing.structural_foil_area == 11
    assert pricing.structural_weld_area == pytest.approx(0.6)
    assert pricing.main_foil_area == 104


def test_partition_by_foil_type() -> None:
    config = auto_optimize_mix_config(WITH_STAIRS)
    main, structural = partition_surfaces_by_foil_type(config)
    assert [sc.key for sc in main] == ["bottom"]
    assert [sc.key for sc in structural] == ["stairs"]


def test_group_area_is_rounded_up() -> None:
    assert FoilGroupArea(10.01, 0.0, 0.0, 0.0).chargeable_area == 11
    assert FoilGroupArea(10.0, 0.0, 0.0, 0.0).chargeable_area == 10
    assert FoilGroupArea(3.0, 2.0, 0.4, 0.0).chargeable_area == 2
    assert FoilGroupArea(0.0, 1.0, 0.0, 0.0).chargeable_area == 0


def test_group_area_components() -> None:
    area = foil_group_area(auto_optimize_mix_config(WITH_STAIRS), structural=True)
    assert area.strip_area == pytest.approx(13.2)
    assert area.reusable_waste_area == pytest.approx(2.6)
    assert area.unusable_roll_waste_area == 0.0


def test_butt_joint_length() -> None:
    config = auto_optimize_mix_config(PLAIN, material="structural")
    # 4 narrow bottom strips laid edge to edge: 3 seams of 10 m
    assert calculate_butt_joint_length(config) == pytest.approx(30.0)
    assert calculate_butt_joint_length(auto_optimize_mix_config(PLAIN)) == 0.0
