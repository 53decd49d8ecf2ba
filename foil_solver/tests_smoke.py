# foil_solver/tests_smoke.py
# Very small smoke tests you can run with:
#   python -m foil_solver.tests_smoke
#
# These are not full unit tests, but they quickly tell you if
# the optimizer, packing, pricing and validation are wired correctly.

from __future__ import annotations

from foil_solver.run import run_job
from foil_solver.types import PaddlingSpec, PoolGeometry, StairsSpec
from foil_solver.validate import raise_on_errors, validate_configuration


def test_basic_pool() -> None:
    geo = PoolGeometry(length=10, width=5, depth=1.5)

    res = run_job(geo, objective="minWaste")
    raise_on_errors(validate_configuration(res.config, res.rolls))

    assert res.config.total_rolls() == len(res.rolls) >= 1
    assert res.pricing.main_foil_area > 0
    assert res.pricing.structural_foil_area == 0


def test_full_pool_both_objectives() -> None:
    geo = PoolGeometry(
        length=8,
        width=4,
        depth=1.4,
        stairs=StairsSpec(step_count=3, step_depth=0.3),
        paddling=PaddlingSpec(width=2, length=2, depth=0.4, dividing_wall_offset_cm=15),
    )

    waste = run_job(geo, objective="minWaste")
    rolls = run_job(geo, objective="minRolls")

    # minRolls never needs more rolls than minWaste
    assert rolls.config.total_rolls() <= waste.config.total_rolls()
    assert waste.pricing.structural_foil_area > 0
    for res in (waste, rolls):
        for r in res.rolls:
            assert r.used_length <= r.roll_length + 1e-6


def main() -> None:
    print("Running smoke tests...")
    test_basic_pool()
    test_full_pool_both_objectives()
    print("OK")


if __name__ == "__main__":
    main()
