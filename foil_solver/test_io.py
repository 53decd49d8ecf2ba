# foil_solver/test_io.py

from __future__ import annotations

import csv
import json

import pytest

from foil_solver import cli, run_json
from foil_solver.io_csv import export_all
from foil_solver.io_json import job_from_dict, load_job_json
from foil_solver.optimizer import auto_optimize_mix_config
from foil_solver.packing import pack_strips_into_rolls
from foil_solver.run import run_job
from foil_solver.types import PoolGeometry
from foil_solver.utils import result_to_dict, save_result_json

JOB = {
    "name": "garden pool",
    "pool": {"length": 10, "width": 5, "depth": 1.5},
    "stairs": {"step_count": 4, "step_depth": 0.3, "step_height": 0.2, "width": "full"},
    "paddling": {"width": 2, "length": 3, "depth": 0.4, "dividing_wall_offset_cm": 10},
    "material": "single-color",
    "objective": "minRolls",
}


def test_job_from_dict() -> None:
    job = job_from_dict(JOB)
    assert job.name == "garden pool"
    assert job.objective == "minRolls"
    assert job.material.name == "single-color"
    g = job.geometry
    assert (g.length, g.width, g.depth) == (10.0, 5.0, 1.5)
    assert g.stairs.width is None
    assert g.paddling.has_dividing_wall
    assert g.vertices == ()


def test_job_defaults() -> None:
    job = job_from_dict({"pool": {"length": 8, "width": 4, "depth": 1.4}})
    assert job.objective == "minWaste"
    assert job.material.name == "single-color"
    assert job.geometry.stairs is None and job.geometry.paddling is None


def test_job_errors() -> None:
    with pytest.raises(ValueError):
        job_from_dict({})
    with pytest.raises(ValueError):
        job_from_dict({"pool": {"length": 8, "width": 4}})
    with pytest.raises(ValueError):
        job_from_dict({**JOB, "objective": "cheapest"})
    with pytest.raises(ValueError):
        job_from_dict({**JOB, "stairs": {"step_count": 2, "step_depth": 0.3, "width": "half"}})


def test_load_job_json(tmp_path) -> None:
    path = tmp_path / "pool.json"
    path.write_text(json.dumps(JOB), encoding="utf-8")
    assert load_job_json(path) == job_from_dict(JOB)

    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_job_json(bad)


def test_export_all(tmp_path) -> None:
    config = auto_optimize_mix_config(PoolGeometry(length=10, width=5, depth=1.5))
    rolls = pack_strips_into_rolls(config)
    export_all(config, rolls, tmp_path, prefix="job")

    with (tmp_path / "job_rolls.csv").open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 5
    assert {r["roll_number"] for r in rows} == {"1", "2", "3", "4"}

    with (tmp_path / "job_offcuts.csv").open(encoding="utf-8") as f:
        assert len(list(csv.DictReader(f))) == 4

    with (tmp_path / "job_surfaces.csv").open(encoding="utf-8") as f:
        surfaces = [r["surface"] for r in csv.DictReader(f)]
    assert surfaces == ["bottom", "wall-long", "wall-short", "walls", "walls"]


def test_save_result_json(tmp_path) -> None:
    res = run_job(PoolGeometry(length=10, width=5, depth=1.5))
    path = tmp_path / "out" / "result.json"
    save_result_json(res.config, res.rolls, path, pricing=res.pricing)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["totals"]["rolls"] == 4
    assert data["pricing"]["main_foil_area"] == 104
    assert [s["label"] for s in data["wall_plan"]["strips"]] == ["A-B-C", "C-D-A"]
    assert data == json.loads(json.dumps(result_to_dict(res.config, res.rolls, res.pricing), default=str))


def test_run_job_exports(tmp_path) -> None:
    run_job(PoolGeometry(length=10, width=5, depth=1.5), objective="minRolls", out_dir=tmp_path, export_prefix="p")
    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["p.json", "p_offcuts.csv", "p_rolls.csv", "p_surfaces.csv"]


def test_cli_main(capsys) -> None:
    cli.main(["--dims", "10x5x1.5"])
    out = capsys.readouterr().out
    assert "ROLLS: 4 (1.65 m: 3, 2.05 m: 1)" in out
    assert "FOIL: main 104 m²" in out


def test_cli_rejects_bad_dims(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--dims", "10x5"])
    assert "[FOIL] ERROR: invalid pool" in capsys.readouterr().err


def test_run_json_main(tmp_path, capsys) -> None:
    path = tmp_path / "pool.json"
    path.write_text(json.dumps({"name": "test pool", "pool": {"length": 10, "width": 5, "depth": 1.5}}), encoding="utf-8")
    run_json.main(["--job", str(path), "--objective", "minRolls", "--out", str(tmp_path / "out")])

    out = capsys.readouterr().out
    assert "Job: test pool" in out
    assert "ROLLS: 3" in out
    assert (tmp_path / "out" / "test_pool_rolls.csv").exists()


def test_run_json_missing_file(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit):
        run_json.main(["--job", str(tmp_path / "missing.json")])
    assert "Job JSON not found" in capsys.readouterr().err
