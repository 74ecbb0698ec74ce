import json
import logging
import math

import pytest

from piseries import series, sweep
from piseries.sweep import Sweep


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger("")
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_evaluate():
    run = sweep.evaluate(800)
    assert run["id"] == ["limit-800"]
    assert run["limit"] == 800
    assert run["pi"] == series.approximate_pi(800)
    assert run["error"] == abs(math.pi - run["pi"])
    assert run["bound"] == series.remainder_bound(800)
    assert run["within_bound"] is True
    assert run["time"] >= 0


def test_default_limits(tmp_path):
    exp = Sweep(tmp_path)
    assert exp.limits == sweep.DEFAULT_LIMITS
    assert 800 in exp.limits


@pytest.mark.parametrize("limit", [-1, 1.5, "10"])
def test_invalid_limit(tmp_path, limit):
    with pytest.raises(ValueError):
        Sweep(tmp_path, limits=[limit])


def test_duplicate_limit(tmp_path):
    with pytest.raises(ValueError):
        Sweep(tmp_path, limits=[10, 10])


def test_duplicate_step_name(tmp_path):
    exp = Sweep(tmp_path, limits=[1])
    with pytest.raises(ValueError):
        exp.add_step("compute", print)


def test_compute_and_write(tmp_path):
    exp = Sweep(tmp_path, limits=[1, 2, 800])
    exp.run_steps()
    with open(tmp_path / "properties") as f:
        props = json.load(f)
    assert sorted(props) == ["limit-1", "limit-2", "limit-800"]
    assert props["limit-1"]["pi"] == 4.0
    assert props["limit-800"]["pi"] == series.approximate_pi()
    assert all(run["within_bound"] for run in props.values())


def test_run_steps_by_name_and_number(tmp_path):
    exp = Sweep(tmp_path, limits=[3])
    called = []
    exp.add_step("record", called.append, "done")
    exp.run_steps(["compute"])
    assert list(exp.props) == ["limit-3"]
    assert not (tmp_path / "properties").exists()
    exp.run_steps(["3"])
    assert called == ["done"]


def test_unknown_step(tmp_path):
    exp = Sweep(tmp_path, limits=[3])
    exp.run_steps(["no-such-step"])
    assert not exp.props


def test_compute_replaces_old_runs(tmp_path):
    Sweep(tmp_path, limits=[1, 2]).run_steps()
    exp = Sweep(tmp_path, limits=[5])
    assert sorted(exp.props) == ["limit-1", "limit-2"]
    exp.run_steps()
    with open(tmp_path / "properties") as f:
        assert list(json.load(f)) == ["limit-5"]


def test_main_all_steps(tmp_path):
    path = tmp_path / "sweep-eval"
    assert sweep.main(["--limits", "1,10,800", "--path", str(path), "--all"]) == 0
    assert (path / "properties").is_file()
    assert (path / "convergence.html").is_file()
    assert (path / "error.png").is_file()


def test_main_steps_after_limits(tmp_path):
    path = tmp_path / "sweep-eval"
    assert sweep.main(["--path", str(path), "--limits", "1,10", "compute", "2"]) == 0
    with open(path / "properties") as f:
        assert sorted(json.load(f)) == ["limit-1", "limit-10"]
    assert not (path / "convergence.html").exists()


def test_main_step_numbers(tmp_path):
    path = tmp_path / "sweep-eval"
    assert sweep.main(["--limits", "800", "--path", str(path), "1", "2", "3"]) == 0
    assert (path / "convergence.html").is_file()
    assert not (path / "error.png").exists()


def test_main_invalid_limits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        sweep.main(["--path", str(tmp_path), "--limits", "1,-2", "compute"])
    assert excinfo.value.code == 2
    assert "--limits" in capsys.readouterr().err


def test_main_without_steps_prints_steps(tmp_path, capsys):
    assert sweep.main(["--path", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Available steps:" in out
    assert "  2 write-properties" in out
    assert "convergence.html" in out
