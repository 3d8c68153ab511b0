import json
import tempfile
from pathlib import Path

import pytest

from experiments.runner import OPERATORS, list_operators, run


def _run(operator: str, seed: int = 42, ticks: int = 600, **kwargs):
    with tempfile.TemporaryDirectory() as d:
        outdir = Path(d)
        summary = run(operator, seed=seed, ticks=ticks, outdir=outdir, **kwargs)
        tick_lines = Path(outdir, "ticks.jsonl").read_text().splitlines()
        written = json.loads(Path(outdir, "summary.json").read_text())
        return tick_lines, summary, written


@pytest.mark.parametrize("operator", sorted(OPERATORS))
def test_runner_is_deterministic(operator):
    ticks1, summary1, _ = _run(operator, seed=1337)
    ticks2, summary2, _ = _run(operator, seed=1337)
    assert summary1 == summary2
    assert ticks1 == ticks2


@pytest.mark.parametrize("operator", sorted(OPERATORS))
def test_runner_lifecycle(operator):
    tick_lines, summary, written = _run(operator)
    assert 0 < len(tick_lines) <= 600
    assert summary["ticks_run"] == len(tick_lines)
    assert written["run_hash"] == summary["run_hash"]
    for key in ["operator", "seed", "score", "boats_saved", "collided", "config"]:
        assert key in written
    last = json.loads(tick_lines[-1])
    assert last["score"] == summary["score"]
    if summary["collided"]:
        assert last["collision"] is True
        assert last["phase"] == "ended"


def test_runner_accepts_round_config():
    tick_lines, summary, _ = _run(
        "fixed",
        ticks=50,
        config={"initial_obstacles": 0, "boat_spawn_interval_ms": 100.0},
        tick_ms=50.0,
    )
    first = json.loads(tick_lines[0])
    assert first["obstacles"] == 0
    assert summary["config"]["boat_spawn_interval_ms"] == 100.0
    assert any(json.loads(line)["boat_spawned"] for line in tick_lines)


def test_runner_rejects_unknown_config_keys():
    with pytest.raises(ValueError):
        _run("fixed", ticks=5, config={"lamp_colour": "green"})


def test_sweep_operator_validates_limits():
    with pytest.raises(ValueError):
        OPERATORS["sweep"]({"low": 2.0, "high": 1.0})


def test_list_operators():
    assert list_operators().splitlines() == ["fixed", "sweep", "tracker"]
