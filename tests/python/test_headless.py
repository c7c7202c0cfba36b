import csv
import json

import pytest

from murmuration.app.headless import _first_aligned_tick, _series_summary, run_headless
from murmuration.sim.core.config import FlockParams, SimulationConfig


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def _config(**overrides) -> SimulationConfig:
    config = SimulationConfig(seed=4, width=300.0, height=200.0, params=FlockParams(boid_count=20))
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def test_headless_log_header_and_rows(tmp_path):
    log_path = tmp_path / "run.csv"
    flock = run_headless(steps=3, config=_config(), log_path=log_path, deterministic_log=True)
    rows = _read_csv(log_path)
    assert len(rows) == 4
    assert rows[0] == [
        "tick",
        "population",
        "avg_speed",
        "polarization",
        "neighbor_checks",
        "neighbor_checks_per_agent",
        "tick_ms",
    ]
    assert [row[0] for row in rows[1:]] == ["0", "1", "2"]
    assert all(row[1] == "20" for row in rows[1:])
    assert all(row[-1] == "0.000" for row in rows[1:])
    assert len(flock) == 20
    assert flock.tick == 3


def test_headless_deterministic_logs_match_for_same_seed(tmp_path):
    first = tmp_path / "a.csv"
    second = tmp_path / "b.csv"
    run_headless(steps=5, config=_config(), log_path=first, deterministic_log=True)
    run_headless(steps=5, config=_config(), log_path=second, deterministic_log=True)
    assert first.read_text() == second.read_text()


def test_headless_summary_output(tmp_path):
    summary_path = tmp_path / "summary.json"
    run_headless(steps=4, config=_config(neighbor_search="grid"), summary_path=summary_path)
    payload = json.loads(summary_path.read_text())
    assert payload["steps"] == 4
    assert payload["seed"] == 4
    assert payload["population"] == 20
    assert payload["neighbor_search"] == "grid"
    for key in ("average_speed", "polarization", "neighbor_checks_per_agent", "tick_ms"):
        assert set(payload[key]) == {"initial", "final", "mean", "min", "max"}
    assert 0.0 <= payload["polarization"]["final"] <= 1.0 + 1e-9
    assert payload["average_speed"]["max"] <= 4.0 + 1e-9
    assert payload["aligned_tick"] is None or 0 <= payload["aligned_tick"] < 4


def test_headless_rejects_unknown_neighbor_search():
    with pytest.raises(ValueError):
        run_headless(steps=1, config=_config(neighbor_search="kdtree"))


def test_aligned_flock_reports_first_aligned_tick(tmp_path):
    summary_path = tmp_path / "aligned.json"
    params = FlockParams(
        boid_count=12,
        align_weight=2.5,
        cohesion_weight=0.0,
        separation_weight=0.0,
        perception_radius=400.0,
    )
    config = _config(params=params)
    run_headless(steps=150, config=config, deterministic_log=True, summary_path=summary_path)
    payload = json.loads(summary_path.read_text())
    assert payload["polarization"]["final"] > payload["polarization"]["initial"]
    assert payload["aligned_tick"] is not None


def test_series_helpers():
    assert _series_summary([]) == {"initial": 0.0, "final": 0.0, "mean": 0.0, "min": 0.0, "max": 0.0}
    assert _series_summary([0.2, 0.8, 0.5]) == pytest.approx(
        {"initial": 0.2, "final": 0.5, "mean": 0.5, "min": 0.2, "max": 0.8}
    )
    assert _first_aligned_tick([0.1, 0.95, 0.99]) == 1
    assert _first_aligned_tick([0.1, 0.5]) is None
