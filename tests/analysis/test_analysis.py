from pathlib import Path

import pandas as pd

from analysis.metrics import (
    calculate_illumination_stats,
    calculate_operator_scores,
    calculate_survival_stats,
    calculate_warning_stats,
    load_summaries,
    load_ticks,
    run_all_metrics,
    score_curve,
)
from analysis.report import generate_report
from experiments.runner import run


def _record(root: Path) -> None:
    run("sweep", seed=3, ticks=900, outdir=root / "sweep_3")
    run("fixed", seed=3, ticks=900, outdir=root / "fixed_3")


def test_metrics_from_recorded_run(tmp_path):
    _record(tmp_path)
    ticks_df = load_ticks(tmp_path / "sweep_3" / "ticks.jsonl")
    assert not ticks_df.empty

    survival = calculate_survival_stats(ticks_df)
    assert survival["ticks"] == len(ticks_df)
    assert survival["score"] == survival["boats_saved"] * 100

    lit = calculate_illumination_stats(ticks_df)
    assert 0.0 <= lit["boat_coverage"] <= 1.0

    warnings = calculate_warning_stats(ticks_df)
    assert warnings["warning_ticks"] >= 0

    assert set(run_all_metrics(tmp_path / "fixed_3")) == {"survival", "illumination", "warnings"}


def test_fixed_sky_beam_lights_nothing(tmp_path):
    _record(tmp_path)
    ticks_df = load_ticks(tmp_path / "fixed_3" / "ticks.jsonl")
    stats = calculate_illumination_stats(ticks_df)
    assert stats["mean_lit_boats"] == 0.0
    assert stats["mean_lit_obstacles"] == 0.0


def test_score_curve_keeps_only_changes():
    ticks_df = pd.DataFrame(
        {
            "elapsed_ms": [0.0, 16.0, 32.0, 48.0],
            "score": [0, 100, 100, 200],
            "boats_saved": [0, 1, 1, 2],
        }
    )
    curve = score_curve(ticks_df)
    assert list(curve["score"]) == [100, 200]
    assert score_curve(pd.DataFrame()).empty


def test_missing_recording_is_empty(tmp_path):
    assert load_ticks(tmp_path / "nope.jsonl").empty
    assert calculate_survival_stats(pd.DataFrame()) == {}
    assert load_summaries(tmp_path).empty
    assert calculate_operator_scores(pd.DataFrame()).empty


def test_operator_scores_group_runs(tmp_path):
    _record(tmp_path)
    summaries = load_summaries(tmp_path)
    assert sorted(summaries["run_id"]) == ["fixed_3", "sweep_3"]
    scores = calculate_operator_scores(summaries)
    assert set(scores.index) == {"fixed", "sweep"}


def test_generate_report_writes_markdown_and_plot(tmp_path):
    runs = tmp_path / "runs"
    _record(runs)
    report_path = generate_report(runs, tmp_path / "report")
    text = report_path.read_text()
    assert "# Lighthouse Run Report" in text
    assert "## sweep_3" in text
    assert (tmp_path / "report" / "score_curve.png").exists()


def test_generate_report_without_runs(tmp_path):
    report_path = generate_report(tmp_path / "missing", tmp_path / "report")
    assert "No runs found." in report_path.read_text()
