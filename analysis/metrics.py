import json
from pathlib import Path
from typing import Dict

import pandas as pd


def load_ticks(ticks_path: Path) -> pd.DataFrame:
    """Reads a ticks.jsonl recording into a DataFrame (empty if missing)."""
    ticks_path = Path(ticks_path)
    if not ticks_path.exists() or ticks_path.stat().st_size == 0:
        return pd.DataFrame()
    return pd.read_json(ticks_path, lines=True)


def load_summaries(run_root: Path) -> pd.DataFrame:
    """One row per run directory under run_root that has a summary.json."""
    rows = []
    for summary_file in sorted(Path(run_root).glob("*/summary.json")):
        data = json.loads(summary_file.read_text())
        data["run_id"] = summary_file.parent.name
        rows.append(data)
    return pd.DataFrame(rows)


def calculate_survival_stats(ticks_df: pd.DataFrame) -> Dict[str, float]:
    """How long the round lasted and how it ended."""
    if ticks_df.empty:
        return {}
    last = ticks_df.iloc[-1]
    return {
        "ticks": int(len(ticks_df)),
        "elapsed_ms": float(last["elapsed_ms"]),
        "score": int(last["score"]),
        "boats_saved": int(last["boats_saved"]),
        "collided": bool(ticks_df["collision"].any()),
    }


def calculate_illumination_stats(ticks_df: pd.DataFrame) -> Dict[str, float]:
    """Share of ticks where the beam was actually lighting something."""
    if ticks_df.empty or "lit_boats" not in ticks_df.columns:
        return {}
    with_boats = ticks_df[ticks_df["boats_active"] > 0]
    return {
        "mean_lit_boats": float(ticks_df["lit_boats"].mean()),
        "mean_lit_obstacles": float(ticks_df["lit_obstacles"].mean()),
        "boat_coverage": float((with_boats["lit_boats"] > 0).mean()) if not with_boats.empty else 0.0,
    }


def calculate_warning_stats(ticks_df: pd.DataFrame) -> Dict[str, float]:
    if ticks_df.empty or "warnings" not in ticks_df.columns:
        return {}
    warned = ticks_df[ticks_df["warnings"] > 0]
    return {
        "warning_ticks": int(len(warned)),
        "max_simultaneous": int(ticks_df["warnings"].max()),
        "avoidance_ticks": int((ticks_df["avoiding"] > 0).sum()),
    }


def score_curve(ticks_df: pd.DataFrame) -> pd.DataFrame:
    """Score and saves against round time, one row per tick where they changed."""
    if ticks_df.empty:
        return pd.DataFrame(columns=["elapsed_ms", "score", "boats_saved"])
    curve = ticks_df[["elapsed_ms", "score", "boats_saved"]]
    changed = curve["score"].diff().fillna(curve["score"]) != 0
    return curve[changed].reset_index(drop=True)


def calculate_operator_scores(summaries_df: pd.DataFrame) -> pd.DataFrame:
    """Score distribution per operator across runs."""
    if summaries_df.empty or "operator" not in summaries_df.columns:
        return pd.DataFrame()
    return summaries_df.groupby("operator")["score"].describe()


def run_all_metrics(run_dir: Path) -> Dict:
    ticks_df = load_ticks(Path(run_dir) / "ticks.jsonl")
    return {
        "survival": calculate_survival_stats(ticks_df),
        "illumination": calculate_illumination_stats(ticks_df),
        "warnings": calculate_warning_stats(ticks_df),
    }
