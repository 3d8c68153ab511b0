import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from analysis.metrics import (  # noqa: E402
    calculate_illumination_stats,
    calculate_operator_scores,
    calculate_survival_stats,
    calculate_warning_stats,
    load_summaries,
    load_ticks,
    score_curve,
)


def generate_report(run_root: Path, report_dir: Path) -> Path:
    """
    Writes report.md (plus plots) covering every run under run_root.
    """
    report_dir.mkdir(parents=True, exist_ok=True)
    summaries_df = load_summaries(run_root)

    report_parts = ["# Lighthouse Run Report\n"]

    report_parts.append("## Runs\n")
    if summaries_df.empty:
        report_parts.append("No runs found.\n")
    else:
        columns = [c for c in ["run_id", "operator", "seed", "ticks_run", "score", "boats_saved", "collided"] if c in summaries_df]
        report_parts.append(summaries_df[columns].to_markdown(index=False))
        report_parts.append("\n")

    report_parts.append("## Score by Operator\n")
    scores = calculate_operator_scores(summaries_df)
    if not scores.empty:
        report_parts.append(scores.to_markdown())
        report_parts.append("\n")
    else:
        report_parts.append("No score data found.\n")

    # --- Per-run detail ---
    plotted = False
    plt.figure()
    run_dirs = sorted(p for p in Path(run_root).iterdir() if p.is_dir()) if Path(run_root).exists() else []
    for run_dir in run_dirs:
        ticks_df = load_ticks(run_dir / "ticks.jsonl")
        if ticks_df.empty:
            continue
        report_parts.append(f"## {run_dir.name}\n")
        stats = {
            **calculate_survival_stats(ticks_df),
            **calculate_illumination_stats(ticks_df),
            **calculate_warning_stats(ticks_df),
        }
        report_parts.append(pd.DataFrame([stats]).to_markdown(index=False))
        report_parts.append("\n")
        curve = score_curve(ticks_df)
        last = ticks_df.iloc[-1]
        times = [0.0, *curve["elapsed_ms"], float(last["elapsed_ms"])]
        scores = [0, *curve["score"], int(last["score"])]
        plt.step([t / 1000.0 for t in times], scores, where="post", label=run_dir.name)
        plotted = True

    if plotted:
        plt.title("Score over Round Time")
        plt.xlabel("Round time (s)")
        plt.ylabel("Score")
        plt.legend()
        plt.savefig(report_dir / "score_curve.png")
        report_parts.append("\n![Score Curve](score_curve.png)\n")
    plt.close()

    report_path = report_dir / "report.md"
    report_path.write_text("\n".join(report_parts))
    print(f"Report saved to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Generate a report from recorded lighthouse runs.")
    parser.add_argument("--runs-dir", type=Path, default=Path("runs"), help="Directory of run outputs.")
    parser.add_argument("--report-dir", type=Path, default=Path("analysis/report"), help="Where to write the report.")
    args = parser.parse_args()

    generate_report(args.runs_dir, args.report_dir)


if __name__ == "__main__":
    main()
