from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Type

from experiments.operators.base import Operator
from experiments.operators.fixed import FixedOperator
from experiments.operators.sweep import SweepOperator
from experiments.operators.tracker import TrackerOperator
from lighthouse.config import LighthouseConfig
from lighthouse.controller import RoundController
from lighthouse.sim_logging import configure_logging
from metrics.hash import RunHash
from metrics.logger import JsonlLogger
from metrics.schema import SCHEMA_VERSION

logger = logging.getLogger(__name__)

OPERATORS: Dict[str, Type[Operator]] = {
    "fixed": FixedOperator,
    "sweep": SweepOperator,
    "tracker": TrackerOperator,
}

DEFAULT_TICK_MS = 1000.0 / 60.0


def list_operators() -> str:
    return "\n".join(sorted(OPERATORS.keys()))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless lighthouse round runner")
    parser.add_argument("--operator", choices=sorted(OPERATORS.keys()))
    parser.add_argument("--seed", type=int, default=1337)
    parser.add_argument("--ticks", type=int, default=3600)
    parser.add_argument("--tick-ms", type=float, default=DEFAULT_TICK_MS)
    parser.add_argument("--out", type=str, required=False)
    parser.add_argument("--list", action="store_true", help="List available operators")
    parser.add_argument("--config", type=str, help="Path to JSON round config")
    parser.add_argument("--operator-config", type=str, help="Path to JSON operator config")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def run(
    operator_name: str,
    seed: int,
    ticks: int,
    outdir: Path,
    *,
    operator_config: dict | None = None,
    config: dict | None = None,
    tick_ms: float = DEFAULT_TICK_MS,
) -> Dict[str, Any]:
    """Play one round with a scripted operator and write ticks + summary to ``outdir``."""
    round_config = LighthouseConfig.from_dict(config)
    operator = OPERATORS[operator_name](operator_config)
    controller = RoundController(round_config, seed=seed)
    controller.start()
    operator.setup(controller)

    outdir.mkdir(parents=True, exist_ok=True)
    tick_path = outdir / "ticks.jsonl"
    summary_path = outdir / "summary.json"

    rh = RunHash()
    ticks_run = 0
    with JsonlLogger(tick_path) as tick_log:
        for i in range(ticks):
            controller.set_beam_angle(operator.angle_for(controller, i))
            tick = controller.tick(tick_ms)
            if tick is None:
                break
            ticks_run += 1
            operator.on_tick(controller, tick, i)
            tick_log.write_tick(tick)
            rh.update(tick)
            if not controller.running:
                break

    summary = operator.summarize()
    summary.update(
        {
            "operator": operator_name,
            "seed": seed,
            "ticks_requested": ticks,
            "ticks_run": ticks_run,
            "tick_ms": tick_ms,
            "score": controller.score,
            "boats_saved": controller.boats_saved,
            "collided": controller.result is not None,
            "schema_version": SCHEMA_VERSION,
            "run_hash": rh.hexdigest(),
            "operator_config": operator_config or {},
            "config": round_config.to_dict(),
        }
    )
    summary_path.write_text(json.dumps(summary, sort_keys=True, separators=(",", ":")))
    logger.info("wrote %d ticks to %s", ticks_run, tick_path)
    return summary


def main() -> None:
    args = parse_args()
    if args.list:
        print(list_operators())
        return
    if not args.operator:
        raise SystemExit("Operator required unless --list is used")
    configure_logging(args.log_level)
    config = json.loads(Path(args.config).read_text()) if args.config else None
    operator_config = json.loads(Path(args.operator_config).read_text()) if args.operator_config else None
    outdir = Path(args.out) if args.out else Path(f"runs/{args.operator}_{args.seed}")
    summary = run(
        args.operator,
        args.seed,
        args.ticks,
        outdir,
        operator_config=operator_config,
        config=config,
        tick_ms=args.tick_ms,
    )
    print(f"score={summary['score']} saved={summary['boats_saved']} ticks={summary['ticks_run']} -> {outdir}")


if __name__ == "__main__":
    main()
