"""Flask app factory: remote steering input and round control over HTTP."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict

from flask import Flask

from app.routes import bp
from app.routes.api import init_state
from lighthouse.sim_logging import configure_logging


def create_app(config: Dict[str, Any] | None = None) -> Flask:
    """Create the Flask application and initialize keeper state.

    ``config`` may carry ``seed`` and a ``round`` mapping of round settings.
    """
    config = config or {}
    init_state(seed=int(config.get("seed", 1337)), config=config.get("round"))
    flask_app = Flask(__name__)
    flask_app.register_blueprint(bp)
    return flask_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Lighthouse remote input server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=1337)
    parser.add_argument("--config", type=str, help="Path to JSON round config")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    configure_logging(args.log_level)
    round_config = json.loads(Path(args.config).read_text()) if args.config else None
    app = create_app({"seed": args.seed, "round": round_config})
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
