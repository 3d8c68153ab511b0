from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from flask import jsonify, request

from app.routes import bp
from lighthouse.config import LighthouseConfig
from lighthouse.controller import RoundController
from lighthouse.rng import RNG
from metrics.schema import TickData

logger = logging.getLogger(__name__)

MAX_BATCH = 100
HISTORY_LIMIT = 5000


class KeeperState:
    """Holds the controller, pairing code and recent ticks for the HTTP surface."""

    def __init__(self, seed: int = 1337, config: Dict[str, Any] | None = None) -> None:
        self.seed = seed
        self.controller = RoundController(LighthouseConfig.from_dict(config), seed=seed)
        self.access_code = f"{RNG(seed).stream('pairing').randint(1000, 9999)}"
        self.paired = False
        self.history: List[TickData] = []

    def step(self, batch_size: int, tick_ms: float) -> TickData | None:
        last = None
        for tick in self.controller.run(batch_size, elapsed_ms=tick_ms):
            self.history.append(tick)
            last = tick
        del self.history[:-HISTORY_LIMIT]
        return last


state: KeeperState | None = None


def init_state(seed: int = 1337, config: Dict[str, Any] | None = None) -> KeeperState:
    global state
    state = KeeperState(seed=seed, config=config)
    logger.info("remote input ready, access code %s", state.access_code)
    return state


def _error(message: str, status: int) -> Any:
    return jsonify({"error": message}), status


def _check_code(payload: Dict[str, Any]) -> bool:
    assert state is not None, "Keeper state not initialized"
    return str(payload.get("code", "")) == state.access_code


@bp.route("/", methods=["GET"])
def index() -> Any:
    assert state is not None, "Keeper state not initialized"
    return jsonify({"status": "ok", "phase": state.controller.phase.value, "paired": state.paired})


@bp.route("/pair", methods=["POST"])
def pair() -> Any:
    assert state is not None, "Keeper state not initialized"
    payload = request.get_json(silent=True) or {}
    if not _check_code(payload):
        return _error("invalid access code", 403)
    state.paired = True
    return jsonify({"status": "paired"})


@bp.route("/beam", methods=["POST"])
def beam() -> Any:
    assert state is not None, "Keeper state not initialized"
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error("expected a JSON object", 400)
    if not _check_code(payload):
        return _error("invalid access code", 403)
    if payload.get("type", "rotation") != "rotation":
        return _error(f"unsupported message type {payload.get('type')!r}", 400)
    angle = payload.get("angle")
    if isinstance(angle, bool) or not isinstance(angle, (int, float)) or not math.isfinite(angle):
        return _error("angle must be a finite number of radians", 400)
    accepted = state.controller.set_beam_angle(float(angle))
    return jsonify({"accepted": accepted, "phase": state.controller.phase.value})


@bp.route("/start", methods=["POST"])
def start() -> Any:
    assert state is not None, "Keeper state not initialized"
    if not state.paired:
        return _error("pair the steering input before starting", 409)
    state.controller.start()
    state.history = []
    return jsonify(state.controller.snapshot().to_dict())


@bp.route("/step", methods=["POST"])
def step() -> Any:
    assert state is not None, "Keeper state not initialized"
    req = request.get_json(silent=True) or {}
    try:
        batch_size = int(req.get("batch_size", 1))
        tick_ms = float(req.get("tick_ms", 1000.0 / 60.0))
    except (TypeError, ValueError):
        return _error("batch_size and tick_ms must be numbers", 400)
    if not math.isfinite(tick_ms) or tick_ms < 0:
        return _error("tick_ms must be a non-negative number", 400)
    batch_size = max(1, min(batch_size, MAX_BATCH))
    last = state.step(batch_size, tick_ms)
    payload = state.controller.snapshot().to_dict()
    payload["last_tick"] = last.to_ordered_dict() if last else None
    return jsonify(payload)


@bp.route("/state", methods=["GET"])
def snapshot() -> Any:
    assert state is not None, "Keeper state not initialized"
    return jsonify(state.controller.snapshot().to_dict())


@bp.route("/history", methods=["GET"])
def history() -> Any:
    assert state is not None, "Keeper state not initialized"
    return jsonify([t.to_ordered_dict() for t in state.history])


@bp.route("/reset", methods=["POST"])
def reset() -> Any:
    req = request.get_json(silent=True) or {}
    try:
        new_seed = int(req.get("seed", 1337))
        init_state(seed=new_seed, config=req.get("config"))
    except (TypeError, ValueError) as exc:
        return _error(str(exc), 400)
    return jsonify({"status": "reset", "seed": new_seed})
