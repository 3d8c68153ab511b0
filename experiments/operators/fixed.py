from __future__ import annotations

import math
from typing import Any, Dict

from experiments.operators.base import Operator


class FixedOperator(Operator):
    """Holds the beam still. Pointed at the sky, nothing is ever lit."""

    name = "fixed"

    def __init__(self, config: dict | None = None) -> None:
        cfg = config or {}
        self.angle = float(cfg.get("angle", -math.pi / 2))
        self.commands = 0

    def setup(self, controller: Any) -> None:
        self.commands = 0

    def angle_for(self, controller: Any, tick_index: int) -> float:
        self.commands += 1
        return self.angle

    def summarize(self) -> Dict[str, Any]:
        return {"operator_angle": self.angle, "commands": self.commands}


__all__ = ["FixedOperator"]
