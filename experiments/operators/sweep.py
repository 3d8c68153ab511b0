from __future__ import annotations

import math
from typing import Any, Dict

from experiments.operators.base import Operator


class SweepOperator(Operator):
    """Swings the beam back and forth across the water at a constant rate."""

    name = "sweep"

    def __init__(self, config: dict | None = None) -> None:
        cfg = config or {}
        self.low = float(cfg.get("low", 0.15))
        self.high = float(cfg.get("high", math.pi - 0.15))
        self.rate = float(cfg.get("rate", 0.02))  # radians per tick
        if self.low >= self.high:
            raise ValueError(f"sweep low must be below high, got {self.low} >= {self.high}")
        if self.rate <= 0:
            raise ValueError(f"sweep rate must be positive, got {self.rate}")
        self.angle = self.low
        self.heading = 1.0
        self.reversals = 0

    def setup(self, controller: Any) -> None:
        self.angle = self.low
        self.heading = 1.0
        self.reversals = 0

    def angle_for(self, controller: Any, tick_index: int) -> float:
        if tick_index > 0:
            self.angle += self.heading * self.rate
            if self.angle >= self.high or self.angle <= self.low:
                self.angle = min(self.high, max(self.low, self.angle))
                self.heading = -self.heading
                self.reversals += 1
        return self.angle

    def summarize(self) -> Dict[str, Any]:
        return {"sweep_low": self.low, "sweep_high": self.high, "sweep_rate": self.rate, "reversals": self.reversals}


__all__ = ["SweepOperator"]
