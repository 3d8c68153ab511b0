"""Operator base class for headless rounds.

An operator stands in for the keeper on the remote steering wheel: each
tick it proposes the beam angle the controller should receive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from metrics.schema import TickData


class Operator(ABC):
    name: str = "base"

    @abstractmethod
    def setup(self, controller: Any) -> None:
        """Prepare against a freshly started round."""

    @abstractmethod
    def angle_for(self, controller: Any, tick_index: int) -> float:
        """Steering value to send before tick ``tick_index``."""

    def on_tick(self, controller: Any, tickdata: TickData, tick_index: int) -> None:
        """Hook invoked after every tick."""

    @abstractmethod
    def summarize(self) -> Dict[str, Any]:
        """Operator-specific summary fields."""


__all__ = ["Operator"]
