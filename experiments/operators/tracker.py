from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from experiments.operators.base import Operator
from lighthouse.geometry import bearing, distance, normalize_angle, wheel_delta
from lighthouse.navigation import nearest_obstacle_ahead


class TrackerOperator(Operator):
    """Keeps the most endangered boat and the rock ahead of it in the light.

    The target is the boat closest to the obstacle it is heading for; the
    beam aims between the two. With no threatened boat it follows the boat
    nearest the lighthouse. Turning is rate-limited like a hand on a wheel.
    """

    name = "tracker"

    def __init__(self, config: dict | None = None) -> None:
        cfg = config or {}
        self.max_turn = float(cfg.get("max_turn", 0.08))
        if self.max_turn <= 0:
            raise ValueError(f"max_turn must be positive, got {self.max_turn}")
        self.angle: Optional[float] = None
        self.retargets = 0
        self.turned = 0.0
        self._target: Optional[int] = None

    def setup(self, controller: Any) -> None:
        self.angle = controller.beam.angle
        self.retargets = 0
        self.turned = 0.0
        self._target = None

    def _aim_point(self, controller: Any) -> Tuple[Optional[int], Optional[Tuple[float, float]]]:
        world = controller.world
        origin = controller.beam.origin
        best = None
        for boat in world.boats:
            obstacle = nearest_obstacle_ahead(boat, world.obstacles)
            if obstacle is None:
                continue
            gap = distance(boat.pos, obstacle.pos)
            if best is None or gap < best[0]:
                midpoint = ((boat.x + obstacle.x) / 2.0, (boat.y + obstacle.y) / 2.0)
                best = (gap, boat.id, midpoint)
        if best is not None:
            return best[1], best[2]
        if world.boats:
            closest = min(world.boats, key=lambda b: distance(origin, b.pos))
            return closest.id, closest.pos
        return None, None

    def angle_for(self, controller: Any, tick_index: int) -> float:
        if self.angle is None:
            self.angle = controller.beam.angle
        target_id, point = self._aim_point(controller)
        if target_id != self._target:
            self._target = target_id
            if target_id is not None:
                self.retargets += 1
        if point is None:
            return self.angle
        wanted = bearing(controller.beam.origin, point)
        step = max(-self.max_turn, min(self.max_turn, wheel_delta(self.angle, wanted)))
        self.angle = normalize_angle(self.angle + step)
        self.turned += abs(step)
        return self.angle

    def summarize(self) -> Dict[str, Any]:
        return {"max_turn": self.max_turn, "retargets": self.retargets, "turned": self.turned}


__all__ = ["TrackerOperator"]
