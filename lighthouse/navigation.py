"""Per-boat steering, collision detection and exit handling.

Illumination gates what a boat can see, never what exists: an unlit rock
is just as solid, so a boat that cannot see it will sail straight into it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from lighthouse.config import LighthouseConfig
from lighthouse.entities import Boat, Obstacle
from lighthouse.geometry import distance
from lighthouse.world import World

logger = logging.getLogger(__name__)


@dataclass
class NavigationOutcome:
    """What happened during one navigation pass."""

    saved_ids: List[int] = field(default_factory=list)
    warnings: int = 0
    avoiding: int = 0
    collision: bool = False
    collided_boat: Optional[int] = None
    collided_obstacle: Optional[int] = None


def nearest_obstacle_ahead(boat: Boat, obstacles: Sequence[Obstacle]) -> Optional[Obstacle]:
    """Closest obstacle on the boat's side of travel; obstacles behind are ignored."""
    nearest = None
    best = float("inf")
    for obstacle in obstacles:
        ahead = obstacle.x > boat.x if boat.direction > 0 else obstacle.x < boat.x
        if not ahead:
            continue
        dist = distance(boat.pos, obstacle.pos)
        if dist < best:
            best = dist
            nearest = obstacle
    return nearest


def can_see(boat: Boat, obstacle: Obstacle, dist: float) -> bool:
    return boat.illuminated and obstacle.illuminated and dist < boat.vision_range


class NavigationEngine:
    """Applies the avoid / warn / collide rules and advances every boat."""

    def __init__(self, config: LighthouseConfig) -> None:
        self.config = config

    def step(self, world: World) -> NavigationOutcome:
        outcome = NavigationOutcome()
        # Newest boats move first.
        for boat in reversed(world.boats):
            boat.warning = False
            obstacle = nearest_obstacle_ahead(boat, world.obstacles)
            if obstacle is not None:
                dist = distance(boat.pos, obstacle.pos)
                if can_see(boat, obstacle, dist):
                    self.avoid(boat, obstacle)
                    outcome.avoiding += 1
                elif dist < self.config.proximity_threshold:
                    boat.warning = True
                    outcome.warnings += 1
                    if dist < obstacle.radius + boat.half_width:
                        outcome.collision = True
                        outcome.collided_boat = boat.id
                        outcome.collided_obstacle = obstacle.id
                        logger.info(
                            "boat %d struck obstacle %d unseen (dist=%.1f)", boat.id, obstacle.id, dist
                        )
                        return outcome

            boat.x += boat.speed

            if world.is_outside(boat) and not boat.saved:
                boat.saved = True
                outcome.saved_ids.append(boat.id)
        return outcome

    def avoid(self, boat: Boat, obstacle: Obstacle) -> None:
        away = -1.0 if obstacle.y > boat.y else 1.0
        boat.y += away * abs(boat.speed) * self.config.avoid_factor


__all__ = ["NavigationEngine", "NavigationOutcome", "can_see", "nearest_obstacle_ahead"]
