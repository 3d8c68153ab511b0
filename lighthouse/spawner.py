"""Timed creation of boats and obstacles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from lighthouse.config import LighthouseConfig
from lighthouse.entities import Boat, Obstacle, Side
from lighthouse.geometry import distance
from lighthouse.rng import RNG, RNGStream
from lighthouse.world import World

logger = logging.getLogger(__name__)


@dataclass
class SpawnTimer:
    """Accumulates round time since the last spawn."""

    elapsed_ms: float = 0.0

    def advance(self, delta_ms: float) -> None:
        self.elapsed_ms += delta_ms

    def ready(self, interval_ms: float) -> bool:
        return self.elapsed_ms > interval_ms

    def reset(self) -> None:
        self.elapsed_ms = 0.0


class SpawnScheduler:
    """Creates entities on fixed intervals using dedicated RNG streams."""

    def __init__(self, config: LighthouseConfig, rng: RNG, world: World) -> None:
        self.config = config
        self.world = world
        self.boat_stream: RNGStream = rng.stream("boats")
        self.obstacle_stream: RNGStream = rng.stream("obstacles")
        self.boat_timer = SpawnTimer()
        self.obstacle_timer = SpawnTimer()

    def maybe_spawn_boat(self, elapsed_ms: float) -> Optional[Boat]:
        self.boat_timer.advance(elapsed_ms)
        if not self.boat_timer.ready(self.config.boat_spawn_interval_ms):
            return None
        self.boat_timer.reset()
        return self.spawn_boat()

    def spawn_boat(self) -> Boat:
        cfg = self.config
        stream = self.boat_stream
        side = Side.LEFT if stream.coin() else Side.RIGHT
        x = -cfg.spawn_offset if side is Side.LEFT else cfg.scene_width + cfg.spawn_offset
        y = stream.uniform(*cfg.boat_band)
        speed = stream.uniform(cfg.boat_speed_min, cfg.boat_speed_max) * side.direction
        boat = Boat(
            id=self.world.next_id(),
            x=x,
            y=y,
            side=side,
            speed=speed,
            vision_range=cfg.vision_range,
            width=cfg.boat_width,
            height=cfg.boat_height,
            color=stream.choice(cfg.palette),
        )
        self.world.add_boat(boat)
        logger.debug("boat %d spawned %s at y=%.1f speed=%.2f", boat.id, side.value, y, speed)
        return boat

    def maybe_spawn_obstacle(self, elapsed_ms: float) -> Optional[Obstacle]:
        self.obstacle_timer.advance(elapsed_ms)
        if not self.obstacle_timer.ready(self.config.obstacle_spawn_interval_ms):
            return None
        if len(self.world.obstacles) >= self.config.max_obstacles:
            return None
        # The interval is consumed even when the candidate is rejected.
        self.obstacle_timer.reset()
        return self.place_obstacle()

    def place_obstacle(self) -> Optional[Obstacle]:
        """Try one candidate; discard it if it crowds an existing obstacle."""
        cfg = self.config
        stream = self.obstacle_stream
        x = stream.uniform(cfg.obstacle_margin_x, cfg.scene_width - cfg.obstacle_margin_x)
        y = stream.uniform(*cfg.obstacle_band)
        radius = stream.uniform(cfg.obstacle_radius_min, cfg.obstacle_radius_max)
        if not self.has_clearance(x, y, radius, self.world.obstacles):
            logger.debug("obstacle candidate at (%.1f, %.1f) r=%.1f rejected", x, y, radius)
            return None
        obstacle = Obstacle(id=self.world.next_id(), x=x, y=y, radius=radius)
        self.world.add_obstacle(obstacle)
        logger.debug("obstacle %d placed at (%.1f, %.1f) r=%.1f", obstacle.id, x, y, radius)
        return obstacle

    def has_clearance(self, x: float, y: float, radius: float, obstacles: List[Obstacle]) -> bool:
        margin = self.config.clearance_margin
        return all(distance((x, y), o.pos) >= radius + o.radius + margin for o in obstacles)

    def seed_obstacles(self) -> List[Obstacle]:
        """Initial placement before the round clock starts."""
        placed = []
        for _ in range(self.config.initial_obstacles):
            obstacle = self.place_obstacle()
            if obstacle is not None:
                placed.append(obstacle)
        return placed


__all__ = ["SpawnScheduler", "SpawnTimer"]
