"""Flat, ordered entity store for one round."""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from typing import Iterable, List

from lighthouse.entities import Boat, Obstacle


@dataclass
class World:
    """Boats and obstacles in insertion order plus the scene bounds."""

    width: float = 1200.0
    height: float = 700.0
    exit_margin: float = 100.0
    boats: List[Boat] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    _next_id: int = field(default=0, repr=False)

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_boat(self, boat: Boat) -> None:
        self.boats.append(boat)

    def add_obstacle(self, obstacle: Obstacle) -> None:
        self.obstacles.append(obstacle)

    def remove_boats(self, ids: Iterable[int]) -> int:
        """Drop boats by id without splicing during iteration; returns count removed."""
        doomed = set(ids)
        if not doomed:
            return 0
        before = len(self.boats)
        self.boats = [b for b in self.boats if b.id not in doomed]
        return before - len(self.boats)

    def is_outside(self, boat: Boat) -> bool:
        return boat.x < -self.exit_margin or boat.x > self.width + self.exit_margin

    def clear(self) -> None:
        self.boats = []
        self.obstacles = []
        self._next_id = 0


def world_checksum(world: World) -> str:
    """Stable digest of every entity's state, for snapshot comparison."""
    payload = (
        [sorted(asdict(b).items()) for b in world.boats],
        [sorted(asdict(o).items()) for o in world.obstacles],
    )
    return hashlib.sha256(repr(payload).encode("utf-8")).hexdigest()


__all__ = ["World", "world_checksum"]
