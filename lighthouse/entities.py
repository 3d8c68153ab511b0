"""Entity definitions for the lighthouse scene."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from lighthouse.geometry import normalize_angle

Vector = Tuple[float, float]


class Side(Enum):
    """Scene edge a boat enters from."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def direction(self) -> int:
        # Boats entering on the left travel right (+x).
        return 1 if self is Side.LEFT else -1


@dataclass
class Boat:
    """Ship drifting across the scene at constant signed speed."""

    id: int
    x: float
    y: float
    side: Side
    speed: float  # signed: positive heads right
    vision_range: float = 150.0
    width: float = 60.0
    height: float = 30.0
    color: str = "red"
    illuminated: bool = False
    warning: bool = False
    saved: bool = False

    @property
    def pos(self) -> Vector:
        return (self.x, self.y)

    @property
    def direction(self) -> int:
        return self.side.direction

    @property
    def half_width(self) -> float:
        return self.width / 2.0


@dataclass
class Obstacle:
    """Stationary rock; persists until the round is reset."""

    id: int
    x: float
    y: float
    radius: float
    illuminated: bool = False

    @property
    def pos(self) -> Vector:
        return (self.x, self.y)


@dataclass
class Beam:
    """The single steerable light. ``angle`` is always kept in (-pi, pi]."""

    origin_x: float
    origin_y: float
    angle: float
    half_width: float
    range: float

    def __post_init__(self) -> None:
        self.angle = normalize_angle(self.angle)

    @property
    def origin(self) -> Vector:
        return (self.origin_x, self.origin_y)

    def aim(self, angle: float) -> None:
        self.angle = normalize_angle(angle)

    def sector(self) -> Tuple[float, float]:
        """(start, end) edges of the lit wedge, before wrapping."""
        return self.angle - self.half_width, self.angle + self.half_width


__all__ = ["Beam", "Boat", "Obstacle", "Side", "Vector"]
