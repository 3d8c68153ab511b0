"""Data contracts and collaborator interfaces at the edge of the core.

Renderers and audio sinks are injected into the controller; the core only
hands them read-only snapshots and discrete events.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from lighthouse.entities import Beam, Boat, Obstacle


class RoundEvent(Enum):
    ROUND_START = "round_start"
    COLLISION = "collision"


@dataclass(frozen=True)
class BeamView:
    origin: Tuple[float, float]
    angle: float
    half_width: float
    range: float

    @classmethod
    def of(cls, beam: Beam) -> "BeamView":
        return cls(origin=beam.origin, angle=beam.angle, half_width=beam.half_width, range=beam.range)

    def validate(self) -> None:
        if not -math.pi < self.angle <= math.pi:
            raise ValueError(f"angle must be in (-pi, pi], got {self.angle}")
        if self.range <= 0:
            raise ValueError(f"range must be positive, got {self.range}")


@dataclass(frozen=True)
class BoatView:
    id: int
    pos: Tuple[float, float]
    direction: int
    illuminated: bool
    warning: bool
    color: str

    @classmethod
    def of(cls, boat: Boat) -> "BoatView":
        return cls(
            id=boat.id,
            pos=boat.pos,
            direction=boat.direction,
            illuminated=boat.illuminated,
            warning=boat.warning,
            color=boat.color,
        )


@dataclass(frozen=True)
class ObstacleView:
    id: int
    pos: Tuple[float, float]
    radius: float
    illuminated: bool

    @classmethod
    def of(cls, obstacle: Obstacle) -> "ObstacleView":
        return cls(id=obstacle.id, pos=obstacle.pos, radius=obstacle.radius, illuminated=obstacle.illuminated)


@dataclass(frozen=True)
class FrameSnapshot:
    """Immutable per-tick picture handed to the renderer."""

    tick: int
    phase: str
    score: int
    boats_saved: int
    beam: BeamView
    boats: Tuple[BoatView, ...]
    obstacles: Tuple[ObstacleView, ...]
    debug: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "phase": self.phase,
            "score": self.score,
            "boats_saved": self.boats_saved,
            "beam": {
                "origin": list(self.beam.origin),
                "angle": self.beam.angle,
                "half_width": self.beam.half_width,
                "range": self.beam.range,
            },
            "boats": [
                {
                    "id": b.id,
                    "pos": list(b.pos),
                    "direction": b.direction,
                    "illuminated": b.illuminated,
                    "warning": b.warning,
                    "color": b.color,
                }
                for b in self.boats
            ],
            "obstacles": [
                {"id": o.id, "pos": list(o.pos), "radius": o.radius, "illuminated": o.illuminated}
                for o in self.obstacles
            ],
            "debug": dict(self.debug),
        }


@dataclass(frozen=True)
class GameOver:
    score: int
    boats_saved: int


class Renderer(ABC):
    @abstractmethod
    def render(self, frame: FrameSnapshot) -> None:
        """Draw one frame. Must not mutate simulation state."""


class AudioSink(ABC):
    @abstractmethod
    def notify(self, event: RoundEvent) -> None:
        """React to a round lifecycle event."""


class NullRenderer(Renderer):
    def render(self, frame: FrameSnapshot) -> None:
        return None


class NullAudio(AudioSink):
    def notify(self, event: RoundEvent) -> None:
        return None


class RecordingRenderer(Renderer):
    """Keeps every frame; handy for tests and replays."""

    def __init__(self) -> None:
        self.frames: List[FrameSnapshot] = []

    def render(self, frame: FrameSnapshot) -> None:
        self.frames.append(frame)

    @property
    def last(self) -> FrameSnapshot | None:
        return self.frames[-1] if self.frames else None


class RecordingAudio(AudioSink):
    def __init__(self) -> None:
        self.events: List[RoundEvent] = []

    def notify(self, event: RoundEvent) -> None:
        self.events.append(event)


__all__ = [
    "AudioSink",
    "BeamView",
    "BoatView",
    "FrameSnapshot",
    "GameOver",
    "NullAudio",
    "NullRenderer",
    "ObstacleView",
    "RecordingAudio",
    "RecordingRenderer",
    "Renderer",
    "RoundEvent",
]
