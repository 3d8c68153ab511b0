"""Tunable constants for a lighthouse round.

Values are fixed for the lifetime of a round. The defaults describe a
1200x700 scene with the lamp near the top edge.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class LighthouseConfig:
    # Scene
    scene_width: float = 1200.0
    scene_height: float = 700.0
    # Beam
    origin_x: float = 600.0
    origin_y: float = 50.0
    beam_range: float = 800.0
    beam_half_width: float = math.pi / 12
    initial_beam_angle: float = 0.0
    # Spawn timing (milliseconds of round time)
    boat_spawn_interval_ms: float = 3000.0
    obstacle_spawn_interval_ms: float = 8000.0
    max_obstacles: int = 5
    initial_obstacles: int = 3
    # Boats
    boat_band: Tuple[float, float] = (200.0, 600.0)
    boat_speed_min: float = 0.5
    boat_speed_max: float = 1.5
    boat_width: float = 60.0
    boat_height: float = 30.0
    vision_range: float = 150.0
    spawn_offset: float = 50.0
    exit_margin: float = 100.0
    palette: Tuple[str, ...] = ("red", "blue", "teal")
    neutral_color: str = "gray"
    # Obstacles
    obstacle_margin_x: float = 150.0
    obstacle_band: Tuple[float, float] = (200.0, 600.0)
    obstacle_radius_min: float = 20.0
    obstacle_radius_max: float = 50.0
    clearance_margin: float = 100.0
    # Navigation / scoring
    proximity_threshold: float = 100.0
    avoid_factor: float = 0.5
    score_per_save: int = 100

    def validate(self) -> None:
        for name in ("boat_band", "obstacle_band"):
            band = getattr(self, name)
            if len(band) != 2:
                raise ValueError(f"{name} must be a (low, high) pair, got {band!r}")
        if not all(isinstance(c, str) for c in self.palette):
            raise ValueError(f"palette entries must be strings, got {self.palette!r}")
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value}")
        positive = (
            "scene_width",
            "scene_height",
            "beam_range",
            "beam_half_width",
            "boat_spawn_interval_ms",
            "obstacle_spawn_interval_ms",
            "boat_width",
            "vision_range",
            "proximity_threshold",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.beam_half_width > math.pi:
            raise ValueError(f"beam_half_width must be <= pi, got {self.beam_half_width}")
        if self.max_obstacles < 0 or self.initial_obstacles < 0:
            raise ValueError("obstacle counts must be non-negative")
        if self.initial_obstacles > self.max_obstacles:
            raise ValueError("initial_obstacles cannot exceed max_obstacles")
        for low, high, label in (
            (self.boat_speed_min, self.boat_speed_max, "boat speed"),
            (self.obstacle_radius_min, self.obstacle_radius_max, "obstacle radius"),
            (self.boat_band[0], self.boat_band[1], "boat_band"),
            (self.obstacle_band[0], self.obstacle_band[1], "obstacle_band"),
        ):
            if low > high:
                raise ValueError(f"{label} range is inverted: {low} > {high}")
        if self.obstacle_margin_x * 2 > self.scene_width:
            raise ValueError("obstacle_margin_x leaves no room for obstacles")
        if not self.palette:
            raise ValueError("palette must not be empty")
        if self.neutral_color in self.palette:
            raise ValueError("neutral_color must not be part of the palette")

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any] | None = None) -> "LighthouseConfig":
        """Build a validated config from a plain mapping (e.g. parsed JSON)."""
        cfg = dict(cfg or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        defaults = cls()
        values: Dict[str, Any] = {}
        for name in known:
            default = getattr(defaults, name)
            raw = cfg.get(name, default)
            if isinstance(default, tuple):
                values[name] = _coerce_sequence(name, raw, default)
            elif isinstance(default, str):
                if not isinstance(raw, str):
                    raise ValueError(f"{name} must be a string, got {raw!r}")
                values[name] = raw
            elif isinstance(default, int):
                values[name] = int(raw)
            elif isinstance(default, float):
                values[name] = float(raw)
            else:
                values[name] = raw
        config = cls(**values)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}


def _coerce_sequence(name: str, raw: Any, default: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """Bands are (low, high) number pairs; the palette is a list of colour names."""
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {raw!r}")
    if isinstance(default[0], str):
        if not all(isinstance(item, str) for item in raw):
            raise ValueError(f"{name} entries must be strings, got {raw!r}")
        return tuple(raw)
    if len(raw) != len(default):
        raise ValueError(f"{name} must have {len(default)} entries, got {len(raw)}")
    if any(isinstance(item, bool) or not isinstance(item, (int, float)) for item in raw):
        raise ValueError(f"{name} entries must be numbers, got {raw!r}")
    return tuple(float(item) for item in raw)


DEFAULT_CONFIG = LighthouseConfig()


__all__ = ["DEFAULT_CONFIG", "LighthouseConfig"]
