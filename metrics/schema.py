"""Canonical metrics schema definitions."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

SCHEMA_VERSION = "1.0.0"


@dataclass
class TickData:
    """Single source of truth for analysis, replay and the HTTP surface."""

    schema_version: str = SCHEMA_VERSION
    tick: int = 0
    round_index: int = 0
    phase: str = "running"
    elapsed_ms: float = 0.0
    beam_angle: float = 0.0
    # Scoring
    score: int = 0
    boats_saved: int = 0
    saved_this_tick: int = 0
    # Population
    boats_active: int = 0
    obstacles: int = 0
    boat_spawned: bool = False
    obstacle_spawned: bool = False
    # Illumination / navigation
    lit_boats: int = 0
    lit_obstacles: int = 0
    warnings: int = 0
    avoiding: int = 0
    collision: bool = False
    entities_checksum: str = ""

    def to_ordered_dict(self) -> Dict[str, Any]:
        """Return a plain dict in schema order for deterministic serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


__all__ = ["SCHEMA_VERSION", "TickData"]
