"""Per-tick lit/unlit classification of every entity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Union

from lighthouse.entities import Beam, Boat, Obstacle
from lighthouse.geometry import bearings_and_distances, is_in_sector

Lightable = Union[Boat, Obstacle]


@dataclass(frozen=True)
class IlluminationSummary:
    lit_boats: int = 0
    lit_obstacles: int = 0


def _classify(beam: Beam, entities: Sequence[Lightable]) -> int:
    start, end = beam.sector()
    # A half-width of pi or more covers every bearing.
    full_circle = beam.half_width >= math.pi
    bearings, dists = bearings_and_distances(beam.origin, [e.pos for e in entities])
    lit = 0
    for entity, theta, dist in zip(entities, bearings, dists):
        # Sector edges are inclusive, the range edge is not.
        in_sector = full_circle or is_in_sector(float(theta), start, end)
        entity.illuminated = in_sector and float(dist) < beam.range
        lit += entity.illuminated
    return lit


def illuminate(beam: Beam, boats: Sequence[Boat], obstacles: Sequence[Obstacle]) -> IlluminationSummary:
    """Recompute ``illuminated`` on all boats and obstacles for the current beam."""
    return IlluminationSummary(
        lit_boats=_classify(beam, boats),
        lit_obstacles=_classify(beam, obstacles),
    )


__all__ = ["IlluminationSummary", "illuminate"]
