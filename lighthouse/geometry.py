"""Angle normalization and beam-sector membership."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

TWO_PI = 2.0 * math.pi

# fmod leaves at most one wrap; a couple of extra passes absorb rounding at the seam.
_MAX_WRAPS = 4


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]. In-range values come back untouched."""
    if not math.isfinite(angle):
        raise ValueError(f"angle must be finite, got {angle!r}")
    if -math.pi < angle <= math.pi:
        return angle
    wrapped = math.fmod(angle, TWO_PI)
    for _ in range(_MAX_WRAPS):
        if wrapped > math.pi:
            wrapped -= TWO_PI
        elif wrapped <= -math.pi:
            wrapped += TWO_PI
        else:
            break
    return min(math.pi, max(wrapped, math.nextafter(-math.pi, 0.0)))


def is_in_sector(angle: float, start: float, end: float) -> bool:
    """Inclusive sector test that handles sectors straddling the +/-pi seam."""
    angle = normalize_angle(angle)
    start = normalize_angle(start)
    end = normalize_angle(end)
    if start <= end:
        return start <= angle <= end
    return angle >= start or angle <= end


def wheel_delta(previous: float, current: float) -> float:
    """Signed rotation between two pointer bearings, taking the short way round."""
    return normalize_angle(current - previous)


def bearing(origin: Point, point: Point) -> float:
    return math.atan2(point[1] - origin[1], point[0] - origin[0])


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def bearings_and_distances(origin: Point, points: Sequence[Point]) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised bearing/distance from ``origin`` to each of ``points``."""
    if not points:
        empty = np.zeros(0, dtype=np.float64)
        return empty, empty.copy()
    coords = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    dx = coords[:, 0] - origin[0]
    dy = coords[:, 1] - origin[1]
    return np.arctan2(dy, dx), np.hypot(dx, dy)


__all__ = [
    "TWO_PI",
    "bearing",
    "bearings_and_distances",
    "distance",
    "is_in_sector",
    "normalize_angle",
    "wheel_delta",
]
