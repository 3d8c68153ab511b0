"""Hash utilities for tick traces."""

from __future__ import annotations

import hashlib
from typing import Iterable

from .logger import TickLike, canonical_json, normalize_tick


def tick_hash(tick: TickLike) -> str:
    """Deterministic digest of a single tick."""
    canonical = canonical_json(normalize_tick(tick))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class RunHash:
    """Chains per-tick digests into one fingerprint for a whole round."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha256()
        self.count = 0

    def update(self, tick: TickLike) -> str:
        digest = tick_hash(tick)
        self._hasher.update(digest.encode("utf-8"))
        self.count += 1
        return digest

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()


def trace_hash(ticks: Iterable[TickLike]) -> str:
    rh = RunHash()
    for tick in ticks:
        rh.update(tick)
    return rh.hexdigest()


__all__ = ["RunHash", "tick_hash", "trace_hash"]
