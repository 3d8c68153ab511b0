"""Seeded randomness for spawning and pairing.

Every random draw in a round goes through a named stream ("boats",
"obstacles", "pairing"). Streams are keyed on the base seed and the round
number, so replaying a seed replays the harbour exactly while each new
round on the same controller gets its own layout.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence


def _derive_seed(base_seed: int, name: str, round_index: int = 0) -> int:
    payload = f"{base_seed}:{round_index}:{name}".encode("utf-8")
    digest = hashlib.sha256(payload).digest()
    return int.from_bytes(digest[:8], "big") & ((1 << 63) - 1)


@dataclass
class RNGStream:
    """One independent source of draws, e.g. all boat spawns of a round."""

    seed: int
    _random: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def random(self) -> float:
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        return self._random.uniform(a, b)

    def coin(self) -> bool:
        """Which edge a boat enters from."""
        return self._random.random() < 0.5

    def choice(self, seq: Sequence[Any]) -> Any:
        return self._random.choice(seq)

    def randint(self, a: int, b: int) -> int:
        return self._random.randint(a, b)


class RNG:
    """Stream factory for one round of one seed."""

    def __init__(self, seed: int, round_index: int = 0) -> None:
        self.seed = seed
        self.round_index = round_index
        self._streams: Dict[str, RNGStream] = {}

    def stream(self, name: str) -> RNGStream:
        # Repeated lookups continue the same sequence.
        if name not in self._streams:
            self._streams[name] = RNGStream(seed=_derive_seed(self.seed, name, self.round_index))
        return self._streams[name]

    def for_round(self, round_index: int) -> "RNG":
        """Factory for a later round of the same seed."""
        return RNG(seed=self.seed, round_index=round_index)


__all__ = ["RNG", "RNGStream"]
