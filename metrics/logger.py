"""Canonical JSON serialization and JSONL tick recording."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import IO, Any, Dict, Iterator, Mapping, Union

from .schema import TickData

TickLike = Union[TickData, Mapping[str, Any]]


def normalize_tick(tick: TickLike) -> Dict[str, Any]:
    if isinstance(tick, TickData):
        return tick.to_ordered_dict()
    if is_dataclass(tick) and not isinstance(tick, type):
        return asdict(tick)
    if isinstance(tick, Mapping):
        return dict(tick)
    raise TypeError(f"Unsupported tick type: {type(tick)!r}")


def canonical_json(payload: Mapping[str, Any]) -> str:
    # Sorted keys and compact separators keep byte output stable across runs.
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


class JsonlLogger:
    """Writes one canonical JSON line per tick."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fh: IO[str] | None = None
        self.lines_written = 0

    def __enter__(self) -> "JsonlLogger":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("w", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def write_tick(self, tick: TickLike) -> None:
        if self._fh is None:
            self.open()
        assert self._fh is not None
        self._fh.write(canonical_json(normalize_tick(tick)) + "\n")
        self._fh.flush()
        self.lines_written += 1


def read_ticks(path: str | Path) -> Iterator[Dict[str, Any]]:
    """Yield tick dicts back from a JSONL recording."""
    with Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if line:
                yield json.loads(line)


__all__ = ["JsonlLogger", "canonical_json", "normalize_tick", "read_ticks"]
