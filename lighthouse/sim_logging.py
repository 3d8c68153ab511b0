from __future__ import annotations

import logging

# Round clock shared with log records (milliseconds).
_current_round_ms = 0.0

LOG_FORMAT = "[%(round_time)s] %(levelname)s %(short_name)s: %(message)s"


def set_round_time(ms: float) -> None:
    """Update the round clock stamped onto log records."""
    global _current_round_ms
    _current_round_ms = ms


class RoundTimeFilter(logging.Filter):
    """Adds the round clock and a shortened logger name to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.round_time = f"{_current_round_ms / 1000.0:.3f}s"
        # lighthouse.navigation -> navigation
        record.short_name = record.name.rsplit(".", 1)[-1]
        return True


def configure_logging(level: str | int = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.addFilter(RoundTimeFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
