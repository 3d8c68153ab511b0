"""Pipeline ordering for the round tick loop."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Tuple

# spawn -> illuminate -> navigate -> cull/score -> record
PIPELINE_ORDER: Tuple[str, ...] = (
    "pre_tick",
    "spawn_boats",
    "spawn_obstacles",
    "illuminate",
    "navigate",
    "score",
    "log",
)

# Duck-typed context keeps this module free of controller imports.
Step = Callable[[Any], None]


class Pipeline:
    """Executes named steps in a fixed, explicit order."""

    def __init__(self, handlers: Dict[str, Step], order: Iterable[str] = PIPELINE_ORDER) -> None:
        missing = [name for name in order if name not in handlers]
        if missing:
            raise ValueError(f"No handler for pipeline steps: {', '.join(missing)}")
        self.handlers = handlers
        self.order = tuple(order)

    def run(self, context: Any) -> None:
        for name in self.order:
            self.handlers[name](context)


__all__ = ["PIPELINE_ORDER", "Pipeline", "Step"]
