"""Round controller: lifecycle state machine around the tick pipeline."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from lighthouse.config import DEFAULT_CONFIG, LighthouseConfig
from lighthouse.contracts import (
    AudioSink,
    BeamView,
    BoatView,
    FrameSnapshot,
    GameOver,
    NullAudio,
    NullRenderer,
    ObstacleView,
    Renderer,
    RoundEvent,
)
from lighthouse.entities import Beam
from lighthouse.illumination import IlluminationSummary, illuminate
from lighthouse.navigation import NavigationEngine, NavigationOutcome
from lighthouse.pipeline import PIPELINE_ORDER, Pipeline
from lighthouse.rng import RNG
from lighthouse.sim_logging import set_round_time
from lighthouse.spawner import SpawnScheduler
from lighthouse.world import World, world_checksum
from metrics.schema import TickData

logger = logging.getLogger(__name__)

GameOverListener = Callable[[GameOver], None]


class RoundPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class AngleMailbox:
    """Single-slot mailbox: only the latest steering value survives."""

    def __init__(self) -> None:
        self._value: Optional[float] = None

    def put(self, angle: float) -> None:
        self._value = angle

    def take(self) -> Optional[float]:
        value, self._value = self._value, None
        return value

    def clear(self) -> None:
        self._value = None


@dataclass
class RoundState:
    phase: RoundPhase = RoundPhase.IDLE
    tick: int = -1
    elapsed_ms: float = 0.0
    score: int = 0
    boats_saved: int = 0


@dataclass
class RoundContext:
    """Mutable tick state passed through the pipeline."""

    tick: int
    delta_ms: float
    boat_spawned: bool = False
    obstacle_spawned: bool = False
    illumination: IlluminationSummary = field(default_factory=IlluminationSummary)
    outcome: NavigationOutcome = field(default_factory=NavigationOutcome)
    saved_this_tick: int = 0
    ended: bool = False
    tick_data: TickData | None = None


class RoundController:
    """Owns one beam, one world and the round lifecycle (idle -> running -> ended)."""

    def __init__(
        self,
        config: LighthouseConfig | None = None,
        *,
        seed: int = 1337,
        renderer: Renderer | None = None,
        audio: AudioSink | None = None,
        on_game_over: GameOverListener | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.config.validate()
        self.seed = seed
        self.rng = RNG(seed)
        self.round_index = 0
        self.renderer = renderer or NullRenderer()
        self.audio = audio or NullAudio()
        self._listeners: List[GameOverListener] = [on_game_over] if on_game_over else []
        self.world = World(
            width=self.config.scene_width,
            height=self.config.scene_height,
            exit_margin=self.config.exit_margin,
        )
        self.beam = Beam(
            origin_x=self.config.origin_x,
            origin_y=self.config.origin_y,
            angle=self.config.initial_beam_angle,
            half_width=self.config.beam_half_width,
            range=self.config.beam_range,
        )
        self.mailbox = AngleMailbox()
        self.state = RoundState()
        self.result: GameOver | None = None
        self.spawner: SpawnScheduler | None = None
        self.navigator = NavigationEngine(self.config)
        self.pipeline = Pipeline(
            handlers={
                "pre_tick": self._pre_tick,
                "spawn_boats": self._spawn_boats,
                "spawn_obstacles": self._spawn_obstacles,
                "illuminate": self._illuminate,
                "navigate": self._navigate,
                "score": self._score,
                "log": self._log_tick,
            },
            order=PIPELINE_ORDER,
        )

    # -- lifecycle -------------------------------------------------------

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def running(self) -> bool:
        return self.state.phase is RoundPhase.RUNNING

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def boats_saved(self) -> int:
        return self.state.boats_saved

    def on_game_over(self, listener: GameOverListener) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        """Begin a fresh round; a running or ended round is discarded."""
        self.round_index += 1
        self.world.clear()
        self.mailbox.clear()
        self.beam.aim(self.config.initial_beam_angle)
        self.state = RoundState(phase=RoundPhase.RUNNING)
        self.result = None
        self.spawner = SpawnScheduler(self.config, self.rng.for_round(self.round_index), self.world)
        self.spawner.seed_obstacles()
        set_round_time(0.0)
        logger.info(
            "round %d started (seed=%d, %d obstacles)", self.round_index, self.seed, len(self.world.obstacles)
        )
        self.audio.notify(RoundEvent.ROUND_START)

    def end(self) -> None:
        """Stop the round and announce the result. Only the first call has an effect."""
        if self.state.phase is not RoundPhase.RUNNING:
            return
        self._freeze()
        self._announce()

    def _freeze(self) -> None:
        self.state.phase = RoundPhase.ENDED
        self.result = GameOver(score=self.state.score, boats_saved=self.state.boats_saved)
        logger.info("round %d over: score=%d saved=%d", self.round_index, self.result.score, self.result.boats_saved)

    def _announce(self) -> None:
        assert self.result is not None
        self.audio.notify(RoundEvent.COLLISION)
        for listener in self._listeners:
            listener(self.result)

    def reset(self) -> None:
        """Return to idle with an empty scene."""
        self.world.clear()
        self.mailbox.clear()
        self.state = RoundState()
        self.spawner = None

    def set_beam_angle(self, angle: float) -> bool:
        """Queue a steering value for the next tick. Returns False when ignored."""
        if self.state.phase is not RoundPhase.RUNNING:
            return False
        try:
            value = float(angle)
        except (TypeError, ValueError):
            logger.debug("ignoring non-numeric beam angle %r", angle)
            return False
        if not math.isfinite(value):
            logger.debug("ignoring non-finite beam angle %r", angle)
            return False
        self.mailbox.put(value)
        return True

    # -- ticking ---------------------------------------------------------

    def tick(self, elapsed_ms: float) -> TickData | None:
        """Advance one tick; returns None when the round is not running."""
        if self.state.phase is not RoundPhase.RUNNING:
            return None
        if not math.isfinite(elapsed_ms) or elapsed_ms < 0:
            logger.debug("clamping bad tick delta %r to 0", elapsed_ms)
            elapsed_ms = 0.0
        self.state.tick += 1
        self.state.elapsed_ms += elapsed_ms
        ctx = RoundContext(tick=self.state.tick, delta_ms=elapsed_ms)
        self.pipeline.run(ctx)
        if ctx.tick_data is None:
            raise RuntimeError("Pipeline failed to produce TickData")
        self.renderer.render(self.snapshot())
        # Collaborators hear about the collision once the final frame is out.
        if ctx.ended:
            self._announce()
        return ctx.tick_data

    def run(self, ticks: int, elapsed_ms: float = 1000.0 / 60.0) -> List[TickData]:
        """Tick up to N times at a fixed cadence, stopping once the round ends."""
        trace: List[TickData] = []
        for _ in range(ticks):
            data = self.tick(elapsed_ms)
            if data is None:
                break
            trace.append(data)
        return trace

    def _pre_tick(self, ctx: RoundContext) -> None:
        angle = self.mailbox.take()
        if angle is not None:
            self.beam.aim(angle)
        set_round_time(self.state.elapsed_ms)

    def _spawn_boats(self, ctx: RoundContext) -> None:
        if self.spawner is None:
            raise RuntimeError("Round started without a spawner")
        ctx.boat_spawned = self.spawner.maybe_spawn_boat(ctx.delta_ms) is not None

    def _spawn_obstacles(self, ctx: RoundContext) -> None:
        if self.spawner is None:
            raise RuntimeError("Round started without a spawner")
        ctx.obstacle_spawned = self.spawner.maybe_spawn_obstacle(ctx.delta_ms) is not None

    def _illuminate(self, ctx: RoundContext) -> None:
        ctx.illumination = illuminate(self.beam, self.world.boats, self.world.obstacles)

    def _navigate(self, ctx: RoundContext) -> None:
        ctx.outcome = self.navigator.step(self.world)

    def _score(self, ctx: RoundContext) -> None:
        saved = ctx.outcome.saved_ids
        ctx.saved_this_tick = len(saved)
        self.state.boats_saved += len(saved)
        self.state.score += len(saved) * self.config.score_per_save
        self.world.remove_boats(saved)
        # Saves from this tick are credited before the final result is frozen.
        if ctx.outcome.collision:
            self._freeze()
            ctx.ended = True

    def _log_tick(self, ctx: RoundContext) -> None:
        ctx.tick_data = TickData(
            tick=ctx.tick,
            round_index=self.round_index,
            phase=self.state.phase.value,
            elapsed_ms=self.state.elapsed_ms,
            beam_angle=self.beam.angle,
            score=self.state.score,
            boats_saved=self.state.boats_saved,
            saved_this_tick=ctx.saved_this_tick,
            boats_active=len(self.world.boats),
            obstacles=len(self.world.obstacles),
            boat_spawned=ctx.boat_spawned,
            obstacle_spawned=ctx.obstacle_spawned,
            lit_boats=ctx.illumination.lit_boats,
            lit_obstacles=ctx.illumination.lit_obstacles,
            warnings=ctx.outcome.warnings,
            avoiding=ctx.outcome.avoiding,
            collision=ctx.outcome.collision,
            entities_checksum=world_checksum(self.world),
        )

    # -- views -----------------------------------------------------------

    def snapshot(self) -> FrameSnapshot:
        """Read-only picture of the scene for renderers and the HTTP surface."""
        beam = BeamView.of(self.beam)
        beam.validate()
        return FrameSnapshot(
            tick=self.state.tick,
            phase=self.state.phase.value,
            score=self.state.score,
            boats_saved=self.state.boats_saved,
            beam=beam,
            boats=tuple(BoatView.of(b) for b in self.world.boats),
            obstacles=tuple(ObstacleView.of(o) for o in self.world.obstacles),
            debug={
                "boats": len(self.world.boats),
                "obstacles": len(self.world.obstacles),
                "max_obstacles": self.config.max_obstacles,
                "boat_spawn_interval_ms": self.config.boat_spawn_interval_ms,
                "obstacle_spawn_interval_ms": self.config.obstacle_spawn_interval_ms,
            },
        )


__all__ = ["AngleMailbox", "RoundContext", "RoundController", "RoundPhase", "RoundState"]
