import math

import pytest

from lighthouse.config import LighthouseConfig
from lighthouse.contracts import GameOver, RecordingAudio, RecordingRenderer, RoundEvent
from lighthouse.controller import RoundController, RoundPhase
from lighthouse.entities import Boat, Obstacle, Side

TICK_MS = 16.0

# No random traffic: scenarios place their own boats and rocks.
QUIET = {
    "boat_spawn_interval_ms": 1e9,
    "obstacle_spawn_interval_ms": 1e9,
    "initial_obstacles": 0,
}


def quiet_controller(**overrides) -> RoundController:
    config = LighthouseConfig.from_dict({**QUIET, **overrides})
    return RoundController(config, seed=11, renderer=RecordingRenderer(), audio=RecordingAudio())


def add_boat(controller: RoundController, x: float, y: float, speed: float = 1.0, side: Side = Side.LEFT) -> Boat:
    boat = Boat(id=controller.world.next_id(), x=x, y=y, side=side, speed=speed * side.direction)
    controller.world.add_boat(boat)
    return boat


def add_rock(controller: RoundController, x: float, y: float, radius: float) -> Obstacle:
    rock = Obstacle(id=controller.world.next_id(), x=x, y=y, radius=radius)
    controller.world.add_obstacle(rock)
    return rock


def test_idle_controller_ignores_tick_and_steering():
    controller = RoundController(seed=3)
    assert controller.phase is RoundPhase.IDLE
    assert controller.tick(TICK_MS) is None
    assert controller.set_beam_angle(1.0) is False
    assert controller.world.boats == []


def test_start_seeds_obstacles_and_announces_round():
    audio = RecordingAudio()
    controller = RoundController(seed=3, audio=audio)
    controller.start()
    assert controller.phase is RoundPhase.RUNNING
    assert 1 <= len(controller.world.obstacles) <= controller.config.initial_obstacles
    assert audio.events == [RoundEvent.ROUND_START]


def test_starting_twice_resets_everything():
    controller = RoundController(seed=3)
    controller.start()
    controller.run(400, elapsed_ms=TICK_MS)
    controller.state.score = 500
    controller.state.boats_saved = 5
    add_boat(controller, 10.0, 300.0)

    controller.start()
    assert controller.score == 0
    assert controller.boats_saved == 0
    assert controller.world.boats == []
    assert len(controller.world.obstacles) <= controller.config.initial_obstacles
    assert controller.state.tick == -1
    assert controller.state.elapsed_ms == 0.0
    assert controller.round_index == 2


def test_beam_angle_applies_on_next_tick():
    controller = quiet_controller()
    controller.start()
    assert controller.set_beam_angle(1.0)
    assert controller.beam.angle == 0.0
    controller.tick(TICK_MS)
    assert controller.beam.angle == 1.0


def test_mailbox_keeps_only_latest_angle():
    controller = quiet_controller()
    controller.start()
    controller.set_beam_angle(0.3)
    controller.set_beam_angle(0.7)
    data = controller.tick(TICK_MS)
    assert controller.beam.angle == 0.7
    assert data.beam_angle == 0.7


def test_beam_angle_is_wrapped():
    controller = quiet_controller()
    controller.start()
    controller.set_beam_angle(1.0 + 4 * math.pi)
    controller.tick(TICK_MS)
    assert controller.beam.angle == pytest.approx(1.0)
    assert -math.pi < controller.beam.angle <= math.pi


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "north", None])
def test_bad_beam_angle_is_ignored(bad):
    controller = quiet_controller()
    controller.start()
    controller.set_beam_angle(0.4)
    assert controller.set_beam_angle(bad) is False
    controller.tick(TICK_MS)
    assert controller.beam.angle == 0.4


def test_bad_tick_delta_is_clamped():
    controller = quiet_controller()
    controller.start()
    controller.tick(float("nan"))
    controller.tick(-5.0)
    assert controller.state.elapsed_ms == 0.0
    assert controller.state.tick == 1


def test_renderer_gets_one_frame_per_tick():
    controller = quiet_controller()
    controller.start()
    boat = add_boat(controller, 100.0, 300.0)
    controller.run(3, elapsed_ms=TICK_MS)
    frames = controller.renderer.frames
    assert len(frames) == 3
    assert frames[-1].boats[0].id == boat.id
    assert frames[-1].boats[0].pos == (103.0, 300.0)
    assert frames[-1].debug["max_obstacles"] == controller.config.max_obstacles


def test_clean_exit_scores_once():
    controller = quiet_controller()
    controller.start()
    add_boat(controller, 1299.5, 300.0)
    data = controller.tick(TICK_MS)
    assert data.saved_this_tick == 1
    assert controller.boats_saved == 1
    assert controller.score == controller.config.score_per_save
    assert controller.world.boats == []
    controller.run(5, elapsed_ms=TICK_MS)
    assert controller.boats_saved == 1
    assert controller.score == controller.config.score_per_save


def test_end_is_idempotent_and_notifies_once():
    results = []
    audio = RecordingAudio()
    controller = RoundController(seed=5, audio=audio, on_game_over=results.append)
    controller.end()
    assert results == []
    controller.start()
    controller.state.score = 300
    controller.state.boats_saved = 3
    controller.end()
    controller.end()
    assert controller.phase is RoundPhase.ENDED
    assert results == [GameOver(score=300, boats_saved=3)]
    assert audio.events == [RoundEvent.ROUND_START, RoundEvent.COLLISION]


def test_ended_round_is_frozen():
    controller = quiet_controller()
    controller.start()
    boat = add_boat(controller, 100.0, 300.0)
    controller.end()
    assert controller.tick(TICK_MS) is None
    assert controller.set_beam_angle(1.0) is False
    assert boat.x == 100.0


def test_reset_returns_to_idle():
    controller = RoundController(seed=5)
    controller.start()
    controller.end()
    controller.reset()
    assert controller.phase is RoundPhase.IDLE
    assert controller.world.obstacles == []
    controller.start()
    assert controller.running


def test_dark_approach_warns_then_collides():
    # Beam points at the sky, so nothing is ever lit.
    controller = quiet_controller(initial_beam_angle=-math.pi / 2)
    listener = []
    controller.on_game_over(listener.append)
    controller.start()
    rock = add_rock(controller, 600.0, 400.0, radius=20.0)
    boat = add_boat(controller, 400.0, 400.0)

    first_warning = None
    trace = []
    while controller.running:
        data = controller.tick(TICK_MS)
        trace.append(data)
        assert data.lit_boats == 0 and data.lit_obstacles == 0
        if first_warning is None and data.warnings:
            first_warning = data.tick

    # Checks run before the move: warning once the gap drops below 100.
    assert first_warning == 101
    assert 600.0 - (400.0 + first_warning) < controller.config.proximity_threshold
    assert 600.0 - (400.0 + first_warning - 1) >= controller.config.proximity_threshold
    # Collision once the gap drops below radius + half width (50); the boat does not move that tick.
    assert trace[-1].collision
    assert boat.x == 551.0
    assert rock.x - boat.x < rock.radius + boat.half_width
    assert rock.x - (boat.x - 1.0) >= rock.radius + boat.half_width
    assert controller.phase is RoundPhase.ENDED
    assert listener == [GameOver(score=0, boats_saved=0)]
    assert controller.audio.events == [RoundEvent.ROUND_START, RoundEvent.COLLISION]


def test_lit_approach_steers_clear():
    # A half-plane beam pointing down keeps the whole sea lit.
    controller = quiet_controller(initial_beam_angle=math.pi / 2, beam_half_width=math.pi / 2)
    controller.start()
    rock = add_rock(controller, 600.0, 400.0, radius=20.0)
    boat = add_boat(controller, 400.0, 395.0)

    gaps = []
    for _ in range(350):
        data = controller.tick(TICK_MS)
        assert data is not None
        gaps.append(abs(boat.y - rock.y))

    assert controller.running
    assert boat.x > rock.x
    assert all(later >= earlier for earlier, later in zip(gaps, gaps[1:]))
    assert gaps[-1] > gaps[0]


def test_collision_is_announced_after_final_frame():
    controller = quiet_controller(initial_beam_angle=-math.pi / 2)
    seen = []
    controller.on_game_over(
        lambda result: seen.append((result, len(controller.renderer.frames), controller.renderer.last.phase))
    )
    controller.start()
    add_rock(controller, 600.0, 400.0, radius=20.0)
    add_boat(controller, 560.0, 400.0)

    data = controller.tick(TICK_MS)
    assert data.collision
    assert data.phase == "ended"
    assert seen == [(GameOver(score=0, boats_saved=0), 1, "ended")]
    assert controller.audio.events == [RoundEvent.ROUND_START, RoundEvent.COLLISION]
