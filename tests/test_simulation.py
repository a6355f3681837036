"""Tests for the level session: frame order, contacts, level flow."""

import pytest

from jungle_platformer.config import GameConfig, PlayerConfig, get_config
from jungle_platformer.controls import InputSnapshot
from jungle_platformer.events import (
    EventEmitter,
    LEVEL_COMPLETE,
    PICKUP_COUNT_CHANGED,
    PLAYER_DIED,
    HEARTS_CHANGED,
)
from jungle_platformer.levels import LevelDefinition, create_platform
from jungle_platformer.player import Animation, Movement
from jungle_platformer.simulation import Simulation


FRAME_MS = 1000 / 60
IDLE = InputSnapshot()


def teleport(sim, x, y):
    sim.player.body.position = (x, y)
    sim.player.body.velocity = (0, 0)


@pytest.fixture
def sim(events):
    return Simulation(events=events)


class TestSetup:
    def test_first_level(self, sim):
        assert sim.level_index == 0
        assert sim.level_name == "Jungle Approach"
        assert not (sim.paused or sim.game_over or sim.level_complete)
        assert sim.elapsed_ms == 0

    def test_player_at_spawn(self, sim):
        left, top, right, bottom = sim.player.bounds
        assert sim.player.x == 180
        assert bottom == pytest.approx(520)

    def test_player_shares_events(self, sim, events):
        assert sim.events is events
        assert sim.player.events is events

    @pytest.mark.parametrize("requested,expected", [(-3, 0), (1, 1), (7, 1)])
    def test_level_index_clamped(self, requested, expected):
        assert Simulation(level_index=requested).level_index == expected

    def test_config_flows_to_player(self):
        sim = Simulation(GameConfig(player=PlayerConfig(max_hearts=4)))
        assert sim.player.hearts == 4


class TestStep:
    def test_player_lands_on_ground(self, sim):
        for _ in range(60):
            sim.step(IDLE, FRAME_MS)
        assert sim.player.is_on_floor
        assert sim.player.bounds[3] == pytest.approx(656, abs=1)

    def test_elapsed_time(self, sim):
        for _ in range(3):
            sim.step(IDLE, FRAME_MS)
        assert sim.elapsed_ms == pytest.approx(3 * FRAME_MS)
        assert sim.steps == 3

    def test_none_input_still_advances_world(self, sim):
        y = sim.player.y
        sim.step(None, FRAME_MS)
        assert sim.player.y > y

    def test_hazards_update(self, sim):
        barrel = sim.level.hazards[0]
        barrel.body.position = (-300, 300)
        sim.step(IDLE, FRAME_MS)
        assert barrel.reset_count == 1

    def test_pickups_bob(self, sim):
        pickup = sim.level.pickups[0]
        y = pickup.y
        sim.step(IDLE, FRAME_MS)
        assert pickup.y != y

    def test_ladder_overlap_enables_climbing(self, sim):
        # Ladder from the ground up to the first platform sits at x = 704
        teleport(sim, 704, 600)
        sim.step(InputSnapshot(up=True), FRAME_MS)
        assert sim.player.is_climbing
        assert sim.player.status.movement is Movement.CLIMBING


class TestPause:
    def test_toggle(self, sim):
        assert sim.toggle_pause()
        position = sim.player.position
        sim.step(IDLE, FRAME_MS)
        assert sim.player.position == position
        assert sim.elapsed_ms == 0
        assert not sim.toggle_pause()


class TestPickupContact:
    def test_collects(self, sim, events, recorder):
        rec = recorder(events, PICKUP_COUNT_CHANGED)
        pickup = sim.level.pickups[0]
        teleport(sim, pickup.x, pickup.y)

        sim.step(IDLE, FRAME_MS)

        assert not pickup.active
        assert sim.player.pickup_count == 1
        assert rec.named(PICKUP_COUNT_CHANGED) == [(1,)]

    def test_collected_once(self, sim):
        pickup = sim.level.pickups[0]
        teleport(sim, pickup.x, pickup.y)
        sim.step(IDLE, FRAME_MS)
        teleport(sim, pickup.x, pickup.y)
        sim.step(IDLE, FRAME_MS)
        assert sim.player.pickup_count == 1


class TestHazardContact:
    def test_hit_from_right(self, sim, events, recorder):
        rec = recorder(events, HEARTS_CHANGED)
        barrel = sim.level.hazards[0]
        teleport(sim, barrel.x + 30, barrel.y - 10)

        sim.step(IDLE, FRAME_MS)

        assert sim.player.hearts == 2
        assert sim.player.velocity == (280, -520)
        assert sim.player.is_invulnerable()
        assert rec.named(HEARTS_CHANGED) == [(2,)]

    def test_hit_from_left(self, sim):
        barrel = sim.level.hazards[0]
        teleport(sim, barrel.x - 30, barrel.y - 10)
        sim.step(IDLE, FRAME_MS)
        assert sim.player.velocity == (-280, -520)

    def test_invulnerable_ignores_contact(self, sim):
        barrel = sim.level.hazards[0]
        teleport(sim, barrel.x + 30, barrel.y - 10)
        sim.step(IDLE, FRAME_MS)
        teleport(sim, barrel.x + 30, barrel.y - 10)
        sim.step(IDLE, FRAME_MS)
        assert sim.player.hearts == 2

    def test_last_heart_ends_game(self, events, recorder):
        rec = recorder(events, PLAYER_DIED)
        sim = Simulation(get_config("hardcore"), events=events)
        barrel = sim.level.hazards[0]
        teleport(sim, barrel.x + 30, barrel.y - 10)

        sim.step(IDLE, FRAME_MS)

        assert sim.game_over
        assert sim.player.is_dead
        assert sim.player.animation is Animation.DEAD
        assert len(rec.named(PLAYER_DIED)) == 1

    def test_game_over_freezes_session(self):
        sim = Simulation(get_config("hardcore"))
        barrel = sim.level.hazards[0]
        teleport(sim, barrel.x + 30, barrel.y - 10)
        sim.step(IDLE, FRAME_MS)

        elapsed = sim.elapsed_ms
        position = sim.player.position
        sim.step(IDLE, FRAME_MS)
        assert sim.elapsed_ms == elapsed
        assert sim.player.position == position
        assert not sim.toggle_pause()
        assert not sim.advance_level()


def reach_goal(sim):
    goal = sim.level.goal
    teleport(sim, goal.x, goal.y)
    sim.step(IDLE, FRAME_MS)


class TestGoalContact:
    def test_completes_level(self, sim, events, recorder):
        rec = recorder(events, LEVEL_COMPLETE)
        reach_goal(sim)

        assert sim.level_complete
        assert sim.level.goal.reached
        assert not sim.level.goal.enabled
        assert sim.player.animation is Animation.CELEBRATE
        assert rec.named(LEVEL_COMPLETE) == [(0,)]

    def test_completion_freezes_session(self, sim):
        reach_goal(sim)
        position = sim.player.position
        sim.step(IDLE, FRAME_MS)
        assert sim.player.position == position
        assert not sim.toggle_pause()
        assert not sim.paused


class TestLevelFlow:
    def test_advance_requires_completion(self, sim):
        assert sim.has_next_level()
        assert not sim.advance_level()
        assert sim.level_index == 0

    def test_advance(self, sim):
        reach_goal(sim)
        assert sim.advance_level()
        assert sim.level_index == 1
        assert sim.level_name == "Treetop Gauntlet"
        assert not sim.level_complete
        assert sim.elapsed_ms == 0

    def test_last_level(self):
        sim = Simulation(level_index=1)
        assert not sim.has_next_level()
        reach_goal(sim)
        assert sim.level_complete
        assert not sim.advance_level()

    def test_restart(self, sim):
        pickup = sim.level.pickups[0]
        teleport(sim, pickup.x, pickup.y)
        sim.step(IDLE, FRAME_MS)
        sim.player.take_damage()

        sim.restart()

        assert sim.level_index == 0
        assert sim.player.hearts == 3
        assert sim.player.pickup_count == 0
        assert all(p.active for p in sim.level.pickups)
        assert sim.elapsed_ms == 0

    def test_restart_after_game_over(self, events, recorder):
        rec = recorder(events, PLAYER_DIED)
        sim = Simulation(get_config("hardcore"), events=events)
        sim.player.take_damage()
        assert sim.game_over

        sim.restart()
        assert not sim.game_over
        sim.player.take_damage()
        assert sim.game_over
        assert len(rec.named(PLAYER_DIED)) == 2

    def test_single_custom_level(self):
        level = LevelDefinition(
            name="Clearing",
            spawn=(100.0, 600.0),
            goal=(400.0, 500.0),
            platforms=(create_platform(256, 500, 2),),
            ladders=(),
            pickups=(),
            hazards=(),
        )
        sim = Simulation(levels=(level,))
        assert sim.level_name == "Clearing"
        assert not sim.has_next_level()


class TestGetState:
    def test_snapshot(self, sim):
        state = sim.get_state()
        assert state["level_index"] == 0
        assert state["level_name"] == "Jungle Approach"
        assert state["hearts"] == state["max_hearts"] == 3
        assert state["pickups"] == 0
        assert state["pickups_total"] == len(sim.level.pickups)
        assert state["has_next_level"]
        assert not state["paused"]
        assert state["player_position"] == sim.player.position
        assert state["player_status"].movement is Movement.AIRBORNE
