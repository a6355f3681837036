"""Tests for shipped level data and authoring helpers."""

import pytest

from jungle_platformer import geometry
from jungle_platformer.config import GROUND_SURFACE_Y
from jungle_platformer.levels import (
    GROUND,
    LEVEL_1,
    LEVEL_2,
    LEVEL_DEFINITIONS,
    LadderConnector,
    LevelDefinition,
    LevelDefinitionError,
    PlatformRef,
    create_platform,
    goal_on,
    hazard_on_ground,
    hazard_on_platform,
    ladder_between_platforms,
    ladder_from_ground,
    pickup_on_platform,
)


def make_level(platforms, ladders=()):
    return LevelDefinition(
        name="Test",
        spawn=(100.0, 600.0),
        goal=(1000.0, 656.0),
        platforms=tuple(platforms),
        ladders=tuple(ladders),
        pickups=(),
        hazards=(),
    )


class TestShippedLevels:
    def test_two_levels(self):
        assert LEVEL_DEFINITIONS == (LEVEL_1, LEVEL_2)
        assert LEVEL_1.name == "Jungle Approach"
        assert LEVEL_2.name == "Treetop Gauntlet"

    def test_all_validate(self):
        for level in LEVEL_DEFINITIONS:
            level.validate()

    def test_shared_spawn(self):
        for level in LEVEL_DEFINITIONS:
            assert level.spawn == (180.0, 520.0)

    def test_content_counts(self):
        assert len(LEVEL_1.platforms) == 13
        assert len(LEVEL_1.ladders) == 13
        assert len(LEVEL_1.hazards) == 5
        assert len(LEVEL_2.platforms) == 13
        assert len(LEVEL_2.ladders) == 15
        assert len(LEVEL_2.hazards) == 8

    def test_goal_on_last_platform(self):
        for level in LEVEL_DEFINITIONS:
            last = level.platforms[-1]
            assert level.goal == (geometry.midpoint_x(last), last.y)

    def test_platforms_inside_world(self):
        for level in LEVEL_DEFINITIONS:
            for segment in level.platforms:
                s = geometry.span(segment)
                assert 0 <= s.left and s.right <= 6400


class TestAuthoringHelpers:
    def test_create_platform_from_left_edge(self):
        segment = create_platform(512, 500, 3)
        assert segment.x == 576
        assert geometry.span(segment).left == 512

    def test_ladder_between_orders_endpoints(self):
        platforms = (create_platform(0, 500, 3), create_platform(256, 400, 3))
        ladder = ladder_between_platforms(platforms, 1, 0)
        assert ladder.lower == PlatformRef(0)
        assert ladder.upper == PlatformRef(1)
        assert ladder.x == 320

    def test_ladder_from_ground(self):
        platforms = (create_platform(256, 400, 3),)
        ladder = ladder_from_ground(platforms, 0)
        assert ladder.lower == GROUND
        assert ladder.upper == PlatformRef(0)
        assert ladder.x == 448

    def test_pickup_ratio_is_clamped(self):
        segment = create_platform(0, 500, 2)
        assert pickup_on_platform(segment, 2.0).x == 256
        assert pickup_on_platform(segment, -1.0).x == 0
        assert pickup_on_platform(segment, 0.5).y == 468 - 48

    def test_hazard_placement(self):
        assert hazard_on_ground(900, 180).y == GROUND_SURFACE_Y - 28
        spawn = hazard_on_platform(create_platform(0, 500, 2), 0.25, 200)
        assert (spawn.x, spawn.y, spawn.speed) == (64, 440, 200)

    def test_goal_on(self):
        assert goal_on(create_platform(0, 500, 2)) == (128, 500)


class TestValidation:
    def test_valid_platform_reference(self):
        level = make_level(
            [create_platform(0, 500, 2)],
            [LadderConnector(64, GROUND, PlatformRef(0))],
        )
        level.validate()
        assert level.platform_for(PlatformRef(0)) is level.platforms[0]

    def test_out_of_range_index(self):
        level = make_level(
            [create_platform(0, 500, 2)],
            [LadderConnector(64, GROUND, PlatformRef(3))],
        )
        with pytest.raises(LevelDefinitionError, match="invalid ladder platform index 3"):
            level.validate()

    def test_negative_index(self):
        level = make_level(
            [create_platform(0, 500, 2)],
            [LadderConnector(64, PlatformRef(-1), PlatformRef(0))],
        )
        with pytest.raises(LevelDefinitionError):
            level.validate()

    def test_ground_is_not_a_platform(self):
        level = make_level([create_platform(0, 500, 2)])
        with pytest.raises(LevelDefinitionError):
            level.platform_for(GROUND)

    def test_error_is_value_error(self):
        assert issubclass(LevelDefinitionError, ValueError)
