"""Tests for configuration system."""

import pytest

from jungle_platformer.config import (
    PhysicsConfig,
    PlayerConfig,
    HazardConfig,
    PickupConfig,
    GameConfig,
    WorldBounds,
    CONFIGS,
    get_config,
    GROUND_Y,
    GROUND_SURFACE_Y,
    TILE_WIDTH,
    TILE_HEIGHT,
)


class TestWorldGeometry:
    def test_ground_row(self):
        assert GROUND_Y == 688
        assert GROUND_SURFACE_Y == 656

    def test_tile_size(self):
        assert (TILE_WIDTH, TILE_HEIGHT) == (128, 64)

    def test_default_bounds(self):
        bounds = WorldBounds()
        assert (bounds.min_x, bounds.max_x) == (0, 6400)
        assert (bounds.min_y, bounds.max_y) == (0, 720)
        assert bounds.width == 6400
        assert bounds.height == 720


class TestPhysicsConfig:
    def test_defaults(self):
        config = PhysicsConfig()
        assert config.gravity == 1500
        assert config.player_max_velocity_x == 360
        assert config.player_max_velocity_y == 1200
        assert config.jump_velocity == -650
        assert config.double_jump_velocity == -560

    def test_jumps_point_up(self):
        config = PhysicsConfig()
        assert config.jump_velocity < 0
        assert config.double_jump_velocity < 0
        assert abs(config.double_jump_velocity) < abs(config.jump_velocity)

    def test_to_dict_roundtrip(self):
        original = PhysicsConfig(gravity=1200.0, jump_velocity=-600.0)
        restored = PhysicsConfig.from_dict(original.to_dict())
        assert restored == original


class TestPlayerConfig:
    def test_defaults(self):
        config = PlayerConfig()
        assert config.run_acceleration == 1400
        assert config.run_drag == 1800
        assert config.min_move_speed == 40
        assert config.climb_speed == 220
        assert config.coyote_time == 120
        assert config.max_hearts == 3
        assert config.invulnerability_duration == 1200
        assert config.hurt_duration == 320
        assert config.climb_jump_factor == 0.85

    def test_hurt_window_inside_invulnerability(self):
        config = PlayerConfig()
        assert config.hurt_duration < config.invulnerability_duration

    def test_from_dict_missing_keys_use_defaults(self):
        config = PlayerConfig.from_dict({"max_hearts": 5})
        assert config.max_hearts == 5
        assert config.coyote_time == 120


class TestHazardConfig:
    def test_defaults(self):
        config = HazardConfig()
        assert config.default_speed == 160
        assert config.speed_tolerance == 12
        assert config.clamp_factor == 1.1
        assert config.max_fall_speed == 900
        assert config.reset_margin == 200


class TestPickupConfig:
    def test_bob_parameters(self):
        config = PickupConfig()
        assert config.bob_speed == 0.0035
        assert config.bob_range == 10


class TestGameConfig:
    def test_default_creation(self):
        config = GameConfig()
        assert isinstance(config.physics, PhysicsConfig)
        assert isinstance(config.player, PlayerConfig)
        assert config.fps == 60
        assert (config.screen_width, config.screen_height) == (1280, 720)

    def test_nested_roundtrip(self):
        original = GameConfig(player=PlayerConfig(max_hearts=4), fps=30)
        restored = GameConfig.from_dict(original.to_dict())
        assert restored.player.max_hearts == 4
        assert restored.fps == 30
        assert restored.physics == original.physics

    def test_full_roundtrip(self):
        original = GameConfig(
            player=PlayerConfig(width=48.0, hurt_alpha=0.4, flicker_period=80.0, hurt_tint=(255, 0, 0)),
            hazards=HazardConfig(radius=32.0, bounce=0.3),
            pickups=PickupConfig(size=36.0, bob_range=6.0),
            bounds=WorldBounds(max_x=3200.0),
            screen_width=960,
        )
        restored = GameConfig.from_dict(original.to_dict())
        assert restored == original
        assert restored.player.hurt_tint == (255, 0, 0)
        assert restored.bounds.max_x == 3200

    def test_preset_roundtrip(self):
        for config in CONFIGS.values():
            assert GameConfig.from_dict(config.to_dict()) == config

    def test_from_empty_dict(self):
        config = GameConfig.from_dict({})
        assert config.player.max_hearts == 3


class TestPresets:
    def test_known_presets(self):
        assert set(CONFIGS) == {"default", "casual", "hardcore"}

    def test_get_config_default(self):
        assert get_config() is CONFIGS["default"]
        assert get_config("casual").player.max_hearts == 5

    def test_hardcore(self):
        config = get_config("hardcore")
        assert config.player.max_hearts == 1
        assert config.player.coyote_time == 0

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="casual"):
            get_config("nightmare")
