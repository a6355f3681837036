"""Configuration system for the jungle platformer.

Tunables are grouped by the subsystem that consumes them:
- PhysicsConfig: gravity and the velocity limits of the player body
- PlayerConfig: movement feel, climbing, damage windows
- HazardConfig: barrel speed policy and reset behaviour
- PickupConfig: collectible size and bobbing

World geometry (game size, tile size, ground row) is fixed for every level and
lives in module constants so level data can be authored against it.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, Optional


# === WORLD GEOMETRY (identical across levels) ===

GAME_WIDTH = 1280
GAME_HEIGHT = 720

WORLD_MIN_X = 0.0
WORLD_MIN_Y = 0.0
WORLD_MAX_X = float(GAME_WIDTH * 5)
WORLD_MAX_Y = float(GAME_HEIGHT)

TILE_WIDTH = 128.0
TILE_HEIGHT = 64.0
HALF_TILE_HEIGHT = TILE_HEIGHT / 2

GROUND_Y = GAME_HEIGHT - 32.0  # Centre of the ground tile row
GROUND_SURFACE_Y = GROUND_Y - HALF_TILE_HEIGHT  # Walkable top of the ground

MIN_LADDER_HEIGHT = 24.0  # Ladders this short or shorter are not built
LADDER_WIDTH = 64.0
LADDER_GAP_TOLERANCE = 0.1  # Fraction of tile width around a ladder that stays open


@dataclass(frozen=True)
class WorldBounds:
    """Axis-aligned playable region."""
    min_x: float = WORLD_MIN_X
    min_y: float = WORLD_MIN_Y
    max_x: float = WORLD_MAX_X
    max_y: float = WORLD_MAX_Y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> Dict[str, float]:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "WorldBounds":
        return cls(
            min_x=d.get("min_x", WORLD_MIN_X),
            min_y=d.get("min_y", WORLD_MIN_Y),
            max_x=d.get("max_x", WORLD_MAX_X),
            max_y=d.get("max_y", WORLD_MAX_Y),
        )


@dataclass
class PhysicsConfig:
    """Global physics parameters.

    Screen coordinates: y grows downward, so gravity is positive and jump
    velocities are negative.
    """
    gravity: float = 1500.0  # px/s^2
    player_max_velocity_x: float = 360.0  # px/s
    player_max_velocity_y: float = 1200.0  # px/s
    jump_velocity: float = -650.0  # px/s
    double_jump_velocity: float = -560.0  # px/s
    substeps: int = 3

    def to_dict(self) -> Dict[str, float]:
        return {
            "gravity": self.gravity,
            "player_max_velocity_x": self.player_max_velocity_x,
            "player_max_velocity_y": self.player_max_velocity_y,
            "jump_velocity": self.jump_velocity,
            "double_jump_velocity": self.double_jump_velocity,
            "substeps": self.substeps,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PhysicsConfig":
        return cls(
            gravity=d.get("gravity", 1500.0),
            player_max_velocity_x=d.get("player_max_velocity_x", 360.0),
            player_max_velocity_y=d.get("player_max_velocity_y", 1200.0),
            jump_velocity=d.get("jump_velocity", -650.0),
            double_jump_velocity=d.get("double_jump_velocity", -560.0),
            substeps=int(d.get("substeps", 3)),
        )


@dataclass
class PlayerConfig:
    """Player controller tuning.

    Times are in milliseconds because the controller consumes frame deltas
    in milliseconds.
    """
    # Movement
    run_acceleration: float = 1400.0  # px/s^2 while a direction is held
    run_drag: float = 1800.0  # px/s^2 deceleration with no acceleration
    min_move_speed: float = 40.0  # Near-stopped threshold (px/s)
    floor_bounce_threshold: float = 10.0  # |vy| below this is zeroed on the floor

    # Climbing and jumping
    climb_speed: float = 220.0  # px/s
    climb_jump_factor: float = 0.85  # Fraction of jump velocity when leaving a ladder
    coyote_time: float = 120.0  # ms

    # Damage
    max_hearts: int = 3
    invulnerability_duration: float = 1200.0  # ms
    hurt_duration: float = 320.0  # ms
    hurt_alpha: float = 0.6  # Opacity on the dim half of the flicker
    flicker_period: float = 100.0  # ms per flicker half-cycle
    hurt_tint: Tuple[int, int, int] = (255, 138, 138)
    shake_duration: float = 200.0  # ms
    shake_intensity: float = 0.01
    knockback_x: float = 280.0  # px/s, sign chosen by side of contact
    knockback_y: float = -520.0  # px/s

    # Collision body
    width: float = 40.0
    height: float = 64.0
    mass: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_acceleration": self.run_acceleration,
            "run_drag": self.run_drag,
            "min_move_speed": self.min_move_speed,
            "climb_speed": self.climb_speed,
            "climb_jump_factor": self.climb_jump_factor,
            "floor_bounce_threshold": self.floor_bounce_threshold,
            "coyote_time": self.coyote_time,
            "max_hearts": self.max_hearts,
            "invulnerability_duration": self.invulnerability_duration,
            "hurt_duration": self.hurt_duration,
            "hurt_alpha": self.hurt_alpha,
            "flicker_period": self.flicker_period,
            "hurt_tint": list(self.hurt_tint),
            "shake_duration": self.shake_duration,
            "shake_intensity": self.shake_intensity,
            "knockback_x": self.knockback_x,
            "knockback_y": self.knockback_y,
            "width": self.width,
            "height": self.height,
            "mass": self.mass,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PlayerConfig":
        return cls(
            run_acceleration=d.get("run_acceleration", 1400.0),
            run_drag=d.get("run_drag", 1800.0),
            min_move_speed=d.get("min_move_speed", 40.0),
            floor_bounce_threshold=d.get("floor_bounce_threshold", 10.0),
            climb_speed=d.get("climb_speed", 220.0),
            climb_jump_factor=d.get("climb_jump_factor", 0.85),
            coyote_time=d.get("coyote_time", 120.0),
            max_hearts=int(d.get("max_hearts", 3)),
            invulnerability_duration=d.get("invulnerability_duration", 1200.0),
            hurt_duration=d.get("hurt_duration", 320.0),
            hurt_alpha=d.get("hurt_alpha", 0.6),
            flicker_period=d.get("flicker_period", 100.0),
            hurt_tint=tuple(d.get("hurt_tint", (255, 138, 138))),
            shake_duration=d.get("shake_duration", 200.0),
            shake_intensity=d.get("shake_intensity", 0.01),
            knockback_x=d.get("knockback_x", 280.0),
            knockback_y=d.get("knockback_y", -520.0),
            width=d.get("width", 40.0),
            height=d.get("height", 64.0),
            mass=d.get("mass", 1.0),
        )


@dataclass
class HazardConfig:
    """Rolling barrel tuning."""
    default_speed: float = 160.0  # Baseline magnitude when a spawn gives speed 0
    speed_tolerance: float = 12.0  # Allowed deviation before snapping back (px/s)
    clamp_factor: float = 1.1  # Headroom over baseline for bounce-induced speedup
    max_fall_speed: float = 900.0  # px/s
    radius: float = 28.0
    bounce: float = 0.1
    mass: float = 1.0
    reset_margin: float = 200.0  # Distance past the bounds before respawning
    rotation_divisor: float = 220.0  # px/s per radian of roll per 60 Hz frame
    reference_frame_ms: float = 16.67

    def to_dict(self) -> Dict[str, float]:
        return {
            "default_speed": self.default_speed,
            "speed_tolerance": self.speed_tolerance,
            "clamp_factor": self.clamp_factor,
            "max_fall_speed": self.max_fall_speed,
            "radius": self.radius,
            "bounce": self.bounce,
            "mass": self.mass,
            "reset_margin": self.reset_margin,
            "rotation_divisor": self.rotation_divisor,
            "reference_frame_ms": self.reference_frame_ms,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "HazardConfig":
        return cls(
            default_speed=d.get("default_speed", 160.0),
            speed_tolerance=d.get("speed_tolerance", 12.0),
            clamp_factor=d.get("clamp_factor", 1.1),
            max_fall_speed=d.get("max_fall_speed", 900.0),
            radius=d.get("radius", 28.0),
            bounce=d.get("bounce", 0.1),
            mass=d.get("mass", 1.0),
            reset_margin=d.get("reset_margin", 200.0),
            rotation_divisor=d.get("rotation_divisor", 220.0),
            reference_frame_ms=d.get("reference_frame_ms", 16.67),
        )


@dataclass
class PickupConfig:
    """Collectible size and idle animation."""
    size: float = 28.0
    bob_speed: float = 0.0035  # rad/ms
    bob_range: float = 10.0  # px

    def to_dict(self) -> Dict[str, float]:
        return {
            "size": self.size,
            "bob_speed": self.bob_speed,
            "bob_range": self.bob_range,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PickupConfig":
        return cls(
            size=d.get("size", 28.0),
            bob_speed=d.get("bob_speed", 0.0035),
            bob_range=d.get("bob_range", 10.0),
        )


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    hazards: HazardConfig = field(default_factory=HazardConfig)
    pickups: PickupConfig = field(default_factory=PickupConfig)
    bounds: WorldBounds = field(default_factory=WorldBounds)

    # Display settings
    screen_width: int = GAME_WIDTH
    screen_height: int = GAME_HEIGHT
    fps: int = 60

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "player": self.player.to_dict(),
            "hazards": self.hazards.to_dict(),
            "pickups": self.pickups.to_dict(),
            "bounds": self.bounds.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Create from a dictionary produced by to_dict (missing keys use defaults)."""
        return cls(
            physics=PhysicsConfig.from_dict(d.get("physics", {})),
            player=PlayerConfig.from_dict(d.get("player", {})),
            hazards=HazardConfig.from_dict(d.get("hazards", {})),
            pickups=PickupConfig.from_dict(d.get("pickups", {})),
            bounds=WorldBounds.from_dict(d.get("bounds", {})),
            screen_width=int(d.get("screen_width", GAME_WIDTH)),
            screen_height=int(d.get("screen_height", GAME_HEIGHT)),
            fps=int(d.get("fps", 60)),
        )


def get_config(name: Optional[str] = None) -> GameConfig:
    """Look up a preset by name ("default" when None)."""
    key = name or "default"
    if key not in CONFIGS:
        raise KeyError(f"Unknown config preset: {key!r} (known: {', '.join(sorted(CONFIGS))})")
    return CONFIGS[key]


# Predefined configurations
CONFIGS = {
    # Shipped tuning
    "default": GameConfig(),

    # More hearts, longer recovery, forgiving ledges
    "casual": GameConfig(player=PlayerConfig(
        max_hearts=5,
        invulnerability_duration=1800.0,
        coyote_time=180.0,
    )),

    # One hit and no ledge grace
    "hardcore": GameConfig(
        player=PlayerConfig(max_hearts=1, coyote_time=0.0),
        hazards=HazardConfig(default_speed=220.0),
    ),
}
