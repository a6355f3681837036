"""Rolling barrel hazard.

A barrel rolls toward decreasing x at a fixed baseline speed. Terrain bounces
can nudge its velocity, but anything beyond a small tolerance is snapped back
to the baseline. When it leaves the world (falls below the floor or rolls off
the left edge) it teleports back to its spawn point and rolls again; barrels
are never destroyed.
"""

import pymunk
from typing import Tuple, Optional

from .physics import PhysicsWorld, COLLISION_HAZARD, HAZARD_GROUP
from .config import HazardConfig, WorldBounds


class Barrel:
    """Hazard controller wrapping a dynamic circle body.

    Contact with the player is resolved by the simulation, not here.
    """

    def __init__(
        self,
        physics: PhysicsWorld,
        x: float,
        y: float,
        speed: float = 0.0,
        config: Optional[HazardConfig] = None,
        bounds: Optional[WorldBounds] = None,
    ):
        """Create barrel at its spawn point.

        Args:
            physics: The physics world
            x, y: Spawn position (centre)
            speed: Configured speed. 0 means the default baseline; the sign is
                ignored because barrels always roll left.
            config: Hazard tuning. Uses defaults if None.
            bounds: Playable region used for the respawn check.
        """
        self.physics = physics
        self.config = config or HazardConfig()
        self.world_bounds = bounds or WorldBounds()
        self.spawn_point: Tuple[float, float] = (x, y)

        intended = speed or 0.0
        if intended == 0:
            intended = self.config.default_speed
        self.baseline_velocity_x = -abs(intended)

        self.max_velocity_x = max(abs(self.baseline_velocity_x), self.config.default_speed) * self.config.clamp_factor
        self.max_velocity_y = self.config.max_fall_speed

        # Rotation is visual only, so the body itself never spins
        self.body = pymunk.Body(self.config.mass, float("inf"))
        self.body.position = (x, y)
        self.body.velocity = (self.baseline_velocity_x, 0)
        self.body.velocity_func = self._velocity_func

        self.shape = pymunk.Circle(self.body, self.config.radius)
        self.shape.collision_type = COLLISION_HAZARD
        self.shape.elasticity = self.config.bounce
        self.shape.friction = 0.0
        self.shape.filter = pymunk.ShapeFilter(group=HAZARD_GROUP)

        physics.add_body(self.body, self.shape)

        self.rotation = 0.0
        self.reset_count = 0

    def _velocity_func(self, body, gravity, damping, dt):
        """Integrate gravity, then clamp to the velocity limits."""
        pymunk.Body.update_velocity(body, gravity, damping, dt)
        vx, vy = body.velocity
        vx = max(-self.max_velocity_x, min(self.max_velocity_x, vx))
        vy = max(-self.max_velocity_y, min(self.max_velocity_y, vy))
        body.velocity = (vx, vy)

    @property
    def position(self) -> Tuple[float, float]:
        return self.body.position.x, self.body.position.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.body.velocity.x, self.body.velocity.y

    @property
    def x(self) -> float:
        return self.body.position.x

    @property
    def y(self) -> float:
        return self.body.position.y

    def update(self, delta_ms: float) -> None:
        """Per-frame enforcement: baseline speed, respawn, visual roll.

        Args:
            delta_ms: Frame time in milliseconds.
        """
        vx, vy = self.body.velocity
        if abs(vx - self.baseline_velocity_x) > self.config.speed_tolerance:
            self.body.velocity = (self.baseline_velocity_x, vy)

        if self.is_out_of_bounds():
            self.reset_position()

        frames = delta_ms / self.config.reference_frame_ms
        self.rotation += (-self.body.velocity.x / self.config.rotation_divisor) * frames

    def is_out_of_bounds(self) -> bool:
        margin = self.config.reset_margin
        x, y = self.position
        return y > self.world_bounds.max_y + margin or x < self.world_bounds.min_x - margin

    def reset_position(self) -> None:
        """Teleport to spawn and relaunch at baseline speed."""
        self.body.position = self.spawn_point
        self.body.velocity = (self.baseline_velocity_x, 0)
        # Teleports bypass integration, so the spatial index must be refreshed
        self.physics.space.reindex_shapes_for_body(self.body)
        self.reset_count += 1

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        r = self.config.radius
        x, y = self.position
        return (x - r, y - r, x + r, y + r)
