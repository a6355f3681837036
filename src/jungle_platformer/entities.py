"""Level entities: terrain, ladders, pickups, the goal.

Each entity wraps a pymunk shape with game-specific behavior. The player and
the barrel hazard have their own modules because they carry controllers.
"""

import math
import pymunk
from typing import Tuple, Optional

from .physics import (
    PhysicsWorld,
    COLLISION_TERRAIN,
    COLLISION_GOAL,
    COLLISION_PICKUP,
    COLLISION_LADDER,
)
from .config import PickupConfig, TILE_HEIGHT, LADDER_WIDTH


def _box_bounds(x: float, y: float, width: float, height: float) -> Tuple[float, float, float, float]:
    half_w = width / 2
    half_h = height / 2
    return (x - half_w, y - half_h, x + half_w, y + half_h)


class Platform:
    """Solid run of one or more adjacent terrain tiles.

    Adjacent tiles on the same row are merged into a single box so that
    bodies sliding along the surface never catch on tile seams.
    """

    def __init__(
        self,
        physics: PhysicsWorld,
        x: float,
        y: float,
        width: float,
        height: float = TILE_HEIGHT,
        tiles: int = 1,
        ground: bool = False,
    ):
        """Create terrain at given position.

        Args:
            physics: The physics world
            x, y: Center position
            width: Total width of the run
            height: Tile height
            tiles: Number of tiles merged into this run
            ground: Whether this run belongs to the ground row
        """
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.tiles = tiles
        self.ground = ground

        self.shape = physics.create_static_box(
            x, y, width, height,
            collision_type=COLLISION_TERRAIN,
            friction=1.0,
        )

    @property
    def top(self) -> float:
        """Walkable surface height."""
        return self.y - self.height / 2

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get (left, top, right, bottom) bounds in screen coordinates."""
        return _box_bounds(self.x, self.y, self.width, self.height)


class Ladder:
    """Overlap-only climb zone spanning two surfaces."""

    def __init__(
        self,
        physics: PhysicsWorld,
        x: float,
        top: float,
        bottom: float,
        width: float = LADDER_WIDTH,
    ):
        self.x = x
        self.top = top
        self.bottom = bottom
        self.width = width

        self.shape = physics.create_static_box(
            x, self.y, width, self.height,
            collision_type=COLLISION_LADDER,
            friction=0.0,
            sensor=True,
        )

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def y(self) -> float:
        """Vertical centre of the zone."""
        return self.top + self.height / 2

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return _box_bounds(self.x, self.y, self.width, self.height)


class Pickup:
    """Collectible that bobs in place and disappears on contact.

    Uses a kinematic body so the bobbing moves the sensor along with the
    sprite. A pickup is collected at most once and never respawns.
    """

    def __init__(
        self,
        physics: PhysicsWorld,
        x: float,
        y: float,
        config: Optional[PickupConfig] = None,
    ):
        """Create pickup.

        Args:
            physics: The physics world
            x, y: Rest position (centre of the bob)
            config: Size and bob parameters. Uses defaults if None.
        """
        self.physics = physics
        self.config = config or PickupConfig()
        self.base_y = y
        self._elapsed = 0.0
        self._active = True

        self.body = pymunk.Body(body_type=pymunk.Body.KINEMATIC)
        self.body.position = (x, y)
        self.shape = pymunk.Poly.create_box(self.body, (self.config.size, self.config.size))
        self.shape.collision_type = COLLISION_PICKUP
        self.shape.sensor = True
        physics.add_body(self.body, self.shape)

    @property
    def x(self) -> float:
        return self.body.position.x

    @property
    def y(self) -> float:
        return self.body.position.y

    @property
    def active(self) -> bool:
        """False once collected."""
        return self._active

    def update(self, delta_ms: float) -> None:
        """Advance the bob animation."""
        if not self._active:
            return
        self._elapsed += delta_ms
        offset = math.sin(self._elapsed * self.config.bob_speed) * self.config.bob_range
        self.body.position = (self.body.position.x, self.base_y + offset)

    def collect(self) -> bool:
        """Deactivate and leave the physics world. Returns False if already collected."""
        if not self._active:
            return False
        self._active = False
        self.physics.remove_body(self.body)
        return True

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return _box_bounds(self.x, self.y, self.config.size, self.config.size)


class Goal:
    """Level exit. Overlap-only, immovable, anchored at its bottom edge.

    Reports ``reached`` when the player enters; the simulation decides what
    completion means.
    """

    SPRITE_WIDTH = 128.0
    SPRITE_HEIGHT = 192.0

    def __init__(
        self,
        physics: PhysicsWorld,
        x: float,
        y: float,
        width: float = SPRITE_WIDTH * 0.6,
        height: float = SPRITE_HEIGHT * 0.8,
    ):
        """Create goal area.

        Args:
            physics: The physics world
            x: Horizontal centre
            y: Bottom edge
            width, height: Trigger area dimensions
        """
        self.physics = physics
        self.x = x
        self.y = y - height / 2
        self.anchor_y = y
        self.width = width
        self.height = height
        self.reached = False
        self.enabled = True

        self.shape = physics.create_static_box(
            x, self.y, width, height,
            collision_type=COLLISION_GOAL,
            friction=0.0,
            sensor=True,
        )

    def disable(self) -> None:
        """Stop reporting contacts (after the level is completed)."""
        if not self.enabled:
            return
        self.enabled = False
        self.physics.remove_shape(self.shape)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return _box_bounds(self.x, self.y, self.width, self.height)
