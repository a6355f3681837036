"""Physics system using pymunk for the platformer.

Wraps a pymunk.Space with the primitives the gameplay layer relies on:
gravity integration, solid and overlap-only collision categories, an
on-floor query, per-frame contact buffers, and overlap queries. Coordinates
are screen-style (y grows downward), so gravity is positive.
"""

import pymunk
from typing import Tuple, Optional, List, NamedTuple
from dataclasses import dataclass

from .config import WorldBounds


# Collision types for different entity categories
COLLISION_PLAYER = 1
COLLISION_TERRAIN = 2
COLLISION_HAZARD = 3
COLLISION_GOAL = 4
COLLISION_PICKUP = 5
COLLISION_LADDER = 6
COLLISION_BOUNDARY = 7

# Shapes sharing a non-zero group never collide with each other
HAZARD_GROUP = 1

# A terrain contact counts as floor when the normal from the body into the
# terrain points at least this much downward
FLOOR_NORMAL_THRESHOLD = 0.5


@dataclass
class PhysicsParams:
    """Physics parameters shared by every body in the world."""
    gravity: float = 1500.0  # px/s^2, positive = down
    substeps: int = 3


class Contacts(NamedTuple):
    """Player contacts recorded since the last drain."""
    hazards: List[pymunk.Shape]
    pickups: List[pymunk.Shape]
    goals: List[pymunk.Shape]


class PhysicsWorld:
    """Manages the pymunk physics simulation.

    Wraps pymunk.Space with game-specific configuration and helpers.
    """

    def __init__(self, params: Optional[PhysicsParams] = None):
        """Initialize physics world with given parameters.

        Args:
            params: Physics parameters. Uses defaults if None.
        """
        self.params = params or PhysicsParams()

        self.space = pymunk.Space()
        self.space.gravity = (0, self.params.gravity)

        # body -> terrain shapes it is currently standing on
        self._floor_contacts: dict = {}

        # Contact buffers, drained once per frame (insertion ordered, no repeats)
        self._hazard_contacts: dict = {}
        self._pickup_contacts: dict = {}
        self._goal_contacts: dict = {}

        self._setup_collision_handlers()

    def _setup_collision_handlers(self) -> None:
        """Configure collision callbacks between entity types."""
        # Player <-> Terrain: floor tracking (runs every step while touching)
        self.space.on_collision(
            collision_type_a=COLLISION_PLAYER,
            collision_type_b=COLLISION_TERRAIN,
            pre_solve=self._player_terrain_pre_solve,
            separate=self._player_terrain_separate,
        )

        # Player <-> Hazard: solid, reported every step while touching
        self.space.on_collision(
            collision_type_a=COLLISION_PLAYER,
            collision_type_b=COLLISION_HAZARD,
            pre_solve=self._player_hazard_pre_solve,
        )

        # Player <-> Pickup / Goal: overlap-only, reported on contact start
        self.space.on_collision(
            collision_type_a=COLLISION_PLAYER,
            collision_type_b=COLLISION_PICKUP,
            begin=self._player_pickup_begin,
        )
        self.space.on_collision(
            collision_type_a=COLLISION_PLAYER,
            collision_type_b=COLLISION_GOAL,
            begin=self._player_goal_begin,
        )

        # Hazards pass through world walls so they can leave and be reset
        self.space.on_collision(
            collision_type_a=COLLISION_HAZARD,
            collision_type_b=COLLISION_BOUNDARY,
            begin=self._ignore_collision,
        )

    def _player_terrain_pre_solve(
        self, arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        """Track whether the player rests on this terrain shape.

        Normal points from shape_a (player) to shape_b (terrain); standing on
        top of terrain means it points down (+y).
        """
        player_shape, terrain_shape = arbiter.shapes
        floors = self._floor_contacts.setdefault(player_shape.body, set())
        if arbiter.contact_point_set.normal.y > FLOOR_NORMAL_THRESHOLD:
            floors.add(terrain_shape)
        else:
            floors.discard(terrain_shape)

    def _player_terrain_separate(
        self, arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        player_shape, terrain_shape = arbiter.shapes
        floors = self._floor_contacts.get(player_shape.body)
        if floors:
            floors.discard(terrain_shape)

    def _player_hazard_pre_solve(
        self, arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        self._hazard_contacts[arbiter.shapes[1]] = None

    def _player_pickup_begin(
        self, arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        self._pickup_contacts[arbiter.shapes[1]] = None
        arbiter.process_collision = False

    def _player_goal_begin(
        self, arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        self._goal_contacts[arbiter.shapes[1]] = None
        arbiter.process_collision = False

    @staticmethod
    def _ignore_collision(
        arbiter: pymunk.Arbiter, _space: pymunk.Space, _data
    ) -> None:
        arbiter.process_collision = False

    def is_on_floor(self, body: pymunk.Body) -> bool:
        """Check if a body is currently supported by terrain."""
        return bool(self._floor_contacts.get(body))

    def drain_contacts(self) -> Contacts:
        """Return and clear the player contacts recorded since the last call."""
        contacts = Contacts(
            hazards=list(self._hazard_contacts),
            pickups=list(self._pickup_contacts),
            goals=list(self._goal_contacts),
        )
        self._hazard_contacts.clear()
        self._pickup_contacts.clear()
        self._goal_contacts.clear()
        return contacts

    def overlaps(self, shape: pymunk.Shape, collision_type: int) -> bool:
        """Whether ``shape``'s bounding box overlaps any shape of ``collision_type``.

        Sensor shapes are included, which is what overlap-only zones need.
        """
        bb = shape.cache_bb()
        for other in self.space.bb_query(bb, pymunk.ShapeFilter()):
            if other is not shape and other.collision_type == collision_type:
                return True
        return False

    def step(self, dt: float) -> None:
        """Advance physics simulation by dt seconds.

        Args:
            dt: Time step in seconds. Typically 1/60 for 60fps.
        """
        substeps = self.params.substeps
        for _ in range(substeps):
            self.space.step(dt / substeps)

    def add_body(self, body: pymunk.Body, *shapes: pymunk.Shape) -> None:
        """Add a body and its shapes to the physics world."""
        self.space.add(body)
        for shape in shapes:
            self.space.add(shape)

    def remove_body(self, body: pymunk.Body) -> None:
        """Remove a body and all its shapes from the physics world."""
        for shape in body.shapes:
            self.space.remove(shape)
        self.space.remove(body)
        self._floor_contacts.pop(body, None)

    def remove_shape(self, shape: pymunk.Shape) -> None:
        """Remove a shape from the physics world (for static shapes)."""
        self.space.remove(shape)
        self._hazard_contacts.pop(shape, None)
        self._pickup_contacts.pop(shape, None)
        self._goal_contacts.pop(shape, None)

    def create_static_segment(
        self,
        p1: Tuple[float, float],
        p2: Tuple[float, float],
        thickness: float = 5.0,
        collision_type: int = COLLISION_BOUNDARY,
        friction: float = 0.0,
    ) -> pymunk.Shape:
        """Create a static line segment (useful for walls).

        Args:
            p1: Start point (x, y)
            p2: End point (x, y)
            thickness: Line thickness for collision
            collision_type: Collision category
            friction: Surface friction coefficient

        Returns:
            The created shape (already added to space)
        """
        body = self.space.static_body
        shape = pymunk.Segment(body, p1, p2, thickness)
        shape.collision_type = collision_type
        shape.friction = friction
        self.space.add(shape)
        return shape

    def create_static_box(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        collision_type: int = COLLISION_TERRAIN,
        friction: float = 1.0,
        sensor: bool = False,
    ) -> pymunk.Shape:
        """Create a static rectangle.

        Args:
            x, y: Center position
            width, height: Dimensions
            collision_type: Collision category
            friction: Surface friction coefficient
            sensor: Overlap-only (reports contact, never blocks)

        Returns:
            The created shape (already added to space)
        """
        body = self.space.static_body
        half_w, half_h = width / 2, height / 2
        vertices = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w, half_h),
            (-half_w, half_h),
        ]
        shape = pymunk.Poly(body, vertices, transform=pymunk.Transform.translation(x, y))
        shape.collision_type = collision_type
        shape.friction = friction
        # Bounce is the product of both shapes' elasticity, so terrain passes
        # each moving body's own value through
        shape.elasticity = 1.0
        shape.sensor = sensor
        self.space.add(shape)
        return shape

    def create_world_bounds(self, bounds: WorldBounds) -> List[pymunk.Shape]:
        """Wall off the playable region. Only the player collides with the walls."""
        corners = [
            (bounds.min_x, bounds.min_y),
            (bounds.max_x, bounds.min_y),
            (bounds.max_x, bounds.max_y),
            (bounds.min_x, bounds.max_y),
        ]
        walls = []
        for i, p1 in enumerate(corners):
            p2 = corners[(i + 1) % len(corners)]
            walls.append(self.create_static_segment(p1, p2, thickness=1.0))
        return walls

    def set_gravity(self, gravity: float) -> None:
        """Update gravity mid-simulation.

        Args:
            gravity: New gravity value (positive = down)
        """
        self.params.gravity = gravity
        self.space.gravity = (0, gravity)

    @property
    def gravity(self) -> float:
        return self.params.gravity
