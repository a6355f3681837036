"""Player controller: movement, climbing, jumping, damage.

The controller reads an InputSnapshot each frame and drives a pymunk body
whose velocity integration mimics an arcade body: acceleration while a
direction is held, constant drag otherwise, per-axis velocity caps, and
gravity that can be switched off while climbing.

Presentation state (facing, tint, opacity, animation) is exposed as plain
attributes for whatever draws the player; it never feeds back into physics.
"""

import itertools
import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Optional, Iterator

import pymunk

from .physics import PhysicsWorld, COLLISION_PLAYER
from .config import PhysicsConfig, PlayerConfig
from .controls import InputSnapshot
from .events import (
    EventEmitter,
    PICKUP_COUNT_CHANGED,
    HEARTS_CHANGED,
    PLAYER_DIED,
    CAMERA_SHAKE,
)


class Movement(Enum):
    """How the player is currently supported. Exactly one applies."""
    GROUNDED = "grounded"
    AIRBORNE = "airborne"
    CLIMBING = "climbing"


class Animation(Enum):
    IDLE = "player-idle"
    RUN = "player-run"
    JUMP = "player-jump"
    CLIMB = "player-climb"
    HURT = "player-hurt"
    DEAD = "player-dead"
    CELEBRATE = "player-celebrate"


@dataclass(frozen=True)
class PlayerStatus:
    """Explicit player state.

    Legal combinations:
    - ``running`` only while ``GROUNDED``
    - ``hurt`` and ``invulnerable`` start on the same hit but run out
      independently, so either may outlast the other
    - ``dead`` may coexist with anything
    """
    movement: Movement
    running: bool = False
    hurt: bool = False
    invulnerable: bool = False
    dead: bool = False

    def __post_init__(self):
        if self.running and self.movement is not Movement.GROUNDED:
            raise ValueError(f"running is only valid while grounded, not {self.movement.value}")

    @property
    def grounded_for_jump(self) -> bool:
        """Climbing counts as grounded for jump eligibility."""
        return self.movement in (Movement.GROUNDED, Movement.CLIMBING)

    @classmethod
    def reachable(cls) -> Iterator["PlayerStatus"]:
        """Every legal combination."""
        for movement, running, hurt, invulnerable, dead in itertools.product(
            Movement, (False, True), (False, True), (False, True), (False, True)
        ):
            if running and movement is not Movement.GROUNDED:
                continue
            yield cls(movement, running, hurt, invulnerable, dead)


def resolve_animation(status: PlayerStatus) -> Animation:
    """Pick the animation for a status.

    Priority: Hurt > Climbing > Airborne > Running > Idle. Dead and
    celebrate are applied by the simulation when the level ends.
    """
    if status.hurt:
        return Animation.HURT
    if status.movement is Movement.CLIMBING:
        return Animation.CLIMB
    if status.movement is Movement.AIRBORNE:
        return Animation.JUMP
    if status.running:
        return Animation.RUN
    return Animation.IDLE


class Player:
    """Player entity with movement, climbing and damage handling.

    The simulation calls ``update`` once per frame and only mutates the
    player through ``take_damage``, ``heal``, ``collect_pickup`` and
    ``apply_knockback``.
    """

    def __init__(
        self,
        physics: PhysicsWorld,
        position: Tuple[float, float],
        physics_config: Optional[PhysicsConfig] = None,
        config: Optional[PlayerConfig] = None,
        events: Optional[EventEmitter] = None,
    ):
        """Create player standing at ``position``.

        Args:
            physics: The physics world to add player to
            position: Spawn point (x, feet y)
            physics_config: Gravity and velocity limits. Uses defaults if None.
            config: Controller tuning. Uses defaults if None.
            events: Where signals are raised. A private emitter if None.
        """
        self.physics = physics
        self.physics_config = physics_config or PhysicsConfig()
        self.config = config or PlayerConfig()
        self.events = events or EventEmitter()

        x, feet_y = position
        self.body = pymunk.Body(self.config.mass, float("inf"))  # Stays upright
        self.body.position = (x, feet_y - self.config.height / 2)
        self.body.velocity_func = self._velocity_func

        self.shape = pymunk.Poly.create_box(self.body, (self.config.width, self.config.height))
        self.shape.collision_type = COLLISION_PLAYER
        self.shape.friction = 0.0  # Drag, not contact friction, slows the player
        self.shape.elasticity = 0.0

        physics.add_body(self.body, self.shape)

        # Arcade-style body state
        self.acceleration_x = 0.0
        self.allow_gravity = True

        # Controller state
        self._can_double_jump = False
        self._coyote_timer = 0.0
        self._invulnerable_timer = 0.0
        self._hurt_timer = 0.0
        self._pickup_count = 0
        self._hearts = self.config.max_hearts
        self._climbing = False
        self._dead = False
        self._on_ground = False

        # Presentation
        self.facing_left = False
        self.alpha = 1.0
        self.tint: Optional[Tuple[int, int, int]] = None
        self.animation = Animation.IDLE

    # === PHYSICS ===

    def _velocity_func(self, body, gravity, damping, dt):
        """Arcade integration: acceleration or drag, gravity, then caps."""
        vx, vy = body.velocity

        if self.acceleration_x != 0:
            vx += self.acceleration_x * dt
        elif vx != 0:
            slowdown = self.config.run_drag * dt
            vx = 0.0 if abs(vx) <= slowdown else vx - math.copysign(slowdown, vx)

        if self.allow_gravity:
            vy += gravity.y * dt

        max_vx = self.physics_config.player_max_velocity_x
        max_vy = self.physics_config.player_max_velocity_y
        body.velocity = (
            max(-max_vx, min(max_vx, vx)),
            max(-max_vy, min(max_vy, vy)),
        )

    @property
    def position(self) -> Tuple[float, float]:
        """Current body centre (x, y)."""
        return self.body.position.x, self.body.position.y

    @property
    def velocity(self) -> Tuple[float, float]:
        """Current velocity (vx, vy)."""
        return self.body.velocity.x, self.body.velocity.y

    @property
    def x(self) -> float:
        return self.body.position.x

    @property
    def y(self) -> float:
        return self.body.position.y

    @property
    def is_on_floor(self) -> bool:
        """Whether the body rests on terrain."""
        return self.physics.is_on_floor(self.body)

    def _set_velocity(self, vx: Optional[float] = None, vy: Optional[float] = None) -> None:
        cur_x, cur_y = self.body.velocity
        self.body.velocity = (cur_x if vx is None else vx, cur_y if vy is None else vy)

    # === QUERIES ===

    @property
    def hearts(self) -> int:
        return self._hearts

    @property
    def max_hearts(self) -> int:
        return self.config.max_hearts

    @property
    def pickup_count(self) -> int:
        return self._pickup_count

    @property
    def can_double_jump(self) -> bool:
        return self._can_double_jump

    @property
    def coyote_timer(self) -> float:
        return self._coyote_timer

    @property
    def invulnerable_timer(self) -> float:
        return self._invulnerable_timer

    @property
    def hurt_timer(self) -> float:
        return self._hurt_timer

    @property
    def is_climbing(self) -> bool:
        return self._climbing

    @property
    def is_dead(self) -> bool:
        return self._dead

    def get_hearts(self) -> int:
        return self._hearts

    def get_max_hearts(self) -> int:
        return self.config.max_hearts

    def get_pickup_count(self) -> int:
        return self._pickup_count

    def is_invulnerable(self) -> bool:
        return self._invulnerable_timer > 0

    @property
    def status(self) -> PlayerStatus:
        """Explicit state value for this frame."""
        if self._climbing:
            movement = Movement.CLIMBING
        elif self._on_ground:
            movement = Movement.GROUNDED
        else:
            movement = Movement.AIRBORNE
        running = (
            movement is Movement.GROUNDED
            and abs(self.body.velocity.x) > self.config.min_move_speed
        )
        return PlayerStatus(
            movement=movement,
            running=running,
            hurt=self._hurt_timer > 0,
            invulnerable=self._invulnerable_timer > 0,
            dead=self._dead,
        )

    # === PER-FRAME UPDATE ===

    def update(
        self,
        inputs: Optional[InputSnapshot],
        delta_ms: float,
        on_ladder: bool = False,
    ) -> None:
        """Advance the controller by one frame.

        Args:
            inputs: Key state for this frame. None makes the frame a no-op.
            delta_ms: Frame time in milliseconds.
            on_ladder: Whether the body overlaps a ladder zone.
        """
        if inputs is None:
            return

        # Suppress micro-bounces from repeated tiny floor corrections
        if self.is_on_floor and abs(self.body.velocity.y) < self.config.floor_bounce_threshold:
            self._set_velocity(vy=0.0)

        self._handle_climbing(inputs, on_ladder)

        on_ground = self.is_on_floor
        if self._climbing:
            on_ground = True
            self._can_double_jump = True
            self._coyote_timer = 0.0
        elif on_ground:
            self._can_double_jump = True
            self._coyote_timer = self.config.coyote_time
        elif self._coyote_timer > 0:
            self._coyote_timer -= delta_ms
        self._on_ground = on_ground and not self._climbing

        if not self._climbing:
            self._handle_horizontal_movement(inputs)
        else:
            self.acceleration_x = 0.0
            self._set_velocity(vx=0.0)

        self._handle_jumping(inputs, on_ground)
        self._update_invulnerability(delta_ms)
        self.animation = resolve_animation(self.status)

    def _handle_climbing(self, inputs: InputSnapshot, on_ladder: bool) -> None:
        if not self._climbing:
            if on_ladder and (inputs.up or inputs.down):
                self._start_climbing()
            else:
                return

        if not on_ladder or inputs.horizontal:
            self._stop_climbing()
            return

        velocity_y = 0.0
        if inputs.up:
            velocity_y -= self.config.climb_speed
        if inputs.down:
            velocity_y += self.config.climb_speed
        self._set_velocity(vy=velocity_y)

    def _start_climbing(self) -> None:
        if self._climbing:
            return
        self._climbing = True
        self.allow_gravity = False
        self.body.velocity = (0.0, 0.0)
        self.acceleration_x = 0.0

    def _stop_climbing(self) -> None:
        if not self._climbing:
            return
        self._climbing = False
        self.allow_gravity = True

    def _handle_horizontal_movement(self, inputs: InputSnapshot) -> None:
        if inputs.left == inputs.right:
            self.acceleration_x = 0.0
            if self.is_on_floor and abs(self.body.velocity.x) < self.config.min_move_speed:
                self._set_velocity(vx=0.0)
            return

        direction = -1 if inputs.left else 1
        self.acceleration_x = direction * self.config.run_acceleration

        # Only turn once actually moving, to avoid flicker at low speed
        if abs(self.body.velocity.x) > self.config.min_move_speed:
            self.facing_left = direction < 0

    def _handle_jumping(self, inputs: InputSnapshot, on_ground: bool) -> None:
        if not inputs.any_jump_pressed:
            return

        if self._climbing:
            self._stop_climbing()
            self._set_velocity(vy=self.physics_config.jump_velocity * self.config.climb_jump_factor)
            return

        if on_ground or self._coyote_timer > 0:
            self._set_velocity(vy=self.physics_config.jump_velocity)
            self._can_double_jump = True
            self._coyote_timer = 0.0
        elif self._can_double_jump:
            self._set_velocity(vy=self.physics_config.double_jump_velocity)
            self._can_double_jump = False

    def _update_invulnerability(self, delta_ms: float) -> None:
        if self._hurt_timer > 0:
            self._hurt_timer = max(0.0, self._hurt_timer - delta_ms)

        if self._invulnerable_timer > 0:
            self._invulnerable_timer -= delta_ms
            dim = math.floor(self._invulnerable_timer / self.config.flicker_period) % 2 == 0
            self.alpha = self.config.hurt_alpha if dim else 1.0
            if self._invulnerable_timer <= 0:
                self._invulnerable_timer = 0.0

        if self._invulnerable_timer <= 0:
            self.alpha = 1.0
            if self._hurt_timer <= 0:
                self.tint = None

    # === ENTRY POINTS FOR THE SIMULATION ===

    def collect_pickup(self, amount: int = 1) -> None:
        self._pickup_count += amount
        self.events.emit(PICKUP_COUNT_CHANGED, self._pickup_count)

    def take_damage(self, amount: int = 1) -> None:
        """Lose hearts and start the invulnerability window.

        No-op while invulnerable. Death is signalled once, on the hit that
        empties the last heart.
        """
        if self._invulnerable_timer > 0:
            return

        self._hearts = max(0, min(self.config.max_hearts, self._hearts - amount))
        self._invulnerable_timer = self.config.invulnerability_duration
        self._hurt_timer = self.config.hurt_duration
        self.tint = self.config.hurt_tint
        self.animation = Animation.HURT
        self.events.emit(CAMERA_SHAKE, self.config.shake_duration, self.config.shake_intensity)
        self.events.emit(HEARTS_CHANGED, self._hearts)

        if self._hearts <= 0 and not self._dead:
            self._dead = True
            self.events.emit(PLAYER_DIED)

    def heal(self, amount: int = 1) -> None:
        """Restore hearts up to the maximum. Never revives a dead player."""
        self._hearts = max(0, min(self.config.max_hearts, self._hearts + amount))
        self.events.emit(HEARTS_CHANGED, self._hearts)

    def apply_knockback(self, vx: float, vy: float) -> None:
        """Push the player, leaving any ladder."""
        self._stop_climbing()
        self.body.velocity = (vx, vy)

    def play(self, animation: Animation) -> None:
        """Force an animation (used for level-end poses)."""
        self.animation = animation

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get (left, top, right, bottom) bounds."""
        half_w = self.config.width / 2
        half_h = self.config.height / 2
        x, y = self.position
        return (x - half_w, y - half_h, x + half_w, y + half_h)
