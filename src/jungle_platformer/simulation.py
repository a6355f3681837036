"""One playable level session, independent of any window.

The simulation owns the physics world, the placed level, the player and the
session flags. A front end feeds it an InputSnapshot and a frame delta once
per frame and reads ``get_state`` (or subscribes to ``events``) for display.
"""

from typing import Optional, Dict, Any

from .config import GameConfig
from .controls import InputSnapshot
from .events import EventEmitter, PLAYER_DIED, LEVEL_COMPLETE
from .level_builder import LevelBuilder, LevelObjects, clamp_level_index
from .levels import LEVEL_DEFINITIONS
from .physics import PhysicsWorld, PhysicsParams, Contacts, COLLISION_LADDER
from .player import Player, Animation


class Simulation:
    """Level session: physics, level objects, player and end-of-level flags."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level_index: int = 0,
        levels=LEVEL_DEFINITIONS,
        events: Optional[EventEmitter] = None,
    ):
        """Build the requested level.

        Args:
            config: Game configuration. Uses defaults if None.
            level_index: Level to load, clamped into the available range.
            levels: Level definitions to play.
            events: Signal bus shared with the player. A private one if None.

        Raises:
            LevelDefinitionError: the selected level data is broken.
        """
        self.config = config or GameConfig()
        self.levels = tuple(levels)
        self.events = events or EventEmitter()
        self.events.on(PLAYER_DIED, self._on_player_died)

        self.physics: Optional[PhysicsWorld] = None
        self.level: Optional[LevelObjects] = None
        self.player: Optional[Player] = None
        self.level_index = 0

        self.paused = False
        self.game_over = False
        self.level_complete = False
        self.elapsed_ms = 0.0
        self.steps = 0

        self.load_level(level_index)

    # === LEVEL LIFECYCLE ===

    def load_level(self, level_index: int) -> None:
        """Tear down the current session and build a fresh one."""
        index = clamp_level_index(level_index, len(self.levels))

        physics = PhysicsWorld(PhysicsParams(
            gravity=self.config.physics.gravity,
            substeps=self.config.physics.substeps,
        ))
        physics.create_world_bounds(self.config.bounds)

        builder = LevelBuilder(physics, self.config, self.levels)
        level = builder.build(index)

        self.physics = physics
        self.level = level
        self.level_index = level.level_index
        self.player = Player(
            physics,
            level.spawn_point,
            physics_config=self.config.physics,
            config=self.config.player,
            events=self.events,
        )

        self._hazards_by_shape = {h.shape: h for h in level.hazards}
        self._pickups_by_shape = {p.shape: p for p in level.pickups}

        self.paused = False
        self.game_over = False
        self.level_complete = False
        self.elapsed_ms = 0.0
        self.steps = 0

    def restart(self) -> None:
        """Reload the current level from scratch."""
        self.load_level(self.level_index)

    def has_next_level(self) -> bool:
        return self.level_index + 1 < len(self.levels)

    def advance_level(self) -> bool:
        """Load the next level. Only allowed once the current one is complete.

        Returns:
            True if a new level was loaded.
        """
        if not self.level_complete or not self.has_next_level():
            return False
        self.load_level(self.level_index + 1)
        return True

    def toggle_pause(self) -> bool:
        """Flip the pause flag unless the level has ended. Returns the new flag."""
        if self.game_over or self.level_complete:
            return self.paused
        self.paused = not self.paused
        return self.paused

    @property
    def ended(self) -> bool:
        return self.game_over or self.level_complete

    @property
    def level_name(self) -> str:
        return self.level.level_name

    # === PER-FRAME UPDATE ===

    def step(self, inputs: Optional[InputSnapshot], delta_ms: float) -> None:
        """Advance the session by one frame.

        Args:
            inputs: Key state for this frame. None skips the player update.
            delta_ms: Frame time in milliseconds.
        """
        if self.paused or self.ended:
            return

        self.physics.step(delta_ms / 1000.0)

        for hazard in self.level.hazards:
            hazard.update(delta_ms)

        for pickup in self.level.pickups:
            if pickup.active:
                pickup.update(delta_ms)

        on_ladder = self.physics.overlaps(self.player.shape, COLLISION_LADDER)
        self.player.update(inputs, delta_ms, on_ladder=on_ladder)

        self._resolve_contacts(self.physics.drain_contacts())

        if not self.ended:
            self.elapsed_ms += delta_ms
        self.steps += 1

    def _resolve_contacts(self, contacts: Contacts) -> None:
        for shape in contacts.pickups:
            pickup = self._pickups_by_shape.get(shape)
            if pickup is not None and pickup.collect():
                self.player.collect_pickup()

        for shape in contacts.hazards:
            hazard = self._hazards_by_shape.get(shape)
            if hazard is not None:
                self._hit_player(hazard)

        if contacts.goals:
            self._complete_level()

    def _hit_player(self, hazard) -> None:
        """Damage and knock the player away from the hazard."""
        player = self.player
        if player.is_invulnerable():
            return

        player.take_damage()
        direction = 1 if player.x >= hazard.x else -1
        player.apply_knockback(
            player.config.knockback_x * direction,
            player.config.knockback_y,
        )

    def _complete_level(self) -> None:
        if self.level_complete or self.game_over:
            return
        self.level_complete = True
        self.paused = False
        self.level.goal.reached = True
        self.level.goal.disable()
        self.player.play(Animation.CELEBRATE)
        self.events.emit(LEVEL_COMPLETE, self.level_index)

    def _on_player_died(self) -> None:
        if self.game_over:
            return
        self.game_over = True
        self.paused = False
        self.player.play(Animation.DEAD)

    # === OBSERVATION ===

    def get_state(self) -> Dict[str, Any]:
        """Snapshot for HUD and debug overlays."""
        player = self.player
        return {
            "level_index": self.level_index,
            "level_name": self.level_name,
            "has_next_level": self.has_next_level(),
            "paused": self.paused,
            "game_over": self.game_over,
            "level_complete": self.level_complete,
            "elapsed_ms": self.elapsed_ms,
            "steps": self.steps,
            "hearts": player.hearts,
            "max_hearts": player.max_hearts,
            "pickups": player.pickup_count,
            "pickups_total": len(self.level.pickups),
            "player_position": player.position,
            "player_velocity": player.velocity,
            "player_on_floor": player.is_on_floor,
            "player_animation": player.animation.value,
            "player_status": player.status,
        }
