"""Pygame front end: window, keyboard, camera, drawing and HUD.

Wraps a Simulation into a playable game. Everything drawn is a rectangle or
circle so the game runs without any art assets.
"""

import math
import random
from typing import Optional, Tuple, Dict

import pygame

from .config import GameConfig
from .controls import InputTracker, InputSnapshot
from .events import CAMERA_SHAKE, LEVEL_COMPLETE
from .simulation import Simulation


# Colors (RGB)
COLOR_SKY = (180, 224, 255)
COLOR_GROUND = (45, 26, 16)
COLOR_PLATFORM = (96, 150, 72)
COLOR_GROUND_TILE = (120, 84, 52)
COLOR_LADDER = (176, 128, 72)
COLOR_PLAYER = (97, 64, 40)
COLOR_GOAL = (229, 192, 123)
COLOR_GOAL_DONE = (255, 238, 161)
COLOR_BARREL = (140, 82, 36)
COLOR_PICKUP = (255, 217, 91)
COLOR_HEART = (224, 72, 88)
COLOR_HEART_EMPTY = (90, 60, 60)
COLOR_TEXT = (255, 255, 255)
COLOR_ACCENT = (255, 238, 161)

# Camera follow
CAMERA_LERP = 0.1
CAMERA_DEADZONE = 0.25  # Fraction of screen width the player roams freely


def format_elapsed(elapsed_ms: float) -> str:
    """Format a level timer as ``m:ss.t``."""
    elapsed = max(0.0, elapsed_ms) / 1000.0
    minutes = int(elapsed // 60)
    seconds = int(elapsed % 60)
    tenths = int((elapsed % 1) * 10)
    return f"{minutes}:{seconds:02d}.{tenths}"


def format_pickups(count: int) -> str:
    """Pickup counter, zero-padded to three digits."""
    return str(count).zfill(3)


class GameEngine:
    """Main game engine coordinating simulation, input and rendering.

    Handles:
    - Game loop with fixed timestep
    - Keyboard input (arrows/space move, P pause, R restart,
      Enter next level, F1 debug overlay, Esc quit)
    - Camera follow with shake
    - Pygame rendering and HUD
    """

    def __init__(self, config: Optional[GameConfig] = None, level_index: int = 0):
        """Initialize game engine and load the first level.

        Args:
            config: Game configuration. Uses defaults if None.
            level_index: Level to start on (clamped into range).
        """
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Jungle Platformer")
        self.clock = pygame.time.Clock()

        self.font = pygame.font.Font(None, 32)
        self.small_font = pygame.font.Font(None, 24)
        self.title_font = pygame.font.Font(None, 64)

        self.sim = Simulation(self.config, level_index)
        self.sim.events.on(CAMERA_SHAKE, self._on_camera_shake)
        self.sim.events.on(LEVEL_COMPLETE, self._on_level_complete)

        self.inputs = InputTracker()
        self.running = False
        self.debug = False

        # Input state
        self._keys_pressed: Dict[int, bool] = {}

        # Camera state
        self.camera_x = 0.0
        self.camera_y = 0.0
        self._shake_remaining = 0.0
        self._shake_intensity = 0.0
        self._shake_offset = (0, 0)

        self._on_level_loaded()

    # === LEVEL MANAGEMENT ===

    def _on_level_loaded(self) -> None:
        self.inputs.reset()
        self._shake_remaining = 0.0
        self._shake_offset = (0, 0)
        self._snap_camera()
        level = self.sim.level
        print(f"LEVEL {level.level_index + 1}: {level.level_name} | "
              f"{len(level.platforms)} terrain runs, {len(level.ladders)} ladders, "
              f"{len(level.pickups)} pickups, {len(level.hazards)} barrels")

    def restart(self) -> None:
        self.sim.restart()
        self._on_level_loaded()

    def next_level(self) -> bool:
        if not self.sim.advance_level():
            return False
        self._on_level_loaded()
        return True

    def _on_camera_shake(self, duration_ms: float, intensity: float) -> None:
        self._shake_remaining = duration_ms
        self._shake_intensity = intensity

    def _on_level_complete(self, level_index: int) -> None:
        print(f"LEVEL {level_index + 1} COMPLETE: "
              f"{format_pickups(self.sim.player.pickup_count)} pickups in "
              f"{format_elapsed(self.sim.elapsed_ms)}")

    # === INPUT ===

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._keys_pressed[event.key] = True
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.restart()
                elif event.key == pygame.K_p:
                    self.sim.toggle_pause()
                elif event.key == pygame.K_F1:
                    self.debug = not self.debug
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    self.next_level()
            elif event.type == pygame.KEYUP:
                self._keys_pressed[event.key] = False

    def handle_input(self) -> InputSnapshot:
        """Sample held keys into this frame's snapshot."""
        keys = self._keys_pressed
        return self.inputs.sample(
            left=bool(keys.get(pygame.K_LEFT)),
            right=bool(keys.get(pygame.K_RIGHT)),
            up=bool(keys.get(pygame.K_UP)),
            down=bool(keys.get(pygame.K_DOWN)),
            jump=bool(keys.get(pygame.K_SPACE)),
        )

    # === UPDATE ===

    def update(self, delta_ms: float) -> None:
        """Advance simulation and camera by one frame."""
        snapshot = self.handle_input()
        self.sim.step(snapshot, delta_ms)
        self._update_camera(delta_ms)

    def _snap_camera(self) -> None:
        self.camera_x = self._clamp_camera_x(self.sim.player.x - self.config.screen_width / 2)

    def _clamp_camera_x(self, x: float) -> float:
        bounds = self.sim.level.bounds
        max_x = max(bounds.min_x, bounds.max_x - self.config.screen_width)
        return max(bounds.min_x, min(max_x, x))

    def _update_camera(self, delta_ms: float) -> None:
        """Follow the player with a deadzone and lerp, then apply shake."""
        width = self.config.screen_width
        player_x = self.sim.player.x

        # Only chase once the player leaves the central deadzone
        half_zone = width * CAMERA_DEADZONE / 2
        center = self.camera_x + width / 2
        target_x = self.camera_x
        if player_x < center - half_zone:
            target_x = player_x + half_zone - width / 2
        elif player_x > center + half_zone:
            target_x = player_x - half_zone - width / 2

        self.camera_x += (target_x - self.camera_x) * CAMERA_LERP
        self.camera_x = self._clamp_camera_x(self.camera_x)

        if self._shake_remaining > 0 and not self.sim.paused:
            self._shake_remaining = max(0.0, self._shake_remaining - delta_ms)
            magnitude_x = self.config.screen_width * self._shake_intensity
            magnitude_y = self.config.screen_height * self._shake_intensity
            self._shake_offset = (
                int(random.uniform(-magnitude_x, magnitude_x)),
                int(random.uniform(-magnitude_y, magnitude_y)),
            )
        else:
            self._shake_offset = (0, 0)

    def _world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Convert world coordinates to screen coordinates.

        Both use a top-left origin; only the camera offset applies.
        """
        shake_x, shake_y = self._shake_offset
        return int(x - self.camera_x) + shake_x, int(y - self.camera_y) + shake_y

    def _draw_box(self, bounds, color, width: int = 0) -> None:
        left, top, right, bottom = bounds
        screen_left, screen_top = self._world_to_screen(left, top)
        pygame.draw.rect(
            self.screen, color,
            (screen_left, screen_top, int(right - left), int(bottom - top)),
            width,
        )

    # === RENDERING ===

    def render(self) -> None:
        """Render current game state."""
        self.screen.fill(COLOR_SKY)
        level = self.sim.level

        # Soil below the ground row
        _, ground_top = self._world_to_screen(0, self.config.screen_height - 64)
        pygame.draw.rect(
            self.screen, COLOR_GROUND,
            (0, ground_top, self.config.screen_width, self.config.screen_height - ground_top),
        )

        for ladder in level.ladders:
            self._draw_box(ladder.bounds, COLOR_LADDER, width=3)

        for plat in level.platforms:
            self._draw_box(plat.bounds, COLOR_GROUND_TILE if plat.ground else COLOR_PLATFORM)

        goal = level.goal
        self._draw_box(goal.bounds, COLOR_GOAL_DONE if goal.reached else COLOR_GOAL)

        for pickup in level.pickups:
            if pickup.active:
                self._draw_box(pickup.bounds, COLOR_PICKUP)

        for barrel in level.hazards:
            cx, cy = self._world_to_screen(barrel.x, barrel.y)
            radius = int(barrel.config.radius)
            pygame.draw.circle(self.screen, COLOR_BARREL, (cx, cy), radius)
            # Spoke shows the roll
            spoke = (
                cx + int(math.cos(barrel.rotation) * radius),
                cy + int(math.sin(barrel.rotation) * radius),
            )
            pygame.draw.line(self.screen, COLOR_GROUND, (cx, cy), spoke, 3)

        self._render_player()
        self._render_hud()

        if self.debug:
            self._render_debug()

        if self.sim.level_complete:
            self._render_level_complete()
        elif self.sim.game_over:
            self._render_overlay("Game Over", ["Press R to restart"], alpha=140)
        elif self.sim.paused:
            self._render_overlay("Paused", ["Press P to resume"], alpha=90)

        pygame.display.flip()

    def _render_player(self) -> None:
        player = self.sim.player
        color = player.tint or COLOR_PLAYER
        left, top, right, bottom = player.bounds
        surface = pygame.Surface((int(right - left), int(bottom - top)), pygame.SRCALPHA)
        surface.fill((*color, int(255 * player.alpha)))
        # Face marker on the side the player looks at
        eye_x = 6 if player.facing_left else surface.get_width() - 12
        pygame.draw.rect(surface, COLOR_TEXT, (eye_x, 12, 6, 6))
        self.screen.blit(surface, self._world_to_screen(left, top))

    def _render_hud(self) -> None:
        player = self.sim.player
        for i in range(player.max_hearts):
            color = COLOR_HEART if i < player.hearts else COLOR_HEART_EMPTY
            pygame.draw.circle(self.screen, color, (28 + i * 36, 28), 14)

        counter = self.font.render(f"x {format_pickups(player.pickup_count)}", True, COLOR_ACCENT)
        pygame.draw.rect(self.screen, COLOR_PICKUP, (20, 52, 20, 20))
        self.screen.blit(counter, (48, 50))

        timer = self.font.render(format_elapsed(self.sim.elapsed_ms), True, COLOR_TEXT)
        self.screen.blit(timer, timer.get_rect(topright=(self.config.screen_width - 16, 16)))

    def _render_debug(self) -> None:
        state = self.sim.get_state()
        px, py = state["player_position"]
        vx, vy = state["player_velocity"]
        lines = [
            f"Pos: {px:.1f}, {py:.1f}",
            f"Vel: {vx:.1f}, {vy:.1f}",
            f"Pickups: {state['pickups']}  Hearts: {state['hearts']}",
            f"Paused: {state['paused']}  GameOver: {state['game_over']}",
            f"Anim: {state['player_animation']}  Floor: {state['player_on_floor']}",
        ]
        y = self.config.screen_height - 20 - len(lines) * 20
        backdrop = pygame.Surface((360, len(lines) * 20 + 12), pygame.SRCALPHA)
        backdrop.fill((0, 0, 0, 128))
        self.screen.blit(backdrop, (10, y - 6))
        for line in lines:
            self.screen.blit(self.small_font.render(line, True, COLOR_TEXT), (18, y))
            y += 20

    def _render_overlay(self, title: str, lines, alpha: int = 120) -> None:
        """Dim the screen and draw a centred title with lines under it."""
        overlay = pygame.Surface((self.config.screen_width, self.config.screen_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        self.screen.blit(overlay, (0, 0))

        cx = self.config.screen_width // 2
        cy = self.config.screen_height // 2
        title_surface = self.title_font.render(title, True, COLOR_TEXT)
        self.screen.blit(title_surface, title_surface.get_rect(center=(cx, cy - 80)))

        y = cy - 28
        for line in lines:
            surface = self.font.render(line, True, COLOR_ACCENT)
            self.screen.blit(surface, surface.get_rect(center=(cx, y)))
            y += 36

    def _render_level_complete(self) -> None:
        sim = self.sim
        lines = [
            f"Level {sim.level_index + 1}: {sim.level_name}",
            f"Pickups: {sim.player.pickup_count}",
            f"Time: {format_elapsed(sim.elapsed_ms)}",
        ]
        if sim.has_next_level():
            lines += ["Press Enter for next level", "Press R to retry"]
        else:
            lines.append("Press R to restart")
        self._render_overlay("Level Complete!", lines)

    # === LOOP ===

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        delta_ms = 1000.0 / self.config.fps

        while self.running:
            self.handle_events()
            self.update(delta_ms)
            self.render()
            self.clock.tick(self.config.fps)

        pygame.quit()
