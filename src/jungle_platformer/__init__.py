"""jungle-platformer — side-scrolling jungle platformer on pymunk and pygame.

Hand-authored levels of tiled platforms joined by ladders, with bobbing
pickups, rolling barrels and a goal. The player runs, double-jumps (with a
coyote window after leaving a ledge), climbs, and survives a few hits thanks
to a short invulnerability window. The gameplay core is a window-free
Simulation; GameEngine wraps it in a pygame window.
"""

from .config import PhysicsConfig, PlayerConfig, HazardConfig, PickupConfig, GameConfig, WorldBounds, CONFIGS, get_config
from .physics import PhysicsWorld, PhysicsParams
from .entities import Platform, Ladder, Pickup, Goal
from .hazards import Barrel
from .player import Player, PlayerStatus, Movement, Animation, resolve_animation
from .controls import InputSnapshot, InputTracker
from .events import EventEmitter
from .levels import LevelDefinition, LevelDefinitionError, LEVEL_DEFINITIONS
from .level_builder import LevelBuilder, LevelObjects, layout_level
from .simulation import Simulation
from .engine import GameEngine

__all__ = [
    "PhysicsConfig",
    "PlayerConfig",
    "HazardConfig",
    "PickupConfig",
    "GameConfig",
    "WorldBounds",
    "CONFIGS",
    "get_config",
    "PhysicsWorld",
    "PhysicsParams",
    "Platform",
    "Ladder",
    "Pickup",
    "Goal",
    "Barrel",
    "Player",
    "PlayerStatus",
    "Movement",
    "Animation",
    "resolve_animation",
    "InputSnapshot",
    "InputTracker",
    "EventEmitter",
    "LevelDefinition",
    "LevelDefinitionError",
    "LEVEL_DEFINITIONS",
    "LevelBuilder",
    "LevelObjects",
    "layout_level",
    "Simulation",
    "GameEngine",
]
