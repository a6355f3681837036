"""Turn level definitions into placed entities.

Building happens in two passes:
- ``layout_level`` is pure: it resolves ladder endpoints, drops ladders too
  short to climb, and decides which platform tiles to omit so every ladder
  passes through an open hole instead of solid terrain.
- ``LevelBuilder.build`` places the layout into a physics world: terrain
  runs, ladder zones, pickups, barrels and the goal.

Broken level data (a ladder pointing at a platform that does not exist) is
raised as LevelDefinitionError before anything is created.
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Optional

from . import geometry
from .config import (
    GameConfig,
    WorldBounds,
    TILE_WIDTH,
    TILE_HEIGHT,
    GROUND_Y,
    GROUND_SURFACE_Y,
    MIN_LADDER_HEIGHT,
    LADDER_GAP_TOLERANCE,
)
from .entities import Platform, Ladder, Pickup, Goal
from .hazards import Barrel
from .levels import (
    LEVEL_DEFINITIONS,
    LevelDefinition,
    LadderEndpoint,
    GROUND,
)
from .physics import PhysicsWorld


@dataclass(frozen=True)
class Tile:
    """One placed terrain tile (centre)."""
    x: float
    y: float
    ground: bool = False


@dataclass(frozen=True)
class LadderZone:
    """Resolved climbable region between two surfaces."""
    x: float
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2


@dataclass
class LevelLayout:
    """Concrete placement for one level, before any physics exists."""
    definition: LevelDefinition
    tiles: List[Tile] = field(default_factory=list)
    ladders: List[LadderZone] = field(default_factory=list)
    skipped_tiles: List[Tile] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def platform_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if not t.ground]

    @property
    def ground_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if t.ground]


def clamp_level_index(level_index: int, level_count: int = len(LEVEL_DEFINITIONS)) -> int:
    """Clamp a requested index into the shipped range."""
    return max(0, min(max(1, level_count) - 1, level_index))


def resolve_surface_y(level: LevelDefinition, endpoint: LadderEndpoint) -> float:
    """Absolute surface height of a ladder endpoint."""
    if endpoint == GROUND:
        return GROUND_SURFACE_Y
    return geometry.top(level.platform_for(endpoint))


def compute_ladder_gaps(level: LevelDefinition) -> Dict[int, List[float]]:
    """Platform index -> x of every ladder touching that platform."""
    gaps: Dict[int, List[float]] = {}
    for ladder in level.ladders:
        for endpoint in (ladder.lower, ladder.upper):
            if endpoint == GROUND:
                continue
            gaps.setdefault(endpoint.index, []).append(ladder.x)
    return gaps


def ground_tiles(bounds: WorldBounds, tile_width: float = TILE_WIDTH) -> List[Tile]:
    """Full-width ground row covering the world's horizontal extent."""
    count = math.ceil(bounds.width / tile_width)
    return [
        Tile(bounds.min_x + i * tile_width + tile_width / 2, GROUND_Y, ground=True)
        for i in range(count)
    ]


def carve_platform_tiles(
    level: LevelDefinition,
    tile_width: float = TILE_WIDTH,
) -> Tuple[List[Tile], List[Tile]]:
    """Platform tiles to place, and the ones omitted for ladder holes.

    A tile is omitted when any ladder touching its segment lies within the
    tile's span widened by the gap tolerance on both sides.
    """
    gaps = compute_ladder_gaps(level)
    tolerance = tile_width * LADDER_GAP_TOLERANCE

    placed: List[Tile] = []
    skipped: List[Tile] = []
    for index, segment in enumerate(level.platforms):
        segment_gaps = gaps.get(index, [])
        for tile_x in geometry.tile_centers(segment, tile_width):
            tile_left = tile_x - tile_width / 2
            tile_right = tile_x + tile_width / 2
            tile = Tile(tile_x, segment.y)
            if any(tile_left - tolerance <= gap_x <= tile_right + tolerance for gap_x in segment_gaps):
                skipped.append(tile)
            else:
                placed.append(tile)
    return placed, skipped


def resolve_ladders(level: LevelDefinition) -> List[LadderZone]:
    """Ladder zones for every connector tall enough to climb."""
    zones = []
    for connector in level.ladders:
        lower_y = resolve_surface_y(level, connector.lower)
        upper_y = resolve_surface_y(level, connector.upper)
        bottom = max(lower_y, upper_y)
        top = min(lower_y, upper_y)
        if bottom - top <= MIN_LADDER_HEIGHT:
            continue
        zones.append(LadderZone(connector.x, top, bottom))
    return zones


def layout_level(
    level: LevelDefinition,
    bounds: Optional[WorldBounds] = None,
) -> LevelLayout:
    """Pure placement pass for one level.

    Raises:
        LevelDefinitionError: a ladder references a missing platform.
    """
    level.validate()
    platform_tiles, skipped = carve_platform_tiles(level)
    return LevelLayout(
        definition=level,
        tiles=ground_tiles(bounds or WorldBounds()) + platform_tiles,
        ladders=resolve_ladders(level),
        skipped_tiles=skipped,
    )


def merge_tile_runs(tiles: List[Tile], tile_width: float = TILE_WIDTH) -> List[Tuple[float, float, int, bool]]:
    """Group adjacent tiles on the same row into runs of (left, y, count, ground)."""
    runs: List[List] = []
    for tile in sorted(tiles, key=lambda t: (t.ground, t.y, t.x)):
        left = tile.x - tile_width / 2
        if runs:
            run_left, run_y, run_count, run_ground = runs[-1]
            contiguous = abs(run_left + run_count * tile_width - left) < 1e-6
            if run_y == tile.y and run_ground == tile.ground and contiguous:
                runs[-1][2] += 1
                continue
        runs.append([left, tile.y, 1, tile.ground])
    return [tuple(run) for run in runs]


@dataclass
class LevelObjects:
    """Everything placed for one level session."""
    level_index: int
    level_name: str
    spawn_point: Tuple[float, float]
    layout: LevelLayout
    platforms: List[Platform]
    ladders: List[Ladder]
    pickups: List[Pickup]
    hazards: List[Barrel]
    goal: Goal
    bounds: WorldBounds


class LevelBuilder:
    """Places shipped level definitions into a physics world."""

    def __init__(
        self,
        physics: PhysicsWorld,
        config: Optional[GameConfig] = None,
        levels: Tuple[LevelDefinition, ...] = LEVEL_DEFINITIONS,
    ):
        self.physics = physics
        self.config = config or GameConfig()
        self.levels = levels

    def get_level_count(self) -> int:
        """Number of levels this builder can place."""
        return len(self.levels)

    def build(self, level_index: int = 0) -> LevelObjects:
        """Build the level at ``level_index`` (clamped into range).

        Raises:
            LevelDefinitionError: the selected definition is broken.
        """
        index = clamp_level_index(level_index, len(self.levels))
        level = self.levels[index]
        bounds = self.config.bounds
        layout = layout_level(level, bounds)

        platforms = [
            Platform(
                self.physics,
                x=left + count * TILE_WIDTH / 2,
                y=y,
                width=count * TILE_WIDTH,
                height=TILE_HEIGHT,
                tiles=count,
                ground=ground,
            )
            for left, y, count, ground in merge_tile_runs(layout.tiles)
        ]

        ladders = [
            Ladder(self.physics, zone.x, zone.top, zone.bottom)
            for zone in layout.ladders
        ]

        pickups = [
            Pickup(self.physics, p.x, p.y, config=self.config.pickups)
            for p in level.pickups
        ]

        hazards = [
            Barrel(self.physics, h.x, h.y, speed=h.speed, config=self.config.hazards, bounds=bounds)
            for h in level.hazards
        ]

        goal = Goal(self.physics, *level.goal)

        return LevelObjects(
            level_index=index,
            level_name=level.name,
            spawn_point=level.spawn,
            layout=layout,
            platforms=platforms,
            ladders=ladders,
            pickups=pickups,
            hazards=hazards,
            goal=goal,
            bounds=bounds,
        )
