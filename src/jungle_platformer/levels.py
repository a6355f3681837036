"""Static level definitions.

Levels are hand-authored, immutable records built once at import time and
indexed by integer. Authoring helpers place ladders, pickups and barrels
relative to platform segments so the data stays readable.
"""

from dataclasses import dataclass
from typing import Tuple, Union, Sequence, List

from . import geometry
from .config import GAME_HEIGHT, GROUND_SURFACE_Y, TILE_WIDTH


class LevelDefinitionError(ValueError):
    """A level definition references geometry that does not exist."""


GROUND = "ground"


@dataclass(frozen=True)
class PlatformSegment:
    """Run of ``tiles`` tiles; ``x`` is the centre of the first tile, ``y`` the vertical centre."""
    x: float
    y: float
    tiles: int

    def __post_init__(self):
        if self.tiles < 1:
            raise LevelDefinitionError(f"Platform segment needs at least one tile, got {self.tiles}")


@dataclass(frozen=True)
class PlatformRef:
    """Ladder endpoint on the platform at ``index`` of the owning level."""
    index: int


LadderEndpoint = Union[str, PlatformRef]


@dataclass(frozen=True)
class LadderConnector:
    x: float
    lower: LadderEndpoint
    upper: LadderEndpoint


@dataclass(frozen=True)
class PickupPlacement:
    x: float
    y: float


@dataclass(frozen=True)
class HazardSpawn:
    x: float
    y: float
    speed: float = 0.0


@dataclass(frozen=True)
class LevelDefinition:
    """Everything needed to build one playable level."""
    name: str
    spawn: Tuple[float, float]
    goal: Tuple[float, float]
    platforms: Tuple[PlatformSegment, ...]
    ladders: Tuple[LadderConnector, ...]
    pickups: Tuple[PickupPlacement, ...]
    hazards: Tuple[HazardSpawn, ...]

    def platform_for(self, endpoint: LadderEndpoint) -> PlatformSegment:
        """Resolve a platform endpoint, failing loudly on a bad index."""
        if not isinstance(endpoint, PlatformRef):
            raise LevelDefinitionError(f"{self.name}: endpoint {endpoint!r} is not a platform reference")
        if not 0 <= endpoint.index < len(self.platforms):
            raise LevelDefinitionError(
                f"{self.name}: invalid ladder platform index {endpoint.index} "
                f"(level has {len(self.platforms)} platforms)"
            )
        return self.platforms[endpoint.index]

    def validate(self) -> None:
        """Check every ladder endpoint resolves. Raises LevelDefinitionError."""
        for ladder in self.ladders:
            for endpoint in (ladder.lower, ladder.upper):
                if endpoint == GROUND:
                    continue
                self.platform_for(endpoint)


# === AUTHORING HELPERS ===

def create_platform(left: float, y: float, tiles: int) -> PlatformSegment:
    """Segment whose span starts at ``left``."""
    return PlatformSegment(x=left + TILE_WIDTH / 2, y=y, tiles=tiles)


def ladder_between_platforms(
    platforms: Sequence[PlatformSegment], a_index: int, b_index: int
) -> LadderConnector:
    """Ladder at the centre of the overlap of two segments, lower end on the lower one."""
    a = platforms[a_index]
    b = platforms[b_index]
    lower_index = a_index if geometry.top(a) > geometry.top(b) else b_index
    upper_index = b_index if lower_index == a_index else a_index
    return LadderConnector(
        x=geometry.overlap_center_x(a, b),
        lower=PlatformRef(lower_index),
        upper=PlatformRef(upper_index),
    )


def ladder_from_ground(platforms: Sequence[PlatformSegment], index: int) -> LadderConnector:
    """Ladder from the ground to the middle of a segment."""
    return LadderConnector(
        x=geometry.midpoint_x(platforms[index]),
        lower=GROUND,
        upper=PlatformRef(index),
    )


def pickup_on_platform(
    platform: PlatformSegment, ratio: float = 0.5, vertical_offset: float = -48.0
) -> PickupPlacement:
    s = geometry.span(platform)
    t = max(0.0, min(1.0, ratio))
    return PickupPlacement(x=s.left + s.width * t, y=geometry.top(platform) + vertical_offset)


def pickup_cluster(
    platform: PlatformSegment, ratios: Sequence[float], vertical_offset: float = -48.0
) -> List[PickupPlacement]:
    return [pickup_on_platform(platform, ratio, vertical_offset) for ratio in ratios]


def hazard_on_ground(x: float, speed: float) -> HazardSpawn:
    return HazardSpawn(x=x, y=GROUND_SURFACE_Y - 28, speed=speed)


def hazard_on_platform(
    platform: PlatformSegment, ratio: float, speed: float, vertical_offset: float = -28.0
) -> HazardSpawn:
    s = geometry.span(platform)
    t = max(0.0, min(1.0, ratio))
    return HazardSpawn(x=s.left + s.width * t, y=geometry.top(platform) + vertical_offset, speed=speed)


def goal_on(platform: PlatformSegment) -> Tuple[float, float]:
    """Goal anchored at the middle of a segment, bottom edge at its centre line."""
    return (geometry.midpoint_x(platform), platform.y)


# === LEVEL 1: Jungle Approach ===

_level1_platforms = (
    create_platform(512, GAME_HEIGHT - 220, 3),
    create_platform(832, GAME_HEIGHT - 340, 3),
    create_platform(1168, GAME_HEIGHT - 260, 4),
    create_platform(1648, GAME_HEIGHT - 420, 3),
    create_platform(2000, GAME_HEIGHT - 320, 4),
    create_platform(2448, GAME_HEIGHT - 240, 5),
    create_platform(3008, GAME_HEIGHT - 360, 4),
    create_platform(3472, GAME_HEIGHT - 280, 4),
    create_platform(3920, GAME_HEIGHT - 440, 3),
    create_platform(4240, GAME_HEIGHT - 300, 4),
    create_platform(4704, GAME_HEIGHT - 220, 5),
    create_platform(5280, GAME_HEIGHT - 320, 4),
    create_platform(5760, GAME_HEIGHT - 220, 4),
)

_level1_ladders = (
    ladder_from_ground(_level1_platforms, 0),
    *(ladder_between_platforms(_level1_platforms, i, i + 1) for i in range(len(_level1_platforms) - 1)),
)

_p1 = _level1_platforms
_level1_pickups = (
    *pickup_cluster(_p1[0], [0.25, 0.6]),
    *pickup_cluster(_p1[1], [0.45], -52),
    *pickup_cluster(_p1[2], [0.2, 0.5, 0.8]),
    *pickup_cluster(_p1[3], [0.5], -56),
    *pickup_cluster(_p1[4], [0.2, 0.85]),
    *pickup_cluster(_p1[5], [0.25, 0.5, 0.75]),
    *pickup_cluster(_p1[6], [0.6], -48),
    *pickup_cluster(_p1[7], [0.35, 0.8]),
    *pickup_cluster(_p1[8], [0.5], -52),
    *pickup_cluster(_p1[9], [0.3, 0.7]),
    *pickup_cluster(_p1[10], [0.15, 0.45, 0.75]),
    *pickup_cluster(_p1[11], [0.35, 0.9], -50),
    *pickup_cluster(_p1[12], [0.55]),
    PickupPlacement(420, GROUND_SURFACE_Y - 36),
    PickupPlacement(980, GROUND_SURFACE_Y - 32),
)

_level1_hazards = (
    hazard_on_ground(1150, 160),
    hazard_on_platform(_p1[4], 0.7, 190),
    hazard_on_platform(_p1[7], 0.4, 210),
    hazard_on_ground(3600, 200),
    hazard_on_platform(_p1[10], 0.6, 220),
)

LEVEL_1 = LevelDefinition(
    name="Jungle Approach",
    spawn=(180.0, GAME_HEIGHT - 200.0),
    goal=goal_on(_p1[-1]),
    platforms=_level1_platforms,
    ladders=_level1_ladders,
    pickups=_level1_pickups,
    hazards=_level1_hazards,
)


# === LEVEL 2: Treetop Gauntlet ===

_level2_platforms = (
    create_platform(480, GAME_HEIGHT - 260, 4),
    create_platform(928, GAME_HEIGHT - 380, 3),
    create_platform(1248, GAME_HEIGHT - 320, 4),
    create_platform(1696, GAME_HEIGHT - 460, 3),
    create_platform(2016, GAME_HEIGHT - 300, 4),
    create_platform(2464, GAME_HEIGHT - 220, 4),
    create_platform(2912, GAME_HEIGHT - 380, 4),
    create_platform(3360, GAME_HEIGHT - 240, 5),
    create_platform(3936, GAME_HEIGHT - 360, 4),
    create_platform(4384, GAME_HEIGHT - 220, 5),
    create_platform(4960, GAME_HEIGHT - 340, 4),
    create_platform(5408, GAME_HEIGHT - 420, 4),
    create_platform(5856, GAME_HEIGHT - 300, 4),
)

_p2 = _level2_platforms
_level2_ladders = (
    ladder_from_ground(_p2, 0),
    ladder_between_platforms(_p2, 0, 1),
    ladder_between_platforms(_p2, 1, 2),
    ladder_between_platforms(_p2, 2, 3),
    ladder_between_platforms(_p2, 3, 4),
    ladder_from_ground(_p2, 5),
    ladder_between_platforms(_p2, 4, 5),
    ladder_between_platforms(_p2, 5, 6),
    ladder_between_platforms(_p2, 6, 7),
    ladder_between_platforms(_p2, 7, 8),
    ladder_from_ground(_p2, 9),
    ladder_between_platforms(_p2, 8, 9),
    ladder_between_platforms(_p2, 9, 10),
    ladder_between_platforms(_p2, 10, 11),
    ladder_between_platforms(_p2, 11, 12),
)

_level2_pickups = (
    *pickup_cluster(_p2[0], [0.3, 0.7]),
    *pickup_cluster(_p2[1], [0.5], -54),
    *pickup_cluster(_p2[2], [0.2, 0.8]),
    *pickup_cluster(_p2[3], [0.5], -58),
    *pickup_cluster(_p2[4], [0.25, 0.5, 0.75]),
    *pickup_cluster(_p2[5], [0.35, 0.65], -46),
    *pickup_cluster(_p2[6], [0.4, 0.9], -52),
    *pickup_cluster(_p2[7], [0.2, 0.5, 0.8]),
    *pickup_cluster(_p2[8], [0.45], -56),
    *pickup_cluster(_p2[9], [0.25, 0.5, 0.75]),
    *pickup_cluster(_p2[10], [0.35, 0.85], -48),
    *pickup_cluster(_p2[11], [0.4, 0.6], -58),
    *pickup_cluster(_p2[12], [0.55]),
    PickupPlacement(760, GROUND_SURFACE_Y - 36),
    PickupPlacement(3200, GROUND_SURFACE_Y - 36),
    PickupPlacement(5200, GROUND_SURFACE_Y - 36),
)

_level2_hazards = (
    hazard_on_ground(900, 180),
    hazard_on_platform(_p2[2], 0.6, 220),
    hazard_on_platform(_p2[4], 0.3, 240),
    hazard_on_ground(2800, 210),
    hazard_on_platform(_p2[7], 0.7, 260),
    hazard_on_ground(3600, 230),
    hazard_on_platform(_p2[9], 0.5, 280),
    hazard_on_platform(_p2[11], 0.4, 300),
)

LEVEL_2 = LevelDefinition(
    name="Treetop Gauntlet",
    spawn=(180.0, GAME_HEIGHT - 200.0),
    goal=goal_on(_p2[-1]),
    platforms=_level2_platforms,
    ladders=_level2_ladders,
    pickups=_level2_pickups,
    hazards=_level2_hazards,
)


LEVEL_DEFINITIONS: Tuple[LevelDefinition, ...] = (LEVEL_1, LEVEL_2)

for _level in LEVEL_DEFINITIONS:
    _level.validate()
