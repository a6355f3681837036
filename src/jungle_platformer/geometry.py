"""Pure geometry helpers for platform segments.

A segment is a horizontal run of fixed-size tiles whose ``x`` is the centre of
its first tile. Everything here is side-effect free.
"""

from typing import NamedTuple, TYPE_CHECKING

from .config import TILE_WIDTH, TILE_HEIGHT

if TYPE_CHECKING:
    from .levels import PlatformSegment


class Span(NamedTuple):
    """Horizontal extent of a segment."""
    left: float
    right: float
    width: float


def span(segment: "PlatformSegment", tile_width: float = TILE_WIDTH) -> Span:
    """Left/right edges and width of a segment."""
    left = segment.x - tile_width / 2
    right = segment.x + (segment.tiles - 0.5) * tile_width
    return Span(left, right, right - left)


def top(segment: "PlatformSegment", tile_height: float = TILE_HEIGHT) -> float:
    """Walkable surface height of a segment."""
    return segment.y - tile_height / 2


def midpoint_x(segment: "PlatformSegment", tile_width: float = TILE_WIDTH) -> float:
    """Horizontal centre of a segment's span."""
    s = span(segment, tile_width)
    return s.left + s.width / 2


def overlap_center_x(
    a: "PlatformSegment",
    b: "PlatformSegment",
    tile_width: float = TILE_WIDTH,
) -> float:
    """Centre of the horizontal intersection of two segments.

    Falls back to the midpoint of ``a`` when the spans do not intersect
    (touching edges count as not intersecting). None of the shipped levels
    request a ladder between segments that do not overlap.
    """
    span_a = span(a, tile_width)
    span_b = span(b, tile_width)
    left = max(span_a.left, span_b.left)
    right = min(span_a.right, span_b.right)

    if right <= left:
        return midpoint_x(a, tile_width)

    return left + (right - left) / 2


def tile_centers(segment: "PlatformSegment", tile_width: float = TILE_WIDTH) -> list:
    """X centre of every tile in a segment, left to right."""
    return [segment.x + i * tile_width for i in range(segment.tiles)]
