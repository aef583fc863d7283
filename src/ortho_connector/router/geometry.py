"""
Geometry helpers shared by the routing stages.

Coordinates in the routing grid are ``(row, col)`` tuples, where ``row``
indexes the y axis and ``col`` the x axis.
"""

import math
from typing import Iterable, List, Sequence, Tuple

from .primitives import Box, Point

Coordinate = Tuple[int, int]


def add_coords(a: Coordinate, b: Coordinate) -> Coordinate:
    return (a[0] + b[0], a[1] + b[1])


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_collinear(p: Point, q: Point, t: Point, tolerance: float = 0.0) -> bool:
    """True if ``t`` lies on the line through ``p`` and ``q``.

    Uses twice the signed triangle area, so coincident points count as
    collinear instead of dividing by a zero-length edge.
    """
    area = (q.x - p.x) * (t.y - p.y) - (q.y - p.y) * (t.x - p.x)
    return abs(area) <= tolerance


def count_inflection_points(path: Sequence[Point]) -> int:
    """Number of interior points where the direction of travel changes."""
    if len(path) < 3:
        return 0

    count = 0
    for i in range(1, len(path) - 1):
        if not is_collinear(path[i - 1], path[i + 1], path[i]):
            count += 1
    return count


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def midpoint(a: Point, b: Point) -> Point:
    """Center of two points, rounded half-up to whole scene units."""
    return Point(_round_half_up((a.x + b.x) / 2), _round_half_up((a.y + b.y) / 2))


def segment_crosses_box(start: Point, end: Point, box: Box) -> bool:
    """Check whether an axis-aligned segment touches ``box``.

    Both the segment and the box are rectilinear, so the test reduces to
    interval overlap on each axis. Boxes with an inverted extent (shrunk
    past zero size) never match.
    """
    lo_x, hi_x = min(start.x, end.x), max(start.x, end.x)
    lo_y, hi_y = min(start.y, end.y), max(start.y, end.y)
    return (
        lo_x <= box.max_x
        and hi_x >= box.min_x
        and lo_y <= box.max_y
        and hi_y >= box.min_y
        and box.min_x <= box.max_x
        and box.min_y <= box.max_y
    )


def unique_points(points: Iterable[Point]) -> List[Point]:
    """Drop duplicates, keeping first-seen order."""
    seen = set()
    result: List[Point] = []
    for p in points:
        if p not in seen:
            seen.add(p)
            result.append(p)
    return result


def intervals_overlap(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    """Open-interval overlap: touching ends do not count."""
    return a[0] < b[1] and b[0] < a[1]
