"""
Path compression for routed connectors.

Collapses runs of collinear points so the returned polyline only keeps
its endpoints and the corners where the direction of travel changes.

Example::

    from ortho_connector.router.optimizer import compress_path

    compress_path([Point(0, 0), Point(10, 0), Point(20, 0), Point(20, 5)])
    # [Point(0, 0), Point(20, 0), Point(20, 5)]
"""

import math
from typing import List, Sequence, Tuple

from .primitives import Point


def remove_duplicates(path: Sequence[Point]) -> List[Point]:
    """Drop consecutive repeated points (zero-length segments)."""
    result: List[Point] = []
    for p in path:
        if not result or result[-1] != p:
            result.append(p)
    return result


def _unit(a: Point, b: Point) -> Tuple[float, float]:
    dx = b.x - a.x
    dy = b.y - a.y
    length = math.hypot(dx, dy)
    return (dx / length, dy / length)


def compress_path(path: Sequence[Point]) -> List[Point]:
    """Merge collinear segments of a polyline.

    The first and last points are always kept. A point in between is kept
    only where the normalized direction of the next segment differs from
    the previous one. Paths shorter than three points pass through
    unchanged.
    """
    if len(path) < 3:
        return list(path)

    points = remove_duplicates(path)
    if len(points) < 3:
        # Everything collapsed onto one or two distinct points
        return [path[0], path[-1]]

    compressed = [points[0]]
    direction = _unit(points[0], points[1])

    for prev, nxt in zip(points[1:], points[2:]):
        last_direction = direction
        direction = _unit(prev, nxt)
        if direction != last_direction:
            compressed.append(prev)

    compressed.append(points[-1])
    return compressed
