"""Pytest fixtures for ortho-connector tests."""

from typing import List, Sequence

import pytest

from ortho_connector.router import (
    AttachedEndpoint,
    Direction,
    FreeEndpoint,
    Point,
    Rect,
)


def segment_direction(a: Point, b: Point) -> Direction:
    """Direction of travel along an axis-aligned segment from a to b."""
    if a.y == b.y:
        return Direction.RIGHT if b.x > a.x else Direction.LEFT
    return Direction.BOTTOM if b.y > a.y else Direction.TOP


def is_rectilinear(points: Sequence[Point]) -> bool:
    return all(a.x == b.x or a.y == b.y for a, b in zip(points, points[1:]))


def crosses_interior(a: Point, b: Point, rect: Rect) -> bool:
    """True if the segment a-b passes through the open interior of rect."""
    lo_x, hi_x = min(a.x, b.x), max(a.x, b.x)
    lo_y, hi_y = min(a.y, b.y), max(a.y, b.y)
    return (
        lo_x < rect.x + rect.width
        and hi_x > rect.x
        and lo_y < rect.y + rect.height
        and hi_y > rect.y
    )


def points_of(*coords) -> List[Point]:
    return [Point(x, y) for x, y in coords]


@pytest.fixture
def free_pair():
    """Two free endpoints facing each other diagonally."""
    start = FreeEndpoint(Point(0, 0), Direction.RIGHT)
    end = FreeEndpoint(Point(100, 100), Direction.LEFT)
    return start, end


@pytest.fixture
def facing_boxes():
    """Two 100x50 shapes 300 units apart with anchors facing each other."""
    start = AttachedEndpoint(Rect(0, 0, 100, 50), Point(100, 25), Direction.RIGHT)
    end = AttachedEndpoint(Rect(400, 0, 100, 50), Point(400, 25), Direction.LEFT)
    return start, end


@pytest.fixture
def offset_boxes():
    """Two shapes apart on both axes, anchors facing each other."""
    start = AttachedEndpoint(Rect(0, 0, 100, 50), Point(100, 25), Direction.RIGHT)
    end = AttachedEndpoint(Rect(400, 200, 100, 50), Point(400, 225), Direction.LEFT)
    return start, end


@pytest.fixture
def nested_boxes():
    """Overlapping shapes where each anchor lies inside the other shape."""
    start = AttachedEndpoint(Rect(0, 0, 100, 100), Point(100, 50), Direction.RIGHT)
    end = AttachedEndpoint(Rect(50, 20, 100, 100), Point(50, 70), Direction.LEFT)
    return start, end
