"""
Basic data structures for connector routing.

This module provides:
- Point: 2D coordinate in scene space
- Rect: Axis-aligned shape rectangle supplied by the caller
- Box: Mutable axis-aligned box used for clearance padding
- Direction: Compass direction a connector leaves or enters an anchor on
- FreeEndpoint / AttachedEndpoint: The two endpoint variants
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A point in scene coordinates."""

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def distance_to(self, other: "Point") -> float:
        """Manhattan distance."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def euclidean_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class Direction(Enum):
    """Side of an anchor a connector leaves (or enters) on.

    Scene coordinates grow rightwards and downwards, so TOP points to -y.
    """

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def sign(self) -> int:
        """+1 when the direction grows its axis, -1 otherwise."""
        return 1 if self in (Direction.RIGHT, Direction.BOTTOM) else -1

    @property
    def vector(self) -> Point:
        """Unit vector in scene coordinates."""
        if self.is_horizontal:
            return Point(self.sign, 0)
        return Point(0, self.sign)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_opposite(self, other: "Direction") -> bool:
        return self.opposite is other

    @classmethod
    def from_vector(cls, dx: float, dy: float) -> "Direction":
        """Classify a travel vector by the side it arrives on.

        The clockwise screen angle of the vector is bucketed into 90 degree
        sectors centred on the axes. A vector heading right arrives on the
        LEFT side of whatever it reaches, a vector heading down arrives on
        the TOP side, and so on.
        """
        o = math.degrees(math.atan2(abs(dy), abs(dx)))
        if dx < 0:
            angle = 180 - o if dy >= 0 else 180 + o
        else:
            angle = o if dy >= 0 else 360 - o

        if angle <= 45 or angle > 315:
            return cls.LEFT
        if angle <= 135:
            return cls.TOP
        if angle <= 225:
            return cls.RIGHT
        return cls.BOTTOM


_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Rect:
    """An axis-aligned shape rectangle. Never mutated by the router."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def to_box(self) -> "Box":
        return Box(self.x, self.y, self.x + self.width, self.y + self.height)

    def contains(self, p: Point) -> bool:
        """Inclusive containment test."""
        return (
            self.x <= p.x <= self.x + self.width
            and self.y <= p.y <= self.y + self.height
        )

    def intersects(self, other: "Rect") -> bool:
        """True if the two rectangles overlap or touch."""
        return not (
            other.x > self.x + self.width
            or other.x + other.width < self.x
            or other.y > self.y + self.height
            or other.y + other.height < self.y
        )


@dataclass
class Box:
    """Mutable axis-aligned box.

    Sides are addressed by the Direction they face, so the constraint
    solver can move the side of a box that looks towards another shape.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def side(self, direction: Direction) -> float:
        """Coordinate of the side facing ``direction``."""
        if direction is Direction.TOP:
            return self.min_y
        if direction is Direction.BOTTOM:
            return self.max_y
        if direction is Direction.LEFT:
            return self.min_x
        return self.max_x

    def set_side(self, direction: Direction, value: float) -> None:
        if direction is Direction.TOP:
            self.min_y = value
        elif direction is Direction.BOTTOM:
            self.max_y = value
        elif direction is Direction.LEFT:
            self.min_x = value
        else:
            self.max_x = value

    def span(self, horizontal: bool) -> Tuple[float, float]:
        """(low, high) extent along the x axis if ``horizontal`` else y."""
        if horizontal:
            return (self.min_x, self.max_x)
        return (self.min_y, self.max_y)

    def expanded(self, d: float) -> "Box":
        """Copy grown by ``d`` on every side (shrunk when negative)."""
        return Box(self.min_x - d, self.min_y - d, self.max_x + d, self.max_y + d)

    def corners(self) -> List[Point]:
        """Corners clockwise from the top-left."""
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        ]

    def contains(self, p: Point) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y


@dataclass(frozen=True)
class FreeEndpoint:
    """A connector end floating on the canvas, e.g. while being dragged.

    ``direction`` may be omitted; the router then derives it from the
    direction of travel between the two endpoints.
    """

    origin: Point
    direction: Optional[Direction] = None

    @property
    def box(self) -> None:
        return None


@dataclass(frozen=True)
class AttachedEndpoint:
    """A connector end anchored on a shape's boundary."""

    box: Rect
    origin: Point
    direction: Direction


Endpoint = Union[FreeEndpoint, AttachedEndpoint]


def anchor_direction(anchor: Point, rect: Rect) -> Direction:
    """Exit direction of an anchor sitting on ``rect``.

    The anchor leaves its shape on the side pointing away from the shape's
    center.
    """
    offset = anchor - rect.center
    return Direction.from_vector(offset.x, offset.y).opposite
