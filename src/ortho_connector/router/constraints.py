"""
Boundary constraint solving.

Works out where the search actually starts and ends. Each endpoint gets a
boundary point, a short stub leaving the anchor in its exit direction, and
(when it is attached to a shape) a boundary box: the shape padded by the
clearance distance. When two shapes sit closer together than twice the
clearance, the padding between them is narrowed to half the gap so the
connector does not detour further than the available space.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .geometry import intervals_overlap
from .primitives import Box, Direction, Endpoint, Point

logger = logging.getLogger(__name__)


@dataclass
class EndpointConstraint:
    """Solved constraints for one endpoint."""

    origin: Point
    direction: Direction
    boundary_point: Point
    box: Optional[Box] = None  # The owning shape, as a box
    boundary_box: Optional[Box] = None  # Shape padded by the clearance
    padded_box: Optional[Box] = None  # Unnarrowed padding, for overlap tests


@dataclass
class BoundaryConstraints:
    """Result of solving both endpoints."""

    start: EndpointConstraint
    end: EndpointConstraint
    is_intersect: bool
    is_covered: bool


def _offset(origin: Point, direction: Direction, distance: float) -> Point:
    return origin + direction.vector.scale(distance)


def _axis_value(p: Point, horizontal: bool) -> float:
    return p.x if horizontal else p.y


def _with_axis_value(p: Point, horizontal: bool, value: float) -> Point:
    return Point(value, p.y) if horizontal else Point(p.x, value)


def check_intersect(start: Endpoint, end: Endpoint) -> bool:
    """True if both endpoints own shapes and those shapes overlap."""
    if start.box is None or end.box is None:
        return False
    return start.box.intersects(end.box)


def check_covered(start: Endpoint, end: Endpoint) -> bool:
    """True if each origin lies inside the other endpoint's shape.

    Only endpoints with a shape take part; two free endpoints are never
    covered.
    """
    tests = [(start.origin, end.box), (end.origin, start.box)]
    tests = [(p, rect) for p, rect in tests if rect is not None]
    if not tests:
        return False
    return all(rect.contains(p) for p, rect in tests)


def _make_constraint(endpoint: Endpoint, direction: Direction, min_dist: float) -> EndpointConstraint:
    box = endpoint.box.to_box() if endpoint.box is not None else None
    return EndpointConstraint(
        origin=endpoint.origin,
        direction=direction,
        boundary_point=_offset(endpoint.origin, direction, min_dist),
        box=box,
        boundary_box=box.expanded(min_dist) if box is not None else None,
        padded_box=box.expanded(min_dist) if box is not None else None,
    )


def _is_contained(
    current: EndpointConstraint, other: EndpointConstraint, direction: Direction
) -> bool:
    """Check whether ``other`` lies across from ``current`` along ``direction``.

    The two padded extents must overlap on the axis perpendicular to
    ``direction``. A free ``current`` uses its origin instead of an extent;
    a free ``other`` has nothing to share a gap with.
    """
    if other.padded_box is None:
        return False

    # Perpendicular axis: y for horizontal directions, x for vertical ones
    perpendicular_is_x = not direction.is_horizontal
    other_span = other.padded_box.span(perpendicular_is_x)

    if current.padded_box is not None:
        return intervals_overlap(current.padded_box.span(perpendicular_is_x), other_span)

    value = _axis_value(current.origin, perpendicular_is_x)
    return other_span[0] < value < other_span[1]


def _narrow_gaps(current: EndpointConstraint, other: EndpointConstraint, min_dist: float) -> None:
    for direction in Direction:
        horizontal = direction.is_horizontal
        sign = direction.sign

        if current.box is not None:
            base = current.box.side(direction)
        else:
            base = _axis_value(current.origin, horizontal)

        if other.box is not None:
            target = other.box.side(direction.opposite)
        else:
            target = _axis_value(other.origin, horizontal)

        dist = target - base
        if dist == 0:
            # Touching sides: no gap to share
            continue
        towards = 1 if dist > 0 else -1
        half_gap = abs(dist) / 2

        should_adjust = towards == sign and abs(dist) < min_dist * 2
        if should_adjust and _is_contained(current, other, direction):
            logger.debug(
                "Narrowing %s padding to %.2f (gap %.2f < %.2f)",
                direction.value,
                half_gap,
                abs(dist),
                min_dist * 2,
            )
            if current.box is not None and current.boundary_box is not None:
                current.boundary_box.set_side(direction, current.box.side(direction) + sign * half_gap)

            if other.box is not None and other.boundary_box is not None:
                opposite = direction.opposite
                other.boundary_box.set_side(opposite, other.box.side(opposite) - sign * half_gap)

            if direction is current.direction and current.box is not None:
                value = _axis_value(current.origin, horizontal) + sign * half_gap
                current.boundary_point = _with_axis_value(current.boundary_point, horizontal, value)


def solve_constraints(
    start: Endpoint,
    start_direction: Direction,
    end: Endpoint,
    end_direction: Direction,
    min_dist: float,
) -> BoundaryConstraints:
    """Compute boundary points and boxes for both endpoints.

    Free endpoints keep a fixed ``min_dist`` stub. Attached endpoints get
    the same stub unless the gap towards the other shape is narrower than
    ``2 * min_dist``, in which case both sides of the gap share it equally.

    Args:
        start: Start endpoint
        start_direction: Resolved exit direction of the start
        end: End endpoint
        end_direction: Resolved exit direction of the end
        min_dist: Clearance distance

    Returns:
        BoundaryConstraints for the pair
    """
    is_intersect = check_intersect(start, end)
    is_covered = check_covered(start, end)

    first = _make_constraint(start, start_direction, min_dist)
    second = _make_constraint(end, end_direction, min_dist)

    # Nested shapes: the stubs alone are enough, there is nothing to detour
    if not is_covered:
        for current, other in _pairs(first, second):
            _narrow_gaps(current, other, min_dist)

    return BoundaryConstraints(
        start=first,
        end=second,
        is_intersect=is_intersect,
        is_covered=is_covered,
    )


def _pairs(
    a: EndpointConstraint, b: EndpointConstraint
) -> Tuple[Tuple[EndpointConstraint, EndpointConstraint], ...]:
    return ((a, b), (b, a))
