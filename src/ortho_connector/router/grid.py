"""
Sparse rectilinear routing grid.

This module provides:
- RoutingGrid: Lattice over a handful of candidate coordinates with
  per-cell cost and a walkability predicate
- candidate_points: Seeds the lattice from the solved boundary constraints
- build_grid: Wires the cost model and walkability rules for one route

The grid never samples the full canvas. A few candidate points (the
boundary points, padding corners, midlines between the two endpoints) are
enough to express every "L", "S", "Z" and "U" shaped connector, and keep
each search to a few dozen cells.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .constraints import BoundaryConstraints
from .geometry import Coordinate, midpoint, segment_crosses_box, unique_points
from .primitives import Box, Point
from .rules import DEFAULT_RULES, RoutingRules

logger = logging.getLogger(__name__)

CostFunction = Callable[[Point, float], float]
WalkFunction = Callable[[Point, Point], bool]


class RoutingGrid:
    """Lattice formed by the distinct x and y values of a point set.

    Cells are addressed as ``(row, col)``: ``row`` indexes ``y_axis`` and
    ``col`` indexes ``x_axis``.
    """

    BASIC_COST = 1.0

    def __init__(
        self,
        points: Sequence[Point],
        get_cost: Optional[CostFunction] = None,
        get_walkable: Optional[WalkFunction] = None,
        basic_cost: float = BASIC_COST,
    ):
        self.x_axis: List[float] = sorted({p.x for p in points})
        self.y_axis: List[float] = sorted({p.y for p in points})
        self.rows = len(self.y_axis)
        self.cols = len(self.x_axis)
        self.basic_cost = basic_cost
        self._get_walkable = get_walkable

        self._x_index: Dict[float, int] = {x: i for i, x in enumerate(self.x_axis)}
        self._y_index: Dict[float, int] = {y: i for i, y in enumerate(self.y_axis)}

        self.point_map: List[List[Point]] = [
            [Point(x, y) for x in self.x_axis] for y in self.y_axis
        ]
        self.costs: List[List[float]] = [
            [get_cost(p, basic_cost) if get_cost else basic_cost for p in row]
            for row in self.point_map
        ]

    @property
    def points(self) -> List[Point]:
        """Every lattice point, row by row."""
        return [p for row in self.point_map for p in row]

    def get_coord(self, p: Point) -> Coordinate:
        """Grid cell of a point that lies on the lattice."""
        return (self._y_index[p.y], self._x_index[p.x])

    def get_point(self, coord: Coordinate) -> Point:
        return self.point_map[coord[0]][coord[1]]

    def get_cost(self, coord: Coordinate) -> float:
        return self.costs[coord[0]][coord[1]]

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord[0] < self.rows and 0 <= coord[1] < self.cols

    def is_walkable(self, current: Coordinate, nxt: Coordinate) -> bool:
        """Check whether the move from ``current`` to ``nxt`` is allowed."""
        if not self.in_bounds(nxt):
            return False
        if self._get_walkable is None:
            return True
        return self._get_walkable(self.get_point(current), self.get_point(nxt))


def candidate_points(constraints: BoundaryConstraints) -> Tuple[List[Point], Point]:
    """Collect the lattice seeds for a route.

    Returns:
        (points, waypoint) where waypoint is the center between the two
        boundary points
    """
    s = constraints.start.boundary_point
    e = constraints.end.boundary_point
    center = midpoint(s, e)

    points = [
        s,
        e,
        Point(s.x, center.y),
        Point(e.x, center.y),
        Point(center.x, s.y),
        Point(center.x, e.y),
        center,
    ]

    # Free origins add a row and column beside their stubs, so two stubs on
    # one line still leave room to turn
    for info in (constraints.start, constraints.end):
        if info.box is None:
            points.append(info.origin)

    if not constraints.is_covered:
        for info in (constraints.start, constraints.end):
            if info.boundary_box is not None:
                points.extend(info.boundary_box.corners())

    return unique_points(points), center


def cost_factor(constraints: BoundaryConstraints, rules: RoutingRules) -> float:
    """How strongly cells inside shapes and padding are penalised."""
    if constraints.is_covered:
        return 0.0
    if not constraints.is_intersect:
        return rules.cost_factor_separate
    if constraints.start.direction.is_opposite(constraints.end.direction):
        return rules.cost_factor_intersect
    return 0.0


def build_grid(
    constraints: BoundaryConstraints,
    rules: Optional[RoutingRules] = None,
) -> Tuple[RoutingGrid, Point, List[Box]]:
    """Build the routing grid for one pair of solved endpoints.

    Returns:
        (grid, waypoint, boxes) where boxes are the shrunk padding boxes
        used for walkability checks
    """
    rules = rules or DEFAULT_RULES
    points, waypoint = candidate_points(constraints)

    inner_boxes = [constraints.start.box, constraints.end.box]
    # Shrunk so moves along the padding edge itself stay legal
    padding_boxes = [
        info.boundary_box.expanded(-rules.walk_margin) if info.boundary_box is not None else None
        for info in (constraints.start, constraints.end)
    ]
    boxes = [box for box in padding_boxes if box is not None]
    factor = cost_factor(constraints, rules)

    if len(boxes) == 2:
        should_check = not constraints.is_intersect
    else:
        should_check = not constraints.is_covered

    def get_cost(p: Point, basic: float) -> float:
        weight = 0
        for inner, padding in zip(inner_boxes, padding_boxes):
            # Cutting through a shape costs more than grazing its padding
            if inner is not None and inner.contains(p):
                weight += rules.cost_inside_shape
            elif padding is not None and padding.contains(p):
                weight += rules.cost_inside_padding
        return basic + weight * factor

    def get_walkable(current: Point, nxt: Point) -> bool:
        if should_check:
            return not any(segment_crosses_box(current, nxt, box) for box in boxes)
        return True

    grid = RoutingGrid(points, get_cost, get_walkable, basic_cost=rules.basic_cost)

    logger.debug(
        "Built %dx%d grid from %d candidate points (cost factor %.1f, checked=%s)",
        grid.rows,
        grid.cols,
        len(points),
        factor,
        should_check,
    )
    return grid, waypoint, boxes
