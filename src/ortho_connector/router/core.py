"""
Route orchestration.

This module provides the single entry point used by callers::

    from ortho_connector.router import AttachedEndpoint, Direction, Point, Rect, route

    start = AttachedEndpoint(Rect(0, 0, 100, 50), Point(100, 25), Direction.RIGHT)
    end = AttachedEndpoint(Rect(400, 0, 100, 50), Point(400, 25), Direction.LEFT)
    result = route(start, end, min_dist=20)
    print(result.control_points)

Each call builds its constraints, grid and search state from scratch and
discards them on return.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constraints import BoundaryConstraints, solve_constraints
from .geometry import segment_crosses_box
from .grid import build_grid
from .heuristics import Heuristic, can_follow_waypoint
from .optimizer import compress_path
from .pathfinder import PathFinder
from .primitives import Box, Direction, Endpoint, Point
from .rules import DEFAULT_RULES, RoutingRules
from .selector import Candidate, make_candidate, search_candidates, select_best

logger = logging.getLogger(__name__)


@dataclass
class RouteResult:
    """Outcome of routing one connector.

    ``control_points`` always runs from the start origin to the end origin.
    The remaining fields are diagnostics.
    """

    control_points: List[Point]
    debug_waypoints: List[Point] = field(default_factory=list)
    cost: float = math.inf
    found: bool = False
    boundary_boxes: List[Box] = field(default_factory=list)
    is_covered: bool = False

    @property
    def bends(self) -> int:
        return max(0, len(self.control_points) - 2)

    @property
    def length(self) -> float:
        return sum(a.distance_to(b) for a, b in zip(self.control_points, self.control_points[1:]))


def resolve_directions(start: Endpoint, end: Endpoint) -> Tuple[Direction, Direction]:
    """Fill in missing directions of free endpoints.

    A free end without a direction is entered on the side facing the
    travel vector from start to end; a free start leaves the opposite way.
    """
    travel = end.origin - start.origin
    arriving = Direction.from_vector(travel.x, travel.y)

    start_direction = start.direction if start.direction is not None else arriving.opposite
    end_direction = end.direction if end.direction is not None else arriving
    return start_direction, end_direction


def _select(
    finder: PathFinder,
    constraints: BoundaryConstraints,
    waypoint: Optional[Point],
) -> Optional[Candidate]:
    start, end = constraints.start, constraints.end

    if constraints.is_covered:
        # One shape sits inside the other: a single direct search suffices
        result = finder.find(
            start.boundary_point,
            end.boundary_point,
            start.direction,
            end.direction,
            waypoint=waypoint,
        )
        return make_candidate(result, start, end) if result.found else None

    return select_best(search_candidates(finder, start, end, waypoint))


def route(
    start: Endpoint,
    end: Endpoint,
    min_dist: Optional[float] = None,
    rules: Optional[RoutingRules] = None,
    heuristic: Optional[Heuristic] = None,
) -> RouteResult:
    """Route an orthogonal connector between two endpoints.

    Args:
        start: Start endpoint
        end: End endpoint
        min_dist: Clearance distance (default: ``rules.min_dist``)
        rules: Cost model (default: RoutingRules())
        heuristic: A* heuristic (default: WaypointHeuristic)

    Returns:
        RouteResult whose control points start at ``start.origin`` and end
        at ``end.origin``. When no route exists the two origins are joined
        directly and ``found`` is False.
    """
    rules = rules or DEFAULT_RULES
    if min_dist is None:
        min_dist = rules.min_dist

    if start.origin == end.origin:
        return RouteResult(control_points=[start.origin, end.origin], cost=0.0, found=True)

    start_direction, end_direction = resolve_directions(start, end)
    constraints = solve_constraints(start, start_direction, end, end_direction, min_dist)
    grid, waypoint, boxes = build_grid(constraints, rules)

    def can_pass(a: Point, b: Point) -> bool:
        if constraints.is_covered:
            return True
        return not any(segment_crosses_box(a, b, box) for box in boxes)

    follow: Optional[Point] = None
    if start_direction.is_opposite(end_direction) and can_follow_waypoint(
        grid,
        constraints.start.boundary_point,
        start_direction,
        constraints.end.boundary_point,
        end_direction,
        waypoint,
        can_pass,
    ):
        follow = waypoint

    finder = PathFinder(grid, rules, heuristic)
    best = _select(finder, constraints, follow)

    boundary_boxes = [
        info.boundary_box
        for info in (constraints.start, constraints.end)
        if info.boundary_box is not None
    ]

    if best is None:
        logger.warning(
            "Path not found from %s (%s) to %s (%s), using direct line",
            start.origin,
            start_direction.value,
            end.origin,
            end_direction.value,
        )
        return RouteResult(
            control_points=[start.origin, end.origin],
            debug_waypoints=grid.points,
            boundary_boxes=boundary_boxes,
            is_covered=constraints.is_covered,
        )

    control_points = compress_path([start.origin] + best.path + [end.origin])
    logger.debug(
        "Routed %s -> %s with %d points (cost %.2f)",
        start.origin,
        end.origin,
        len(control_points),
        best.result.g,
    )
    return RouteResult(
        control_points=control_points,
        debug_waypoints=grid.points,
        cost=best.result.g,
        found=True,
        boundary_boxes=boundary_boxes,
        is_covered=constraints.is_covered,
    )
