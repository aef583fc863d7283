"""
Orthogonal connector router.

Routes axis-aligned connectors between two anchors with:
- Clearance-aware boundary points around the attached shapes
- A sparse grid seeded from a handful of candidate coordinates
- A* search with shape-aware cell costs and a turn penalty
- Multi-candidate selection by bend count, then cost
- Collinear point compression

Example::

    from ortho_connector.router import AttachedEndpoint, Direction, Point, Rect, route

    start = AttachedEndpoint(Rect(0, 0, 100, 50), Point(100, 25), Direction.RIGHT)
    end = AttachedEndpoint(Rect(400, 100, 100, 50), Point(400, 125), Direction.LEFT)

    result = route(start, end, min_dist=20)
    print(result.control_points)
"""

from .connector import Connector
from .constraints import BoundaryConstraints, EndpointConstraint, solve_constraints
from .core import RouteResult, resolve_directions, route
from .grid import RoutingGrid, build_grid
from .heuristics import (
    Heuristic,
    HeuristicContext,
    ManhattanHeuristic,
    WaypointHeuristic,
    can_follow_waypoint,
)
from .optimizer import compress_path
from .pathfinder import PathFinder, PathResult, SearchNode
from .primitives import (
    AttachedEndpoint,
    Box,
    Direction,
    Endpoint,
    FreeEndpoint,
    Point,
    Rect,
    anchor_direction,
)
from .rules import DEFAULT_RULES, RoutingRules
from .selector import Candidate, search_candidates, select_best

__all__ = [
    # High-level API
    "route",
    "RouteResult",
    "Connector",
    "resolve_directions",
    # Constraints
    "solve_constraints",
    "BoundaryConstraints",
    "EndpointConstraint",
    # Grid
    "RoutingGrid",
    "build_grid",
    # Pathfinding
    "PathFinder",
    "PathResult",
    "SearchNode",
    # Heuristics
    "Heuristic",
    "HeuristicContext",
    "ManhattanHeuristic",
    "WaypointHeuristic",
    "can_follow_waypoint",
    # Selection and compression
    "Candidate",
    "search_candidates",
    "select_best",
    "compress_path",
    # Primitives
    "Point",
    "Rect",
    "Box",
    "Direction",
    "Endpoint",
    "FreeEndpoint",
    "AttachedEndpoint",
    "anchor_direction",
    # Rules
    "RoutingRules",
    "DEFAULT_RULES",
]
