"""
ortho-connector: Orthogonal connector routing for diagram editors.

Computes axis-aligned polylines between two anchors, each optionally
attached to a rectangular shape with a fixed exit direction.

Modules:
    router: Constraint solving, sparse grid, A* search and path selection
    config: TOML configuration loading
    cli: Command-line access to the router

Quick Start::

    from ortho_connector import AttachedEndpoint, Direction, Point, Rect, route

    start = AttachedEndpoint(Rect(0, 0, 100, 50), Point(100, 25), Direction.RIGHT)
    end = AttachedEndpoint(Rect(400, 0, 100, 50), Point(400, 25), Direction.LEFT)
    print(route(start, end).control_points)
"""

__version__ = "0.1.0"

from ortho_connector.router import (
    AttachedEndpoint,
    Connector,
    Direction,
    FreeEndpoint,
    Point,
    Rect,
    RouteResult,
    RoutingRules,
    route,
)

__all__ = [
    "__version__",
    "route",
    "RouteResult",
    "Connector",
    "RoutingRules",
    "Point",
    "Rect",
    "Direction",
    "FreeEndpoint",
    "AttachedEndpoint",
]
