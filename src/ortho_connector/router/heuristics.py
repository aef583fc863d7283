"""
Pluggable heuristics for A* pathfinding.

This module provides:
- Heuristic: Abstract base class for A* heuristics
- HeuristicContext: Goal and waypoint handed to a heuristic
- ManhattanHeuristic: Grid-index Manhattan distance (baseline)
- WaypointHeuristic: Manhattan distance plus a pull towards a waypoint
- can_follow_waypoint: Decides whether a waypoint is usable for a search

Heuristics work in grid-index units, not scene units: the sparse grid has
uneven spacing, and every step costs at least the basic cell cost.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from .geometry import Coordinate, manhattan_distance
from .grid import RoutingGrid
from .primitives import Direction, Point


@dataclass
class HeuristicContext:
    """Context providing goal information for heuristic computation."""

    goal: Coordinate

    # Cell the route should pass through, when following it is possible
    waypoint: Optional[Coordinate] = None


class Heuristic(ABC):
    """Abstract base class for A* heuristics.

    Subclasses implement `estimate()` to return the heuristic value.
    """

    @property
    def name(self) -> str:
        """Human-readable name for this heuristic."""
        return self.__class__.__name__

    @abstractmethod
    def estimate(self, coord: Coordinate, context: HeuristicContext) -> float:
        """Estimate cost from ``coord`` to the goal.

        Args:
            coord: Current grid cell (row, col)
            context: HeuristicContext with goal and optional waypoint

        Returns:
            Estimated cost to reach goal
        """
        pass


class ManhattanHeuristic(Heuristic):
    """Simple Manhattan distance heuristic.

    Admissible on any routing grid since each step costs at least the
    basic cell cost.
    """

    @property
    def name(self) -> str:
        return "Manhattan"

    def estimate(self, coord: Coordinate, context: HeuristicContext) -> float:
        return manhattan_distance(coord, context.goal)


class WaypointHeuristic(Heuristic):
    """Manhattan distance to the goal plus distance to a waypoint.

    For endpoints facing each other this pulls the search through the
    center of the two boundary points, so "S" and "Z" shaped routes bend
    halfway instead of hugging one of the shapes. Not admissible; falls
    back to plain Manhattan when the context carries no waypoint.
    """

    @property
    def name(self) -> str:
        return "Waypoint"

    def estimate(self, coord: Coordinate, context: HeuristicContext) -> float:
        h = manhattan_distance(coord, context.goal)
        if context.waypoint is None:
            return h
        return h + manhattan_distance(coord, context.waypoint)


DEFAULT_HEURISTIC = WaypointHeuristic()


def can_follow_waypoint(
    grid: RoutingGrid,
    start: Point,
    start_direction: Direction,
    end: Point,
    end_direction: Direction,
    waypoint: Point,
    can_pass: Callable[[Point, Point], bool],
) -> bool:
    """Check whether a search may be pulled through ``waypoint``.

    Only endpoints facing opposite directions qualify. The corridor through
    the waypoint, perpendicular to the start direction, is walked cell by
    cell towards the start's and the end's position; any blocked step
    rules the waypoint out.
    """
    if not start_direction.is_opposite(end_direction):
        return False

    w_row, w_col = grid.get_coord(waypoint)
    s_row, s_col = grid.get_coord(start)
    e_row, e_col = grid.get_coord(end)

    if start_direction.is_horizontal:
        # Vertical corridor at the waypoint's column
        base, lo, hi = w_row, min(s_row, e_row), max(s_row, e_row)

        def cell(i: int) -> Point:
            return grid.get_point((i, w_col))

    else:
        # Horizontal corridor at the waypoint's row
        base, lo, hi = w_col, min(s_col, e_col), max(s_col, e_col)

        def cell(i: int) -> Point:
            return grid.get_point((w_row, i))

    for i in range(base, lo, -1):
        if not can_pass(cell(i), cell(i - 1)):
            return False
    for j in range(base, hi):
        if not can_pass(cell(j), cell(j + 1)):
            return False
    return True
