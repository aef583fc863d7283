"""
A* pathfinding over the sparse routing grid.

This module provides:
- SearchNode: Node stored in the per-search arena
- PathResult: Outcome of one search
- PathFinder: 4-connected A* with forced first/last move constraints

The open set is a binary heap without decrease-key. Whenever a cell's
cost improves a fresh entry is pushed; entries for cells that are already
closed are skipped when popped.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .geometry import Coordinate, add_coords
from .grid import RoutingGrid
from .heuristics import DEFAULT_HEURISTIC, Heuristic, HeuristicContext
from .primitives import Direction, Point
from .rules import DEFAULT_RULES, RoutingRules

logger = logging.getLogger(__name__)

# (row, col) step for each direction; rows follow the y axis
MOVE_DELTAS: Dict[Direction, Coordinate] = {
    Direction.TOP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.BOTTOM: (1, 0),
    Direction.LEFT: (0, -1),
}


def move_direction(src: Coordinate, dst: Coordinate) -> Direction:
    """Direction of a single grid step."""
    d_row = dst[0] - src[0]
    d_col = dst[1] - src[1]
    if d_col == 0:
        return Direction.BOTTOM if d_row > 0 else Direction.TOP
    return Direction.RIGHT if d_col > 0 else Direction.LEFT


def move_candidates(direction: Direction, first: bool = False) -> List[Direction]:
    """Moves to try from a cell, preferred direction first.

    The first move out of the start can never reverse the start's exit
    direction, since that would run straight back into its shape.
    """
    rest = [d for d in Direction if d is not direction]
    if first:
        rest = [d for d in rest if d is not direction.opposite]
    return [direction] + rest


@dataclass
class SearchNode:
    """Node in the search arena. ``parent`` is an arena index."""

    coord: Coordinate
    g: float
    h: float
    parent: Optional[int] = None

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class PathResult:
    """Result of one A* search. An empty path means no route was found."""

    path: List[Point] = field(default_factory=list)
    g: float = math.inf

    @property
    def found(self) -> bool:
        return bool(self.path)


class PathFinder:
    """A* search between two lattice points.

    Example::

        finder = PathFinder(grid)
        result = finder.find(start, end, Direction.RIGHT, Direction.LEFT)
        if result.found:
            print(result.path, result.g)
    """

    def __init__(
        self,
        grid: RoutingGrid,
        rules: Optional[RoutingRules] = None,
        heuristic: Optional[Heuristic] = None,
    ):
        """
        Args:
            grid: The routing grid
            rules: Cost parameters (turn penalty)
            heuristic: Heuristic for A* search (default: WaypointHeuristic)
        """
        self.grid = grid
        self.rules = rules or DEFAULT_RULES
        self.heuristic = heuristic or DEFAULT_HEURISTIC

    def find(
        self,
        start: Point,
        end: Point,
        start_direction: Direction,
        end_direction: Direction,
        first_move: Optional[Direction] = None,
        waypoint: Optional[Point] = None,
    ) -> PathResult:
        """Find the cheapest rectilinear path from ``start`` to ``end``.

        Args:
            start: Lattice point the search starts from
            end: Lattice point the search ends at
            start_direction: Exit direction of the start; the first move
                never reverses it
            end_direction: Exit direction of the end; the final move may
                not travel along it
            first_move: Restrict the first expansion to this single move
            waypoint: Lattice point to pull the search through

        Returns:
            PathResult, with an empty path and infinite cost on failure
        """
        grid = self.grid
        start_coord = grid.get_coord(start)
        end_coord = grid.get_coord(end)
        context = HeuristicContext(
            goal=end_coord,
            waypoint=grid.get_coord(waypoint) if waypoint is not None else None,
        )

        nodes: List[SearchNode] = [
            SearchNode(start_coord, 0.0, self.heuristic.estimate(start_coord, context))
        ]
        # Entries are (f, node id); ids grow with insertion order and break ties
        open_set: List[Tuple[float, int]] = [(nodes[0].f, 0)]
        closed_set: Set[Coordinate] = set()
        g_scores: Dict[Coordinate, float] = {start_coord: 0.0}

        while open_set:
            _, node_id = heapq.heappop(open_set)
            current = nodes[node_id]
            coord = current.coord

            if coord in closed_set:
                continue

            if coord == end_coord:
                if current.parent is not None:
                    incoming = move_direction(nodes[current.parent].coord, coord)
                    if incoming is end_direction:
                        # Arrived through the end's own shape; keep looking
                        continue
                return PathResult(self._reconstruct(nodes, node_id), current.g)

            closed_set.add(coord)

            if current.parent is None:
                moves = move_candidates(start_direction, first=True)
                if first_move is not None:
                    moves = [first_move] if first_move in moves else []
                last_dir = None
            else:
                moves = move_candidates(start_direction)
                last_dir = move_direction(nodes[current.parent].coord, coord)

            for move in moves:
                nxt = add_coords(coord, MOVE_DELTAS[move])
                if nxt in closed_set or not grid.is_walkable(coord, nxt):
                    continue

                turn_cost = 0.0
                if last_dir is not None and last_dir is not move:
                    turn_cost = self.rules.turn_penalty
                new_g = current.g + grid.get_cost(nxt) + turn_cost

                # The end cell is re-queued for every arrival, since an
                # arrival may be rejected for its direction
                if nxt != end_coord and new_g >= g_scores.get(nxt, math.inf):
                    continue
                g_scores[nxt] = min(new_g, g_scores.get(nxt, math.inf))

                nodes.append(SearchNode(nxt, new_g, self.heuristic.estimate(nxt, context), node_id))
                heapq.heappush(open_set, (nodes[-1].f, len(nodes) - 1))

        logger.debug(
            "No path from %s to %s (first move %s, %d nodes)",
            start,
            end,
            first_move.value if first_move else "any",
            len(nodes),
        )
        return PathResult()

    def _reconstruct(self, nodes: List[SearchNode], node_id: int) -> List[Point]:
        """Walk parent indices back to the start."""
        path: List[Point] = []
        index: Optional[int] = node_id
        while index is not None:
            node = nodes[index]
            path.append(self.grid.get_point(node.coord))
            index = node.parent
        path.reverse()
        return path
