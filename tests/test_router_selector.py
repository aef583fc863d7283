"""Tests for router/selector.py and router/heuristics.py modules."""

import pytest

from ortho_connector.router.constraints import solve_constraints
from ortho_connector.router.grid import build_grid
from ortho_connector.router.heuristics import (
    HeuristicContext,
    ManhattanHeuristic,
    WaypointHeuristic,
    can_follow_waypoint,
)
from ortho_connector.router.pathfinder import PathFinder, PathResult
from ortho_connector.router.primitives import Direction
from ortho_connector.router.selector import (
    Candidate,
    make_candidate,
    search_candidates,
    select_best,
)

from conftest import points_of


def _solve(start, end, min_dist=20):
    return solve_constraints(start, start.direction, end, end.direction, min_dist)


def _candidate(inner, total, g, first_move=None):
    return Candidate(first_move, PathResult(points_of((0, 0)), g), inner, total)


class TestHeuristics:
    """Tests for the A* heuristics."""

    def test_manhattan(self):
        h = ManhattanHeuristic()
        assert h.estimate((0, 0), HeuristicContext(goal=(2, 3))) == 5
        assert h.name == "Manhattan"

    def test_waypoint_adds_detour(self):
        h = WaypointHeuristic()
        context = HeuristicContext(goal=(2, 2), waypoint=(1, 1))
        assert h.estimate((0, 0), context) == 6

    def test_waypoint_without_waypoint(self):
        h = WaypointHeuristic()
        assert h.estimate((0, 0), HeuristicContext(goal=(2, 2))) == 4


class TestCanFollowWaypoint:
    """Tests for the waypoint corridor check."""

    def test_open_corridor(self, free_pair):
        constraints = _solve(*free_pair)
        grid, waypoint, _ = build_grid(constraints)

        assert can_follow_waypoint(
            grid,
            constraints.start.boundary_point,
            Direction.RIGHT,
            constraints.end.boundary_point,
            Direction.LEFT,
            waypoint,
            lambda a, b: True,
        )

    def test_requires_opposite_directions(self, free_pair):
        constraints = _solve(*free_pair)
        grid, waypoint, _ = build_grid(constraints)

        assert not can_follow_waypoint(
            grid,
            constraints.start.boundary_point,
            Direction.RIGHT,
            constraints.end.boundary_point,
            Direction.TOP,
            waypoint,
            lambda a, b: True,
        )

    def test_blocked_corridor(self, free_pair):
        constraints = _solve(*free_pair)
        grid, waypoint, _ = build_grid(constraints)

        assert not can_follow_waypoint(
            grid,
            constraints.start.boundary_point,
            Direction.RIGHT,
            constraints.end.boundary_point,
            Direction.LEFT,
            waypoint,
            lambda a, b: False,
        )


class TestSelectBest:
    """Tests for candidate ranking."""

    def test_empty(self):
        assert select_best([]) is None

    def test_fewer_inner_inflections_win(self):
        a = _candidate(2, 2, 1.0)
        b = _candidate(1, 3, 9.0)
        assert select_best([a, b]) is b

    def test_total_inflections_break_ties(self):
        a = _candidate(1, 3, 1.0)
        b = _candidate(1, 2, 9.0)
        assert select_best([a, b]) is b

    def test_cost_breaks_ties(self):
        a = _candidate(1, 2, 5.0)
        b = _candidate(1, 2, 4.0)
        assert select_best([a, b]) is b

    def test_exact_tie_keeps_first(self):
        a = _candidate(1, 2, 4.0, Direction.RIGHT)
        b = _candidate(1, 2, 4.0, Direction.BOTTOM)
        assert select_best([a, b]) is a


class TestSearchCandidates:
    """Tests for the per-first-move searches."""

    def test_make_candidate_counts_origins(self, free_pair):
        constraints = _solve(*free_pair)
        result = PathResult(points_of((20, 0), (20, 100), (80, 100)), 3.0)
        candidate = make_candidate(result, constraints.start, constraints.end)

        assert candidate.inner_inflections == 1
        # (0, 0) -> (20, 0) turns down, (80, 100) -> (100, 100) is straight
        assert candidate.total_inflections == 2
        assert candidate.score == (1, 2, 3.0)

    def test_one_search_per_first_move(self, free_pair):
        constraints = _solve(*free_pair)
        grid, waypoint, _ = build_grid(constraints)
        candidates = search_candidates(PathFinder(grid), constraints.start, constraints.end, waypoint)

        # Moving up from the top row is impossible, so only two searches succeed
        assert [c.first_move for c in candidates] == [Direction.RIGHT, Direction.BOTTOM]
        for candidate in candidates:
            assert candidate.path[0] == constraints.start.boundary_point
            assert candidate.path[-1] == constraints.end.boundary_point

    def test_best_candidate_is_z_shape(self, free_pair):
        constraints = _solve(*free_pair)
        grid, waypoint, _ = build_grid(constraints)
        best = select_best(search_candidates(PathFinder(grid), constraints.start, constraints.end, waypoint))

        assert best is not None
        assert best.first_move is Direction.RIGHT
        assert best.total_inflections == 2
        assert best.result.g == pytest.approx(4.04)
