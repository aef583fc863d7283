"""
Multi-candidate path selection.

Which way to leave the start boundary point is not known up front, so the
search runs once per non-reversing first move and the results are ranked:

1. fewest inflection points on the search path alone
2. then fewest inflection points once the true origins are attached
3. then lowest search cost
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .constraints import EndpointConstraint
from .geometry import count_inflection_points
from .pathfinder import PathFinder, PathResult, move_candidates
from .primitives import Direction, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A successful search together with its ranking metrics."""

    first_move: Optional[Direction]
    result: PathResult
    inner_inflections: int
    total_inflections: int

    @property
    def score(self) -> Tuple[int, int, float]:
        return (self.inner_inflections, self.total_inflections, self.result.g)

    @property
    def path(self) -> List[Point]:
        return self.result.path


def make_candidate(
    result: PathResult,
    start: EndpointConstraint,
    end: EndpointConstraint,
    first_move: Optional[Direction] = None,
) -> Candidate:
    completed = [start.origin] + result.path + [end.origin]
    return Candidate(
        first_move=first_move,
        result=result,
        inner_inflections=count_inflection_points(result.path),
        total_inflections=count_inflection_points(completed),
    )


def search_candidates(
    finder: PathFinder,
    start: EndpointConstraint,
    end: EndpointConstraint,
    waypoint: Optional[Point] = None,
) -> List[Candidate]:
    """Run one independent search per allowed first move.

    Failed searches are dropped.
    """
    candidates: List[Candidate] = []
    for first_move in move_candidates(start.direction, first=True):
        result = finder.find(
            start.boundary_point,
            end.boundary_point,
            start.direction,
            end.direction,
            first_move=first_move,
            waypoint=waypoint,
        )
        if not result.found:
            continue

        candidate = make_candidate(result, start, end, first_move)
        logger.debug(
            "Candidate %s: %d/%d inflections, cost %.2f",
            first_move.value,
            candidate.inner_inflections,
            candidate.total_inflections,
            result.g,
        )
        candidates.append(candidate)
    return candidates


def select_best(candidates: Iterable[Candidate]) -> Optional[Candidate]:
    """Pick the best candidate; the earliest one wins exact ties."""
    best: Optional[Candidate] = None
    for candidate in candidates:
        if best is None or candidate.score < best.score:
            best = candidate
    return best
