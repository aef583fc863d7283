"""
Connector model with route caching.

Diagram code re-routes a connector on every move or resize of either
attached shape. Connector keeps the last RouteResult and only recomputes
when an endpoint actually changed or the caller reports a shape change.
"""

import logging
from typing import List, Optional

from .core import RouteResult, route
from .primitives import Endpoint, Point
from .rules import DEFAULT_RULES, RoutingRules

logger = logging.getLogger(__name__)


class Connector:
    """A routed connection between two endpoints.

    Example::

        connector = Connector(start, end)
        points = connector.points()

        # A shape moved: hand over the new endpoint
        connector.set_start(moved_start)
        points = connector.points()  # re-routed once
    """

    def __init__(
        self,
        start: Endpoint,
        end: Endpoint,
        min_dist: Optional[float] = None,
        rules: Optional[RoutingRules] = None,
    ):
        self.rules = rules or DEFAULT_RULES
        self.min_dist = self.rules.min_dist if min_dist is None else min_dist
        self._start = start
        self._end = end
        self._result: Optional[RouteResult] = None
        self.route_count = 0

    @property
    def start(self) -> Endpoint:
        return self._start

    @property
    def end(self) -> Endpoint:
        return self._end

    def set_start(self, endpoint: Endpoint) -> bool:
        """Replace the start endpoint. Returns True if the route went stale."""
        if endpoint == self._start:
            return False
        self._start = endpoint
        self.invalidate()
        return True

    def set_end(self, endpoint: Endpoint) -> bool:
        """Replace the end endpoint. Returns True if the route went stale."""
        if endpoint == self._end:
            return False
        self._end = endpoint
        self.invalidate()
        return True

    def invalidate(self) -> None:
        """Drop the cached route, e.g. after an attached shape changed."""
        self._result = None

    @property
    def is_stale(self) -> bool:
        return self._result is None

    @property
    def result(self) -> RouteResult:
        """The current route, computed on first access after a change."""
        if self._result is None:
            self._result = route(self._start, self._end, self.min_dist, self.rules)
            self.route_count += 1
            logger.debug("Connector re-routed (%d routes so far)", self.route_count)
        return self._result

    def points(self) -> List[Point]:
        """Full polyline from the start origin to the end origin."""
        return list(self.result.control_points)

    def inner_points(self) -> List[Point]:
        """Bend points only, without the two origins."""
        return self.points()[1:-1]
