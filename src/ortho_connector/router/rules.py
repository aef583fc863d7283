"""
Routing rules: clearance and A* cost parameters.
"""

from dataclasses import dataclass


@dataclass
class RoutingRules:
    """Cost model for connector routing."""

    min_dist: float = 20.0  # Clearance between a connector and its shapes

    # Costs for A* (tune these for routing style)
    basic_cost: float = 1.0  # Cost of entering any grid cell
    turn_penalty: float = 0.02  # Tie-breaker favouring straighter routes

    # Weight of padding/shape cells in the cell cost
    cost_factor_separate: float = 5.0  # Shapes apart: strongly avoid padding
    cost_factor_intersect: float = 2.0  # Shapes overlap and face each other
    cost_inside_shape: int = 2
    cost_inside_padding: int = 1

    # Padded boxes are shrunk by this much before walkability checks so
    # moves along the padding edge stay legal
    walk_margin: float = 1.0


DEFAULT_RULES = RoutingRules()
