"""
Connector routing CLI command.

Routes a single connector and prints its control points:

    ortho-connector route --start 100,25 --start-box 0,0,100,50 --start-dir right \\
        --end 400,125 --end-box 400,100,100,50 --end-dir left
    ortho-connector route --start 0,0 --end 100,100 --format json

Values starting with a minus sign must be attached with "=", otherwise
argparse reads them as options:

    ortho-connector route --start=-10,5 --end=40,-20
"""

import argparse
import json
import logging
import math
from typing import List, Optional, Tuple

from ortho_connector.config import Config
from ortho_connector.exceptions import ValidationError
from ortho_connector.router import (
    AttachedEndpoint,
    Direction,
    Endpoint,
    FreeEndpoint,
    Point,
    Rect,
    RouteResult,
    route,
)

from .utils import print_error

DIRECTION_CHOICES = [d.value for d in Direction]


def _parse_numbers(text: str, count: int, label: str, errors: List[str]) -> Optional[Tuple[float, ...]]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != count:
        errors.append(f"{label}: expected {count} comma-separated numbers, got '{text}'")
        return None
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        errors.append(f"{label}: not a number in '{text}'")
        return None


def build_endpoint(
    label: str,
    point_text: str,
    box_text: Optional[str],
    direction_text: Optional[str],
    errors: List[str],
) -> Optional[Endpoint]:
    """Build an endpoint from command-line text, collecting errors."""
    error_count = len(errors)
    coords = _parse_numbers(point_text, 2, label, errors)
    direction = Direction(direction_text) if direction_text else None

    if box_text is None:
        if coords is None:
            return None
        return FreeEndpoint(Point(*coords), direction)

    box = _parse_numbers(box_text, 4, f"{label}-box", errors)
    if direction is None:
        errors.append(f"{label}: --{label}-dir is required when --{label}-box is given")
    if box is not None and (box[2] < 0 or box[3] < 0):
        errors.append(f"{label}-box: width and height must be non-negative")
    if coords is None or box is None or direction is None or len(errors) > error_count:
        return None
    return AttachedEndpoint(Rect(*box), Point(*coords), direction)


def _result_to_dict(result: RouteResult, debug: bool) -> dict:
    data = {
        "found": result.found,
        "cost": None if math.isinf(result.cost) else round(result.cost, 4),
        "control_points": [[p.x, p.y] for p in result.control_points],
    }
    if debug:
        data["covered"] = result.is_covered
        data["debug_waypoints"] = [[p.x, p.y] for p in result.debug_waypoints]
        data["boundary_boxes"] = [
            [b.min_x, b.min_y, b.max_x, b.max_y] for b in result.boundary_boxes
        ]
    return data


def _print_table(result: RouteResult, debug: bool) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Control Points")
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for i, p in enumerate(result.control_points):
        table.add_row(str(i), f"{p.x:g}", f"{p.y:g}")
    console.print(table)

    if result.found:
        console.print(f"Bends: {result.bends}  Length: {result.length:g}  Cost: {result.cost:.2f}")
    else:
        console.print("[yellow]No orthogonal route found, using direct line[/yellow]")

    if debug:
        console.print(f"Covered: {result.is_covered}")
        console.print(f"Grid points: {len(result.debug_waypoints)}")


def add_route_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--start",
        required=True,
        help="Start anchor as X,Y; write negative values as --start=-10,5",
    )
    parser.add_argument("--start-box", help="Start shape as X,Y,W,H (--start-box=-50,0,50,50)")
    parser.add_argument("--start-dir", choices=DIRECTION_CHOICES, help="Start exit direction")
    parser.add_argument(
        "--end",
        required=True,
        help="End anchor as X,Y; write negative values as --end=-10,5",
    )
    parser.add_argument("--end-box", help="End shape as X,Y,W,H (--end-box=-50,0,50,50)")
    parser.add_argument("--end-dir", choices=DIRECTION_CHOICES, help="End exit direction")
    parser.add_argument(
        "--min-dist",
        type=float,
        help="Clearance distance (default: from config, 20)",
    )
    parser.add_argument("--format", choices=["table", "json"], help="Output format")
    parser.add_argument("--debug", action="store_true", help="Include grid diagnostics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def run(args: argparse.Namespace) -> int:
    """Execute the route command from parsed arguments."""
    try:
        config = Config.load()
        rules = config.route.to_rules()

        errors: List[str] = []
        start = build_endpoint("start", args.start, args.start_box, args.start_dir, errors)
        end = build_endpoint("end", args.end, args.end_box, args.end_dir, errors)
        if args.min_dist is not None and args.min_dist < 0:
            errors.append("min-dist: must be non-negative")
        if errors:
            raise ValidationError(
                errors,
                suggestions=["Points are X,Y and boxes X,Y,W,H in scene units"],
            )
    except Exception as e:
        print_error(e)
        return 1

    if args.verbose or config.defaults.verbose:
        logging.basicConfig(level=logging.DEBUG)

    result = route(start, end, args.min_dist, rules)

    output_format = args.format or config.defaults.format
    if output_format == "json":
        print(json.dumps(_result_to_dict(result, args.debug), indent=2))
    else:
        _print_table(result, args.debug)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for route command."""
    parser = argparse.ArgumentParser(
        prog="ortho-connector route",
        description="Route an orthogonal connector between two anchors",
    )
    add_route_arguments(parser)
    return run(parser.parse_args(argv))
