"""
Command-line interface for ortho-connector.

    ortho-connector route --start X,Y --end X,Y [...]   - Route one connector
    ortho-connector config --show                       - Show configuration

Examples:
    ortho-connector route --start 0,0 --start-dir right --end 100,100 --end-dir left
    ortho-connector route --start 100,25 --start-box 0,0,100,50 --start-dir right \\
        --end 400,25 --end-box 400,0,100,50 --end-dir left --format json
    ortho-connector config --template > .ortho-connector.toml
"""

import argparse
from typing import List, Optional

from ortho_connector import __version__

from . import config_cmd, route_cmd

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ortho-connector CLI."""
    parser = argparse.ArgumentParser(
        prog="ortho-connector",
        description="Orthogonal connector routing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"ortho-connector {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    route_parser = subparsers.add_parser("route", help="Route a connector between two anchors")
    route_cmd.add_route_arguments(route_parser)

    config_parser = subparsers.add_parser("config", help="Show or initialise configuration")
    config_cmd.add_config_arguments(config_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "route":
        return route_cmd.run(args)
    return config_cmd.run(args)
