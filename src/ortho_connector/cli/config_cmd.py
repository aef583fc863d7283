"""
Config command for ortho-connector CLI.

Usage:
    ortho-connector config --show       Show effective configuration with sources
    ortho-connector config --template   Print a template config file
    ortho-connector config --paths      Show config file paths
"""

import argparse
from typing import List, Optional

from ortho_connector.config import Config, generate_template, get_config_paths

from .utils import print_error


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        "--show",
        action="store_true",
        help="Show effective configuration with sources",
    )
    action_group.add_argument(
        "--template",
        action="store_true",
        help="Print a template config file",
    )
    action_group.add_argument(
        "--paths",
        action="store_true",
        help="Show config file paths",
    )


def run(args: argparse.Namespace) -> int:
    """Execute the config command from parsed arguments."""
    if args.template:
        print(generate_template(), end="")
        return 0

    if args.paths:
        for name, path in get_config_paths().items():
            print(f"{name}: {path if path else '(not found)'}")
        return 0

    try:
        config = Config.load()
    except Exception as e:
        print_error(e)
        return 1

    for key, value in config.items():
        print(f"{key} = {value!r}  ({config.get_source(key)})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for config command."""
    parser = argparse.ArgumentParser(
        prog="ortho-connector config",
        description="Manage ortho-connector configuration",
    )
    add_config_arguments(parser)
    return run(parser.parse_args(argv))
