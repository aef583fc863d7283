"""Error output shared by the CLI commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ortho_connector.exceptions import OrthoConnectorError

if TYPE_CHECKING:
    from rich.console import Console, RenderableType

__all__ = ["format_error", "print_error", "render_error", "get_error_console"]

_error_console: Console | None = None


def get_error_console() -> Console:
    """Rich console on stderr, created on first use."""
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True)
    return _error_console


def render_error(e: Exception) -> RenderableType:
    """Build a red panel for an error.

    Project errors show their bare message, then the context as a
    key/value grid and the suggestions as a bullet list. Anything else is
    shown with its type name.
    """
    from rich.console import Group
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text

    if not isinstance(e, OrthoConnectorError):
        return Panel.fit(Text(f"{type(e).__name__}: {e}"), title="Error", border_style="red")

    parts: list[RenderableType] = [Text(e.message)]

    if e.context:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="dim")
        grid.add_column()
        for key, value in e.context.items():
            grid.add_row(str(key), str(value))
        parts += [Text(""), Text("Context", style="bold"), grid]

    if e.suggestions:
        parts += [Text(""), Text("Suggestions", style="bold")]
        parts += [Text.assemble(("  - ", "green"), s) for s in e.suggestions]

    return Panel.fit(Group(*parts), title="Error", border_style="red")


def print_error(e: Exception, use_rich: bool | None = None) -> None:
    """Print an error to stderr, as a panel on a terminal and plain otherwise."""
    console = get_error_console()
    if use_rich is None:
        use_rich = console.is_terminal

    if use_rich:
        console.print(render_error(e))
    else:
        print(format_error(e), file=sys.stderr)


def format_error(e: Exception) -> str:
    """Plain-text form of an error, for pipes and logs."""
    if isinstance(e, OrthoConnectorError):
        return f"Error: {e}"
    return f"Error: {type(e).__name__}: {e}"
