"""
Resolution Display Module

Rich-formatted display for resolved windows and desktop entry locations.
"""

import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from ..find_command.desktop_entries import DesktopEntryIndex
from ..models import CmdLine, DesktopFile, Exec, WindowDescriptor


def exec_to_dict(exec_: Exec, argv: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Serialize a resolved Exec for JSON output.

    Args:
        exec_: Resolved Exec
        argv: Launch argument vector, if it could be derived

    Returns:
        JSON-compatible dictionary
    """
    result = exec_.model_dump(mode="json")
    if argv is not None:
        result["launch_argv"] = argv
    return result


def display_resolution(
    window: WindowDescriptor,
    exec_: Exec,
    argv: Optional[List[str]],
    console: Console = None,
) -> None:
    """
    Display a resolved window in a formatted table.

    Args:
        window: Window that was resolved
        exec_: Resolution result
        argv: Launch argument vector (None if the desktop file is unusable)
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    table = Table(title="Resolution", show_header=False)
    table.add_column("Property", style="dim")
    table.add_column("Value")

    table.add_row("Window class", window.window_class or "(none)")
    table.add_row("GTK app id", window.gtk_app_id or "(none)")
    table.add_row("Sandboxed app id", window.sandboxed_app_id or "(none)")
    table.add_row("PID", str(window.pid))

    if isinstance(exec_, DesktopFile):
        table.add_row("Source", "[green]desktop file[/green]")
        table.add_row("Desktop file", str(exec_.path))
    elif isinstance(exec_, CmdLine):
        table.add_row("Source", "[yellow]/proc cmdline[/yellow]")
    else:
        raise TypeError(f"Unhandled Exec variant: {exec_!r}")

    if argv is None:
        table.add_row("Launch argv", "[red]invalid desktop entry[/red]")
    else:
        table.add_row("Launch argv", " ".join(argv))

    console.print(table)


def display_locations(index: DesktopEntryIndex, console: Console = None) -> None:
    """
    Display desktop entry locations and their file counts.

    Args:
        index: Desktop entry index
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    table = Table(title="Desktop Entry Locations")
    table.add_column("Location")
    table.add_column("Desktop files", justify="right")

    for location in index.locations:
        count = sum(1 for path in index.desktop_files if path.parent == location)
        table.add_row(str(location), str(count))

    console.print(table)
    console.print(f"[dim]{len(index.desktop_files)} desktop file(s) indexed[/dim]")


def format_locations_json(index: DesktopEntryIndex) -> str:
    """
    Format desktop entry locations as JSON string.

    Args:
        index: Desktop entry index

    Returns:
        JSON string
    """
    return json.dumps(
        {
            "locations": [str(location) for location in index.locations],
            "desktop_files": len(index.desktop_files),
        },
        indent=2,
    )
