"""
Session Restore Resolution CLI

Diagnostic entry point: shows how a window would be relaunched. Never
launches anything.

Usage:
    session-restore-resolve resolve --window-class firefox --pid 4242 [--json]
    session-restore-resolve locations [--json]
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console

from .config import load_find_options
from .displays import resolution_display
from .errors import FindError, InvalidDesktopEntry
from .find_command.desktop_entries import DesktopEntryIndex
from .find_command.resolver import CommandResolver
from .launch_spec import exec_to_argv
from .models import Capability, WindowDescriptor


def _build_index(data_home: Optional[str], data_dirs: Tuple[str, ...]) -> DesktopEntryIndex:
    return DesktopEntryIndex.discover(data_home=data_home, data_dirs=data_dirs or None)


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """Resolve captured windows to relaunchable commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.option('--window-class', default="", help='Window class (WM_CLASS)')
@click.option('--gtk-app-id', default="", help='GTK application id')
@click.option('--sandboxed-app-id', default="", help='Sandboxed (flatpak) application id')
@click.option('--pid', type=int, default=0, help='Process id of the window')
@click.option(
    '-c', '--capability', 'capabilities', multiple=True,
    type=click.Choice([c.value for c in Capability]),
    help='Grant a capability (overrides the config file, repeatable)',
)
@click.option('--no-capabilities', is_flag=True, help='Grant no capabilities (overrides the config file)')
@click.option('--config', 'config_file', type=click.Path(path_type=Path), help='Config file path')
@click.option('--data-home', help='Override XDG data home')
@click.option('--data-dir', 'data_dirs', multiple=True, help='Override XDG data dirs (repeatable)')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
def resolve(
    window_class: str,
    gtk_app_id: str,
    sandboxed_app_id: str,
    pid: int,
    capabilities: Tuple[str, ...],
    no_capabilities: bool,
    config_file: Optional[Path],
    data_home: Optional[str],
    data_dirs: Tuple[str, ...],
    output_json: bool,
):
    """
    Resolve one window to a desktop file or command line.

    Exit codes:
      0 - Resolved
      1 - No strategy succeeded
    """
    console = Console()

    if capabilities and no_capabilities:
        raise click.UsageError("--capability and --no-capabilities are mutually exclusive")

    options = load_find_options(config_file)
    if capabilities or no_capabilities:
        options = options.model_copy(
            update={"capabilities": frozenset(Capability(c) for c in capabilities)}
        )

    window = WindowDescriptor(
        window_class=window_class,
        gtk_app_id=gtk_app_id,
        sandboxed_app_id=sandboxed_app_id,
        pid=pid,
    )
    resolver = CommandResolver(_build_index(data_home, data_dirs))

    try:
        exec_ = resolver.resolve(window, options)
    except FindError as e:
        if output_json:
            click.echo(json.dumps(e.to_dict(), indent=2))
        else:
            console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(1)

    try:
        argv = exec_to_argv(exec_)
    except InvalidDesktopEntry as e:
        logging.getLogger(__name__).warning(e.message)
        argv = None

    if output_json:
        click.echo(json.dumps(resolution_display.exec_to_dict(exec_, argv), indent=2))
    else:
        resolution_display.display_resolution(window, exec_, argv, console)


@cli.command()
@click.option('--data-home', help='Override XDG data home')
@click.option('--data-dir', 'data_dirs', multiple=True, help='Override XDG data dirs (repeatable)')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
def locations(data_home: Optional[str], data_dirs: Tuple[str, ...], output_json: bool):
    """List desktop entry locations and indexed file counts."""
    index = _build_index(data_home, data_dirs)

    if output_json:
        click.echo(resolution_display.format_locations_json(index))
    else:
        resolution_display.display_locations(index, Console())


if __name__ == '__main__':
    cli()
