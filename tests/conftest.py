"""
Pytest configuration and fixtures for session restore tests.

Provides a fake XDG data tree with desktop entries and a fake /proc tree.
"""

import os
from pathlib import Path
from typing import Callable, Optional

import pytest

from session_restore.find_command.desktop_entries import DesktopEntryIndex
from session_restore.find_command.resolver import CommandResolver
from session_restore.models import Capability, FindOptions


def write_desktop_file(directory: Path, name: str, exec_line: Optional[str] = None) -> Path:
    """Write a minimal application desktop entry."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.desktop"
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}"]
    if exec_line is not None:
        lines.append(f"Exec={exec_line}")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def data_tree(tmp_path: Path) -> dict:
    """Fake XDG data directories.

    Layout:
        home/.local/share/applications   tidal, net.lutris.multimc-2
        usr/share/applications           firefox, org.gnome.Terminal (system dir)
        flatpak/exports/share/applications  com.jetbrains.CLion, org.mozilla.firefox
        usr/local/share                  (no applications dir)
    """
    data_home = tmp_path / "home/.local/share"
    system_data = tmp_path / "usr/share"
    flatpak_data = tmp_path / "flatpak/exports/share"
    missing_data = tmp_path / "usr/local/share"

    user_apps = data_home / "applications"
    system_apps = system_data / "applications"
    flatpak_apps = flatpak_data / "applications"

    write_desktop_file(user_apps, "tidal", "tidal-hifi %U")
    write_desktop_file(user_apps, "net.lutris.multimc-2", 'env LUTRIS_SKIP_INIT=1 lutris lutris:rungameid/2')
    write_desktop_file(system_apps, "firefox", "firefox %u")
    write_desktop_file(system_apps, "org.gnome.Terminal", "gnome-terminal")
    write_desktop_file(flatpak_apps, "com.jetbrains.CLion", "flatpak run com.jetbrains.CLion")
    write_desktop_file(flatpak_apps, "org.mozilla.firefox", "flatpak run org.mozilla.firefox @@u %u @@")
    (system_apps / "mimeinfo.cache").write_text("[MIME Cache]\n")
    missing_data.mkdir(parents=True)

    return {
        "data_home": data_home,
        "data_dirs": [system_data, missing_data, flatpak_data],
        "user_apps": user_apps,
        "system_apps": system_apps,
        "flatpak_apps": flatpak_apps,
    }


@pytest.fixture
def index(data_tree: dict) -> DesktopEntryIndex:
    """Desktop entry index over the fake data tree."""
    return DesktopEntryIndex.discover(
        data_home=data_tree["data_home"],
        data_dirs=data_tree["data_dirs"],
        system_directory=data_tree["system_apps"],
    )


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    """Empty fake /proc."""
    root = tmp_path / "proc"
    root.mkdir()
    return root


@pytest.fixture
def make_process(proc_root: Path) -> Callable[..., int]:
    """Factory creating fake /proc/<pid> entries."""

    def _make(pid: int, cmdline: bytes, exe: Optional[str] = None) -> int:
        pid_dir = proc_root / str(pid)
        pid_dir.mkdir()
        (pid_dir / "cmdline").write_bytes(cmdline)
        if exe is not None:
            os.symlink(exe, pid_dir / "exe")
        return pid

    return _make


@pytest.fixture
def resolver(index: DesktopEntryIndex, proc_root: Path) -> CommandResolver:
    """Resolver over the fake data tree and fake /proc."""
    return CommandResolver(index, proc_root=proc_root)


@pytest.fixture
def no_capabilities() -> FindOptions:
    return FindOptions(
        min_wm_class_similarity=0.8,
        min_partial_match_confidence=0.6,
        capabilities=frozenset(),
    )


@pytest.fixture
def all_capabilities() -> FindOptions:
    return FindOptions(
        min_wm_class_similarity=0.8,
        min_partial_match_confidence=0.6,
        capabilities=frozenset({Capability.PROC_FS_SEARCH, Capability.USE_PROC_FS_COMMAND}),
    )


@pytest.fixture
def desktop_file_writer() -> Callable[..., Path]:
    """Helper writing desktop entries into arbitrary directories."""
    return write_desktop_file
