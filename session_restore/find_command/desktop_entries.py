"""
Desktop entry index

Enumerates installed .desktop files from the XDG data directories:
1. $XDG_DATA_HOME/applications (user entries, searched first)
2. $XDG_DATA_DIRS/*/applications (system, flatpak exports, ...)

The index is an immutable value built once. Newly installed applications are
picked up by the next process, not by a running one.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from xdg import BaseDirectory

logger = logging.getLogger(__name__)

DESKTOP_FILE_SUFFIX = ".desktop"
APPLICATIONS_SUBDIR = "applications"
# Only directory consulted for GTK application ids
SYSTEM_APPLICATIONS_DIR = Path("/usr/share/applications")

PathLike = Union[str, Path]


def desktop_entry_locations(
    data_home: Optional[PathLike] = None,
    data_dirs: Optional[Iterable[PathLike]] = None,
) -> Tuple[Path, ...]:
    """
    Get the applications directories that exist, data home first

    Args:
        data_home: XDG data home (default: from environment via pyxdg)
        data_dirs: XDG data dirs (default: from environment via pyxdg)

    Returns:
        De-duplicated tuple of existing ``<dir>/applications`` paths
    """
    if data_home is None:
        data_home = BaseDirectory.xdg_data_home
    if data_dirs is None:
        data_dirs = BaseDirectory.xdg_data_dirs

    locations: List[Path] = []
    for data_dir in [data_home, *data_dirs]:
        candidate = Path(data_dir) / APPLICATIONS_SUBDIR
        if candidate in locations:
            continue
        if not candidate.is_dir():
            logger.debug(f"Ignoring {candidate}: directory does not exist")
            continue
        locations.append(candidate)

    return tuple(locations)


def list_desktop_files(locations: Iterable[Path]) -> Tuple[Path, ...]:
    """Collect every .desktop file directly inside the given locations."""
    desktop_files: List[Path] = []
    for location in locations:
        try:
            entries = sorted(location.iterdir())
        except OSError as e:
            logger.warning(f"Cannot read desktop entry directory {location}: {e}")
            continue
        desktop_files.extend(
            entry for entry in entries
            if entry.suffix == DESKTOP_FILE_SUFFIX and entry.is_file()
        )
    return tuple(desktop_files)


@dataclass(frozen=True)
class DesktopEntryIndex:
    """Read-only view of installed desktop entries.

    Attributes:
        locations: Existing applications directories in search order
        desktop_files: All .desktop files found in ``locations``
        system_directory: Directory consulted for GTK app ids
    """

    locations: Tuple[Path, ...]
    desktop_files: Tuple[Path, ...]
    system_directory: Path = SYSTEM_APPLICATIONS_DIR

    @classmethod
    def from_locations(
        cls,
        locations: Iterable[PathLike],
        system_directory: PathLike = SYSTEM_APPLICATIONS_DIR,
    ) -> "DesktopEntryIndex":
        """Build an index over explicit directories (enumerated immediately)."""
        locations = tuple(Path(p) for p in locations)
        return cls(
            locations=locations,
            desktop_files=list_desktop_files(locations),
            system_directory=Path(system_directory),
        )

    @classmethod
    def discover(
        cls,
        data_home: Optional[PathLike] = None,
        data_dirs: Optional[Iterable[PathLike]] = None,
        system_directory: PathLike = SYSTEM_APPLICATIONS_DIR,
    ) -> "DesktopEntryIndex":
        """Build an index from the XDG base directories."""
        index = cls.from_locations(
            desktop_entry_locations(data_home, data_dirs),
            system_directory=system_directory,
        )
        logger.info(
            f"Indexed {len(index.desktop_files)} desktop file(s) "
            f"in {len(index.locations)} location(s)"
        )
        return index


# Process-wide index, built on first use
_default_index: Optional[DesktopEntryIndex] = None


def get_default_index() -> DesktopEntryIndex:
    """
    Get global desktop entry index

    Returns:
        DesktopEntryIndex singleton
    """
    global _default_index
    if _default_index is None:
        _default_index = DesktopEntryIndex.discover()
    return _default_index
