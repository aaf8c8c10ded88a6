"""
Command resolution pipeline

Maps captured window metadata to an Exec, trying in order:
1. <gtk_app_id>.desktop in the system applications directory
2. <sandboxed_app_id>.desktop in any desktop entry location
3. window class vs desktop file names (whole string similarity)
4. alternate search terms vs desktop file names (partial match similarity)
5. /proc/<pid>/cmdline, when Capability.USE_PROC_FS_COMMAND is granted

First accepted strategy wins. Nothing is launched or written.
"""

import logging
import os
import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..errors import (
    FindError,
    NoSuitableEntryFound,
    NotAllowedToUseProcCmdNoOtherOptionFound,
    ProcSearchDisabledNoOtherOptionFound,
)
from ..models import (
    Capability,
    CmdLine,
    Confidence,
    DesktopFile,
    Exec,
    FindOptions,
    WindowDescriptor,
)
from .desktop_entries import DESKTOP_FILE_SUFFIX, DesktopEntryIndex, get_default_index
from .proc_inspector import PROC_ROOT, read_cmdline
from .similarity import partial_match_similarity, whole_string_similarity

logger = logging.getLogger(__name__)

# Site specific browser shortcuts, e.g. chrome-listen.tidal.com__-Spotify
CHROME_APP_RE = re.compile(r"chrome-(?P<website>.+?)__.*?-(?P<profile>.+)")
# Minimum similarity between process binary and window class to use the binary
MIN_PROC_BINARY_SIMILARITY = 0.5

SimilarityMeasure = Callable[[str, str], float]
ProcCmdline = Union[List[str], FindError]


# ============================================================================
# Strategies
# ============================================================================

def find_by_gtk_app_id(gtk_app_id: str, system_directory: Path) -> DesktopFile:
    """Exact desktop file for a GTK application id, system directory only."""
    path = system_directory / f"{gtk_app_id}{DESKTOP_FILE_SUFFIX}"
    if os.path.exists(path):
        return DesktopFile(path=path)
    raise NoSuitableEntryFound(context={"gtk_app_id": gtk_app_id})


def find_by_sandboxed_app_id(sandboxed_app_id: str, locations: Iterable[Path]) -> DesktopFile:
    """Exact desktop file for a sandboxed (flatpak) app id, first location wins."""
    desktop_file_name = f"{sandboxed_app_id}{DESKTOP_FILE_SUFFIX}"
    for location in locations:
        path = location / desktop_file_name
        if os.path.exists(path):
            return DesktopFile(path=path)
    raise NoSuitableEntryFound(context={"sandboxed_app_id": sandboxed_app_id})


def find_desktop_file_fuzzy(
    search_term: str,
    similarity_measure: SimilarityMeasure,
    desktop_files: Iterable[Path],
) -> Tuple[DesktopFile, Confidence]:
    """
    Best scoring desktop file for a search term

    Both the search term and the file stems are lowercased. On equal scores
    the earlier file is kept.

    Raises:
        NoSuitableEntryFound: There are no desktop files at all
    """
    search_term = search_term.lower()

    best: Optional[Tuple[Path, Confidence]] = None
    for path in desktop_files:
        sim = similarity_measure(search_term, path.stem.lower())
        if best is None or sim > best[1]:
            best = (path, sim)

    if best is None:
        raise NoSuitableEntryFound(context={"search_term": search_term})
    return DesktopFile(path=best[0]), best[1]


def find_by_wm_class(wm_class: str, desktop_files: Iterable[Path]) -> Tuple[DesktopFile, Confidence]:
    return find_desktop_file_fuzzy(wm_class, whole_string_similarity, desktop_files)


def find_by_search_term(search_term: str, desktop_files: Iterable[Path]) -> Tuple[DesktopFile, Confidence]:
    return find_desktop_file_fuzzy(search_term, partial_match_similarity, desktop_files)


def alternate_search_terms(window_class: str, proc_cmdline: ProcCmdline) -> List[str]:
    """
    Search terms for partial matching

    1. The window class itself (if any)
    2. Website and profile of a chrome site specific browser window class
    3. The process binary name, if the window class is empty or similar to it

    Args:
        window_class: Window class (may be empty)
        proc_cmdline: Argument vector, or the error reading it produced

    Returns:
        Ordered list of search terms
    """
    terms: List[str] = []

    if window_class:
        terms.append(window_class)

    match = CHROME_APP_RE.search(window_class)
    if match:
        terms.extend([match.group("website"), match.group("profile")])

    if isinstance(proc_cmdline, list) and proc_cmdline:
        proc_binary = Path(proc_cmdline[0]).name
        if proc_binary and (
            not window_class
            or whole_string_similarity(proc_binary, window_class) > MIN_PROC_BINARY_SIMILARITY
        ):
            terms.append(proc_binary)

    return terms


# ============================================================================
# Pipeline
# ============================================================================

class CommandResolver:
    """
    Resolves windows against one shared, immutable desktop entry index

    Safe to use from several threads at once: resolution reads the index and
    the process table, and keeps no state between calls.
    """

    def __init__(self, index: DesktopEntryIndex, proc_root: Path = PROC_ROOT):
        self.index = index
        self.proc_root = proc_root

    def _read_proc_cmdline(self, pid: int, options: FindOptions) -> ProcCmdline:
        if not options.allows(Capability.PROC_FS_SEARCH):
            return ProcSearchDisabledNoOtherOptionFound(context={"pid": pid})
        try:
            return read_cmdline(pid, self.proc_root)
        except FindError as e:
            logger.debug(f"No usable cmdline for pid {pid}: {e}")
            return e

    def resolve(self, window: WindowDescriptor, options: FindOptions) -> Exec:
        """
        Resolve a window to a launch specification

        Args:
            window: Captured window metadata
            options: Thresholds and capabilities

        Returns:
            DesktopFile or CmdLine

        Raises:
            FindError: Every applicable strategy failed
        """
        desktop_files = self.index.desktop_files

        if window.gtk_app_id:
            try:
                exec_ = find_by_gtk_app_id(window.gtk_app_id, self.index.system_directory)
                logger.debug(f"{window.window_class!r} resolved from gtk app id: {exec_.path}")
                return exec_
            except NoSuitableEntryFound:
                pass

        if window.sandboxed_app_id:
            try:
                exec_ = find_by_sandboxed_app_id(window.sandboxed_app_id, self.index.locations)
                logger.debug(f"{window.window_class!r} resolved from sandboxed app id: {exec_.path}")
                return exec_
            except NoSuitableEntryFound:
                pass

        try:
            exec_, confidence = find_by_wm_class(window.window_class, desktop_files)
            if confidence >= options.min_wm_class_similarity:
                logger.debug(
                    f"{window.window_class!r} resolved from wm class: {exec_.path} "
                    f"(confidence {confidence:.3f})"
                )
                return exec_
        except NoSuitableEntryFound:
            pass

        proc_cmdline = self._read_proc_cmdline(window.pid, options)

        best: Optional[Tuple[DesktopFile, Confidence]] = None
        for search_term in alternate_search_terms(window.window_class, proc_cmdline):
            try:
                candidate = find_by_search_term(search_term, desktop_files)
            except NoSuitableEntryFound:
                continue
            if best is None or candidate[1] > best[1]:
                best = candidate

        if best is not None and best[1] >= options.min_partial_match_confidence:
            logger.debug(
                f"{window.window_class!r} resolved from search term: {best[0].path} "
                f"(confidence {best[1]:.3f})"
            )
            return best[0]

        if isinstance(proc_cmdline, ProcSearchDisabledNoOtherOptionFound):
            raise proc_cmdline

        if not options.allows(Capability.USE_PROC_FS_COMMAND):
            raise NotAllowedToUseProcCmdNoOtherOptionFound(
                context={"window_class": window.window_class, "pid": window.pid}
            )

        if isinstance(proc_cmdline, FindError):
            raise proc_cmdline

        logger.debug(f"{window.window_class!r} resolved from proc: {proc_cmdline}")
        return CmdLine(argv=tuple(proc_cmdline))


def resolve(
    window: WindowDescriptor,
    options: FindOptions,
    index: Optional[DesktopEntryIndex] = None,
) -> Exec:
    """
    Convenience function to resolve one window

    Args:
        window: Captured window metadata
        options: Thresholds and capabilities
        index: Desktop entry index (default: process-wide index)

    Returns:
        Resolved Exec
    """
    return CommandResolver(index or get_default_index()).resolve(window, options)
