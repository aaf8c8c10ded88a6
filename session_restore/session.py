"""Resolve every window of a captured session.

Resolutions are independent of each other, so they run on a thread pool
against one shared index. Output keeps the input window order. A window that
cannot be resolved is logged and skipped; it never aborts the batch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import FindError
from .find_command.desktop_entries import DesktopEntryIndex, get_default_index
from .find_command.proc_inspector import PROC_ROOT
from .find_command.resolver import CommandResolver
from .models import Exec, FindOptions, WindowDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedWindow:
    """A captured window together with the command that relaunches it."""

    window: WindowDescriptor
    exec_: Exec


def resolve_session(
    windows: Iterable[WindowDescriptor],
    options: FindOptions,
    index: Optional[DesktopEntryIndex] = None,
    max_workers: Optional[int] = None,
    proc_root: Path = PROC_ROOT,
) -> List[ResolvedWindow]:
    """
    Resolve all windows of a session

    Args:
        windows: Captured windows in enumeration order
        options: Thresholds and capabilities shared by all windows
        index: Desktop entry index (default: process-wide index)
        max_workers: Thread pool size (default: ThreadPoolExecutor default)
        proc_root: Mount point of the process table

    Returns:
        Resolved windows, in input order, without the failed ones
    """
    windows = list(windows)
    resolver = CommandResolver(index or get_default_index(), proc_root=proc_root)

    def _resolve_one(window: WindowDescriptor) -> Optional[ResolvedWindow]:
        try:
            return ResolvedWindow(window=window, exec_=resolver.resolve(window, options))
        except FindError as e:
            logger.warning(
                f"Skipping window {window.window_class!r} (pid {window.pid}): {e.message}"
            )
            return None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(_resolve_one, windows))

    resolved = [result for result in results if result is not None]
    logger.info(f"Resolved {len(resolved)}/{len(windows)} window(s)")
    return resolved
