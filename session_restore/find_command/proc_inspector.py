"""Best-effort argument vector recovery from /proc/<pid>/cmdline.

Simple in theory, unreliable in practice:

- cmdline is normally NUL separated, but processes may rewrite ``argv`` and
  stuff every argument, space separated, into ``argv[0]``. Sometimes that
  first word is not even an executable.
- zombie processes report an empty cmdline.
- /proc/<pid>/exe usually links to the executable, but may be missing (main
  thread exited early) or point at a deleted file.
"""

import logging
import os
from pathlib import Path
from typing import List

from ..errors import ProcessIOError, ProcessIsZombie

logger = logging.getLogger(__name__)

PROC_ROOT = Path("/proc")


def _split_fields(raw: bytes, separator: bytes) -> List[str]:
    return [os.fsdecode(field) for field in raw.split(separator) if field]


def read_cmdline(pid: int, proc_root: Path = PROC_ROOT) -> List[str]:
    """Get the argument vector of a process.

    Args:
        pid: Process ID
        proc_root: Mount point of the process table

    Returns:
        Non-empty list of arguments

    Raises:
        ProcessIsZombie: The argument record holds no arguments
        ProcessIOError: The argument record could not be read
    """
    cmdline_path = proc_root / str(pid) / "cmdline"

    try:
        raw = cmdline_path.read_bytes()
    except OSError as e:
        logger.debug(f"Failed to read {cmdline_path}: {e}")
        raise ProcessIOError(f"could not read {cmdline_path}: {e}", context={"pid": pid}) from e

    fields = [field for field in raw.split(b"\0") if field]
    if not fields:
        raise ProcessIsZombie(context={"pid": pid})

    if len(fields) == 1 and b" " in fields[0]:
        # argv was rewritten into a single space-joined string
        args = _split_fields(fields[0], b" ")
        if not args:
            raise ProcessIsZombie(context={"pid": pid})

        if not os.path.exists(args[0]):
            exe_link = proc_root / str(pid) / "exe"
            try:
                args[0] = os.readlink(exe_link)
            except OSError as e:
                logger.debug(f"Keeping {args[0]!r} for pid {pid}, cannot resolve {exe_link}: {e}")

        return args

    return [os.fsdecode(field) for field in fields]
