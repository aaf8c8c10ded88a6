"""
Error taxonomy for command resolution.

Every error is terminal for a single resolution attempt. Strategy-level
failures are swallowed by the resolver; only the pipeline-exhausted failure
reaches the caller, which is expected to log it and skip the window.
"""

from enum import Enum
from typing import Any, Dict, Optional


class FindErrorCode(Enum):
    """
    Error codes for command resolution.

    - 1200-1299: File system / process table errors
    - 1300-1399: Resolution errors
    - 1400-1499: Policy errors
    """

    PROCESS_IO_ERROR = 1200
    PROCESS_IS_ZOMBIE = 1201

    NO_SUITABLE_ENTRY_FOUND = 1300
    INVALID_DESKTOP_ENTRY = 1301

    PROC_SEARCH_DISABLED = 1400
    PROC_COMMAND_NOT_ALLOWED = 1401


class FindError(Exception):
    """Base exception for command resolution errors."""

    code = FindErrorCode.NO_SUITABLE_ENTRY_FOUND
    default_message = "could not find a suitable entry"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize resolution error.

        Args:
            message: Human-readable error message (defaults per subclass)
            context: Additional context for debugging (pid, window class, path)
        """
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, name, message and context
        """
        result = {
            "code": self.code.value,
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = {key: str(value) for key, value in self.context.items()}
        return result


class ProcessIOError(FindError):
    """Reading the process table failed (permission, or the pid went away)."""

    code = FindErrorCode.PROCESS_IO_ERROR
    default_message = "io error"


class NoSuitableEntryFound(FindError):
    """A strategy had no candidate meeting its criteria."""

    code = FindErrorCode.NO_SUITABLE_ENTRY_FOUND
    default_message = "could not find a suitable entry"


class ProcessIsZombie(FindError):
    """The process argument record was empty."""

    code = FindErrorCode.PROCESS_IS_ZOMBIE
    default_message = "process is zombie"


class ProcSearchDisabledNoOtherOptionFound(FindError):
    """Policy forbade reading /proc and nothing else matched."""

    code = FindErrorCode.PROC_SEARCH_DISABLED
    default_message = "proc search disabled but could not find alternative"


class NotAllowedToUseProcCmdNoOtherOptionFound(FindError):
    """A /proc command line was available but policy forbids using it."""

    code = FindErrorCode.PROC_COMMAND_NOT_ALLOWED
    default_message = "found cmd in proc but not allowed to use"


class InvalidDesktopEntry(FindError):
    """A desktop file has no usable Exec line."""

    code = FindErrorCode.INVALID_DESKTOP_ENTRY
    default_message = "could only find invalid entry"
