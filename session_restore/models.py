"""
Data models for session command resolution

Window metadata in, launch specification out. All models use Pydantic v2 and
are frozen: a resolution never mutates its inputs.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, FrozenSet, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Confidence scores are plain floats; partial matching may go slightly negative
Confidence = float


# ============================================================================
# Enums
# ============================================================================

class Capability(str, Enum):
    """Policy flags gating /proc based strategies"""
    PROC_FS_SEARCH = "proc-fs-search"            # May read /proc/<pid>/cmdline at all
    USE_PROC_FS_COMMAND = "use-proc-fs-command"  # May fall back to the raw command line


# ============================================================================
# Inputs
# ============================================================================

class WindowDescriptor(BaseModel):
    """Captured window metadata. Empty strings mean "absent"."""
    model_config = ConfigDict(frozen=True)

    window_class: str = ""
    gtk_app_id: str = ""
    sandboxed_app_id: str = ""
    pid: int = 0


class FindOptions(BaseModel):
    """Thresholds and capabilities for one resolution session"""
    model_config = ConfigDict(frozen=True)

    min_wm_class_similarity: Confidence = Field(default=0.8, ge=0.0, le=1.0)
    min_partial_match_confidence: Confidence = Field(default=0.6, ge=0.0, le=1.0)
    capabilities: FrozenSet[Capability] = Field(
        default_factory=lambda: frozenset({Capability.PROC_FS_SEARCH})
    )

    def allows(self, capability: Capability) -> bool:
        return capability in self.capabilities


# ============================================================================
# Result
# ============================================================================

class CmdLine(BaseModel):
    """Raw argument vector recovered from the process table"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["cmdline"] = "cmdline"
    argv: Tuple[str, ...] = Field(..., min_length=1)


class DesktopFile(BaseModel):
    """Installed desktop entry that launches an equivalent application"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["desktop_file"] = "desktop_file"
    path: Path


Exec = Annotated[Union[CmdLine, DesktopFile], Field(discriminator="kind")]
