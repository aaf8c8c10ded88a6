"""
Command resolution for captured windows

Resolves window metadata to a desktop file or a /proc command line.
"""

from .desktop_entries import DesktopEntryIndex, get_default_index
from .proc_inspector import read_cmdline
from .resolver import CommandResolver, resolve
from .similarity import partial_match_similarity, whole_string_similarity

__all__ = [
    "CommandResolver",
    "DesktopEntryIndex",
    "get_default_index",
    "partial_match_similarity",
    "read_cmdline",
    "resolve",
    "whole_string_similarity",
]
