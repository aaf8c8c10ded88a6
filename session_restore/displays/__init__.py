"""
Display modules for the resolution CLI.
"""

from . import resolution_display

__all__ = ['resolution_display']
