"""
GNOME Session Restore

Finds the command that relaunches a captured window's application.
"""

__version__ = "1.0.0"
