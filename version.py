"""
Version information for the Job Tracker application.

This file is the single source of truth for version numbers.
Both the Flask app and the board CLI import from here.
"""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
