"""Goaltrack: work-session logging with daily, weekly and streak rollups."""

__version__ = "1.0.0"
