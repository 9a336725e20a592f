"""Locate or create a terminal pane, window or process and run a canvas in it."""

__version__ = "0.3.0"
