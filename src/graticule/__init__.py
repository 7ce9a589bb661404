"""Adaptive longitude/latitude grids for projected map views."""

__version__ = "0.1.0"
