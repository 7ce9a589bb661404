"""Geometry module for graticule.

This package provides the planar primitives and sampling routines the grid
computation is built on.

Key Components:
    - Primitives: Extent model and coordinate helpers
    - Geodesic: Adaptive densification of meridians and parallels
    - Overlay: Pillow rendering of finished grids (import
      ``graticule.geometry.overlay`` directly; it depends on the core types)

Example:
    from graticule.geometry import Extent, meridian

    extent = Extent(min_x=-10, min_y=-10, max_x=10, max_y=10)
    points = meridian(5.0, -60.0, 60.0, projection.forward, 1.0)
"""

from graticule.geometry.geodesic import densify, meridian, parallel
from graticule.geometry.primitives import (
    Coordinate,
    Extent,
    TransformFunction,
    clamp,
    is_finite_coordinate,
    squared_distance,
    squared_segment_distance,
)

__all__ = [
    "Coordinate",
    "Extent",
    "TransformFunction",
    "clamp",
    "densify",
    "is_finite_coordinate",
    "meridian",
    "parallel",
    "squared_distance",
    "squared_segment_distance",
]
