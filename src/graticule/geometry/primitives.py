"""Geometry primitives for graticule.

This module provides the immutable Pydantic extent model and small helpers
for working with coordinate pairs. Extents are axis-aligned rectangles
``(min_x, min_y, max_x, max_y)``; in geodetic space x is longitude and y is
latitude, both in degrees.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Self

from pydantic import BaseModel, Field

Coordinate = tuple[float, float]
TransformFunction = Callable[[Coordinate], Coordinate]


def is_finite_coordinate(coord: Coordinate) -> bool:
    """Check that both components of a coordinate are finite numbers."""
    return math.isfinite(coord[0]) and math.isfinite(coord[1])


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]."""
    return min(max(value, minimum), maximum)


def squared_distance(a: Coordinate, b: Coordinate) -> float:
    """Squared Euclidean distance between two points."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return dx * dx + dy * dy


def squared_segment_distance(p: Coordinate, a: Coordinate, b: Coordinate) -> float:
    """Squared distance from point p to the segment a-b.

    Args:
        p: The point to measure from.
        a: Segment start.
        b: Segment end.

    Returns:
        Squared distance to the closest point of the segment.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx != 0 or dy != 0:
        t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / (dx * dx + dy * dy)
        if t > 1:
            a = b
        elif t > 0:
            a = (a[0] + dx * t, a[1] + dy * t)
    return squared_distance(p, a)


class Extent(BaseModel, frozen=True):
    """An axis-aligned rectangle.

    An extent with ``min_x > max_x`` or ``min_y > max_y`` is empty. Infinite
    values are allowed so that unbounded world extents can be expressed.

    Attributes:
        min_x: Left edge.
        min_y: Bottom edge.
        max_x: Right edge.
        max_y: Top edge.
    """

    min_x: float = Field(..., description="Left edge")
    min_y: float = Field(..., description="Bottom edge")
    max_x: float = Field(..., description="Right edge")
    max_y: float = Field(..., description="Top edge")

    @property
    def width(self) -> float:
        """Horizontal size (negative for empty extents)."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Vertical size (negative for empty extents)."""
        return self.max_y - self.min_y

    @property
    def center(self) -> Coordinate:
        """Return the center point as (x, y) tuple."""
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def corners(self) -> tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        """Bottom-left, top-left, top-right, bottom-right."""
        return (
            (self.min_x, self.min_y),
            (self.min_x, self.max_y),
            (self.max_x, self.max_y),
            (self.max_x, self.min_y),
        )

    def is_empty(self) -> bool:
        """Check whether the extent covers no area."""
        return self.max_x < self.min_x or self.max_y < self.min_y

    def is_finite(self) -> bool:
        """Check that all four edges are finite numbers."""
        return all(
            math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y)
        )

    def intersects(self, other: Extent) -> bool:
        """Check if this extent touches or overlaps another (edges inclusive)."""
        return (
            self.min_x <= other.max_x
            and self.max_x >= other.min_x
            and self.min_y <= other.max_y
            and self.max_y >= other.min_y
        )

    def contains_x(self, x: float) -> bool:
        """Check if an x value lies within [min_x, max_x]."""
        return self.min_x <= x <= self.max_x

    def clamp_to(self, bounds: Extent) -> Extent:
        """Intersect with bounds, edge by edge.

        The result may be empty if the extents do not overlap.
        """
        return Extent(
            min_x=max(self.min_x, bounds.min_x),
            min_y=max(self.min_y, bounds.min_y),
            max_x=min(self.max_x, bounds.max_x),
            max_y=min(self.max_y, bounds.max_y),
        )

    def shift_x(self, offset: float) -> Extent:
        """Return a copy moved horizontally by offset."""
        return Extent(
            min_x=self.min_x + offset,
            min_y=self.min_y,
            max_x=self.max_x + offset,
            max_y=self.max_y,
        )

    def apply_transform(self, transform: TransformFunction) -> Extent:
        """Transform the four corners and return their bounding extent."""
        return Extent.bounding(transform(corner) for corner in self.corners)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y) tuple."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @classmethod
    def from_tuple(cls, bbox: Iterable[float]) -> Self:
        """Create Extent from (min_x, min_y, max_x, max_y)."""
        min_x, min_y, max_x, max_y = bbox
        return cls(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)

    @classmethod
    def from_center(
        cls, center: Coordinate, resolution: float, size: tuple[int, int]
    ) -> Self:
        """Create the extent a view of size pixels covers around center.

        Args:
            center: View center in projected units.
            resolution: Projected units per pixel.
            size: (width, height) of the view in pixels.
        """
        half_w = resolution * size[0] / 2
        half_h = resolution * size[1] / 2
        return cls(
            min_x=center[0] - half_w,
            min_y=center[1] - half_h,
            max_x=center[0] + half_w,
            max_y=center[1] + half_h,
        )

    @classmethod
    def bounding(cls, coordinates: Iterable[Coordinate]) -> Self:
        """Smallest extent containing every coordinate.

        Returns an empty extent (infinite, inverted) when there are none.
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for x, y in coordinates:
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x)
            max_y = max(max_y, y)
        return cls(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
