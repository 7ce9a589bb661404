"""Grid spacing selection for graticule.

This module picks the spacing, in degrees, between neighbouring grid lines.
The goal is a grid whose lines sit roughly ``target_size`` pixels apart on
screen at the current resolution.

Algorithm:
    Walk the candidate table from coarsest to finest. For each candidate,
    project two probe points offset by half the candidate on both axes from
    the anchor, and compare their squared projected distance with
    ``(target_size * resolution) ** 2``. Stop at the first candidate that is
    too dense (distance <= target); the answer is the candidate just before
    it. If even the coarsest candidate is too dense, generation is disabled.

Boundary Behavior:
    A candidate whose distance equals the target exactly counts as too
    dense, so it is never selected.
"""

from __future__ import annotations

import math
from typing import Protocol

from graticule.geometry.primitives import (
    Coordinate,
    TransformFunction,
    is_finite_coordinate,
    squared_distance,
)

# Candidate spacings in degrees, coarsest first
INTERVALS: tuple[float, ...] = (
    90,
    45,
    30,
    20,
    10,
    5,
    2,
    1,
    0.5,
    0.2,
    0.1,
    0.05,
    0.01,
    0.005,
    0.002,
    0.001,
)

# Interval value meaning "no grid"
DISABLED: float = -1


class IntervalSelectorProtocol(Protocol):
    """Protocol defining the interface for interval selectors.

    This protocol allows for dependency injection and alternative
    implementations (e.g., a configurable candidate table).
    """

    def select_interval(
        self,
        center: Coordinate,
        resolution: float,
        target_size: float,
        forward: TransformFunction,
    ) -> float:
        """Select the grid spacing in degrees, or DISABLED."""
        ...


class IntervalSelector:
    """Selects the grid spacing for a resolution.

    Example:
        >>> from graticule.proj import mercator_projection
        >>> mercator = mercator_projection()
        >>> IntervalSelector().select_interval(
        ...     (0.0, 0.0), 10_000.0, 100, mercator.forward
        ... )
        10
    """

    def __init__(self, intervals: tuple[float, ...] = INTERVALS) -> None:
        """Initialize with a candidate table.

        Args:
            intervals: Candidate spacings in degrees, coarsest first.
        """
        self.intervals = intervals

    def select_interval(
        self,
        center: Coordinate,
        resolution: float,
        target_size: float,
        forward: TransformFunction,
    ) -> float:
        """Select the grid spacing for the given resolution.

        Args:
            center: Geodetic (lon, lat) anchor for the probe points.
            resolution: Projected units per pixel.
            target_size: Desired minimum spacing between lines, in pixels.
            forward: Geodetic to projected transform.

        Returns:
            The finest candidate whose projected span still exceeds the
            target, or DISABLED.
        """
        if not (math.isfinite(resolution) and resolution > 0):
            return DISABLED
        if not is_finite_coordinate(center):
            return DISABLED

        lon, lat = center
        target = (target_size * resolution) ** 2
        interval = DISABLED
        for candidate in self.intervals:
            delta = candidate / 2
            p1 = forward((lon - delta, lat - delta))
            p2 = forward((lon + delta, lat + delta))
            dist = squared_distance(p1, p2)
            # NaN compares false, so it is handled like a too-dense candidate
            if not dist > target:
                break
            interval = candidate
        return interval
