"""Densification of meridians and parallels in projected space.

A meridian or parallel is a straight segment in geodetic coordinates but
generally a curve once projected. These helpers sample it adaptively: the
parameter range [0, 1] is bisected until the projected midpoint of every
piece lies within a squared tolerance of the chord joining its ends.
"""

from __future__ import annotations

from collections.abc import Callable

from graticule.geometry.primitives import (
    Coordinate,
    TransformFunction,
    is_finite_coordinate,
    squared_segment_distance,
)

# Upper bound on bisection steps, reached only for pathological transforms
MAX_ITERATIONS = 100_000


def densify(
    interpolate: Callable[[float], Coordinate],
    transform: TransformFunction,
    squared_tolerance: float,
) -> list[Coordinate]:
    """Sample a geodetic curve into projected points.

    Args:
        interpolate: Maps a fraction in [0, 1] to a geodetic coordinate.
        transform: Geodetic to projected transform.
        squared_tolerance: Maximum squared deviation of a midpoint from
            its chord before the piece is split.

    Returns:
        Projected coordinates ordered from fraction 0 to fraction 1. If the
        transform yields a non-finite point, sampling stops and that point
        is the last element, so callers can detect and drop the line.
    """
    a = transform(interpolate(0.0))
    b = transform(interpolate(1.0))
    if not is_finite_coordinate(a):
        return [a]
    if not is_finite_coordinate(b):
        return [a, b]
    coordinates: list[Coordinate] = []
    seen: set[float] = set()

    # Stack of (fraction, projected point) pairs; pieces pop as (a, b)
    stack: list[tuple[float, Coordinate]] = [(1.0, b), (0.0, a)]
    iterations = MAX_ITERATIONS
    while iterations > 0 and stack:
        iterations -= 1
        frac_a, a = stack.pop()
        if frac_a not in seen:
            coordinates.append(a)
            seen.add(frac_a)
        frac_b, b = stack.pop()
        frac_m = (frac_a + frac_b) / 2
        m = transform(interpolate(frac_m))
        if not is_finite_coordinate(m):
            coordinates.append(m)
            break
        if squared_segment_distance(m, a, b) < squared_tolerance:
            coordinates.append(b)
            seen.add(frac_b)
        else:
            stack.extend(((frac_b, b), (frac_m, m), (frac_m, m), (frac_a, a)))
    return coordinates


def meridian(
    lon: float,
    lat1: float,
    lat2: float,
    transform: TransformFunction,
    squared_tolerance: float,
) -> list[Coordinate]:
    """Densify the meridian at lon from lat1 to lat2."""
    return densify(
        lambda frac: (lon, lat1 + (lat2 - lat1) * frac),
        transform,
        squared_tolerance,
    )


def parallel(
    lat: float,
    lon1: float,
    lon2: float,
    transform: TransformFunction,
    squared_tolerance: float,
) -> list[Coordinate]:
    """Densify the parallel at lat from lon1 to lon2."""
    return densify(
        lambda frac: (lon1 + (lon2 - lon1) * frac, lat),
        transform,
        squared_tolerance,
    )
