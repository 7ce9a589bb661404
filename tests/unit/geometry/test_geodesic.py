"""Unit tests for meridian and parallel densification."""

from __future__ import annotations

import math

import pytest

from graticule.geometry import densify, meridian, parallel, squared_segment_distance
from graticule.proj import mercator_projection
from graticule.proj.builtin import RADIUS


def _sinusoidal(coord: tuple[float, float]) -> tuple[float, float]:
    phi = math.radians(coord[1])
    return (RADIUS * math.radians(coord[0]) * math.cos(phi), RADIUS * phi)


class TestDensify:
    """Tests for densify."""

    def test_straight_line_keeps_endpoints_only(self) -> None:
        points = densify(lambda f: (f * 10, f * 20), lambda c: c, 0.01)
        assert points == [(0.0, 0.0), (10.0, 20.0)]

    def test_curve_is_subdivided_within_tolerance(self) -> None:
        tolerance = 0.001

        def arc(frac: float) -> tuple[float, float]:
            angle = frac * math.pi
            return (math.cos(angle), math.sin(angle))

        points = densify(arc, lambda c: c, tolerance)

        assert len(points) > 2
        assert points[0] == pytest.approx((1.0, 0.0))
        assert points[-1] == pytest.approx((-1.0, 0.0), abs=1e-12)
        # Points are ordered along the arc
        angles = [math.atan2(y, x) for x, y in points]
        assert angles == sorted(angles)
        # Every arc point between two samples lies close to their chord
        for a, b in zip(points, points[1:], strict=False):
            mid_angle = (math.atan2(a[1], a[0]) + math.atan2(b[1], b[0])) / 2
            mid = (math.cos(mid_angle), math.sin(mid_angle))
            assert squared_segment_distance(mid, a, b) < tolerance

    def test_non_finite_midpoint_is_last_point(self) -> None:
        def transform(coord: tuple[float, float]) -> tuple[float, float]:
            return (coord[0], math.nan) if coord[0] == 0.5 else coord

        points = densify(lambda f: (f, 0.0), transform, 1.0)
        assert len(points) == 2
        assert math.isnan(points[-1][1])

    def test_non_finite_endpoint_stops_immediately(self) -> None:
        points = densify(lambda f: (f, 0.0), lambda c: (math.inf, c[1]), 1.0)
        assert len(points) == 1


class TestMeridianAndParallel:
    """Tests for the meridian and parallel helpers."""

    def test_mercator_meridian_is_straight(self) -> None:
        mercator = mercator_projection()
        points = meridian(10.0, -60.0, 60.0, mercator.forward, 1.0)
        assert len(points) == 2
        assert points[0] == pytest.approx(mercator.forward((10.0, -60.0)))
        assert points[1] == pytest.approx(mercator.forward((10.0, 60.0)))

    def test_sinusoidal_meridian_is_curved(self) -> None:
        points = meridian(60.0, -60.0, 60.0, _sinusoidal, 1000.0**2)
        assert len(points) > 2
        ys = [y for _, y in points]
        assert ys == sorted(ys)

    def test_parallel_runs_from_first_to_second_longitude(self) -> None:
        mercator = mercator_projection()
        points = parallel(45.0, 30.0, -30.0, mercator.forward, 1.0)
        assert points[0][0] > points[-1][0]
        assert {round(y, 6) for _, y in points} == {
            round(mercator.forward((0.0, 45.0))[1], 6)
        }
