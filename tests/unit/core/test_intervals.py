"""Unit tests for grid spacing selection.

Tests IntervalSelector including:
- Standard Mercator zoom levels
- Disabled generation when zoomed out or degenerate
- Exact threshold behavior
- Property-based monotonicity
"""

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from graticule.core.intervals import DISABLED, INTERVALS, IntervalSelector
from graticule.proj import mercator_projection

mercator = mercator_projection()


def _x_only(coord: tuple[float, float]) -> tuple[float, float]:
    """Projects longitude one to one and collapses latitude."""
    return (coord[0], 0.0)


@pytest.fixture
def selector() -> IntervalSelector:
    """Create a default interval selector."""
    return IntervalSelector()


class TestIntervalTable:
    """Tests for the candidate table."""

    def test_table_is_strictly_descending(self) -> None:
        assert list(INTERVALS) == sorted(INTERVALS, reverse=True)
        assert len(set(INTERVALS)) == len(INTERVALS)

    def test_table_bounds(self) -> None:
        assert INTERVALS[0] == 90
        assert INTERVALS[-1] == 0.001


class TestSelectInterval:
    """Tests for IntervalSelector.select_interval."""

    @pytest.mark.parametrize(
        ("resolution", "expected"),
        [
            (10_000.0, 10),
            (1_000.0, 1),
            (100.0, 0.1),
        ],
    )
    def test_mercator_levels(
        self, selector: IntervalSelector, resolution: float, expected: float
    ) -> None:
        interval = selector.select_interval(
            (0.0, 0.0), resolution, 100, mercator.forward
        )
        assert interval == expected

    def test_zoomed_out_is_disabled(self, selector: IntervalSelector) -> None:
        interval = selector.select_interval(
            (0.0, 0.0), 1_000_000.0, 100, mercator.forward
        )
        assert interval == DISABLED

    @pytest.mark.parametrize("resolution", [0.0, -5.0, math.nan, math.inf])
    def test_degenerate_resolution_is_disabled(
        self, selector: IntervalSelector, resolution: float
    ) -> None:
        interval = selector.select_interval(
            (0.0, 0.0), resolution, 100, mercator.forward
        )
        assert interval == DISABLED

    def test_non_finite_center_is_disabled(self, selector: IntervalSelector) -> None:
        interval = selector.select_interval(
            (math.nan, 0.0), 1000.0, 100, mercator.forward
        )
        assert interval == DISABLED

    def test_exact_threshold_is_too_dense(self, selector: IntervalSelector) -> None:
        """A candidate spanning exactly the target is rejected."""
        # Candidate 10 spans exactly 10 units; target is 10 px at 1 unit/px
        interval = selector.select_interval((0.0, 0.0), 1.0, 10.0, _x_only)
        assert interval == 20

    def test_just_below_threshold_is_accepted(
        self, selector: IntervalSelector
    ) -> None:
        interval = selector.select_interval((0.0, 0.0), 1.0, 9.99, _x_only)
        assert interval == 10

    def test_nan_probe_stops_walk(self, selector: IntervalSelector) -> None:
        def transform(coord: tuple[float, float]) -> tuple[float, float]:
            half_span = abs(coord[0])
            return (math.nan, 0.0) if half_span < 5 else (coord[0], 0.0)

        # 20 and 10 project fine; 5 probes at +/-2.5 and fails
        interval = selector.select_interval((0.0, 0.0), 1.0, 1.0, transform)
        assert interval == 10

    def test_custom_table(self) -> None:
        selector = IntervalSelector(intervals=(60, 15))
        interval = selector.select_interval(
            (0.0, 0.0), 1_000.0, 100, mercator.forward
        )
        assert interval == 15

    @given(
        r1=st.floats(min_value=1.0, max_value=2_000_000.0),
        r2=st.floats(min_value=1.0, max_value=2_000_000.0),
    )
    @settings(max_examples=200)
    def test_interval_monotonic_in_resolution(self, r1: float, r2: float) -> None:
        """Property: zooming out never selects a finer interval."""
        selector = IntervalSelector()
        low, high = sorted((r1, r2))

        def rank(interval: float) -> float:
            return math.inf if interval == DISABLED else interval

        fine = selector.select_interval((0.0, 0.0), low, 100, mercator.forward)
        coarse = selector.select_interval((0.0, 0.0), high, 100, mercator.forward)
        assert rank(fine) <= rank(coarse)

    @given(st.floats(min_value=1.0, max_value=1e7))
    def test_result_is_table_value_or_disabled(self, resolution: float) -> None:
        interval = IntervalSelector().select_interval(
            (0.0, 0.0), resolution, 100, mercator.forward
        )
        assert interval == DISABLED or interval in INTERVALS
