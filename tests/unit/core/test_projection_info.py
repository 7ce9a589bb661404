"""Tests for the per-projection derived cache."""

from __future__ import annotations

import pytest

from graticule.core import (
    GenerationMode,
    ProjectionInfo,
    ProjectionStatusClassifier,
    ProjectionTracker,
)
from graticule.proj import (
    Projection,
    ProjectionRegistry,
    geodetic_projection,
    mercator_projection,
)


class CountingRegistry(ProjectionRegistry):
    """Registry that counts direct-transform lookups."""

    def __init__(self) -> None:
        super().__init__()
        self.lookups = 0

    def has_direct_transform(self, code: str) -> bool:
        self.lookups += 1
        return super().has_direct_transform(code)


@pytest.fixture
def registry() -> CountingRegistry:
    """Counting registry holding the built-in projections."""
    registry = CountingRegistry()
    registry.add(geodetic_projection())
    registry.add(mercator_projection())
    return registry


@pytest.fixture
def tracker(registry: CountingRegistry) -> ProjectionTracker:
    """Tracker classifying through the counting registry."""
    classifier = ProjectionStatusClassifier(registry, use_definitions=False)
    return ProjectionTracker(classifier)


class TestProjectionInfo:
    """Tests for ProjectionInfo.from_projection."""

    def test_derived_fields(self, mercator: Projection) -> None:
        info = ProjectionInfo.from_projection(
            mercator, ProjectionStatusClassifier(use_definitions=False)
        )
        assert info.projection is mercator
        assert info.world_extent == mercator.world_extent
        assert info.mode is GenerationMode.LINE
        assert info.center_lonlat == pytest.approx((0.0, 0.0), abs=1e-9)
        projected = info.world_extent_projected
        assert projected.min_x == pytest.approx(mercator.extent.min_x)
        assert projected.max_x == pytest.approx(mercator.extent.max_x)
        assert projected.max_y == pytest.approx(mercator.forward((0.0, 85.0))[1])

    def test_info_is_frozen(self, mercator: Projection) -> None:
        info = ProjectionInfo.from_projection(
            mercator, ProjectionStatusClassifier(use_definitions=False)
        )
        with pytest.raises(AttributeError):
            info.mode = GenerationMode.NONE  # type: ignore[misc]


class TestProjectionTracker:
    """Tests for ProjectionTracker."""

    def test_info_starts_empty(self, tracker: ProjectionTracker) -> None:
        assert tracker.info is None
        assert tracker.changes == 0

    def test_equivalent_projection_is_not_reclassified(
        self, tracker: ProjectionTracker, registry: CountingRegistry
    ) -> None:
        first = tracker.update(mercator_projection())
        second = tracker.update(mercator_projection())

        assert second is first
        assert tracker.changes == 1
        assert registry.lookups == 1

    def test_projection_change_rederives(
        self,
        tracker: ProjectionTracker,
        registry: CountingRegistry,
        geodetic: Projection,
    ) -> None:
        tracker.update(mercator_projection())
        info = tracker.update(geodetic)

        assert info.projection is geodetic
        assert tracker.info is info
        assert tracker.changes == 2
        assert registry.lookups == 2

    def test_reset_forces_rederive(
        self, tracker: ProjectionTracker, mercator: Projection
    ) -> None:
        tracker.update(mercator)
        tracker.reset()
        assert tracker.info is None
        tracker.update(mercator)
        assert tracker.changes == 2

    def test_unknown_projection_is_default(
        self, tracker: ProjectionTracker, sinusoidal: Projection
    ) -> None:
        assert tracker.update(sinusoidal).mode is GenerationMode.DEFAULT
