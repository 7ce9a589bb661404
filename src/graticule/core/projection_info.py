"""Per-projection derived state.

Everything the grid computation needs that depends only on the projection
is derived once, frozen into a ProjectionInfo, and reused until a
non-equivalent projection arrives. The tracker swaps the whole record at
once, so bounds and transforms can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass

from graticule.core.classifier import ProjectionStatusClassifier
from graticule.core.types import GenerationMode
from graticule.geometry.primitives import Coordinate, Extent, TransformFunction
from graticule.proj.projection import Projection
from graticule.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectionInfo:
    """Cached, derived view of one projection.

    Attributes:
        projection: The projection this was derived from.
        world_extent: Geodetic bounds (min/max lon and lat).
        world_extent_projected: world_extent forward-transformed.
        forward: Geodetic to projected transform.
        inverse: Projected to geodetic transform.
        center_lonlat: Geodetic position of the projection extent's center,
            the anchor for interval probing.
        mode: Generation mode from the status classifier.
    """

    projection: Projection
    world_extent: Extent
    world_extent_projected: Extent
    forward: TransformFunction
    inverse: TransformFunction
    center_lonlat: Coordinate
    mode: GenerationMode

    @classmethod
    def from_projection(
        cls,
        projection: Projection,
        classifier: ProjectionStatusClassifier,
    ) -> ProjectionInfo:
        """Derive the cached state for a projection."""
        world_extent = projection.world_extent
        return cls(
            projection=projection,
            world_extent=world_extent,
            world_extent_projected=world_extent.apply_transform(projection.forward),
            forward=projection.forward,
            inverse=projection.inverse,
            center_lonlat=projection.inverse(projection.extent.center),
            mode=classifier.classify(projection.code),
        )


class ProjectionTracker:
    """Holds the ProjectionInfo for the active projection.

    Attributes:
        changes: Number of times the info was (re)derived.
    """

    def __init__(self, classifier: ProjectionStatusClassifier | None = None) -> None:
        self.classifier = classifier or ProjectionStatusClassifier()
        self._info: ProjectionInfo | None = None
        self.changes = 0

    @property
    def info(self) -> ProjectionInfo | None:
        """Current derived state, None before the first update."""
        return self._info

    def update(self, projection: Projection) -> ProjectionInfo:
        """Return derived state for projection, re-deriving only on change.

        Args:
            projection: The projection of the current frame.

        Returns:
            The cached ProjectionInfo if projection is equivalent to the
            cached one, otherwise a freshly derived one.
        """
        current = self._info
        if current is not None and current.projection.equivalent(projection):
            return current

        info = ProjectionInfo.from_projection(projection, self.classifier)
        self._info = info
        self.changes += 1
        logger.debug(
            "Projection changed",
            code=projection.code,
            mode=info.mode.value,
            world_extent=info.world_extent.to_tuple(),
        )
        return info

    def reset(self) -> None:
        """Forget the cached projection."""
        self._info = None
