"""Grid line generation for graticule.

This module builds the meridians, parallels and edge label anchors for one
view. Two strategies exist, chosen by the projection's GenerationMode:

LINE (fast path):
    Grid lines are straight in projected space. Each line is the 2-point
    segment spanning the visible extent at the projected x (meridians) or
    y (parallels) of its grid value, and gets a label anchor on both view
    edges it crosses.

DEFAULT (curved path):
    Each line is densified between the bounds of the visible geodetic window
    and kept only if its bounding box touches the visible extent. Lines are
    generated walking outward from the view center in both directions,
    clamped to the projection's geodetic bounds and capped at ``max_lines``
    steps per direction. No labels are produced.

Failure Behavior:
    A line whose transform produces a non-finite coordinate is dropped. A
    degenerate input (non-positive resolution, empty or non-finite extent,
    disabled interval) yields an empty result. Nothing here raises for such
    inputs.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from graticule.config import settings
from graticule.core.intervals import DISABLED
from graticule.core.projection_info import ProjectionInfo
from graticule.core.types import (
    Axis,
    GenerationMode,
    GraticuleResult,
    GridLine,
    LabelEdge,
    LabelPoint,
)
from graticule.geometry import geodesic
from graticule.geometry.primitives import (
    Coordinate,
    Extent,
    clamp,
    is_finite_coordinate,
)
from graticule.utils.logging import get_logger

logger = get_logger(__name__)

# Grid values are multiples of the interval; rounding removes k * 0.1 noise
_VALUE_DIGITS = 9


class GraticuleBuilder:
    """Builds grid lines and label anchors for one view.

    The builder keeps no state between calls; every build returns a fresh
    GraticuleResult.

    Example:
        >>> from graticule.core.projection_info import ProjectionTracker
        >>> from graticule.proj import mercator_projection
        >>> info = ProjectionTracker().update(mercator_projection())
        >>> extent = Extent(min_x=-1e6, min_y=-1e6, max_x=1e6, max_y=1e6)
        >>> result = GraticuleBuilder(max_lines=100).build(
        ...     info, extent, (0.0, 0.0), 1000.0, 0.25e6, GenerationMode.LINE, 5
        ... )
        >>> [line.value for line in result.meridians]
        [-10, -5, 0, 5, 10]
    """

    def __init__(self, max_lines: int | None = None) -> None:
        """Initialize the builder.

        Args:
            max_lines: Cap on lines per axis on each side of the center.
                Defaults to settings.MAX_LINES.
        """
        self.max_lines = settings.MAX_LINES if max_lines is None else max_lines

    def build(  # noqa: PLR0913
        self,
        info: ProjectionInfo,
        extent: Extent,
        center: Coordinate,
        resolution: float,
        squared_tolerance: float,
        mode: GenerationMode,
        interval: float,
    ) -> GraticuleResult:
        """Build the grid for one view.

        Args:
            info: Derived state of the active projection.
            extent: Visible extent in projected units.
            center: View center in projected units.
            resolution: Projected units per pixel.
            squared_tolerance: Densification tolerance for curved lines.
            mode: Generation strategy.
            interval: Grid spacing in degrees, or DISABLED.

        Returns:
            The grid lines and label anchors.
        """
        if mode is GenerationMode.NONE or interval == DISABLED or interval <= 0:
            return GraticuleResult.empty(mode)
        if not (math.isfinite(resolution) and resolution > 0):
            return GraticuleResult.empty(mode)
        if extent.is_empty() or not extent.is_finite():
            return GraticuleResult.empty(mode)
        if not is_finite_coordinate(center):
            return GraticuleResult.empty(mode)

        if mode is GenerationMode.LINE:
            result = self._build_lines(info, extent, center, interval)
        else:
            result = self._build_curves(
                info, extent, center, squared_tolerance, interval
            )

        logger.debug(
            "Graticule built",
            mode=mode.value,
            interval=interval,
            meridians=len(result.meridians),
            parallels=len(result.parallels),
        )
        return result

    # ------------------------------------------------------------------
    # LINE mode
    # ------------------------------------------------------------------

    def _build_lines(
        self,
        info: ProjectionInfo,
        extent: Extent,
        center: Coordinate,
        interval: float,
    ) -> GraticuleResult:
        center_lon, center_lat = info.inverse(center)
        if not (math.isfinite(center_lon) and math.isfinite(center_lat)):
            return GraticuleResult.empty(GenerationMode.LINE, interval)

        min_lon = info.inverse((extent.min_x, center[1]))[0]
        max_lon = info.inverse((extent.max_x, center[1]))[0]
        min_lat = info.inverse((center[0], extent.min_y))[1]
        max_lat = info.inverse((center[0], extent.max_y))[1]

        # Values outside the geodetic world have no valid image
        world = info.world_extent
        lat_bounds = (world.min_y, world.max_y)
        lon_bounds = None
        if not info.projection.can_wrap_x:
            lon_bounds = (world.min_x, world.max_x)

        meridians: list[GridLine] = []
        top: list[LabelPoint] = []
        bottom: list[LabelPoint] = []
        lons = self._line_values(min_lon, max_lon, center_lon, interval, lon_bounds)
        for lon in lons:
            x = info.forward((lon, center_lat))[0]
            if not math.isfinite(x):
                continue
            meridians.append(
                GridLine(
                    axis=Axis.LONGITUDE,
                    value=lon,
                    coordinates=((x, extent.min_y), (x, extent.max_y)),
                )
            )
            top.append(LabelPoint((x, extent.max_y), LabelEdge.TOP, Axis.LONGITUDE))
            bottom.append(
                LabelPoint((x, extent.min_y), LabelEdge.BOTTOM, Axis.LONGITUDE)
            )

        parallels: list[GridLine] = []
        left: list[LabelPoint] = []
        right: list[LabelPoint] = []
        lats = self._line_values(min_lat, max_lat, center_lat, interval, lat_bounds)
        for lat in lats:
            y = info.forward((center_lon, lat))[1]
            if not math.isfinite(y):
                continue
            parallels.append(
                GridLine(
                    axis=Axis.LATITUDE,
                    value=lat,
                    coordinates=((extent.min_x, y), (extent.max_x, y)),
                )
            )
            left.append(LabelPoint((extent.min_x, y), LabelEdge.LEFT, Axis.LATITUDE))
            right.append(
                LabelPoint((extent.max_x, y), LabelEdge.RIGHT, Axis.LATITUDE)
            )

        return GraticuleResult(
            mode=GenerationMode.LINE,
            interval=interval,
            extent=extent,
            meridians=tuple(meridians),
            parallels=tuple(parallels),
            top_labels=tuple(top),
            bottom_labels=tuple(bottom),
            left_labels=tuple(left),
            right_labels=tuple(right),
        )

    def _line_values(
        self,
        low: float,
        high: float,
        anchor: float,
        interval: float,
        bounds: tuple[float, float] | None = None,
    ) -> list[float]:
        """Interval multiples covering [low, high], snapped outward.

        At most max_lines multiples on either side of the anchor's multiple
        are returned, and none outside bounds when given.
        """
        if not (math.isfinite(low) and math.isfinite(high)):
            return []
        first = math.floor(low / interval)
        last = math.ceil(high / interval)
        snapped = math.floor(anchor / interval)
        first = max(first, snapped - self.max_lines)
        last = min(last, snapped + self.max_lines)
        if bounds is not None:
            first = max(first, math.ceil(bounds[0] / interval))
            last = min(last, math.floor(bounds[1] / interval))
        return [round(k * interval, _VALUE_DIGITS) for k in range(first, last + 1)]

    # ------------------------------------------------------------------
    # DEFAULT mode
    # ------------------------------------------------------------------

    def _build_curves(
        self,
        info: ProjectionInfo,
        extent: Extent,
        center: Coordinate,
        squared_tolerance: float,
        interval: float,
    ) -> GraticuleResult:
        visible = extent.clamp_to(info.world_extent_projected)
        if visible.is_empty():
            return GraticuleResult.empty(GenerationMode.DEFAULT, interval)
        window = visible.apply_transform(info.inverse)
        if window.is_empty() or not window.is_finite():
            return GraticuleResult.empty(GenerationMode.DEFAULT, interval)

        center_lonlat = info.inverse(center)
        if not is_finite_coordinate(center_lonlat):
            center_lonlat = window.center
        center_lon, center_lat = center_lonlat
        world = info.world_extent

        meridians = self._walk(
            center_lon,
            interval,
            world.min_x,
            world.max_x,
            lambda lon: geodesic.meridian(
                lon, window.min_y, window.max_y, info.forward, squared_tolerance
            ),
            extent,
            Axis.LONGITUDE,
        )
        parallels = self._walk(
            center_lat,
            interval,
            world.min_y,
            world.max_y,
            lambda lat: geodesic.parallel(
                lat, window.min_x, window.max_x, info.forward, squared_tolerance
            ),
            extent,
            Axis.LATITUDE,
        )
        return GraticuleResult(
            mode=GenerationMode.DEFAULT,
            interval=interval,
            extent=extent,
            meridians=meridians,
            parallels=parallels,
        )

    def _walk(  # noqa: PLR0913
        self,
        center: float,
        interval: float,
        low: float,
        high: float,
        densify: Callable[[float], list[Coordinate]],
        extent: Extent,
        axis: Axis,
    ) -> tuple[GridLine, ...]:
        """Generate lines outward from center until a bound or the cap.

        The decreasing and increasing walks each take at most max_lines
        steps. A walk that lands exactly on its bound stops there.
        """
        start = clamp(math.floor(center / interval) * interval, low, high)

        below: list[GridLine] = []
        value = start
        steps = 0
        while value != low and steps < self.max_lines:
            steps += 1
            value = max(start - steps * interval, low)
            self._add_line(below, axis, value, densify, extent)

        middle: list[GridLine] = []
        self._add_line(middle, axis, start, densify, extent)

        above: list[GridLine] = []
        value = start
        steps = 0
        while value != high and steps < self.max_lines:
            steps += 1
            value = min(start + steps * interval, high)
            self._add_line(above, axis, value, densify, extent)

        below.reverse()
        return tuple(below + middle + above)

    def _add_line(
        self,
        lines: list[GridLine],
        axis: Axis,
        value: float,
        densify: Callable[[float], list[Coordinate]],
        extent: Extent,
    ) -> None:
        coordinates = densify(value)
        if len(coordinates) < 2 or not all(
            is_finite_coordinate(c) for c in coordinates
        ):
            logger.debug("Dropped non-finite grid line", axis=axis.value, value=value)
            return
        line = GridLine(
            axis=axis,
            value=round(value, _VALUE_DIGITS),
            coordinates=tuple(coordinates),
        )
        if line.extent.intersects(extent):
            lines.append(line)
