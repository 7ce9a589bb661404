"""Graticule controller.

Ties the pieces together for a live map: on every frame it refreshes the
projection cache if the projection changed, selects the interval, builds
the grid, and hands the result to an optional listener (typically a
renderer). The computation itself is a pure function of projection, view
and options; the only state kept between frames is the projection cache
and the last result.

Lifecycle:
    ``attach(view_source)`` subscribes to the source's render events and
    ``detach()`` unsubscribes. A view source is anything implementing
    ViewSource.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from graticule.config import Settings, settings
from graticule.core.builder import GraticuleBuilder
from graticule.core.classifier import ProjectionStatusClassifier
from graticule.core.intervals import (
    DISABLED,
    IntervalSelector,
    IntervalSelectorProtocol,
)
from graticule.core.labels import LabelFormatter
from graticule.core.projection_info import ProjectionInfo, ProjectionTracker
from graticule.core.types import (
    FrameState,
    GenerationMode,
    GraticuleResult,
    GridLine,
    LabelPoint,
    ViewState,
)
from graticule.geometry.primitives import Coordinate, Extent
from graticule.geometry.styles import StrokeStyle, TextStyle
from graticule.proj.projection import Projection
from graticule.utils.logging import get_logger, set_render_context

logger = get_logger(__name__)

FrameCallback = Callable[[FrameState], None]
ResultListener = Callable[[GraticuleResult, FrameState], None]


class ViewSource(Protocol):
    """A map view that announces frames to subscribers."""

    def on_render(self, callback: FrameCallback) -> None:
        """Subscribe callback to frame events."""
        ...

    def off_render(self, callback: FrameCallback) -> None:
        """Unsubscribe callback from frame events."""
        ...

    def request_render(self) -> None:
        """Ask for a new frame to be rendered."""
        ...


@dataclass(frozen=True)
class GraticuleOptions:
    """Configuration set once per graticule.

    Attributes:
        target_size: Target spacing between lines in pixels.
        max_lines: Cap on lines per axis on each side of the center.
        stroke_style: Line styling, passed through to renderers.
        text_style: Label styling, passed through to renderers.
    """

    target_size: float = 100.0
    max_lines: int = 100
    stroke_style: StrokeStyle = field(default_factory=StrokeStyle)
    text_style: TextStyle = field(default_factory=TextStyle)

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> GraticuleOptions:
        """Build options from settings.

        Raises:
            ConfigError: If TARGET_SIZE or MAX_LINES is unusable.
        """
        config = config or settings
        return cls(
            target_size=config.require_target_size(),
            max_lines=config.require_max_lines(),
        )


def wrap_view(view: ViewState, projection: Projection) -> tuple[Extent, Coordinate]:
    """Move the view onto the canonical world copy of a wrapping projection.

    When the projection repeats horizontally and the focus lies outside the
    projection extent, extent and center are shifted by whole world widths
    so the focus falls inside it.

    Returns:
        The (possibly shifted) extent and center.
    """
    extent, center = view.extent, view.center
    if not projection.can_wrap_x:
        return extent, center
    world = projection.extent
    world_width = world.width
    x = (view.focus or view.center)[0]
    if not (world_width > 0 and math.isfinite(x)):
        return extent, center
    if world.contains_x(x):
        return extent, center
    offset = world_width * math.ceil((world.min_x - x) / world_width)
    return extent.shift_x(offset), (center[0] + offset, center[1])


class Graticule:
    """Adaptive longitude/latitude grid for a projected map view.

    Example:
        >>> from graticule.proj import mercator_projection
        >>> graticule = Graticule()
        >>> view = ViewState(
        ...     extent=Extent(min_x=-5e5, min_y=-5e5, max_x=5e5, max_y=5e5),
        ...     center=(0.0, 0.0),
        ...     resolution=1000.0,
        ... )
        >>> result = graticule.compute(mercator_projection(), view)
        >>> result.mode.value, result.interval
        ('line', 1)
    """

    def __init__(
        self,
        options: GraticuleOptions | None = None,
        *,
        classifier: ProjectionStatusClassifier | None = None,
        selector: IntervalSelectorProtocol | None = None,
        listener: ResultListener | None = None,
    ) -> None:
        """Initialize the graticule.

        Args:
            options: Configuration. Defaults to GraticuleOptions.from_settings().
            classifier: Projection status classifier.
            selector: Interval selector.
            listener: Called with every new result and its frame.
        """
        self.options = options or GraticuleOptions.from_settings()
        self.tracker = ProjectionTracker(classifier)
        self.selector = selector or IntervalSelector()
        self.builder = GraticuleBuilder(max_lines=self.options.max_lines)
        self.listener = listener
        self._view_source: ViewSource | None = None
        self._formatter: tuple[ProjectionInfo, LabelFormatter] | None = None
        self._result = GraticuleResult.empty(GenerationMode.NONE)

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def compute(self, projection: Projection, view: ViewState) -> GraticuleResult:
        """Compute the grid for one view.

        Args:
            projection: Projection the view is expressed in.
            view: Visible extent, center and resolution.

        Returns:
            A fresh result that supersedes any previous one.
        """
        info = self.tracker.update(projection)
        extent, center = wrap_view(view, projection)

        if info.mode is GenerationMode.NONE:
            interval = DISABLED
        else:
            interval = self.selector.select_interval(
                info.center_lonlat,
                view.resolution,
                self.options.target_size,
                info.forward,
            )

        result = self.builder.build(
            info,
            extent,
            center,
            view.resolution,
            view.squared_tolerance,
            info.mode,
            interval,
        )
        self._result = result
        return result

    def render_frame(self, frame: FrameState) -> GraticuleResult:
        """Compute the grid for a frame and notify the listener."""
        set_render_context(projection=frame.projection.code, frame=frame.index)
        result = self.compute(frame.projection, frame.view)
        if self.listener is not None:
            self.listener(result, frame)
        return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def view_source(self) -> ViewSource | None:
        """The view source this graticule is attached to."""
        return self._view_source

    def attach(self, view_source: ViewSource) -> None:
        """Render on every frame of view_source, detaching from any other."""
        if self._view_source is view_source:
            return
        self.detach()
        view_source.on_render(self.render_frame)
        view_source.request_render()
        self._view_source = view_source
        logger.debug("Graticule attached")

    def detach(self) -> None:
        """Stop rendering on the current view source, if any."""
        if self._view_source is None:
            return
        source = self._view_source
        self._view_source = None
        source.off_render(self.render_frame)
        source.request_render()
        logger.debug("Graticule detached")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def last_result(self) -> GraticuleResult:
        """Result of the most recent computation."""
        return self._result

    @property
    def meridians(self) -> tuple[GridLine, ...]:
        """Lines of constant longitude from the last computation."""
        return self._result.meridians

    @property
    def parallels(self) -> tuple[GridLine, ...]:
        """Lines of constant latitude from the last computation."""
        return self._result.parallels

    @property
    def top_labels(self) -> tuple[LabelPoint, ...]:
        return self._result.top_labels

    @property
    def bottom_labels(self) -> tuple[LabelPoint, ...]:
        return self._result.bottom_labels

    @property
    def left_labels(self) -> tuple[LabelPoint, ...]:
        return self._result.left_labels

    @property
    def right_labels(self) -> tuple[LabelPoint, ...]:
        return self._result.right_labels

    @property
    def formatter(self) -> LabelFormatter | None:
        """Label formatter for the active projection, None before any frame."""
        info = self.tracker.info
        if info is None:
            return None
        if self._formatter is None or self._formatter[0] is not info:
            self._formatter = (info, LabelFormatter(info.inverse))
        return self._formatter[1]
