"""Data types shared by the grid computation.

View input is a validated Pydantic model; frames and outputs (GridLine,
LabelPoint, GraticuleResult) are frozen dataclasses built fresh on every
computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from graticule.geometry.primitives import Coordinate, Extent
from graticule.proj.projection import Projection


class GenerationMode(str, Enum):
    """How grid lines are generated for a projection."""

    NONE = "none"  # No lines or labels
    LINE = "line"  # Straight 2-point lines
    DEFAULT = "default"  # Densified curves, culled by extent


class Axis(str, Enum):
    """Which geodetic coordinate a line or label carries."""

    LONGITUDE = "longitude"
    LATITUDE = "latitude"

    @property
    def index(self) -> int:
        """Position of this axis in a (lon, lat) pair."""
        return 0 if self is Axis.LONGITUDE else 1


class LabelEdge(str, Enum):
    """View edge a label is anchored to."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class GridLine:
    """One meridian or parallel in projected coordinates.

    Attributes:
        axis: LONGITUDE for meridians, LATITUDE for parallels.
        value: The constant longitude or latitude, in degrees.
        coordinates: Ordered projected points, at least two.
    """

    axis: Axis
    value: float
    coordinates: tuple[Coordinate, ...]

    @property
    def extent(self) -> Extent:
        """Bounding extent of the line."""
        return Extent.bounding(self.coordinates)


@dataclass(frozen=True)
class LabelPoint:
    """Anchor for one edge label.

    Attributes:
        coordinate: Projected anchor position.
        edge: Edge of the view the label sits on.
        axis: Axis whose value the label displays.
    """

    coordinate: Coordinate
    edge: LabelEdge
    axis: Axis


@dataclass(frozen=True)
class GraticuleResult:
    """Everything one grid computation produces.

    Attributes:
        mode: Generation mode the lines were built with.
        interval: Spacing in degrees, or -1 when generation is disabled.
        extent: Projected extent the lines were built for, if any.
        meridians: Lines of constant longitude.
        parallels: Lines of constant latitude.
        top_labels: Longitude labels on the top edge.
        bottom_labels: Longitude labels on the bottom edge.
        left_labels: Latitude labels on the left edge.
        right_labels: Latitude labels on the right edge.
    """

    mode: GenerationMode
    interval: float
    extent: Extent | None = None
    meridians: tuple[GridLine, ...] = ()
    parallels: tuple[GridLine, ...] = ()
    top_labels: tuple[LabelPoint, ...] = ()
    bottom_labels: tuple[LabelPoint, ...] = ()
    left_labels: tuple[LabelPoint, ...] = ()
    right_labels: tuple[LabelPoint, ...] = ()

    @classmethod
    def empty(cls, mode: GenerationMode, interval: float = -1) -> GraticuleResult:
        """A result with no lines and no labels."""
        return cls(mode=mode, interval=interval)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw."""
        return not (self.meridians or self.parallels)

    @property
    def labels(self) -> tuple[LabelPoint, ...]:
        """All labels, top, bottom, left then right."""
        return (
            self.top_labels + self.bottom_labels + self.left_labels + self.right_labels
        )

    def to_dict(self) -> dict[str, object]:
        """Plain-data form for JSON output."""
        return {
            "mode": self.mode.value,
            "interval": self.interval,
            "meridians": [_line_dict(line) for line in self.meridians],
            "parallels": [_line_dict(line) for line in self.parallels],
            "labels": {
                edge.value: [list(label.coordinate) for label in labels]
                for edge, labels in (
                    (LabelEdge.TOP, self.top_labels),
                    (LabelEdge.BOTTOM, self.bottom_labels),
                    (LabelEdge.LEFT, self.left_labels),
                    (LabelEdge.RIGHT, self.right_labels),
                )
            },
        }


def _line_dict(line: GridLine) -> dict[str, object]:
    return {"value": line.value, "coordinates": [list(c) for c in line.coordinates]}


class ViewState(BaseModel, frozen=True):
    """What the map shows for one frame.

    Degenerate values (non-positive resolution, empty extent) are accepted
    here and produce an empty grid downstream.

    Attributes:
        extent: Visible extent in projected units.
        center: View center in projected units.
        resolution: Projected units per pixel.
        pixel_ratio: Device pixels per CSS pixel.
        focus: Point the user is looking at; defaults to center. Used to pick
            the world copy on projections that wrap horizontally.
    """

    extent: Extent
    center: Coordinate
    resolution: float
    pixel_ratio: float = Field(default=1.0, gt=0)
    focus: Coordinate | None = None

    @property
    def squared_tolerance(self) -> float:
        """Squared densification tolerance: a quarter device pixel."""
        return self.resolution * self.resolution / (
            4 * self.pixel_ratio * self.pixel_ratio
        )


@dataclass(frozen=True)
class FrameState:
    """A view state together with the projection it is expressed in.

    Attributes:
        view: What the map shows.
        projection: Projection the view coordinates are expressed in.
        index: Frame sequence number, used for log correlation.
    """

    view: ViewState
    projection: Projection
    index: int = 0

