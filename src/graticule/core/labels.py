"""Label text for grid edge labels."""

from __future__ import annotations

import math

from graticule.config import settings
from graticule.core.types import Axis, LabelPoint
from graticule.geometry.primitives import Coordinate, TransformFunction

DEGREE_SIGN = "\N{DEGREE SIGN}"


def normalize_longitude(value: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return ((value % 360) + 360 + 180) % 360 - 180


def format_degrees(value: float, precision: int = 6) -> str:
    """Shortest decimal text for value rounded to precision places.

    Example:
        >>> format_degrees(10.0)
        '10'
        >>> format_degrees(-0.0000001)
        '0'
        >>> format_degrees(12.3456789)
        '12.345679'
    """
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


class LabelFormatter:
    """Turns label anchors back into degree strings.

    Example:
        >>> formatter = LabelFormatter(lambda c: c)
        >>> formatter.format_label((-180.0, 0.0), Axis.LONGITUDE)
        '180°'
        >>> formatter.format_label((0.0, 45.5), Axis.LATITUDE)
        '45.5°'
    """

    def __init__(
        self,
        inverse: TransformFunction,
        precision: int | None = None,
        suffix: str = DEGREE_SIGN,
    ) -> None:
        """Initialize the formatter.

        Args:
            inverse: Projected to geodetic transform.
            precision: Decimal places kept. Defaults to settings.LABEL_PRECISION.
            suffix: Appended to every label.
        """
        self.inverse = inverse
        self.precision = settings.LABEL_PRECISION if precision is None else precision
        self.suffix = suffix

    def value(self, point: Coordinate, axis: Axis) -> float:
        """Geodetic value shown by a label at point, normalized and rounded."""
        v = self.inverse(point)[axis.index]
        if not math.isfinite(v):
            return v
        if axis is Axis.LONGITUDE:
            v = normalize_longitude(v)
        v = round(v, self.precision)
        # The antimeridian is always written as +180
        if axis is Axis.LONGITUDE and v == -180:
            v = 180.0
        return v

    def format_label(self, point: Coordinate, axis: Axis) -> str:
        """Label text for a projected point; empty if it has no geodetic value."""
        v = self.value(point, axis)
        if not math.isfinite(v):
            return ""
        return format_degrees(v, self.precision) + self.suffix

    def format(self, label: LabelPoint) -> str:
        """Label text for a LabelPoint."""
        return self.format_label(label.coordinate, label.axis)
