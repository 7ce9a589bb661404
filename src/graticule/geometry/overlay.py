"""Raster rendering of graticules with Pillow.

This module draws a GraticuleResult onto a transparent RGBA image covering
the view, for previews and for compositing onto rendered maps. Projected
coordinates are mapped to pixels with the view's extent and resolution;
labels follow the usual web-map placement:

- left edge: left-aligned, vertically centered
- right edge: right-aligned, vertically centered
- top edge: centered, hanging below the edge
- bottom edge: centered, sitting on the edge
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from graticule.core.types import LabelEdge
from graticule.geometry.styles import StrokeStyle, TextStyle

if TYPE_CHECKING:
    from graticule.core.labels import LabelFormatter
    from graticule.core.types import GraticuleResult, LabelPoint
    from graticule.geometry.primitives import Coordinate, Extent

logger = logging.getLogger(__name__)

# Pillow text anchors per edge
_EDGE_ANCHORS: dict[LabelEdge, str] = {
    LabelEdge.LEFT: "lm",
    LabelEdge.RIGHT: "rm",
    LabelEdge.TOP: "mt",
    LabelEdge.BOTTOM: "mb",
}


class GraticuleRenderer:
    """Draws graticule lines and labels onto Pillow images.

    Example:
        >>> renderer = GraticuleRenderer()
        >>> overlay = renderer.render(result, view.extent, view.resolution, formatter)
        >>> overlay.mode
        'RGBA'
    """

    def __init__(
        self,
        stroke_style: StrokeStyle | None = None,
        text_style: TextStyle | None = None,
    ) -> None:
        """Initialize the renderer with optional custom styling.

        Args:
            stroke_style: Line styling. Uses defaults if not provided.
            text_style: Label styling. Uses defaults if not provided.
        """
        self.stroke_style = stroke_style or StrokeStyle()
        self.text_style = text_style or TextStyle()

    def render(
        self,
        result: GraticuleResult,
        extent: Extent,
        resolution: float,
        formatter: LabelFormatter | None = None,
    ) -> Image.Image:
        """Render a graticule to a transparent overlay.

        Args:
            result: Lines and labels to draw.
            extent: Projected extent covered by the image.
            resolution: Projected units per pixel.
            formatter: Produces label text. Labels are skipped without one.

        Returns:
            RGBA image of the view's pixel size.

        Raises:
            ValueError: If resolution is not positive or extent is empty.
        """
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")
        if extent.is_empty():
            raise ValueError(f"extent must not be empty, got {extent.to_tuple()}")

        size = (
            max(1, round(extent.width / resolution)),
            max(1, round(extent.height / resolution)),
        )
        overlay = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)

        # Lines were built for result.extent, which differs from the view
        # extent only by a whole-world shift on wrapping projections
        frame = result.extent or extent

        def to_pixel(coord: Coordinate) -> tuple[float, float]:
            return (
                (coord[0] - frame.min_x) / resolution,
                (frame.max_y - coord[1]) / resolution,
            )

        for line in result.meridians + result.parallels:
            draw.line(
                [to_pixel(c) for c in line.coordinates],
                fill=self.stroke_style.color,
                width=self.stroke_style.width,
            )

        if formatter is not None and result.labels:
            font = self._get_font()
            for label in result.labels:
                self._draw_label(draw, label, to_pixel(label.coordinate), font, formatter)

        return overlay

    def compose(self, base: Image.Image, overlay: Image.Image) -> Image.Image:
        """Composite an overlay onto a base image of the same size.

        Args:
            base: Rendered map image.
            overlay: RGBA graticule overlay.

        Returns:
            RGB image with the graticule drawn over the map.

        Raises:
            ValueError: If the images differ in size.
        """
        if base.size != overlay.size:
            raise ValueError(
                f"Overlay size {overlay.size} does not match base size {base.size}"
            )
        base_rgba = base if base.mode == "RGBA" else base.convert("RGBA")
        return Image.alpha_composite(base_rgba, overlay).convert("RGB")

    def _get_font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """Get font for labels, with fallback to default.

        Raises:
            RuntimeError: If strict_font_check is True and no TrueType font found.
        """
        try:
            return ImageFont.truetype("DejaVuSans.ttf", self.text_style.font_size)
        except OSError:
            try:
                return ImageFont.truetype("Arial.ttf", self.text_style.font_size)
            except OSError:
                if self.text_style.strict_font_check:
                    raise RuntimeError(
                        "No TrueType fonts available (DejaVuSans.ttf, Arial.ttf). "
                        "Strict font check is enabled. Install system fonts."
                    ) from None
                logger.warning(
                    "No TrueType fonts available (DejaVuSans.ttf, Arial.ttf). "
                    "Using default font."
                )
                return ImageFont.load_default()

    def _draw_label(
        self,
        draw: ImageDraw.ImageDraw,
        label: LabelPoint,
        position: tuple[float, float],
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        formatter: LabelFormatter,
    ) -> None:
        text = formatter.format(label)
        if not text:
            return
        draw.text(
            position,
            text,
            fill=self.text_style.fill,
            font=font,
            anchor=_EDGE_ANCHORS[label.edge],
            stroke_width=self.text_style.halo_width,
            stroke_fill=self.text_style.halo_color,
        )
