"""Line and label styles.

The grid computation treats styles as opaque values passed through to
renderers; only the renderer in ``graticule.geometry.overlay`` reads them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StrokeStyle:
    """Appearance of grid lines.

    Attributes:
        color: RGBA line color.
        width: Line width in pixels.
    """

    color: tuple[int, int, int, int] = (0, 0, 0, 51)  # rgba(0,0,0,0.2)
    width: int = 1


@dataclass(frozen=True)
class TextStyle:
    """Appearance of edge labels.

    Attributes:
        fill: RGBA text color.
        halo_color: RGBA color of the outline drawn around the text.
        halo_width: Outline width in pixels (0 disables it).
        font_size: Font size in pixels.
        strict_font_check: If True, raise error if no TrueType font is found.
    """

    fill: tuple[int, int, int, int] = (0, 0, 0, 255)
    halo_color: tuple[int, int, int, int] = (255, 255, 255, 128)
    halo_width: int = 2
    font_size: int = 12
    strict_font_check: bool = False
