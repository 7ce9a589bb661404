"""Projections backed by pyproj.

Install the ``proj`` extra to use this module. pyproj is imported lazily so
the rest of the package works without it.
"""

from __future__ import annotations

import math
import warnings
from functools import lru_cache
from types import ModuleType

from graticule.geometry.primitives import Coordinate, Extent
from graticule.proj.exceptions import ProjectionError
from graticule.proj.projection import GEODETIC_CODE, Projection
from graticule.utils.logging import get_logger

logger = get_logger(__name__)

_WORLD = Extent(min_x=-180, min_y=-90, max_x=180, max_y=90)


@lru_cache(maxsize=1)
def _require_pyproj() -> ModuleType:
    try:
        import pyproj  # noqa: PLC0415
    except ImportError as exc:
        raise ProjectionError(
            "pyproj is required for CRS-backed projections; "
            "install graticule[proj]"
        ) from exc
    return pyproj


def pyproj_family(code: str) -> str | None:
    """Projection family ("merc", "stere", ...) of a CRS known to pyproj.

    Usable as the status classifier's definition lookup. Returns None when
    pyproj cannot build the CRS or it carries no ``proj`` parameter.
    """
    pyproj = _require_pyproj()
    try:
        crs = pyproj.CRS.from_user_input(code)
    except pyproj.exceptions.CRSError:
        return None
    with warnings.catch_warnings():
        # to_dict() warns that PROJ strings lose information
        warnings.simplefilter("ignore", UserWarning)
        family = crs.to_dict().get("proj")
    return str(family).lower() if family else None


def projection_from_crs(code: str) -> Projection:
    """Build a Projection for any CRS pyproj understands.

    The geodetic world extent is the CRS area of use (whole world if the
    CRS declares none); the projected extent is its forward image.

    Raises:
        ProjectionError: If pyproj is missing or the CRS cannot be built.
    """
    pyproj = _require_pyproj()
    try:
        crs = pyproj.CRS.from_user_input(code)
        to_crs = pyproj.Transformer.from_crs(GEODETIC_CODE, crs, always_xy=True)
        to_geo = pyproj.Transformer.from_crs(crs, GEODETIC_CODE, always_xy=True)
    except (pyproj.exceptions.CRSError, pyproj.exceptions.ProjError) as exc:
        raise ProjectionError(f"Cannot build CRS: {exc}", code) from exc

    def forward(coord: Coordinate) -> Coordinate:
        x, y = to_crs.transform(coord[0], coord[1])
        return (float(x), float(y))

    def inverse(coord: Coordinate) -> Coordinate:
        lon, lat = to_geo.transform(coord[0], coord[1])
        return (float(lon), float(lat))

    area = crs.area_of_use
    if area is not None:
        world_extent = Extent(
            min_x=area.west, min_y=area.south, max_x=area.east, max_y=area.north
        )
    else:
        world_extent = _WORLD

    extent = world_extent.apply_transform(forward)
    if not extent.is_finite():
        raise ProjectionError("Area of use has no finite projected image", code)

    units = crs.axis_info[0].unit_name if crs.axis_info else "m"
    logger.debug(
        "Built pyproj projection",
        code=code,
        units=units,
        world_extent=world_extent.to_tuple(),
    )
    return Projection(
        code=code,
        extent=extent,
        world_extent=world_extent,
        forward=forward,
        inverse=inverse,
        units="degrees" if crs.is_geographic else units,
        can_wrap_x=crs.is_geographic
        and math.isclose(world_extent.width, 360.0),
    )
