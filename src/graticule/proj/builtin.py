"""Projections available without any external projection library.

Geographic WGS 84 and spherical (Web) Mercator, the two projections every
web map ships. Both have meridians and parallels that are straight lines
in projected space.
"""

from __future__ import annotations

import math

from graticule.geometry.primitives import Coordinate, Extent
from graticule.proj.projection import GEODETIC_CODE, Projection

RADIUS = 6378137.0
HALF_SIZE = math.pi * RADIUS
MERCATOR_CODE = "EPSG:3857"
# atan(exp(k)) is pi/2 in double precision well before exp overflows
_MAX_EXPONENT = 700.0


def _identity(coord: Coordinate) -> Coordinate:
    return (coord[0], coord[1])


def mercator_forward(coord: Coordinate) -> Coordinate:
    """Geodetic degrees to spherical Mercator meters.

    y is clamped to the square projection extent; latitudes outside
    [-90, 90] have no image and yield NaN.
    """
    lon, lat = coord
    x = RADIUS * math.pi * lon / 180
    t = math.tan(math.pi * (lat + 90) / 360)
    if t > 0:
        y = RADIUS * math.log(t)
        y = min(max(y, -HALF_SIZE), HALF_SIZE)
    elif t == 0 or math.isinf(t):
        y = -HALF_SIZE if lat < 0 else HALF_SIZE
    else:
        y = math.nan
    return (x, y)


def mercator_inverse(coord: Coordinate) -> Coordinate:
    """Spherical Mercator meters to geodetic degrees.

    y far beyond the extent saturates at the poles instead of overflowing.
    """
    x, y = coord
    lon = 180 * x / HALF_SIZE
    k = min(max(y / RADIUS, -_MAX_EXPONENT), _MAX_EXPONENT)
    lat = 360 * math.atan(math.exp(k)) / math.pi - 90
    return (lon, lat)


def geodetic_projection() -> Projection:
    """Geographic WGS 84 longitude/latitude."""
    world = Extent(min_x=-180, min_y=-90, max_x=180, max_y=90)
    return Projection(
        code=GEODETIC_CODE,
        extent=world,
        world_extent=world,
        forward=_identity,
        inverse=_identity,
        units="degrees",
        can_wrap_x=True,
        equivalent_codes=frozenset(
            {
                "CRS:84",
                "EPSG:4326",
                "urn:ogc:def:crs:EPSG::4326",
                "urn:ogc:def:crs:OGC:1.3:CRS84",
                "http://www.opengis.net/gml/srs/epsg.xml#4326",
            }
        ),
    )


def mercator_projection() -> Projection:
    """Spherical Mercator as used by web map tiles."""
    return Projection(
        code=MERCATOR_CODE,
        extent=Extent(
            min_x=-HALF_SIZE, min_y=-HALF_SIZE, max_x=HALF_SIZE, max_y=HALF_SIZE
        ),
        world_extent=Extent(min_x=-180, min_y=-85, max_x=180, max_y=85),
        forward=mercator_forward,
        inverse=mercator_inverse,
        units="m",
        can_wrap_x=True,
        equivalent_codes=frozenset(
            {
                "EPSG:102100",
                "EPSG:102113",
                "EPSG:900913",
                "urn:ogc:def:crs:EPSG::3857",
                "http://www.opengis.net/gml/srs/epsg.xml#3857",
            }
        ),
    )
