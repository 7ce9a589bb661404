"""Projection handles and lookup for graticule.

Key Components:
    - Projection: Code, extents and transforms of one projection
    - ProjectionRegistry: Code/alias lookup with built-in EPSG:4326/3857
    - ProjDefinitions: proj definition strings, queried for their family
    - pyproj_backend: Optional CRS-backed projections (``graticule[proj]``)

Example:
    from graticule.proj import default_registry

    mercator = default_registry.get("EPSG:3857")
    x, y = mercator.forward((10.0, 45.0))
"""

from graticule.proj.builtin import (
    MERCATOR_CODE,
    geodetic_projection,
    mercator_projection,
)
from graticule.proj.definitions import FamilyLookup, ProjDefinitions, parse_family
from graticule.proj.exceptions import ProjectionError, UnknownProjectionError
from graticule.proj.projection import GEODETIC_CODE, Projection
from graticule.proj.registry import ProjectionRegistry, default_registry

__all__ = [
    "GEODETIC_CODE",
    "MERCATOR_CODE",
    "FamilyLookup",
    "ProjDefinitions",
    "Projection",
    "ProjectionError",
    "ProjectionRegistry",
    "UnknownProjectionError",
    "default_registry",
    "geodetic_projection",
    "mercator_projection",
    "parse_family",
]
