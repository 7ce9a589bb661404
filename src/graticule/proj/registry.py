"""Projection registry.

Maps projection codes (and their aliases) to Projection handles and
remembers which projections have a direct, built-in transform to geodetic
coordinates. That second fact drives the status classifier's fallback when
no projection definition is available.
"""

from __future__ import annotations

from graticule.proj.builtin import geodetic_projection, mercator_projection
from graticule.proj.exceptions import UnknownProjectionError
from graticule.proj.projection import Projection


class ProjectionRegistry:
    """Lookup table of known projections.

    Example:
        >>> registry = ProjectionRegistry.with_defaults()
        >>> registry.get("EPSG:900913").code
        'EPSG:3857'
        >>> registry.has_direct_transform("EPSG:3857")
        True
    """

    def __init__(self) -> None:
        self._projections: dict[str, Projection] = {}
        self._direct: set[str] = set()

    @classmethod
    def with_defaults(cls) -> ProjectionRegistry:
        """Create a registry holding EPSG:4326 and EPSG:3857."""
        registry = cls()
        registry.add(geodetic_projection())
        registry.add(mercator_projection())
        return registry

    def add(self, projection: Projection, *, direct: bool = True) -> None:
        """Register a projection under its code and all its aliases.

        Args:
            projection: Projection to register.
            direct: Whether its transforms to and from geodetic coordinates
                are exact closed forms rather than a general library path.
        """
        for code in projection.all_codes:
            self._projections[code] = projection
            if direct:
                self._direct.add(code)
            else:
                self._direct.discard(code)

    def get(self, code: str) -> Projection:
        """Look up a projection by code.

        Raises:
            UnknownProjectionError: If the code is not registered.
        """
        try:
            return self._projections[code]
        except KeyError:
            raise UnknownProjectionError("Projection not registered", code) from None

    def has_direct_transform(self, code: str) -> bool:
        """Check for a direct transform between code and geodetic degrees."""
        return code in self._direct

    def codes(self) -> list[str]:
        """All registered codes, aliases included, sorted."""
        return sorted(self._projections)

    def __contains__(self, code: object) -> bool:
        return code in self._projections


# Default registry for import convenience
default_registry = ProjectionRegistry.with_defaults()
