"""Projection handle consumed by the grid computation.

A projection bundles everything the graticule needs from a coordinate
reference system: its code, its projected extent, the geodetic extent it is
valid for, and transforms in both directions between geodetic
(longitude, latitude) degrees and projected coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graticule.geometry.primitives import Extent, TransformFunction

GEODETIC_CODE = "EPSG:4326"


@dataclass(frozen=True, eq=False)
class Projection:
    """Read-only projection handle.

    Attributes:
        code: Identifier such as "EPSG:3857".
        extent: Valid extent in projected coordinates.
        world_extent: Valid extent in geodetic degrees.
        forward: Geodetic (lon, lat) to projected (x, y).
        inverse: Projected (x, y) to geodetic (lon, lat).
        units: Units of the projected coordinates ("m", "degrees", ...).
        can_wrap_x: Whether the world repeats horizontally.
        equivalent_codes: Other codes naming the same projection.
    """

    code: str
    extent: Extent
    world_extent: Extent
    forward: TransformFunction = field(repr=False)
    inverse: TransformFunction = field(repr=False)
    units: str = "m"
    can_wrap_x: bool = False
    equivalent_codes: frozenset[str] = frozenset()

    def equivalent(self, other: Projection | None) -> bool:
        """Check whether other names the same projection.

        Two projections are equivalent when they are the same object, share
        a code, or one lists the other's code as an alias, and they agree on
        units. Identity of the transform callables is not compared.
        """
        if other is None:
            return False
        if other is self:
            return True
        if self.units != other.units:
            return False
        return (
            self.code == other.code
            or other.code in self.equivalent_codes
            or self.code in other.equivalent_codes
        )

    @property
    def all_codes(self) -> frozenset[str]:
        """The code plus its aliases."""
        return self.equivalent_codes | {self.code}
