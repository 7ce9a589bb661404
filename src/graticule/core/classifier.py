"""Projection status classification.

Decides, per projection code, whether meridians and parallels:

- can be drawn as straight 2-point lines (LINE),
- need the densified curve method (DEFAULT),
- cannot be drawn at all (NONE).

When a definition lookup is enabled and knows the code, the decision is made
from the projection family. Otherwise the registry decides: projections with
a direct transform to geodetic coordinates are the built-in cylindrical ones,
whose grid lines are straight.
"""

from __future__ import annotations

from graticule.config import settings
from graticule.core.types import GenerationMode
from graticule.proj.definitions import FamilyLookup
from graticule.proj.registry import ProjectionRegistry, default_registry

# Families whose grid cannot be generated are listed explicitly: stere
# (EPSG:32761) and eqdc (ESRI:102031) only densify meridians and take minutes
# to do so; cea (EPSG:3410) produces nothing usable.
DEFAULT_FAMILY_MODES: dict[str, GenerationMode] = {
    "eqc": GenerationMode.LINE,
    "longlat": GenerationMode.LINE,
    "latlong": GenerationMode.LINE,
    "lonlat": GenerationMode.LINE,
    "latlon": GenerationMode.LINE,
    "merc": GenerationMode.LINE,
    "stere": GenerationMode.NONE,
    "cea": GenerationMode.NONE,
    "eqdc": GenerationMode.NONE,
}


class ProjectionStatusClassifier:
    """Maps projection codes to a GenerationMode.

    Classification never raises: unknown codes and unknown families fall
    back to DEFAULT.

    Example:
        >>> from graticule.proj import ProjDefinitions
        >>> defs = ProjDefinitions({"ESRI:53009": "+proj=moll +lon_0=0"})
        >>> classifier = ProjectionStatusClassifier(definitions=defs, use_definitions=True)
        >>> classifier.classify("ESRI:53009")
        <GenerationMode.DEFAULT: 'default'>
        >>> classifier.classify("EPSG:3857")
        <GenerationMode.LINE: 'line'>
    """

    def __init__(
        self,
        registry: ProjectionRegistry | None = None,
        definitions: FamilyLookup | None = None,
        *,
        use_definitions: bool | None = None,
        family_modes: dict[str, GenerationMode] | None = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            registry: Registry consulted for the direct-transform fallback.
            definitions: Returns the projection family for a code.
            use_definitions: Whether to consult definitions at all. Defaults
                to settings.ENABLE_PROJ_DEFINITIONS.
            family_modes: Family to mode table. Defaults to a copy of
                DEFAULT_FAMILY_MODES.
        """
        self.registry = registry if registry is not None else default_registry
        self.definitions = definitions
        self.use_definitions = (
            settings.ENABLE_PROJ_DEFINITIONS
            if use_definitions is None
            else use_definitions
        )
        self.family_modes = dict(
            DEFAULT_FAMILY_MODES if family_modes is None else family_modes
        )

    def register_family(self, family: str, mode: GenerationMode) -> None:
        """Set the mode for a projection family."""
        self.family_modes[family.lower()] = mode

    def classify_family(self, family: str) -> GenerationMode:
        """Mode for a projection family; DEFAULT if not in the table."""
        return self.family_modes.get(family.lower(), GenerationMode.DEFAULT)

    def classify(self, code: str) -> GenerationMode:
        """Classify the projection with the given code.

        Args:
            code: Projection code such as "EPSG:3857".

        Returns:
            The generation mode for that projection.
        """
        if self.use_definitions and self.definitions is not None:
            family = self.definitions(code)
            if family is not None:
                return self.classify_family(family)

        if self.registry.has_direct_transform(code):
            return GenerationMode.LINE
        return GenerationMode.DEFAULT
