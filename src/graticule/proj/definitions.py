"""Projection definition store.

Holds proj-style definition strings (``+proj=merc +lon_0=0 ...``) keyed by
projection code. The status classifier only needs the projection family,
the value of the ``+proj=`` parameter, so that is all this module parses.
"""

from __future__ import annotations

import re
from collections.abc import Callable

# Looks up the projection family name for a code, or None if unknown
FamilyLookup = Callable[[str], str | None]

_PROJ_PARAM = re.compile(r"(?:^|\s)\+proj=([A-Za-z0-9_]+)")


def parse_family(definition: str) -> str | None:
    """Extract the projection family from a proj definition string.

    Example:
        >>> parse_family("+proj=stere +lat_0=-90 +lat_ts=-71 +datum=WGS84")
        'stere'
        >>> parse_family("+init=epsg:4326") is None
        True
    """
    match = _PROJ_PARAM.search(definition)
    return match.group(1).lower() if match else None


class ProjDefinitions:
    """Registry of proj definition strings.

    Instances are callable as a FamilyLookup, so they can be handed to the
    status classifier directly.
    """

    def __init__(self, definitions: dict[str, str] | None = None) -> None:
        self._definitions: dict[str, str] = dict(definitions or {})

    def define(self, code: str, definition: str) -> None:
        """Register or replace the definition for code."""
        self._definitions[code] = definition

    def get(self, code: str) -> str | None:
        """Return the raw definition string for code, if any."""
        return self._definitions.get(code)

    def family(self, code: str) -> str | None:
        """Return the projection family for code, if defined."""
        definition = self._definitions.get(code)
        if definition is None:
            return None
        return parse_family(definition)

    def __call__(self, code: str) -> str | None:
        return self.family(code)

    def __contains__(self, code: object) -> bool:
        return code in self._definitions
