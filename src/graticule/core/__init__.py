"""Core algorithms for graticule.

This package contains the grid computation: projection classification,
interval selection, line building and label formatting, plus the
controller that runs them once per frame.

Public API:
    - Graticule: Per-frame controller with attach/detach lifecycle.
    - GraticuleOptions: Target pixel spacing, line cap and styles.
    - GraticuleBuilder: Builds meridians, parallels and label anchors.
    - IntervalSelector: Chooses the grid spacing for a resolution.
    - ProjectionStatusClassifier: Maps projections to a GenerationMode.
    - ProjectionTracker / ProjectionInfo: Per-projection derived cache.
    - LabelFormatter: Degree text for label anchors.
"""

from graticule.core.builder import GraticuleBuilder
from graticule.core.classifier import DEFAULT_FAMILY_MODES, ProjectionStatusClassifier
from graticule.core.graticule import Graticule, GraticuleOptions, ViewSource, wrap_view
from graticule.core.intervals import (
    DISABLED,
    INTERVALS,
    IntervalSelector,
    IntervalSelectorProtocol,
)
from graticule.core.labels import LabelFormatter, format_degrees, normalize_longitude
from graticule.core.projection_info import ProjectionInfo, ProjectionTracker
from graticule.core.types import (
    Axis,
    FrameState,
    GenerationMode,
    GraticuleResult,
    GridLine,
    LabelEdge,
    LabelPoint,
    ViewState,
)

__all__ = [
    "DEFAULT_FAMILY_MODES",
    "DISABLED",
    "INTERVALS",
    "Axis",
    "FrameState",
    "GenerationMode",
    "Graticule",
    "GraticuleBuilder",
    "GraticuleOptions",
    "GraticuleResult",
    "GridLine",
    "IntervalSelector",
    "IntervalSelectorProtocol",
    "LabelEdge",
    "LabelFormatter",
    "LabelPoint",
    "ProjectionInfo",
    "ProjectionStatusClassifier",
    "ProjectionTracker",
    "ViewSource",
    "ViewState",
    "format_degrees",
    "normalize_longitude",
    "wrap_view",
]
