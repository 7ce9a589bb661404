"""Command-line interface for graticule.

Provides commands to compute graticules for a view and render previews.
"""

from __future__ import annotations

from graticule.cli.main import app

__all__ = ["app"]
