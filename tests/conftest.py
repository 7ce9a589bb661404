"""Shared pytest fixtures and configuration."""

import logging
import math
from collections.abc import Iterator

import pytest

from graticule.config import Settings
from graticule.geometry import Coordinate, Extent
from graticule.proj import Projection, geodetic_projection, mercator_projection
from graticule.proj.builtin import RADIUS
from graticule.utils.logging import (
    PACKAGE_LOGGER,
    clear_render_context,
    configure_logging,
)


@pytest.fixture(autouse=True)
def reset_render_context() -> Iterator[None]:
    """Reset render context between tests."""
    clear_render_context()
    yield
    clear_render_context()


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers configure_logging bound to per-test streams."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def mercator() -> Projection:
    """Spherical Mercator (EPSG:3857)."""
    return mercator_projection()


@pytest.fixture
def geodetic() -> Projection:
    """Geographic WGS 84 (EPSG:4326)."""
    return geodetic_projection()


def _sinusoidal_forward(coord: Coordinate) -> Coordinate:
    lon, lat = coord
    phi = math.radians(lat)
    return (RADIUS * math.radians(lon) * math.cos(phi), RADIUS * phi)


def _sinusoidal_inverse(coord: Coordinate) -> Coordinate:
    x, y = coord
    phi = y / RADIUS
    cos_phi = math.cos(phi)
    if abs(cos_phi) < 1e-12:
        return (math.nan, math.degrees(phi))
    return (math.degrees(x / (RADIUS * cos_phi)), math.degrees(phi))


@pytest.fixture
def sinusoidal() -> Projection:
    """Sinusoidal projection with curved meridians, unknown to the registry.

    The world extent stops at +/-80 degrees so its projected corners keep a
    usable width.
    """
    world = Extent(min_x=-180, min_y=-80, max_x=180, max_y=80)
    return Projection(
        code="TEST:SINUSOIDAL",
        extent=world.apply_transform(_sinusoidal_forward),
        world_extent=world,
        forward=_sinusoidal_forward,
        inverse=_sinusoidal_inverse,
    )


@pytest.fixture
def plane() -> Projection:
    """Identity projection with practically unbounded geodetic bounds."""
    world = Extent(min_x=-1e9, min_y=-1e9, max_x=1e9, max_y=1e9)
    return Projection(
        code="TEST:PLANE",
        extent=world,
        world_extent=world,
        forward=lambda c: (c[0], c[1]),
        inverse=lambda c: (c[0], c[1]),
        units="degrees",
    )
