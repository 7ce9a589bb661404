"""Tests for the projection registry and exceptions."""

from __future__ import annotations

import pytest

from graticule.proj import (
    GEODETIC_CODE,
    MERCATOR_CODE,
    Projection,
    ProjectionError,
    ProjectionRegistry,
    UnknownProjectionError,
    default_registry,
)


class TestProjectionRegistry:
    """Tests for ProjectionRegistry."""

    def test_defaults_hold_builtin_projections(self) -> None:
        registry = ProjectionRegistry.with_defaults()
        assert registry.get(MERCATOR_CODE).code == MERCATOR_CODE
        assert registry.get(GEODETIC_CODE).code == GEODETIC_CODE

    def test_aliases_resolve_to_same_projection(self) -> None:
        registry = ProjectionRegistry.with_defaults()
        assert registry.get("EPSG:900913") is registry.get(MERCATOR_CODE)
        assert registry.get("CRS:84") is registry.get(GEODETIC_CODE)

    def test_unknown_code_raises(self) -> None:
        with pytest.raises(UnknownProjectionError) as exc_info:
            ProjectionRegistry().get("EPSG:0")
        assert exc_info.value.code == "EPSG:0"
        assert "(code: EPSG:0)" in str(exc_info.value)

    def test_unknown_projection_error_is_projection_error(self) -> None:
        assert issubclass(UnknownProjectionError, ProjectionError)

    def test_direct_transform_flags(self, sinusoidal: Projection) -> None:
        registry = ProjectionRegistry.with_defaults()
        registry.add(sinusoidal, direct=False)
        assert registry.has_direct_transform(MERCATOR_CODE)
        assert registry.has_direct_transform("EPSG:102100")
        assert not registry.has_direct_transform(sinusoidal.code)
        assert not registry.has_direct_transform("EPSG:0")
        assert sinusoidal.code in registry

    def test_codes_are_sorted(self) -> None:
        codes = default_registry.codes()
        assert codes == sorted(codes)
        assert MERCATOR_CODE in codes


class TestProjectionError:
    """Tests for ProjectionError formatting."""

    def test_message_without_code(self) -> None:
        error = ProjectionError("broken")
        assert str(error) == "broken"
        assert error.code is None

    def test_message_with_code(self) -> None:
        error = ProjectionError("broken", "EPSG:3857")
        assert str(error) == "broken (code: EPSG:3857)"
        assert error.message == "broken"
