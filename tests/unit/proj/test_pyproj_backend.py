"""Tests for pyproj-backed projections.

Skipped when the ``proj`` extra is not installed.
"""

from __future__ import annotations

import pytest

pyproj = pytest.importorskip("pyproj")

from graticule.core import GenerationMode, ProjectionStatusClassifier  # noqa: E402
from graticule.proj import ProjectionError  # noqa: E402
from graticule.proj.pyproj_backend import (  # noqa: E402
    projection_from_crs,
    pyproj_family,
)


class TestPyprojFamily:
    """Tests for pyproj_family."""

    @pytest.mark.parametrize(
        ("code", "family"),
        [
            ("EPSG:3857", "merc"),
            ("EPSG:4326", "longlat"),
            ("EPSG:3031", "stere"),
        ],
    )
    def test_known_codes(self, code: str, family: str) -> None:
        assert pyproj_family(code) == family

    def test_unknown_code_is_none(self) -> None:
        assert pyproj_family("EPSG:0") is None

    def test_classifier_uses_family(self) -> None:
        classifier = ProjectionStatusClassifier(
            definitions=pyproj_family, use_definitions=True
        )
        assert classifier.classify("EPSG:3031") is GenerationMode.NONE
        assert classifier.classify("EPSG:3857") is GenerationMode.LINE


class TestProjectionFromCrs:
    """Tests for projection_from_crs."""

    def test_mercator_roundtrip(self) -> None:
        projection = projection_from_crs("EPSG:3857")
        x, y = projection.forward((10.0, 45.0))
        lon, lat = projection.inverse((x, y))
        assert lon == pytest.approx(10.0, abs=1e-7)
        assert lat == pytest.approx(45.0, abs=1e-7)
        assert projection.extent.is_finite()
        assert not projection.extent.is_empty()

    def test_geographic_crs_wraps(self) -> None:
        projection = projection_from_crs("EPSG:4326")
        assert projection.units == "degrees"
        assert projection.can_wrap_x

    def test_invalid_code_raises(self) -> None:
        with pytest.raises(ProjectionError, match="Cannot build CRS"):
            projection_from_crs("EPSG:0")

    def test_transformer_failure_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(*args: object, **kwargs: object) -> None:
            raise pyproj.exceptions.ProjError("no transformation found")

        monkeypatch.setattr(pyproj.Transformer, "from_crs", fail)

        with pytest.raises(ProjectionError, match="no transformation found"):
            projection_from_crs("EPSG:3857")
