import pytest
from pyproj.exceptions import ProjError

from placegeo.geometry.projection import CoordinateNormalizer, is_projected_coordinate, transform_coordinate
from placegeo.records import Point


class FailingTransformer:
    def transform(self, x, y, errcheck=False):
        raise ProjError("transform failed")


@pytest.fixture
def normalizer():
    return CoordinateNormalizer()


class TestDetection:
    """Tests for projected coordinate detection."""

    def test_geographic_pairs(self, normalizer):
        assert not normalizer.is_projected(2.35, 48.85)
        assert not normalizer.is_projected(-180, -90)

    def test_lambert93_pairs(self, normalizer):
        assert normalizer.is_projected(700000, 6600000)
        assert normalizer.is_projected(652469, 6862035)

    def test_outside_grid_bounds(self, normalizer):
        assert not normalizer.is_projected(200, 100)
        assert not normalizer.is_projected(5000000, 6600000)
        assert not normalizer.is_projected(700000, 100000)

    def test_non_finite(self, normalizer):
        assert not normalizer.is_projected(float("nan"), 6600000)

    def test_module_shortcut(self):
        assert is_projected_coordinate(700000, 6600000)
        assert not is_projected_coordinate(3, 46.5)


class TestToGeographic:
    """Tests for Lambert-93 to WGS84 conversion."""

    def test_projection_origin(self, normalizer):
        point = normalizer.to_geographic(700000, 6600000)
        assert point.lon == pytest.approx(3.0, abs=1e-6)
        assert point.lat == pytest.approx(46.5, abs=1e-6)

    def test_paris(self, normalizer):
        point = normalizer.to_geographic(652469, 6862035)
        assert point.lon == pytest.approx(2.3508, abs=0.02)
        assert point.lat == pytest.approx(48.8567, abs=0.02)

    def test_geographic_passthrough(self, normalizer):
        assert normalizer.to_geographic(2.35, 48.85) == Point(lat=48.85, lon=2.35)
        assert transform_coordinate(2.35, 48.85) == Point(lat=48.85, lon=2.35)

    def test_transform_failure_returns_none(self, normalizer):
        normalizer._transformer = FailingTransformer()
        assert normalizer.to_geographic(700000, 6600000) is None


class TestTransformGeometry:
    """Tests for whole-geometry conversion."""

    def test_polygon_converted(self, normalizer):
        geometry = {
            "type": "Polygon",
            "coordinates": [[[700000, 6600000], [701000, 6600000], [701000, 6601000], [700000, 6600000]]],
        }
        assert normalizer.needs_transform(geometry)
        converted = normalizer.transform_geometry(geometry)
        assert converted["type"] == "Polygon"
        first = converted["coordinates"][0][0]
        assert first[0] == pytest.approx(3.0, abs=1e-6)
        assert first[1] == pytest.approx(46.5, abs=1e-6)
        assert not normalizer.needs_transform(converted)
        # Original left untouched
        assert geometry["coordinates"][0][0] == [700000, 6600000]

    def test_geographic_geometry_unchanged(self, normalizer):
        geometry = {"type": "LineString", "coordinates": [[2.0, 48.0], [2.1, 48.1]]}
        assert not normalizer.needs_transform(geometry)
        assert normalizer.transform_geometry(geometry) == geometry

    def test_multipolygon_and_multilinestring(self, normalizer):
        multipolygon = {"type": "MultiPolygon", "coordinates": [[[[700000, 6600000], [700100, 6600000], [700100, 6600100], [700000, 6600000]]]]}
        multiline = {"type": "MultiLineString", "coordinates": [[[700000, 6600000], [700100, 6600100]]]}
        assert not normalizer.needs_transform(normalizer.transform_geometry(multipolygon))
        assert not normalizer.needs_transform(normalizer.transform_geometry(multiline))

    def test_failure_keeps_original_positions(self, normalizer):
        normalizer._transformer = FailingTransformer()
        geometry = {"type": "Point", "coordinates": [700000, 6600000]}
        assert normalizer.transform_geometry(geometry) == geometry

    def test_empty_or_unknown(self, normalizer):
        assert normalizer.transform_geometry(None) is None
        unknown = {"type": "GeometryCollection", "coordinates": [[1, 2]]}
        assert normalizer.transform_geometry(unknown) == unknown
