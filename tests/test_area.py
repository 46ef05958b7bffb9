import math

import pytest

from placegeo.geometry.area import METERS_PER_DEGREE, geometry_area, ring_area

from .helpers import square


class TestRingArea:
    """Tests for shoelace area in square meters."""

    def test_one_degree_square_at_equator(self):
        area = ring_area(square(0, -0.5, 1))
        assert area == pytest.approx(METERS_PER_DEGREE ** 2, rel=0.01)

    def test_area_shrinks_with_latitude(self):
        equator = ring_area(square(0, -0.5, 1))
        north = ring_area(square(0, 59.5, 1))
        assert north < equator
        # Scale factor applies to both axes
        assert north / equator == pytest.approx(math.cos(math.radians(60)) ** 2, rel=0.02)

    def test_orientation_does_not_matter(self):
        ring = square(2, 48, 0.1)
        assert ring_area(ring[::-1]) == pytest.approx(ring_area(ring))

    def test_degenerate_ring(self):
        assert ring_area([]) == 0.0
        assert ring_area([[0, 0], [1, 1]]) == 0.0


class TestGeometryArea:
    """Tests for area by geometry type."""

    def test_polygon_uses_outer_ring(self):
        outer = square(0, 44, 0.01)
        hole = square(0.002, 44.002, 0.001)
        assert geometry_area({"type": "Polygon", "coordinates": [outer, hole]}) == pytest.approx(ring_area(outer))

    def test_multipolygon_sums_outer_rings(self):
        a = square(0, 44, 0.01)
        b = square(1, 44, 0.02)
        area = geometry_area({"type": "MultiPolygon", "coordinates": [[a], [b]]})
        assert area == pytest.approx(ring_area(a) + ring_area(b))

    def test_no_area_for_other_types(self):
        assert geometry_area(None) is None
        assert geometry_area({"type": "Point", "coordinates": [3, 44]}) is None
        assert geometry_area({"type": "LineString", "coordinates": [[0, 0], [1, 1]]}) is None
        assert geometry_area({"type": "Polygon", "coordinates": []}) is None
