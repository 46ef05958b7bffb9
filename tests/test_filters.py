import pytest

from placegeo.collectors.overpass.classifier import FeatureClassifier
from placegeo.collectors.overpass.filters import FeatureFilter

from .helpers import square


@pytest.fixture
def feature_filter():
    return FeatureFilter()


def polygon(ring):
    return {"type": "Polygon", "coordinates": [ring]}


class TestFeatureClassifier:
    """Tests for tag-based categories."""

    def test_supported_tag(self):
        assert FeatureClassifier().classify({"natural": "peak", "name": "Mont Aigoual"}) == "peak"

    def test_first_supported_tag_wins(self):
        classifier = FeatureClassifier()
        assert classifier.classify({"leisure": "park", "natural": "beach"}) == "park"
        assert classifier.classify({"natural": "beach", "leisure": "park"}) == "beach"

    def test_route_stored_as_tag_value(self):
        assert FeatureClassifier().classify({"type": "route", "route": "hiking"}) == "hiking"

    def test_unknown(self):
        classifier = FeatureClassifier()
        assert classifier.classify({"name": "Somewhere"}) == "unknown"
        assert classifier.classify({"natural": "tree"}) == "unknown"

    def test_custom_tags(self):
        classifier = FeatureClassifier({"amenity": ["shelter"]})
        assert classifier.classify({"amenity": "shelter"}) == "shelter"
        assert classifier.classify({"natural": "peak"}) == "unknown"


class TestFeatureFilter:
    """Tests for inclusion rules."""

    def test_name_required(self, feature_filter):
        point = {"type": "Point", "coordinates": [3.0, 44.0]}
        assert not feature_filter.should_include(None, "peak", {}, point)
        assert not feature_filter.should_include("Ab", "peak", {}, point)
        assert not feature_filter.should_include("  Ab  ", "peak", {}, point)
        assert feature_filter.should_include("Pic", "peak", {}, point)

    def test_small_park_dropped(self, feature_filter):
        small = polygon(square(3.0, 45.0, 0.001))
        assert not feature_filter.should_include("Parc du Lac", "park", {}, small)

    def test_large_forest_kept(self, feature_filter):
        large = polygon(square(3.0, 45.0, 0.01))
        assert feature_filter.should_include("Forêt Domaniale", "forest", {}, large)

    def test_area_rule_skipped_without_area(self, feature_filter):
        point = {"type": "Point", "coordinates": [3.0, 45.0]}
        assert feature_filter.should_include("Parc du Lac", "park", {}, point)
        assert feature_filter.should_include("Parc du Lac", "park", {}, None)

    def test_required_tags(self, feature_filter):
        line = {"type": "LineString", "coordinates": [[3.0, 44.0], [3.1, 44.1]]}
        assert not feature_filter.should_include("GR 7", "hiking", {"route": "hiking"}, line)
        assert not feature_filter.should_include("GR 7", "hiking", {"route": "hiking", "ref": ""}, line)
        assert feature_filter.should_include("GR 7", "hiking", {"route": "hiking", "ref": "GR 7"}, line)

    def test_route_rules_only_for_routes(self, feature_filter):
        assert feature_filter.rule_key("hiking", {"route": "hiking"}) == "hiking_route"
        assert feature_filter.rule_key("peak", {"natural": "peak"}) == "peak"
        point = {"type": "Point", "coordinates": [3.0, 44.0]}
        assert feature_filter.should_include("Sentier", "hiking", {"highway": "path"}, point)

    @pytest.mark.parametrize("tags", [
        {"building": "yes"},
        {"office": "government"},
        {"office": "administrative", "boundary": "protected_area"},
    ])
    def test_support_structures_excluded(self, feature_filter, tags):
        geometry = polygon(square(3.0, 45.0, 0.1))
        assert not feature_filter.should_include("Maison du Parc", "protected_area", tags, geometry)

    def test_specific_building_kept(self, feature_filter):
        point = {"type": "Point", "coordinates": [3.0, 45.0]}
        assert feature_filter.should_include("Refuge du Goûter", "alpine_hut", {"building": "hut"}, point)

    def test_pure(self, feature_filter):
        geometry = polygon(square(3.0, 45.0, 0.01))
        tags = {"landuse": "forest"}
        results = {feature_filter.should_include("Bois Noir", "forest", tags, geometry) for _ in range(3)}
        assert results == {True}
        assert tags == {"landuse": "forest"}
