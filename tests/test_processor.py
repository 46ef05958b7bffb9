import pytest

from placegeo.collectors.overpass.processor import FeatureProcessor

from .helpers import latlon, square


@pytest.fixture
def processor():
    return FeatureProcessor()


def peak(element_id, name="Mont Aigoual", **extra):
    element = {
        "type": "node",
        "id": element_id,
        "lat": 44.1211,
        "lon": 3.5817,
        "tags": {"natural": "peak", "name": name},
    }
    element.update(extra)
    return element


class TestFeatureProcessor:
    """Tests for batch processing of Overpass elements."""

    def test_named_node_kept(self, processor):
        features = processor.process_elements({"elements": [peak(1)]})
        assert len(features) == 1
        feature = features[0]
        assert feature.name == "Mont Aigoual"
        assert feature.category == "peak"
        assert feature.location == "POINT(3.5817 44.1211)"
        assert feature.geometry_dict() == {"type": "Point", "coordinates": [3.5817, 44.1211]}
        assert processor.stats.kept == 1

    def test_output_keys(self, processor):
        feature = processor.process_elements([peak(1)])[0]
        assert set(feature.to_dict()) == {
            "source", "source_id", "osm_id", "osm_type", "name", "type",
            "latitude", "longitude", "location", "geometry", "tags",
        }

    def test_unnamed_counted(self, processor):
        element = peak(2)
        del element["tags"]["name"]
        assert processor.process_elements([element, peak(3)])[0].osm_id == 3
        assert processor.stats.unnamed == 1
        assert processor.stats.received == 2

    def test_no_location_counted(self, processor):
        element = {"type": "relation", "id": 4, "tags": {"natural": "peak", "name": "Nowhere"}}
        assert processor.process_elements([element]) == []
        assert processor.stats.no_location == 1

    def test_malformed_element_skipped(self, processor):
        features = processor.process_elements([{"type": "area", "id": 5}, peak(6)])
        assert [f.osm_id for f in features] == [6]

    def test_failure_isolated(self, processor, monkeypatch):
        classify = processor.classifier.classify

        def flaky(tags):
            if tags.get("name") == "Broken":
                raise RuntimeError("classifier exploded")
            return classify(tags)

        monkeypatch.setattr(processor.classifier, "classify", flaky)
        features = processor.process_elements([peak(7), peak(8, name="Broken"), peak(9)])
        assert [f.osm_id for f in features] == [7, 9]
        assert processor.stats.failed == 1
        assert processor.stats.kept == 2

    def test_small_park_filtered(self, processor):
        element = {
            "type": "way",
            "id": 10,
            "geometry": latlon(square(3.0, 45.0, 0.001)),
            "tags": {"leisure": "park", "name": "Square Montholon"},
        }
        assert processor.process_elements([element]) == []
        assert processor.stats.filtered == 1

    def test_area_relation_kept(self, processor):
        element = {
            "type": "relation",
            "id": 11,
            "tags": {"boundary": "national_park", "name": "Parc national des Cévennes"},
            "members": [
                {"type": "way", "role": "outer", "geometry": latlon([(3.0, 44.0), (3.5, 44.0), (3.5, 44.5)])},
                {"type": "way", "role": "outer", "geometry": latlon([(3.5, 44.5), (3.0, 44.5), (3.0, 44.0)])},
            ],
        }
        feature = processor.process_elements([element])[0]
        assert feature.category == "national_park"
        assert feature.geometry_dict()["type"] == "Polygon"
        assert feature.latitude == pytest.approx(44.25)
        assert feature.longitude == pytest.approx(3.25)

    def test_projected_node_normalized(self, processor):
        element = peak(12, lat=6600000, lon=700000)
        feature = processor.process_elements([element])[0]
        assert feature.latitude == pytest.approx(46.5, abs=1e-6)
        assert feature.longitude == pytest.approx(3.0, abs=1e-6)
        lon, lat = feature.geometry_dict()["coordinates"]
        assert lon == pytest.approx(3.0, abs=1e-6)
        assert lat == pytest.approx(46.5, abs=1e-6)
        assert processor.stats.projection_failures == 0

    def test_stats_reset_per_batch(self, processor):
        processor.process_elements([peak(13), peak(14)])
        processor.process_elements([peak(15)])
        assert processor.stats.received == 1

    def test_hiking_route_stored_as_tag_value(self, processor):
        def route(element_id, tags):
            return {
                "type": "relation",
                "id": element_id,
                "tags": {"type": "route", "route": "hiking", "name": "GR 70", **tags},
                "members": [
                    {"type": "way", "role": "", "geometry": latlon([(3.0, 44.0), (3.1, 44.1)])},
                ],
            }

        features = processor.process_elements([route(16, {"ref": "GR 70"}), route(17, {})])
        assert [f.osm_id for f in features] == [16]
        assert features[0].to_dict()["type"] == "hiking"
        assert features[0].geometry_dict()["type"] == "LineString"
        assert processor.stats.filtered == 1
