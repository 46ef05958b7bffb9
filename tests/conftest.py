import pytest

from placegeo.records import FeatureRecord


@pytest.fixture
def make_record():
    def _make(**element):
        element.setdefault("id", 1)
        return FeatureRecord.from_element(element)
    return _make
