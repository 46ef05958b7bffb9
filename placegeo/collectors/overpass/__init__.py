"""
Overpass place collection module

Modular collector with separate components for:
- API client: Overpass API communication
- Query: Overpass QL builders
- Parser: Response parsing into feature records
- Converter: GeoJSON synthesis per feature
- Classifier: Place categories from tags
- Filters: Inclusion rules
- Processor: Batch processing
- Cache: Caching functionality
- Collector: Main orchestrator class
"""

from .converter import GeometryConverter
from .processor import FeatureProcessor, ProcessStats
from .collector import OverpassCollector

__all__ = [
    "GeometryConverter",
    "FeatureProcessor",
    "ProcessStats",
    "OverpassCollector",
]
