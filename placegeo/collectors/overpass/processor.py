"""
Batch processing of Overpass elements into places
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger
from shapely.geometry import shape
from shapely.errors import GEOSException
from shapely.validation import explain_validity

from ...config import PipelineConfig, get_config, validate_config
from ...geometry.points import resolve_center
from ...geometry.projection import CoordinateNormalizer
from ...models import ProcessedFeature
from ...records import FeatureRecord, Point
from .classifier import FeatureClassifier
from .converter import GeometryConverter
from .filters import FeatureFilter
from .parser import OverpassResponseParser


@dataclass
class ProcessStats:
    """Counters for one processing run"""
    received: int = 0
    kept: int = 0
    no_location: int = 0
    unnamed: int = 0
    filtered: int = 0
    failed: int = 0
    projection_failures: int = 0
    start_time: float = field(default_factory=time.time)

    def summary(self) -> str:
        elapsed = time.time() - self.start_time
        return (
            f"{self.kept}/{self.received} kept, {self.filtered} filtered, "
            f"{self.unnamed} unnamed, {self.no_location} without location, "
            f"{self.failed} failed, {self.projection_failures} projection failures "
            f"({elapsed:.1f}s)"
        )


class FeatureProcessor:
    """
    Turns raw feature records into filtered, render-ready places

    Every record is handled on its own: a failure is logged and counted,
    and the rest of the batch carries on.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or get_config()
        validate_config(self.config)
        self.parser = OverpassResponseParser()
        self.converter = GeometryConverter(self.config.geometry)
        self.normalizer = CoordinateNormalizer(self.config.geometry)
        self.classifier = FeatureClassifier(self.config.supported_tags)
        self.filter = FeatureFilter(self.config.filters)
        self.stats = ProcessStats()

    def process_elements(self, data: Any) -> List[ProcessedFeature]:
        """
        Parse and process a raw Overpass response or element list

        Args:
            data: Overpass JSON response, or a list of elements

        Returns:
            List of ProcessedFeature that passed the filters
        """
        records = self.parser.parse_elements(data)
        return self.process_records(records)

    def process_records(self, records: Sequence[FeatureRecord]) -> List[ProcessedFeature]:
        """Process already parsed records"""
        self.stats = ProcessStats()
        features = []

        for record in records:
            self.stats.received += 1
            try:
                feature = self.process_record(record)
            except Exception as e:
                self.stats.failed += 1
                logger.warning(f"Failed to process {record.kind} {record.id}: {e}")
                continue
            if feature is not None:
                self.stats.kept += 1
                features.append(feature)

        logger.info(f"Processed Overpass elements: {self.stats.summary()}")
        return features

    def process_record(self, record: FeatureRecord) -> Optional[ProcessedFeature]:
        """
        Process one record

        Returns:
            ProcessedFeature, or None if the record is skipped or filtered
        """
        center = resolve_center(record)
        geometry = self.converter.to_geometry(record)

        if center is None and geometry is None:
            self.stats.no_location += 1
            logger.warning(
                f"Cannot determine location for {record.kind} {record.id}, skipping "
                f"(tags: {', '.join(record.tags) or 'none'})"
            )
            return None

        name = record.name
        if name is None:
            self.stats.unnamed += 1
            return None

        center = self._normalize_center(record, center)
        geometry = self._normalize_geometry(record, geometry)
        self._check_validity(record, geometry)

        category = self.classifier.classify(record.tags)
        if not self.filter.should_include(name, category, record.tags, geometry):
            self.stats.filtered += 1
            logger.debug(f"Filtering out {category}: {name} (failed filter criteria)")
            return None

        return ProcessedFeature(
            osm_id=record.id,
            osm_type=record.kind,
            name=name,
            category=category,
            latitude=center.lat if center else None,
            longitude=center.lon if center else None,
            geometry=geometry,
            tags=record.tags,
        )

    def _normalize_center(self, record: FeatureRecord, center: Optional[Point]) -> Optional[Point]:
        if center is None or not self.normalizer.is_projected(center.lon, center.lat):
            return center
        converted = self.normalizer.projected_to_geographic(center.lon, center.lat)
        if converted is None:
            self.stats.projection_failures += 1
            logger.warning(f"Keeping projected center for {record.kind} {record.id}")
            return center
        return converted

    def _normalize_geometry(
        self,
        record: FeatureRecord,
        geometry: Optional[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        if not self.normalizer.needs_transform(geometry):
            return geometry
        converted = self.normalizer.transform_geometry(geometry)
        if self.normalizer.needs_transform(converted):
            self.stats.projection_failures += 1
            logger.warning(f"Some positions of {record.kind} {record.id} are still projected")
        return converted

    @staticmethod
    def _check_validity(record: FeatureRecord, geometry: Optional[Dict[str, Any]]) -> None:
        # Best effort only: invalid shapes are reported, not repaired
        if not geometry or geometry["type"] not in ("Polygon", "MultiPolygon"):
            return
        try:
            shapely_geom = shape(geometry)
            if not shapely_geom.is_valid:
                logger.debug(
                    f"{record.kind} {record.id} produced an invalid {geometry['type']}: "
                    f"{explain_validity(shapely_geom)}"
                )
        except (ValueError, TypeError, GEOSException) as e:
            logger.debug(f"{record.kind} {record.id}: could not check validity: {e}")
