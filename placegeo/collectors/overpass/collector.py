"""
Main Overpass Collector

Orchestrates fetching raw elements and turning them into places
"""

from typing import Any, Dict, List, Optional, Sequence
from loguru import logger

from .api_client import OverpassAPIClient
from .cache import OverpassCache
from .processor import FeatureProcessor
from .query import build_area_query, build_id_query, build_name_query
from ...config import PipelineConfig, get_config
from ...models import ProcessedFeature
from ...records import BoundingBox


class OverpassCollector:
    """
    Collect places from OpenStreetMap via Overpass API

    Network access, caching and retries stay here; the geometry engine
    only ever sees the in-memory element batch.
    """

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        config: Optional[PipelineConfig] = None,
        api_client: Optional[OverpassAPIClient] = None
    ):
        self.config = config or get_config()
        self.api_client = api_client or OverpassAPIClient(self.config.api)
        self.cache = OverpassCache(cache_dir if cache_dir is not None else self.config.cache_dir)
        self.processor = FeatureProcessor(self.config)
        self.timeout = self.config.api.overpass_timeout

    def fetch_elements(
        self,
        query: str,
        cache_key: Optional[str] = None,
        refresh: bool = False
    ) -> List[Dict[str, Any]]:
        """Run a query, going through the disk cache when a key is given"""
        cache_path = self.cache.get_cache_path(cache_key) if cache_key else None
        if cache_path and refresh:
            self.cache.invalidate(cache_key)
        elif cache_path:
            cached = self.cache.load(cache_path)
            if cached is not None:
                return cached

        elements = self.api_client.query(query)

        if cache_path:
            self.cache.save(cache_path, elements)
        return elements

    def collect(
        self,
        bbox: BoundingBox,
        cache_key: Optional[str] = None,
        refresh: bool = False
    ) -> List[ProcessedFeature]:
        """
        Fetch and process all supported places in a bounding box

        Args:
            bbox: Area to query
            cache_key: Optional key for the raw response cache
            refresh: Drop any cached response and query again

        Returns:
            List of ProcessedFeature
        """
        logger.info(f"Fetching places in bbox {bbox.to_overpass()}")
        query = build_area_query(bbox, self.config.supported_tags, self.timeout)
        elements = self.fetch_elements(query, cache_key or f"bbox_{bbox.to_overpass()}", refresh)
        return self.processor.process_elements(elements)

    def collect_by_ids(self, ids: Sequence[int], batch_size: Optional[int] = None) -> List[ProcessedFeature]:
        """
        Fetch and process specific elements by id, in batches

        A failing batch is logged and skipped; the other batches still run.
        """
        batch_size = batch_size or self.config.api.id_batch_size
        elements: List[Dict[str, Any]] = []
        total = (len(ids) + batch_size - 1) // batch_size

        for start in range(0, len(ids), batch_size):
            batch = list(ids[start:start + batch_size])
            number = start // batch_size + 1
            logger.info(f"Querying batch {number}/{total} with {len(batch)} ids")
            try:
                found = self.api_client.query(build_id_query(batch, self.timeout))
            except RuntimeError as e:
                logger.error(f"Failed to query batch {number}: {e}")
                logger.info(f"Failed ids: {', '.join(str(i) for i in batch)}")
                continue
            logger.info(f"Batch completed: found {len(found)}/{len(batch)} elements")
            elements.extend(found)

        return self.processor.process_elements(elements)

    def search_by_name(self, name: str, bbox: BoundingBox) -> List[ProcessedFeature]:
        """Search supported places by name within a bounding box"""
        logger.info(f"Searching OSM for: {name!r}")
        query = build_name_query(name, bbox, self.config.supported_tags)
        safe_key = "".join(c if c.isalnum() else "_" for c in name)
        elements = self.fetch_elements(query, f"search_{safe_key}")
        return self.processor.process_elements(elements)
