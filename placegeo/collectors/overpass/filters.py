"""
Inclusion filtering

Decides whether a processed place is worth keeping
"""

from typing import Any, Dict, Optional

from loguru import logger

from ...config import FilterConfig, get_config
from ...geometry.area import geometry_area


class FeatureFilter:
    """Applies per-category inclusion rules"""

    def __init__(self, filter_config: Optional[FilterConfig] = None):
        self.config = filter_config or get_config().filters

    @staticmethod
    def rule_key(category: str, tags: Dict[str, str]) -> str:
        """Key for per-category rules; route=hiking is looked up as hiking_route"""
        if category and tags.get("route") == category:
            return f"{category}_route"
        return category

    def is_excluded_structure(self, tags: Dict[str, str]) -> bool:
        """Generic buildings and administrative offices are never places"""
        for key, values in self.config.excluded_tags.items():
            value = tags.get(key)
            if value is not None and value in values:
                return True
        return False

    def should_include(
        self,
        name: Optional[str],
        category: str,
        tags: Dict[str, str],
        geometry: Optional[Dict[str, Any]]
    ) -> bool:
        """
        Check a place against the inclusion rules

        Args:
            name: Place name
            category: Place category from the classifier
            tags: OSM tags
            geometry: GeoJSON geometry (used for the area rule)

        Returns:
            True if the place should be kept
        """
        if not name or len(name.strip()) < self.config.min_name_length:
            return False

        if self.is_excluded_structure(tags):
            logger.debug(f"Excluding support structure {name!r}")
            return False

        key = self.rule_key(category, tags)

        min_area = self.config.min_area.get(key)
        if min_area:
            area = geometry_area(geometry)
            # Places without a computable area are not judged on it
            if area is not None and area < min_area:
                logger.debug(f"{category} {name!r} too small: {area:.0f} < {min_area:.0f} sqm")
                return False

        required_tags = self.config.require_tags.get(key)
        if required_tags and not all(tags.get(tag) for tag in required_tags):
            logger.debug(f"{category} {name!r} missing required tags {required_tags}")
            return False

        return True
