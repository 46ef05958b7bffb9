"""
Feature classification

Maps OSM tags onto the place category used for filtering and storage
"""

from typing import Dict, List, Optional

from loguru import logger

from ...config import get_config


class FeatureClassifier:
    """Classifies places from their OSM tags"""

    UNKNOWN = "unknown"

    def __init__(self, supported_tags: Optional[Dict[str, List[str]]] = None):
        self.supported_tags = supported_tags if supported_tags is not None else get_config().supported_tags

    def classify(self, tags: Dict[str, str]) -> str:
        """
        Category of the first supported tag, in the element's tag order

        The category is the bare tag value, so "route=hiking" is stored
        as "hiking".
        """
        category = self._match(tags)
        if category is None:
            logger.debug(f"Unknown place type for tags: {tags}")
            return self.UNKNOWN
        return category

    def _match(self, tags: Dict[str, str]) -> Optional[str]:
        for key, value in tags.items():
            values = self.supported_tags.get(key)
            if values and value in values:
                return value
        return None
