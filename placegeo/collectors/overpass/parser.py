"""
Overpass response parser

Parses Overpass API responses into FeatureRecord objects
"""

from typing import Any, Dict, List, Union

from loguru import logger

from ...records import FeatureRecord


class OverpassResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_elements(data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[FeatureRecord]:
        """
        Parse an Overpass response into feature records

        Accepts either the full response ({"elements": [...]}) or a bare
        element list, as stored by the cache. Elements that cannot be
        parsed are logged and skipped.

        Args:
            data: JSON response from Overpass API

        Returns:
            List of FeatureRecord in response order
        """
        elements = data.get("elements", []) if isinstance(data, dict) else data
        records = []

        for element in elements or []:
            if not isinstance(element, dict):
                logger.warning(f"Skipping non-object Overpass element: {element!r}")
                continue
            try:
                records.append(FeatureRecord.from_element(element))
            except ValueError as e:
                logger.warning(f"Skipping malformed Overpass element: {e}")

        return records
