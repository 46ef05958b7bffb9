"""
GeoJSON synthesis

Turns one Overpass feature record into a single simplified GeoJSON geometry
"""

import math
from dataclasses import replace
from typing import Any, Dict, List, Optional

from loguru import logger

from ...config import GeometryConfig, get_config, validate_config
from ...geometry.points import resolve_center
from ...geometry.rings import connect_and_close, connect_paths, distinct_positions, is_closed_ring
from ...geometry.simplify import simplify_coordinates
from ...records import FeatureRecord


Coordinates = List[List[float]]


def _point(lon: float, lat: float) -> Dict[str, Any]:
    return {"type": "Point", "coordinates": [lon, lat]}


class GeometryConverter:
    """Converts feature records to GeoJSON geometries"""

    def __init__(self, geometry_config: Optional[GeometryConfig] = None):
        config = get_config()
        if geometry_config is not None:
            config = replace(config, geometry=geometry_config)
        # Bad tolerances must fail here, not silently per feature
        validate_config(config)
        self.config = config.geometry

    def is_route(self, tags: Dict[str, str]) -> bool:
        return tags.get("route") in self.config.route_types

    def to_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        """
        Build the GeoJSON geometry for one record

        Failures are contained to the record: they are logged and
        yield None so sibling features keep processing.

        Args:
            record: Feature record

        Returns:
            GeoJSON geometry dict, or None if no usable geometry exists
        """
        try:
            if record.kind == "node":
                geometry = self._node_geometry(record)
            elif record.kind == "way":
                geometry = self._way_geometry(record)
            elif record.kind == "relation":
                geometry = self._relation_geometry(record)
            else:
                geometry = None

            if geometry is None and record.kind != "relation":
                geometry = self._center_geometry(record)
            return geometry
        except Exception as e:
            logger.warning(f"Failed to convert geometry for {record.kind} {record.id}: {e}")
            return None

    def _center_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        center = resolve_center(record)
        if center is None:
            return None
        return _point(center.lon, center.lat)

    def _node_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        if record.lat is None or record.lon is None:
            return None
        if not (math.isfinite(record.lat) and math.isfinite(record.lon)):
            return None
        return _point(record.lon, record.lat)

    def _way_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        coordinates = record.coordinates()
        if not coordinates:
            return None

        simplified = simplify_coordinates(coordinates, self.config.area_tolerance)

        distinct = distinct_positions(simplified)
        if distinct < 2:
            return _point(simplified[0][0], simplified[0][1])

        if self.is_route(record.tags):
            return {"type": "LineString", "coordinates": simplified}

        if distinct >= 3 and is_closed_ring(simplified):
            return {"type": "Polygon", "coordinates": [simplified]}

        return {"type": "LineString", "coordinates": simplified}

    def _relation_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        if self.is_route(record.tags):
            return self._route_geometry(record)
        return self._area_geometry(record)

    def _route_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        segments = []
        for member in record.members:
            coordinates = member.coordinates()
            if coordinates:
                segments.append(simplify_coordinates(coordinates, self.config.route_tolerance))

        if not segments:
            logger.debug(f"Route relation {record.id} has no member geometry")
            return self._center_geometry(record)

        if len(segments) == 1 and len(segments[0]) >= 2:
            return {"type": "LineString", "coordinates": segments[0]}

        paths = [p for p in connect_paths(segments) if len(p) >= 2]
        if not paths:
            return self._center_geometry(record)

        if len(paths) == 1:
            return {"type": "LineString", "coordinates": paths[0]}

        return {"type": "MultiLineString", "coordinates": paths}

    def _area_geometry(self, record: FeatureRecord) -> Optional[Dict[str, Any]]:
        outer_ways: List[Coordinates] = []
        inner_ways: List[Coordinates] = []

        for member in record.members:
            if member.role not in ("outer", "inner"):
                continue
            coordinates = member.coordinates()
            if not coordinates:
                continue
            simplified = simplify_coordinates(coordinates, self.config.area_tolerance)
            if member.role == "outer":
                outer_ways.append(simplified)
            else:
                inner_ways.append(simplified)

        outer_rings = connect_and_close(outer_ways)
        if not outer_rings:
            geometry = self._center_geometry(record)
            if geometry is None:
                logger.debug(f"Relation {record.id} has no usable members and no center")
            return geometry

        inner_rings = connect_and_close(inner_ways)

        if len(outer_rings) == 1:
            return {"type": "Polygon", "coordinates": [outer_rings[0], *inner_rings]}

        if inner_rings:
            # Holes are not distributed among several outer rings
            logger.warning(
                f"Relation {record.id}: dropping {len(inner_rings)} inner rings "
                f"across {len(outer_rings)} outer rings"
            )

        return {"type": "MultiPolygon", "coordinates": [[ring] for ring in outer_rings]}
